"""OpenAPI document loaders.

Reads a specification from a local file or fetches it over HTTP and
parses it into a plain dict. JSON is the default format; YAML is used
for ``.yaml`` / ``.yml`` files and YAML content types.
"""

import json
import logging
from pathlib import Path

import anyio
import httpx
import yaml

from llms_txt.config import SourceConfig
from llms_txt.errors import ConfigurationError, SpecLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _parse(text: str, as_yaml: bool) -> dict:
    data = yaml.safe_load(text) if as_yaml else json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"document root must be an object, got {type(data).__name__}")
    return data


async def load_from_file(file_path: str | Path) -> dict:
    """Read and parse an OpenAPI document from a local file."""
    path = Path(file_path)
    logger.debug("Loading spec from file %s", path)
    try:
        text = await anyio.Path(path).read_text(encoding="utf-8")
        return _parse(text, as_yaml=path.suffix.lower() in YAML_SUFFIXES)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        raise SpecLoadError(f"Failed to read file: {file_path}. {e}") from e


async def load_from_url(url: str, client: httpx.AsyncClient | None = None) -> dict:
    """Fetch and parse an OpenAPI document over HTTP GET.

    No timeout, retry or caching is applied. Pass ``client`` to reuse a
    session (or a mock transport in tests).
    """
    logger.debug("Loading spec from URL %s", url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=None, follow_redirects=True) as session:
                response = await session.get(url)
        else:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise SpecLoadError(f"Failed to fetch URL: {url}. {e}") from e

    if response.is_error:
        raise SpecLoadError(
            f"Failed to fetch URL: {url}. HTTP {response.status_code}: {response.reason_phrase}"
        )

    content_type = response.headers.get("content-type", "")
    try:
        return _parse(response.text, as_yaml="yaml" in content_type)
    except (ValueError, yaml.YAMLError) as e:
        raise SpecLoadError(f"Failed to fetch URL: {url}. {e}") from e


def resolve_url(url: str, base_url: str | None = None) -> str:
    """Return ``url`` unchanged if absolute, else join it onto ``base_url``."""
    if url.startswith(("http://", "https://")):
        return url
    if not base_url:
        raise ConfigurationError(f"Cannot resolve relative URL without a base URL: {url}")
    return str(httpx.URL(base_url).join(url))


async def load_source(source: SourceConfig, base_url: str | None = None) -> dict:
    """Load the document described by ``source``."""
    if source.type == "file" and source.file:
        return await load_from_file(source.file)
    if source.type == "url" and source.url:
        return await load_from_url(resolve_url(source.url, base_url))
    raise ConfigurationError("Invalid source configuration")
