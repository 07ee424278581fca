"""Options for serving and generating llms.txt documents."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from llms_txt.errors import ConfigurationError

DEFAULT_SOURCE_URL = "/swagger/json"


class SourceConfig(BaseModel):
    """Where the OpenAPI document comes from."""

    type: Literal["file", "url"]
    file: str | None = None
    url: str | None = None  # absolute, or relative to the serving host


def _default_source() -> SourceConfig:
    return SourceConfig(type="url", url=DEFAULT_SOURCE_URL)


class LlmsOptions(BaseModel):
    """Plugin options: the spec source and how the document is served."""

    model_config = ConfigDict(populate_by_name=True)

    source: SourceConfig = Field(default_factory=_default_source)
    content_type: Literal["text/markdown", "text/plain"] = Field(
        default="text/markdown", alias="contentType"
    )
    header: str | None = None  # prepended raw text
    footer: str | None = None  # appended raw text

    @classmethod
    def from_mapping(cls, data: dict) -> "LlmsOptions":
        """Build options from a plain mapping, accepting camelCase keys."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid options: {e}") from e


def validate_options(options: LlmsOptions) -> None:
    """Check that the source carries the field its type needs.

    Raises ConfigurationError before any I/O is attempted.
    """
    source = options.source
    if source.type == "file" and not source.file:
        raise ConfigurationError('File path is required when source type is "file"')
    if source.type == "url" and not source.url:
        raise ConfigurationError('URL is required when source type is "url"')


def load_options(file_path: Path) -> LlmsOptions:
    """Read options from a YAML or JSON file."""
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read options file: {file_path}. {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Options file must contain a mapping: {file_path}")
    return LlmsOptions.from_mapping(data)
