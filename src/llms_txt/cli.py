"""CLI entry point for llms-txt."""

import asyncio
import logging
from pathlib import Path

import click
import uvicorn

from llms_txt.app import create_app
from llms_txt.config import LlmsOptions, SourceConfig, load_options, validate_options
from llms_txt.errors import LlmsTxtError
from llms_txt.generator.markdown import render_llms_txt
from llms_txt.parser.loader import load_from_file, load_from_url


def _load_spec(source: str) -> dict:
    """Load a spec from an http(s) URL or a local file path."""
    if source.startswith(("http://", "https://")):
        return asyncio.run(load_from_url(source))
    return asyncio.run(load_from_file(source))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """llms-txt: turn OpenAPI / Swagger specs into llms.txt Markdown."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file path; prints to stdout when omitted.")
@click.option("--header", default=None, help="Raw text prepended to the document.")
@click.option("--footer", default=None, help="Raw text appended to the document.")
def generate(source: str, output: Path | None, header: str | None, footer: str | None):
    """Generate Markdown from an OpenAPI document (file path or URL)."""
    click.echo(f"Loading {source}...", err=True)
    try:
        spec = _load_spec(source)
    except LlmsTxtError as e:
        raise click.ClickException(str(e)) from e

    result = render_llms_txt(spec, header=header, footer=footer)

    if output is None:
        click.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")
    click.echo(f"Markdown saved to {output}", err=True)


@main.command()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML/JSON options file.")
@click.option("--source-file", default=None, help="Serve the spec read from this file.")
@click.option("--source-url", default=None, help="Serve the spec fetched from this URL (may be relative).")
@click.option("--content-type", default=None, type=click.Choice(["text/markdown", "text/plain"]), help="Response content type.")
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Bind port.")
def serve(
    config_path: Path | None,
    source_file: str | None,
    source_url: str | None,
    content_type: str | None,
    host: str,
    port: int,
):
    """Serve /llms.txt and /llms-full.txt over HTTP."""
    if source_file and source_url:
        raise click.UsageError("Use only one of --source-file and --source-url.")

    try:
        options = load_options(config_path) if config_path else LlmsOptions()
        updates = {}
        if source_file:
            updates["source"] = SourceConfig(type="file", file=source_file)
        elif source_url:
            updates["source"] = SourceConfig(type="url", url=source_url)
        if content_type:
            updates["content_type"] = content_type
        options = options.model_copy(update=updates)
        validate_options(options)
    except LlmsTxtError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Serving llms.txt on http://{host}:{port}/llms.txt", err=True)
    uvicorn.run(create_app(options), host=host, port=port)
