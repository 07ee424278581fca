"""Generate llms.txt Markdown documents from OpenAPI / Swagger specifications."""

from llms_txt.generator.markdown import OpenAPIToMarkdownConverter, get_schema_type

__version__ = "0.1.1"

__all__ = ["OpenAPIToMarkdownConverter", "get_schema_type", "__version__"]
