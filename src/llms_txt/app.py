"""Starlette routes serving the generated document at /llms.txt."""

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from llms_txt.config import LlmsOptions, validate_options
from llms_txt.generator.markdown import render_llms_txt
from llms_txt.parser.loader import load_source

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error generating LLMs documentation"


def create_llms_routes(options: LlmsOptions | None = None) -> list[Route]:
    """Build the ``/llms.txt`` route and its ``/llms-full.txt`` alias."""
    options = options or LlmsOptions()

    async def llms_route(request: Request) -> Response:
        try:
            validate_options(options)
            spec = await load_source(options.source, base_url=str(request.base_url))
            body = render_llms_txt(spec, header=options.header, footer=options.footer)
        except Exception as exc:
            logger.exception("Failed to generate %s", request.url.path)
            message = str(exc) or "Unknown error"
            return PlainTextResponse(f"{ERROR_PREFIX}: {message}", status_code=500)

        # Starlette appends "; charset=utf-8" to text/* media types
        return Response(body, media_type=options.content_type)

    async def llms_full_route(request: Request) -> RedirectResponse:
        return RedirectResponse("/llms.txt", status_code=301)

    return [
        Route("/llms.txt", llms_route, methods=["GET"]),
        Route("/llms-full.txt", llms_full_route, methods=["GET"]),
    ]


def create_app(options: LlmsOptions | None = None, debug: bool = False) -> Starlette:
    """Standalone application exposing only the llms.txt routes."""
    return Starlette(debug=debug, routes=create_llms_routes(options))
