"""Starlette ASGI application serving the snapshot and the web viewer."""

from __future__ import annotations

from typing import Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from ..logging_config import get_logger
from ..snapshot import CONTENT_TYPE, encode
from ..tree import PathTree
from .bundle import StaticBundle

logger = get_logger(__name__)

# Everything except GET/HEAD is answered with 404 as well.
_WRITE_METHODS = ["POST", "PUT", "PATCH", "DELETE"]


def create_app(tree: PathTree, bundle: Optional[StaticBundle] = None) -> Starlette:
    """Build the application for a completed, read-only ``tree``.

    Args:
        tree: The scanned tree, never modified after this call
        bundle: Web viewer files; defaults to the packaged bundle
    """
    bundle = bundle if bundle is not None else StaticBundle.load()
    payload: Optional[bytes] = None

    def not_found() -> Response:
        return Response(status_code=404)

    async def get_tree(request: Request) -> Response:
        nonlocal payload
        if request.method not in ("GET", "HEAD"):
            return not_found()
        if payload is None:
            payload = encode(tree)
        return Response(content=payload, media_type=CONTENT_TYPE)

    async def get_file(request: Request) -> Response:
        if request.method not in ("GET", "HEAD"):
            return not_found()
        found = bundle.get(request.url.path)
        if found is None:
            logger.debug("no bundle file for %s", request.url.path)
            return not_found()
        body, mime = found
        return Response(content=body, media_type=mime)

    methods = ["GET", "HEAD", *_WRITE_METHODS]
    routes = [
        Route("/tree", get_tree, methods=methods),
        Route("/{path:path}", get_file, methods=methods),
    ]

    return Starlette(routes=routes)
