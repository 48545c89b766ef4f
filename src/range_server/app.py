r""":mod:`range_server.app` builds the Starlette application serving the landing page
at ``/`` and the media file at ``/video``.

Only single range requests are served at ``/video``: a request with no ``range``
header, a malformed one, one which cannot be satisfied, or one which gives more than
one range after combining overlapping ranges, gets a 400 (Bad Request) response.
There is no fallback to sending the whole file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.responses import FileResponse, PlainTextResponse
from starlette.routing import Route

if TYPE_CHECKING:  # pragma: no cover
    from starlette.requests import Request

from .config import ServerConfig
from .http_utils import RangeHeaderError
from .log_utils import log
from .request import RangeRequest
from .resource import MediaResource
from .response import RangeResponse

__all__ = ["make_app", "INVALID_RANGE_MESSAGE"]

INVALID_RANGE_MESSAGE = "Invalid RANGE header"


async def invalid_range(request: Request, exc: Exception) -> PlainTextResponse:
    log.info(f"Rejected range request: {exc}")
    return PlainTextResponse(INVALID_RANGE_MESSAGE, status_code=400)


def make_app(config: ServerConfig | None = None) -> Starlette:
    """
    Create the app for the content described by ``config`` (by default, a
    :class:`~range_server.config.ServerConfig` with its default values).

    The files are not checked here: call :func:`~range_server.config.check_content`
    before serving.
    """
    config = ServerConfig() if config is None else config
    resource = MediaResource(config.media_path)

    async def index(request: Request) -> FileResponse:
        return FileResponse(config.index_path, media_type="text/html; charset=utf-8")

    async def video(request: Request) -> RangeResponse:
        log.debug(f"Request: {dict(request.headers)}")
        range_request = RangeRequest.from_header(
            request.headers.get("range"),
            total_bytes=await resource.get_size(),
            legacy_length=config.legacy_length,
        )
        return RangeResponse(
            resource,
            range_request,
            media_type=config.media_type,
            chunk_size=config.chunk_size,
        )

    app = Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route("/video", video, methods=["GET"]),
        ],
        exception_handlers={RangeHeaderError: invalid_range},
    )
    app.state.config = config
    app.state.resource = resource
    return app
