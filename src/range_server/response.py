from __future__ import annotations

from contextlib import aclosing
from typing import TYPE_CHECKING

from starlette.responses import Response

if TYPE_CHECKING:  # pragma: no cover
    from starlette.types import Receive, Scope, Send

    from .request import RangeRequest
    from .resource import MediaResource

from .log_utils import log
from .resource import DEFAULT_CHUNK_SIZE

__all__ = ["RangeResponse"]


class RangeResponse(Response):
    """
    An ASGI response streaming the window of a
    :class:`~range_server.resource.MediaResource` given by a
    :class:`~range_server.request.RangeRequest`.

    The status and the ``content-range``, ``accept-ranges``, ``content-length`` and
    ``content-type`` headers are all computed on initialisation; the body is read
    from disk and sent chunk by chunk only when the response is called.
    """

    media_type = "video/mp4"

    def __init__(
        self,
        resource: MediaResource,
        range_request: RangeRequest,
        media_type: str | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.resource = resource
        self.request = range_request
        self.chunk_size = chunk_size
        self.status_code = range_request.status_code
        if media_type is not None:
            self.media_type = media_type
        self.background = None
        self.init_headers(
            {
                "content-range": range_request.content_range,
                "accept-ranges": "bytes",
                "content-length": str(range_request.content_length),
            }
        )

    def __repr__(self):
        return (
            f"{self.__class__.__name__} ⠶ {self.status_code} {self.request.range} @ "
            f"'{self.resource.name}'"
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        log.debug(f"Response: {dict(self.headers)}")
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.raw_headers,
            }
        )
        if scope.get("method") != "HEAD":
            # Exactly the declared content-length is sent, from the range start
            window = self.resource.iter_window(
                start=self.request.start,
                length=self.request.content_length,
                chunk_size=self.chunk_size,
            )
            async with aclosing(window) as chunks:
                async for chunk in chunks:
                    await send(
                        {"type": "http.response.body", "body": chunk, "more_body": True}
                    )
        await send({"type": "http.response.body", "body": b"", "more_body": False})
