r""":mod:`range_server.resource` exposes a class
:class:`~range_server.resource.MediaResource`, the single file being served.

Its size is looked up afresh on every request (the file is not expected to change
while being served, but nothing is cached), and byte windows onto it are read
asynchronously by :meth:`~range_server.resource.MediaResource.iter_window`.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import anyio

__all__ = ["MediaResource", "ResourceTruncatedError", "DEFAULT_CHUNK_SIZE"]

DEFAULT_CHUNK_SIZE = 64 * 1024


class ResourceTruncatedError(OSError):
    """
    The file ended before the requested window could be read in full.
    """

    def __init__(self, path: Path, position: int, remaining: int):
        super().__init__(
            f"{path} ended at position {position} with {remaining} bytes left to read"
        )
        self.path = path
        self.position = position
        self.remaining = remaining


class MediaResource:
    """
    A read-only file on disk, streamed in byte windows.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self):
        return f"{self.__class__.__name__} @ '{self.name}'"

    @property
    def name(self) -> str:
        return self.path.name

    async def get_size(self) -> int:
        """
        The current size of the file in bytes, from a fresh ``stat`` call made on a
        worker thread so that other requests are not held up.
        """
        stat_result = await anyio.Path(self.path).stat()
        return stat_result.st_size

    async def iter_window(
        self, start: int, length: int, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """
        Read ``length`` bytes beginning at position ``start``, yielding chunks of at
        most ``chunk_size`` bytes.

        The file is held open only while the generator runs: it is closed when the
        window is exhausted, or when the generator is closed early (wrap it in
        :func:`contextlib.aclosing` so that this happens on disconnect). No file is
        opened for an empty window.

        Raises :exc:`ResourceTruncatedError` if the file ends before the window does.

        Args:
          start      : Position of the first byte to read (0-based)
          length     : Number of bytes to read
          chunk_size : Maximum size of each chunk yielded
        """
        if length <= 0:
            return
        async with await anyio.open_file(self.path, mode="rb") as file:
            await file.seek(start)
            remaining = length
            while remaining > 0:
                chunk = await file.read(min(chunk_size, remaining))
                if not chunk:
                    raise ResourceTruncatedError(
                        self.path, position=start + length - remaining, remaining=remaining
                    )
                remaining -= len(chunk)
                yield chunk
