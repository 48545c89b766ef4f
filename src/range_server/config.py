r""":mod:`range_server.config` holds the :class:`~range_server.config.ServerConfig`
passed to :func:`~range_server.app.make_app`, so that the file being served and
the address listened on are never module-level globals.

The files are looked for in a ``content`` directory, found by
:func:`~range_server.config.find_content_dir` alongside the package or in one of
its ancestor directories (for a source checkout, the repository root):

.. code-block:: text

    content/
    ├── index.html
    └── video.mp4
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ServerConfig",
    "find_content_dir",
    "check_content",
    "ContentDirNotFoundError",
    "MissingContentError",
]

CONTENT_DIR_NAME = "content"
SEARCH_DEPTH = 3  # ancestors of the package directory to search


class ContentDirNotFoundError(FileNotFoundError):
    """
    No ``content`` directory was found alongside the package or its ancestors.
    """

    def __init__(self, searched: list[Path]):
        super().__init__(f"Failed to find content directory (searched {searched})")
        self.searched = searched


class MissingContentError(FileNotFoundError):
    """
    A file the server needs is missing from the content directory at startup.
    """

    def __init__(self, path: Path):
        super().__init__(f"Missing content file {path}")
        self.path = path


def find_content_dir(start: Path | str | None = None) -> Path:
    """
    Try and find the ``content`` directory in the directory ``start`` (by default,
    the one this package is installed in) and in several ancestor directories.

    Args:
      start : The first directory to look in
    """
    parent_dir = (Path(__file__).parent if start is None else Path(start)).resolve()
    searched = []
    for directory in [parent_dir, *parent_dir.parents][: SEARCH_DEPTH + 1]:
        candidate = directory / CONTENT_DIR_NAME
        if candidate.is_dir():
            return candidate
        searched.append(candidate)
    raise ContentDirNotFoundError(searched)


class ServerConfig:
    """
    Configuration for the server, passed explicitly to the app factory
    :func:`~range_server.app.make_app` (there are no environment variables or
    command line flags).
    """

    def __init__(
        self,
        content_dir: Path | str | None = None,
        media_name: str = "video.mp4",
        index_name: str = "index.html",
        host: str = "0.0.0.0",
        port: int = 1337,
        media_type: str = "video/mp4",
        chunk_size: int = 64 * 1024,
        legacy_length: bool = False,
        media_url: str | None = None,
    ):
        """
        Args:
          content_dir   : Directory holding the media file and landing page. If
                          ``None``, located with
                          :func:`~range_server.config.find_content_dir`.
          media_name    : File name of the media file served at ``/video``
          index_name    : File name of the landing page served at ``/``
          host          : Interface to bind to (default: all interfaces)
          port          : TCP port to listen on
          media_type    : ``content-type`` of the media file
          chunk_size    : Maximum number of bytes read from disk at a time
          legacy_length : Send ``content-length`` as ``end - start`` (one short of the
                          byte count), and 200 rather than 206 when that is zero.
          media_url     : If given, download the media file from this URL at startup
                          when it is not already present.
        """
        if content_dir is None:
            content_dir = find_content_dir()
        self.content_dir = Path(content_dir)
        self.media_name = media_name
        self.index_name = index_name
        self.host = host
        self.port = port
        self.media_type = media_type
        if chunk_size < 1:
            raise ValueError(f"{chunk_size=} must be a positive number of bytes")
        self.chunk_size = chunk_size
        self.legacy_length = legacy_length
        self.media_url = media_url

    def __repr__(self):
        return (
            f"{self.__class__.__name__} ⠶ '{self.content_dir}' on "
            f"{self.host}:{self.port}"
        )

    @property
    def media_path(self) -> Path:
        return self.content_dir / self.media_name

    @property
    def index_path(self) -> Path:
        return self.content_dir / self.index_name


def check_content(config: ServerConfig) -> None:
    """
    Check that the media file and landing page exist, so that the server fails to
    start rather than serve broken responses.

    Raises :exc:`MissingContentError` for the first file found to be missing.
    """
    for path in (config.media_path, config.index_path):
        if not path.is_file():
            raise MissingContentError(path)
