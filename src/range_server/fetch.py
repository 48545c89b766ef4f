r"""Large media files are not kept in version control, so the media file can instead
be downloaded when the server starts, by setting
:attr:`~range_server.config.ServerConfig.media_url`.

    >>> from range_server import _EXAMPLE_MEDIA_URL
    >>> from range_server.config import ServerConfig
    >>> from range_server.fetch import download
    >>> config = ServerConfig(media_url=_EXAMPLE_MEDIA_URL) # doctest: +SKIP
    >>> download(config.media_url, config.media_path) # doctest: +SKIP

A file already present is never downloaded again.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

MYPY = False  # when using mypy will be overrided as True
if MYPY or not TYPE_CHECKING:  # pragma: no cover
    import httpx  # avoid importing to Sphinx type checker

import tqdm

from .log_utils import log

__all__ = ["download", "DownloadError"]

DOWNLOAD_CHUNK_SIZE = 1_000_000


class DownloadError(Exception):
    """
    The media file could not be downloaded in full.
    """

    def __init__(self, url: str, path: Path, reason: str):
        super().__init__(f"Failed to download {path} from {url} ({reason})")
        self.url = url
        self.path = path
        self.reason = reason


def download(
    url: str,
    path: Path | str,
    client=None,  # don't hint httpx.Client (Sphinx gives error)
    show_progress_bar: bool = True,
) -> bool:
    """
    Stream the file at ``url`` to ``path`` unless ``path`` is already a file.

    The number of bytes written is checked against the ``content-length`` header
    (if sent), and a partially written file is removed on failure.

    Raises :exc:`DownloadError` on a non-success status or a length mismatch.

    Args:
      url               : The URL to download from
      path              : Where to write the file
      client            : A :class:`httpx.Client` to use, or else a fresh one
                          is created (and closed afterwards)
      show_progress_bar : Whether to show a ``tqdm`` progress bar

    Returns:
      Whether a download took place.
    """
    path = Path(path)
    if path.is_file():
        log.info(f"File {path} is already downloaded")
        return False
    log.info(f"Downloading {path} from {url}")
    if client is None:
        with httpx.Client(follow_redirects=True) as client:
            _stream_to_file(url, path, client, show_progress_bar)
    else:
        _stream_to_file(url, path, client, show_progress_bar)
    log.info(f"Download of {path} complete")
    return True


def _stream_to_file(url: str, path: Path, client, show_progress_bar: bool) -> None:
    with client.stream("GET", url) as response:
        if not response.is_success:
            raise DownloadError(url, path, reason=f"HTTP {response.status_code}")
        expected = response.headers.get("content-length")
        total = int(expected) if expected is not None else None
        written = 0
        try:
            with open(path, "wb") as f, tqdm.tqdm(
                total=total,
                unit="B",
                unit_scale=True,
                desc=path.name,
                disable=not show_progress_bar,
            ) as pbar:
                for chunk in response.iter_raw(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
                    written += len(chunk)
                    pbar.update(len(chunk))
            if total is not None and written != total:
                raise DownloadError(
                    url, path, reason=f"got {written} of {total} bytes"
                )
        except BaseException:
            path.unlink(missing_ok=True)
            raise
