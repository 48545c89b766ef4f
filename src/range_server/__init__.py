r"""
:mod:`range_server` serves a single media file over HTTP with support for `HTTP range
requests <https://developer.mozilla.org/en-US/docs/Web/HTTP/Range_requests>`_, so that
a browser's video player can seek within the file without downloading it in full.

Byte ranges are represented with the :class:`~ranges.Range` class (from the externally
maintained `python-ranges <https://python-ranges.readthedocs.io/en/latest/>`_ library)
as half-open intervals, inclusive of start/exclusive of stop as is common practice
in Python — ``[start, stop)`` in `interval notation
<https://en.wikipedia.org/wiki/Interval_(mathematics)#Notations_for_intervals>`_.
The ``range`` request header and ``content-range`` response header instead give
inclusive termini, so ``bytes=0-499`` corresponds to ``Range(0, 500)``.

    >>> from range_server.request import RangeRequest
    >>> req = RangeRequest.from_header("bytes=0-499", total_bytes=1000)
    >>> req.range
    Range[0, 500)
    >>> req.content_range
    'bytes 0-499/1000'
    >>> req.status_code, req.content_length
    (206, 500)

Overlapping or adjacent ranges in one header are combined, but a header which leaves
more than one range after combining is rejected (multipart responses are not served):

    >>> RangeRequest.from_header("bytes=0-9,5-19", total_bytes=1000).range
    Range[0, 20)
    >>> RangeRequest.from_header("bytes=0-10,500-510", total_bytes=1000)
    Traceback (most recent call last):
    ...
    range_server.http_utils.MultipleRangesError: Invalid range header 'bytes=0-10,500-510' (2 disjoint ranges)

The server itself is a Starlette app, built from a
:class:`~range_server.config.ServerConfig` by :func:`~range_server.app.make_app` and
run with ``python -m range_server``, which listens on port 1337 on all interfaces and
serves the files in the ``content`` directory:

    >>> from range_server.app import make_app
    >>> from range_server.config import ServerConfig
    >>> app = make_app(ServerConfig(content_dir="content")) # doctest: +SKIP

A legacy length mode reproduces the ``content-length`` arithmetic of the server this
one replaces, giving ``end - start`` (one byte short) and a 200 status when a single
byte is requested:

    >>> req = RangeRequest.from_header("bytes=999-999", total_bytes=1000, legacy_length=True)
    >>> req.status_code, req.content_length
    (200, 0)
"""

# Get classes into package namespace but exclude from __all__ so Sphinx can access types

from . import app, config, fetch, http_utils, range_utils, request, resource, response
from .request import RangeRequest
from .resource import MediaResource
from .response import RangeResponse

__all__ = [
    "app",
    "config",
    "fetch",
    "request",
    "response",
    "resource",
    "http_utils",
    "range_utils",
]

__author__ = "Louis Maddox"
__license__ = "MIT"
__description__ = "Serving a media file via range requests."
__url__ = "https://github.com/lmmx/range-server"
__uri__ = __url__
__email__ = "louismmx@gmail.com"
__version__ = "0.1.0"

_EXAMPLE_MEDIA_URL = (
    "http://distribution.bbb3d.renderfarming.net/video/mp4/"
    "bbb_sunflower_2160p_60fps_normal.mp4"
)
