r"""A client seeking within the media file sends a HTTP `range request
<https://developer.mozilla.org/en-US/docs/Web/HTTP/Range_requests>`_
header, for example:

.. code-block:: python

    {"range": "bytes=0-1"}

which requests the two bytes at positions ``0`` and ``1`` (i.e. the inclusive
interval ``[0,1]``). An open-ended range ``bytes=500-`` runs to the last byte
of the file, and a suffix range ``bytes=-500`` gives the last 500 bytes.

Several comma-separated ranges may be given: overlapping or adjacent ones are
combined, but only a single combined range can be served.

The server replies with a `Content-Range
<https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/Content-Range>`_
header giving the inclusive termini and the total size of the file the range was
taken from, e.g. ``bytes 0-1/1000``.
"""
from __future__ import annotations

from ranges import Range, RangeSet

from .range_utils import range_termini

__all__ = [
    "parse_range_header",
    "combine_ranges",
    "single_range",
    "content_range_header",
    "RangeHeaderError",
    "UnsatisfiableRangeError",
    "MultipleRangesError",
]

RANGE_UNIT = "bytes"
MAX_POSITION_DIGITS = 20  # more than any file offset needs


class RangeHeaderError(ValueError):
    """
    The ``range`` header was missing or could not be parsed as a byte range.
    """

    def __init__(self, header: str | None, reason: str = "malformed"):
        super().__init__(f"Invalid range header {header!r} ({reason})")
        self.header = header
        self.reason = reason


class UnsatisfiableRangeError(RangeHeaderError):
    """
    A byte range in the ``range`` header lies (at least partly) outside the file,
    or has its start after its end.
    """

    def __init__(self, header: str | None, byte_range: tuple[int, int], size: int):
        start, end = byte_range
        super().__init__(header, reason=f"{start}-{end} not satisfiable for {size=}")
        self.byte_range = byte_range
        self.size = size


class MultipleRangesError(RangeHeaderError):
    """
    The ``range`` header gave more than one range after combining them, and
    multipart responses are not served.
    """

    def __init__(self, header: str | None, ranges: list[Range]):
        super().__init__(header, reason=f"{len(ranges)} disjoint ranges")
        self.ranges = ranges


def _parse_position(header: str, value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise RangeHeaderError(header, reason=f"bad position {value!r}")
    if len(value) > MAX_POSITION_DIGITS:
        raise RangeHeaderError(header, reason=f"{len(value)}-digit position")
    return int(value)


def parse_range_header(header: str | None, size: int) -> list[Range]:
    """
    Parse a ``range`` header into a list of :class:`~ranges.Range` (half-open
    ``[start,end+1)`` intervals) resolved against a file of ``size`` bytes, in
    the order given in the header.

      >>> from range_server.http_utils import parse_range_header
      >>> parse_range_header("bytes=0-499", 1000)
      [Range[0, 500)]
      >>> parse_range_header("bytes=-100", 1000)
      [Range[900, 1000)]

    Raises :exc:`RangeHeaderError` if the header is absent or malformed, and
    :exc:`UnsatisfiableRangeError` if any range does not fit in the file.

    Args:
      header : The raw ``range`` header value (or ``None`` if not sent)
      size   : The total size of the file in bytes
    """
    if not header:
        raise RangeHeaderError(header, reason="missing")
    unit, sep, specs = header.strip().partition("=")
    if not sep:
        raise RangeHeaderError(header, reason="expected '=' character")
    if unit.strip().lower() != RANGE_UNIT:
        raise RangeHeaderError(header, reason=f"unit {unit!r} is not {RANGE_UNIT!r}")
    ranges = []
    for spec in specs.split(","):
        first, sep, last = spec.strip().partition("-")
        if not sep:
            raise RangeHeaderError(header, reason="expected '-' character")
        if first == "" and last == "":
            raise RangeHeaderError(header, reason="empty range")
        if first == "":
            # Suffix range: the last N bytes
            suffix = _parse_position(header, last)
            start, end = max(0, size - suffix), size - 1
            if suffix == 0:
                raise UnsatisfiableRangeError(header, (start, end), size)
        else:
            start = _parse_position(header, first)
            end = size - 1 if last == "" else _parse_position(header, last)
        if start > end or end >= size:
            raise UnsatisfiableRangeError(header, (start, end), size)
        ranges.append(Range(start, end + 1))
    return ranges


def combine_ranges(ranges: list[Range]) -> list[Range]:
    """
    Combine overlapping or adjacent ranges, giving the minimal list of ranges that
    covers the same positions, in ascending order (via :class:`~ranges.RangeSet`).

      >>> combine_ranges([Range(5, 10), Range(0, 6), Range(10, 12)])
      [Range[0, 12)]

    Args:
      ranges : Non-empty half-open ranges, in any order
    """
    return RangeSet(*ranges).ranges()


def single_range(header: str | None, size: int) -> Range:
    """
    Parse and combine the ranges in a ``range`` header, requiring that exactly one
    range results.

    Raises :exc:`MultipleRangesError` if the combined ranges are disjoint, as well as
    the errors raised by :func:`~range_server.http_utils.parse_range_header`.

    Args:
      header : The raw ``range`` header value (or ``None`` if not sent)
      size   : The total size of the file in bytes
    """
    combined = combine_ranges(parse_range_header(header, size))
    if len(combined) != 1:
        raise MultipleRangesError(header, combined)
    return combined[0]


def content_range_header(rng: Range, size: int) -> str:
    """
    Prepare the value of the ``content-range`` response header.

      >>> content_range_header(Range(0, 500), 1000)
      'bytes 0-499/1000'

    Args:
      rng  : range of the bytes being sent (0-based, half-open)
      size : the total size of the file in bytes
    """
    start_byte, end_byte = range_termini(rng)
    return f"{RANGE_UNIT} {start_byte}-{end_byte}/{size}"
