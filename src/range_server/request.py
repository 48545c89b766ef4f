from __future__ import annotations

from ranges import Range

from .http_utils import content_range_header, single_range
from .range_utils import range_count, range_len, range_max, range_min, validate_range

__all__ = ["RangeRequest"]


class RangeRequest:
    """
    The single byte range requested from a file of ``total_bytes`` bytes, from
    which the status and headers of the partial content response are computed.

    The range is stored as a half-open :class:`~ranges.Range` ``[start,end+1)``
    as is usual in Python, while :attr:`~range_server.request.RangeRequest.start`
    and :attr:`~range_server.request.RangeRequest.end` give the inclusive termini
    used in HTTP headers.
    """

    def __init__(
        self,
        byte_range: Range | tuple[int, int],
        total_bytes: int,
        legacy_length: bool = False,
    ):
        """
        Args:
          byte_range    : The :class:`~ranges.Range` requested (or a tuple of two
                          integers, interpreted as a half-open interval)
          total_bytes   : The total size of the file the range is taken from
          legacy_length : Whether to compute the ``content-length`` as the distance
                          between the termini (one less than the number of bytes),
                          sending 200 rather than 206 when that distance is zero.
        """
        self.range = validate_range(byte_range, allow_empty=False)
        self.total_bytes = total_bytes
        self.legacy_length = legacy_length
        if self.end >= total_bytes:
            raise ValueError(f"{self.range} is not a sub-range of {total_bytes} bytes")

    @classmethod
    def from_header(
        cls, header: str | None, total_bytes: int, legacy_length: bool = False
    ) -> RangeRequest:
        """
        Parse the raw ``range`` header of a request for a file of ``total_bytes``
        bytes, combining overlapping ranges into one.

        Raises :exc:`~range_server.http_utils.RangeHeaderError` (or one of its
        subclasses) unless exactly one satisfiable range results.
        """
        byte_range = single_range(header, size=total_bytes)
        return cls(byte_range, total_bytes=total_bytes, legacy_length=legacy_length)

    def __repr__(self):
        return f"{self.__class__.__name__} ⠶ {self.range} of {self.total_bytes} bytes"

    @property
    def start(self) -> int:
        return range_min(self.range)

    @property
    def end(self) -> int:
        return range_max(self.range)

    @property
    def content_range(self) -> str:
        return content_range_header(self.range, size=self.total_bytes)

    @property
    def content_length(self) -> int:
        """
        The number of bytes in the range, or in legacy length mode the distance
        between its termini (``end - start``).
        """
        if self.legacy_length:
            return range_len(self.range)
        return range_count(self.range)

    @property
    def status_code(self) -> int:
        """
        206 (Partial Content), except in legacy length mode where a zero
        :attr:`~range_server.request.RangeRequest.content_length` gives 200.
        """
        if self.legacy_length and self.content_length == 0:
            return 200
        return 206
