r"""Define the byte range used to build ``Range`` request headers."""

from __future__ import annotations

__all__ = ["ByteRange"]

from dataclasses import dataclass

from webrequests.core.validation import validate_byte_range


@dataclass(frozen=True)
class ByteRange:
    """A range of bytes requested with the ``Range`` header.

    Args:
        start: The first byte offset. Must be >= 0.
        end: The last byte offset (inclusive). ``None`` requests every
            byte from ``start`` to the end of the resource.

    Raises:
        ValueError: If start is negative or end is smaller than start.

    Example:
        ```pycon
        >>> from webrequests import ByteRange
        >>> ByteRange(100).to_header()
        'bytes=100-'
        >>> ByteRange(0, 499).to_header()
        'bytes=0-499'

        ```
    """

    start: int
    end: int | None = None

    def __post_init__(self) -> None:
        validate_byte_range(self.start, self.end)

    @property
    def has_end(self) -> bool:
        """``True`` if the range is bounded."""
        return self.end is not None

    def to_header(self) -> str:
        """Return the ``Range`` header value for this range."""
        if not self.has_end:
            return f"bytes={self.start}-"
        return f"bytes={self.start}-{self.end}"
