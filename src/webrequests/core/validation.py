r"""Parameter validation utilities for web service requests.

This module provides validation functions for request parameters to
ensure they meet the required constraints before a request is composed.
"""

from __future__ import annotations

__all__ = ["ALLOWED_SCHEMES", "validate_byte_range", "validate_timeout", "validate_url"]

import httpx

ALLOWED_SCHEMES = ("http", "https")


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate a timeout parameter.

    Args:
        timeout: Maximum seconds to wait for the server response.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from webrequests.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_url(url: str | httpx.URL) -> httpx.URL:
    """Validate a request URL and return it as an ``httpx.URL``.

    Args:
        url: The request URL. Only absolute ``http`` and ``https`` URLs
            are accepted.

    Returns:
        The parsed URL.

    Raises:
        ValueError: If the URL cannot be parsed or its scheme is not
            ``http`` or ``https``.

    Example:
        ```pycon
        >>> from webrequests.core.validation import validate_url
        >>> validate_url("https://api.example.com/data")
        URL('https://api.example.com/data')
        >>> validate_url("ftp://example.com")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: Expected URL with http or https scheme; received ftp

        ```
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        msg = f"Invalid URL {url!r}: {exc}"
        raise ValueError(msg) from exc
    if parsed.scheme not in ALLOWED_SCHEMES:
        msg = f"Expected URL with http or https scheme; received {parsed.scheme or '(none)'}"
        raise ValueError(msg)
    return parsed


def validate_byte_range(start: int, end: int | None) -> None:
    """Validate the bounds of a byte range.

    Args:
        start: The first byte offset. Must be >= 0.
        end: The last byte offset (inclusive), or ``None`` for an
            open-ended range. Must be >= start if provided.

    Raises:
        ValueError: If start is negative or end is smaller than start.
    """
    if start < 0:
        msg = f"start must be >= 0, got {start}"
        raise ValueError(msg)
    if end is not None and end < start:
        msg = f"end must be >= start ({start}), got {end}"
        raise ValueError(msg)
