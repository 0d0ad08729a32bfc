r"""Header collection utilities.

Header collections accepted by this package can be a mapping, a
sequence of ``(name, value)`` pairs, or an ``httpx.Headers`` instance.
All functions here are pure and never deduplicate: a header that appears
twice is kept twice.
"""

from __future__ import annotations

__all__ = [
    "HEADER_VALUE_SEPARATOR",
    "HeaderCollection",
    "from_header_dict",
    "get_joined_values",
    "header_items",
    "merge_headers",
    "to_header_dict",
]

from collections.abc import Mapping, Sequence
from typing import Union

import httpx

HeaderCollection = Union[httpx.Headers, Mapping[str, str], Sequence[tuple[str, str]]]

# Separator used to join the values of a multi-valued header
HEADER_VALUE_SEPARATOR = "; "


def header_items(headers: HeaderCollection | None) -> list[tuple[str, str]]:
    """Return the ``(name, value)`` pairs of a header collection.

    Args:
        headers: The header collection, or ``None``.

    Returns:
        The header pairs, in order and including duplicates.

    Example:
        ```pycon
        >>> import httpx
        >>> from webrequests.utils.headers import header_items
        >>> header_items({"A": "1"})
        [('A', '1')]
        >>> header_items(httpx.Headers([("a", "1"), ("a", "2")]))
        [('a', '1'), ('a', '2')]

        ```
    """
    if headers is None:
        return []
    if isinstance(headers, httpx.Headers):
        return list(headers.multi_items())
    if isinstance(headers, Mapping):
        return [(str(name), str(value)) for name, value in headers.items()]
    return [(str(name), str(value)) for name, value in headers]


def merge_headers(*collections: HeaderCollection | None) -> httpx.Headers:
    """Merge header collections without deduplication.

    Later collections are appended after earlier ones, so a header present
    in several collections ends up with all of their values.

    Args:
        *collections: The header collections to merge. ``None`` entries
            are skipped.

    Returns:
        The merged headers.

    Example:
        ```pycon
        >>> from webrequests.utils.headers import merge_headers
        >>> merged = merge_headers({"A": "1"}, {"A": "2"})
        >>> merged.get_list("A")
        ['1', '2']

        ```
    """
    items: list[tuple[str, str]] = []
    for collection in collections:
        items.extend(header_items(collection))
    return httpx.Headers(items)


def get_joined_values(headers: httpx.Headers, name: str) -> str | None:
    """Return all the values of a header joined with ``"; "``.

    Args:
        headers: The headers to read.
        name: The header name (case-insensitive).

    Returns:
        The joined values, or ``None`` if the header is absent.
    """
    values = headers.get_list(name)
    if not values:
        return None
    return HEADER_VALUE_SEPARATOR.join(values)


def to_header_dict(headers: httpx.Headers) -> dict[str, str]:
    """Convert ``httpx.Headers`` to a plain dictionary.

    Multi-valued headers are joined with ``"; "``.

    Example:
        ```pycon
        >>> import httpx
        >>> from webrequests.utils.headers import to_header_dict
        >>> to_header_dict(httpx.Headers([("X-A", "1"), ("X-A", "2"), ("X-B", "3")]))
        {'x-a': '1; 2', 'x-b': '3'}

        ```
    """
    return {name: get_joined_values(headers, name) or "" for name in headers.keys()}


def from_header_dict(headers: Mapping[str, str]) -> httpx.Headers:
    """Convert a plain dictionary to ``httpx.Headers``."""
    return httpx.Headers(header_items(headers))
