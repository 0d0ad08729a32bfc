r"""Utility functions for header, cookie and request content handling.

This package provides pure helper functions used by the request
pipeline: merging and converting header collections, forwarding
``Set-Cookie`` headers to a cookie manager, and compressing request
content.
"""

from __future__ import annotations

__all__ = [
    "HEADER_VALUE_SEPARATOR",
    "HeaderCollection",
    "compress_content",
    "from_header_dict",
    "get_joined_values",
    "get_set_cookie_header",
    "header_items",
    "merge_headers",
    "set_cookies",
    "to_header_dict",
]

from webrequests.utils.compression import compress_content
from webrequests.utils.cookies import get_set_cookie_header, set_cookies
from webrequests.utils.headers import (
    HEADER_VALUE_SEPARATOR,
    HeaderCollection,
    from_header_dict,
    get_joined_values,
    header_items,
    merge_headers,
    to_header_dict,
)
