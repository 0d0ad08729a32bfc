r"""Core configuration and validation shared by web service requests."""

from __future__ import annotations

__all__ = [
    "COMPRESSED_CONTENT_TYPE",
    "DEFAULT_ACCEPT_ENCODING",
    "DEFAULT_TIMEOUT",
    "OCTET_STREAM_CONTENT_TYPE",
    "WebServiceRequestSettings",
    "validate_byte_range",
    "validate_timeout",
    "validate_url",
]

from webrequests.core.config import (
    COMPRESSED_CONTENT_TYPE,
    DEFAULT_ACCEPT_ENCODING,
    DEFAULT_TIMEOUT,
    OCTET_STREAM_CONTENT_TYPE,
    WebServiceRequestSettings,
)
from webrequests.core.validation import validate_byte_range, validate_timeout, validate_url
