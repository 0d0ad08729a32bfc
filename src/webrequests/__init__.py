r"""webrequests - Typed web service requests built on httpx.

This package provides request objects that configure headers, cookies,
request compression, byte ranges, timeouts and redirect behavior, send
a single asynchronous request with httpx, and map the response into a
typed result or a structured ``WebServiceError``.

Key Features:
    - Shared settings for default headers, timeout, user agent,
      authorization, cookies and tracing
    - Pluggable response handlers (bytes, text, streaming, JSON, custom)
    - JSON responses validated against a declared type with pydantic
    - Structured errors distinguishing request and response failures
    - Cooperative cancellation through asyncio task cancellation

Example:
    ```pycon
    >>> import asyncio
    >>> from webrequests import JsonWebServiceRequest, WebServiceRequestSettings
    >>> settings = WebServiceRequestSettings(user_agent="my-app/1.0", default_timeout=30.0)
    >>> async def main():  # doctest: +SKIP
    ...     request = JsonWebServiceRequest(
    ...         "https://api.example.com/data", dict[str, int], settings=settings
    ...     )
    ...     return await request.get_response()
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ByteRange",
    "BytesResponseHandler",
    "CookieJarManager",
    "CookieManager",
    "ErrorKind",
    "JsonResponseHandler",
    "JsonSettings",
    "JsonWebServiceRequest",
    "ResponseHandler",
    "ResponseHandlerInfo",
    "StreamResponseHandler",
    "TextResponseHandler",
    "WebServiceError",
    "WebServiceJsonError",
    "WebServiceRequest",
    "WebServiceRequestBase",
    "WebServiceRequestInfo",
    "WebServiceRequestSettings",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from webrequests.byte_range import ByteRange
from webrequests.cookies import CookieJarManager, CookieManager
from webrequests.core.config import WebServiceRequestSettings
from webrequests.exceptions import ErrorKind, WebServiceError, WebServiceJsonError
from webrequests.handlers import (
    BytesResponseHandler,
    ResponseHandler,
    StreamResponseHandler,
    TextResponseHandler,
)
from webrequests.info import ResponseHandlerInfo, WebServiceRequestInfo
from webrequests.json_request import JsonResponseHandler, JsonWebServiceRequest
from webrequests.json_settings import JsonSettings
from webrequests.request import WebServiceRequest, WebServiceRequestBase

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
