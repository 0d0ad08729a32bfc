r"""Settings dataclass and defaults for web service requests.

This module provides configuration constants and the settings object
shared by any number of ``WebServiceRequest`` instances.
"""

from __future__ import annotations

__all__ = [
    "COMPRESSED_CONTENT_TYPE",
    "DEFAULT_ACCEPT_ENCODING",
    "DEFAULT_TIMEOUT",
    "OCTET_STREAM_CONTENT_TYPE",
    "WebServiceRequestSettings",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from webrequests.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextlib import AbstractContextManager

    import httpx

    from webrequests.cookies import CookieManager
    from webrequests.info import WebServiceRequestInfo
    from webrequests.utils.headers import HeaderCollection


# Default timeout in seconds for clients created by the request pipeline
DEFAULT_TIMEOUT = 10.0

# Content type of the explicit empty body sent with POST/PUT requests
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

# Content type wrapping compressed request content
COMPRESSED_CONTENT_TYPE = "application/x-vnd.logos.compressed"

# Response encodings decoded automatically by httpx
DEFAULT_ACCEPT_ENCODING = "gzip, deflate"


@dataclass
class WebServiceRequestSettings:
    """Settings shared by web service requests.

    A settings object is typically created once and reused by many
    requests. The request pipeline never mutates it.

    Args:
        default_headers: Headers added to every request before the
            request's own additional headers.
        default_timeout: Timeout used when the request does not specify
            one. Must be > 0 if numeric.
        user_agent: User-Agent used when the request does not specify one.
        cookie_manager: Shared cookie manager. Its cookies are sent with
            every request and ``Set-Cookie`` headers of handled responses
            are forwarded to it.
        authorization_header: Static Authorization header value. Takes
            precedence over ``authorization_header_creator``.
        authorization_header_creator: Callable producing the Authorization
            header value from the outbound request info.
        host: Host header override.
        disable_100_continue: Remove any ``Expect`` header from requests.
        disable_keep_alive: Send ``Connection: close`` with requests.
        start_trace: Callable invoked with the composed ``httpx.Request``
            before it is sent. It returns a context manager (or ``None``)
            that is exited once the request completes or fails.
        client: Caller-owned ``httpx.AsyncClient`` used to send requests.
            If ``None``, each request creates and closes its own client.
            httpx still stores response cookies in the client's own
            jar, but that jar is never used to build the ``Cookie``
            header; only ``cookie_manager`` is.

    Example:
        ```pycon
        >>> from webrequests import WebServiceRequestSettings
        >>> settings = WebServiceRequestSettings(user_agent="my-app/1.0")
        >>> settings.user_agent
        'my-app/1.0'
        >>> merged = settings.merge(default_timeout=30.0)
        >>> merged.default_timeout
        30.0
        >>> settings.default_timeout is None  # Original unchanged
        True

        ```
    """

    default_headers: HeaderCollection | None = None
    default_timeout: float | httpx.Timeout | None = None
    user_agent: str | None = None
    cookie_manager: CookieManager | None = None
    authorization_header: str | None = None
    authorization_header_creator: Callable[[WebServiceRequestInfo], str | None] | None = None
    host: str | None = None
    disable_100_continue: bool = False
    disable_keep_alive: bool = False
    start_trace: Callable[[httpx.Request], AbstractContextManager[Any] | None] | None = None
    client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        validate_timeout(self.default_timeout)

    def merge(self, **overrides: Any) -> WebServiceRequestSettings:
        """Create new settings with the specified fields overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new ``WebServiceRequestSettings`` instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def create_authorization_header(self, info: WebServiceRequestInfo) -> str | None:
        """Return the Authorization header value for a request.

        The static ``authorization_header`` wins; the creator is only
        called when no static value is configured.

        Args:
            info: The outbound request info.

        Returns:
            The header value, or ``None`` if no authorization is configured.
        """
        if self.authorization_header is not None:
            return self.authorization_header
        if self.authorization_header_creator is not None:
            return self.authorization_header_creator(info)
        return None
