r"""Utilities forwarding ``Set-Cookie`` response headers to a cookie
manager."""

from __future__ import annotations

__all__ = ["SET_COOKIE_HEADER", "get_set_cookie_header", "set_cookies"]

import logging
from typing import TYPE_CHECKING

from webrequests.utils.headers import get_joined_values

if TYPE_CHECKING:
    import httpx

    from webrequests.cookies import CookieManager

logger: logging.Logger = logging.getLogger(__name__)

SET_COOKIE_HEADER = "Set-Cookie"


def get_set_cookie_header(headers: httpx.Headers | None) -> str | None:
    """Return all ``Set-Cookie`` values joined with ``"; "``.

    Args:
        headers: The response headers, or ``None``.

    Returns:
        The joined values, or ``None`` if there is no non-empty
        ``Set-Cookie`` header.

    Example:
        ```pycon
        >>> import httpx
        >>> from webrequests.utils.cookies import get_set_cookie_header
        >>> get_set_cookie_header(httpx.Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]))
        'a=1; b=2'
        >>> get_set_cookie_header(httpx.Headers({"Content-Type": "text/plain"})) is None
        True

        ```
    """
    if headers is None:
        return None
    return get_joined_values(headers, SET_COOKIE_HEADER) or None


def set_cookies(
    cookie_manager: CookieManager | None, url: httpx.URL | str, headers: httpx.Headers | None
) -> None:
    """Forward the ``Set-Cookie`` values of a response to a cookie
    manager.

    The manager receives a single call with all the values joined with
    ``"; "``. Nothing happens without a manager or without cookies.

    Args:
        cookie_manager: The cookie manager, or ``None``.
        url: The request URL the cookies belong to.
        headers: The response headers.

    Raises:
        http.cookies.CookieError: If the cookie manager rejects the header.
    """
    if cookie_manager is None:
        return
    cookie_header = get_set_cookie_header(headers)
    if cookie_header is None:
        return
    logger.debug(f"Setting cookies for {url}")
    cookie_manager.set_cookies(url, cookie_header)
