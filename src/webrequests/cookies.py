r"""Cookie manager interface and default implementation.

A cookie manager is shared by any number of concurrent requests through
``WebServiceRequestSettings.cookie_manager``. Its ``cookies`` store is
used to build the ``Cookie`` header of outgoing requests, and the
``Set-Cookie`` values of handled responses are given to
``set_cookies``.

Example:
    ```pycon
    >>> from webrequests.cookies import CookieJarManager
    >>> manager = CookieJarManager()
    >>> manager.set_cookies("https://example.com/", "session=abc; Path=/")
    >>> manager.cookies.get("session")
    'abc'

    ```
"""

from __future__ import annotations

__all__ = ["CookieJarManager", "CookieManager"]

import threading
from http.cookies import CookieError, SimpleCookie
from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class CookieManager(Protocol):
    """Capability interface of a cookie manager.

    Implementations must support concurrent calls to ``set_cookies`` and
    raise ``http.cookies.CookieError`` for malformed cookie headers.
    """

    @property
    def cookies(self) -> httpx.Cookies:
        """The cookies sent with outgoing requests."""

    def set_cookies(self, url: httpx.URL | str, cookie_header: str) -> None:
        """Store the cookies of a ``Set-Cookie`` header value.

        Args:
            url: The URL of the request that received the cookies.
            cookie_header: The ``Set-Cookie`` values joined with ``"; "``.
        """


class CookieJarManager:
    r"""Cookie manager storing cookies in an ``httpx.Cookies`` jar.

    Args:
        cookies: Optional initial cookies.
    """

    def __init__(self, cookies: httpx.Cookies | None = None) -> None:
        self._cookies = cookies if cookies is not None else httpx.Cookies()
        self._lock = threading.Lock()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._cookies

    def set_cookies(self, url: httpx.URL | str, cookie_header: str) -> None:
        """Parse a ``Set-Cookie`` header value and store its cookies.

        Cookies are stored under the ``Domain`` attribute when present,
        otherwise under the host of ``url``, and under the ``Path``
        attribute (default ``/``).

        Raises:
            http.cookies.CookieError: If the header cannot be parsed.
        """
        url = httpx.URL(url)
        parsed = SimpleCookie()
        parsed.load(cookie_header)
        if not parsed and cookie_header.strip():
            msg = f"Invalid Set-Cookie header for {url}: {cookie_header!r}"
            raise CookieError(msg)
        with self._lock:
            for name, morsel in parsed.items():
                self._cookies.set(
                    name,
                    morsel.value,
                    domain=morsel["domain"] or url.host,
                    path=morsel["path"] or "/",
                )
