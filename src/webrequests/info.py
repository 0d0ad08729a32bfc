r"""Data structures passed to request and response callbacks."""

from __future__ import annotations

__all__ = ["ResponseHandlerInfo", "WebServiceRequestInfo", "is_cancellation_requested"]

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    import httpx

T = TypeVar("T")


def is_cancellation_requested() -> bool:
    """Return ``True`` if the current asyncio task is being cancelled."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        return False
    return task is not None and task.cancelling() > 0


@dataclass(frozen=True)
class WebServiceRequestInfo:
    """Information about an outbound request, passed to
    ``authorization_header_creator``.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        url: The request URL.
        headers: The headers composed so far.
    """

    method: str
    url: httpx.URL
    headers: httpx.Headers


class ResponseHandlerInfo(Generic[T]):
    r"""Information passed to ``ResponseHandler.handle``.

    The handler reads ``web_response`` and stores the typed result in
    ``response``. The request pipeline owns the raw response and closes
    it once the handler returns, unless the handler calls
    ``detach_web_response`` to take ownership of it.

    Args:
        web_response: The raw streamed response. Its body has not been
            read yet.
    """

    def __init__(self, web_response: httpx.Response) -> None:
        self._web_response: httpx.Response | None = web_response
        self._request = web_response.request
        self._detached = False
        self.response: T | None = None

    @property
    def web_response(self) -> httpx.Response | None:
        """The raw response, or ``None`` once it has been detached."""
        return self._web_response

    @property
    def request(self) -> httpx.Request:
        """The request that produced the response."""
        return self._request

    @property
    def is_detached(self) -> bool:
        return self._detached

    @property
    def cancellation_requested(self) -> bool:
        """``True`` if the task running the request is being cancelled."""
        return is_cancellation_requested()

    def detach_web_response(self) -> httpx.Response:
        """Take ownership of the raw response.

        After this call the pipeline no longer closes the response; the
        caller must close it (``await response.aclose()``).

        Returns:
            The raw response.

        Raises:
            RuntimeError: If the response was already detached.
        """
        if self._web_response is None:
            msg = "The web response has already been detached"
            raise RuntimeError(msg)
        web_response = self._web_response
        self._web_response = None
        self._detached = True
        return web_response
