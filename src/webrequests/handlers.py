r"""Response handlers turning raw responses into typed results.

A response handler implements the single ``handle`` operation called by
the request pipeline once per request. It returns ``True`` when it
handled the response (and stored the result in ``info.response``), or
``False`` to make the pipeline raise a "not handled" error.

The following exceptions raised by a handler are wrapped by the pipeline
in a ``WebServiceError``: ``httpx.RequestError`` (network and decoding
failures), ``httpx.StreamError`` (use of a closed or consumed stream),
``OSError``, and the malformed data errors ``UnicodeDecodeError`` and
``json.JSONDecodeError``.

Example:
    ```pycon
    >>> import asyncio
    >>> from webrequests import WebServiceRequest
    >>> from webrequests.handlers import TextResponseHandler
    >>> async def main():  # doctest: +SKIP
    ...     request = WebServiceRequest("https://example.com", TextResponseHandler())
    ...     return await request.get_response()
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "BytesResponseHandler",
    "ResponseHandler",
    "StreamResponseHandler",
    "TextResponseHandler",
]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    import httpx

    from webrequests.info import ResponseHandlerInfo

T = TypeVar("T")


class ResponseHandler(ABC, Generic[T]):
    """Define the interface of a response handler."""

    @abstractmethod
    async def handle(self, info: ResponseHandlerInfo[T]) -> bool:
        """Handle a response.

        Args:
            info: The response info. The handler stores its result in
                ``info.response``.

        Returns:
            ``True`` if the response was handled, ``False`` if the
            pipeline should raise a "not handled" error.
        """


class BytesResponseHandler(ResponseHandler[bytes]):
    """Return the body of successful (2xx) responses as bytes."""

    async def handle(self, info: ResponseHandlerInfo[bytes]) -> bool:
        web_response = info.web_response
        if web_response is None or not web_response.is_success:
            return False
        info.response = await web_response.aread()
        return True


class TextResponseHandler(ResponseHandler[str]):
    """Return the body of successful (2xx) responses as decoded text."""

    async def handle(self, info: ResponseHandlerInfo[str]) -> bool:
        web_response = info.web_response
        if web_response is None or not web_response.is_success:
            return False
        await web_response.aread()
        info.response = web_response.text
        return True


class StreamResponseHandler(ResponseHandler["httpx.Response"]):
    """Return successful (2xx) responses unread.

    The response is detached from the pipeline, so its body can be
    streamed after ``get_response`` returns. The caller must close it.
    """

    async def handle(self, info: ResponseHandlerInfo[httpx.Response]) -> bool:
        web_response = info.web_response
        if web_response is None or not web_response.is_success:
            return False
        info.response = info.detach_web_response()
        return True
