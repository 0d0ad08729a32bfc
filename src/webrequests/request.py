r"""Contain the web service request pipeline.

A ``WebServiceRequest`` is configured through its attributes, then sent
once with ``get_response``. The pipeline composes an ``httpx.Request``
from the request attributes and the shared settings, sends it, passes
the streamed response to a ``ResponseHandler``, forwards cookies of
handled responses to the cookie manager, and normalizes failures into
``WebServiceError``.
"""

from __future__ import annotations

__all__ = ["WebServiceRequest", "WebServiceRequestBase"]

import asyncio
import email.utils
import json
import logging
from contextlib import ExitStack
from datetime import datetime, timezone
from http.cookies import CookieError
from typing import TYPE_CHECKING, Generic, TypeVar

import httpx

from webrequests.core.config import (
    DEFAULT_ACCEPT_ENCODING,
    DEFAULT_TIMEOUT,
    OCTET_STREAM_CONTENT_TYPE,
    WebServiceRequestSettings,
)
from webrequests.core.validation import validate_timeout, validate_url
from webrequests.exceptions import ErrorKind, WebServiceError
from webrequests.info import ResponseHandlerInfo, WebServiceRequestInfo, is_cancellation_requested
from webrequests.utils.compression import compress_content
from webrequests.utils.cookies import set_cookies
from webrequests.utils.headers import header_items

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from webrequests.byte_range import ByteRange
    from webrequests.handlers import ResponseHandler
    from webrequests.utils.headers import HeaderCollection

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

# Exceptions raised while handling a response that are wrapped in a WebServiceError
WRAPPED_RESPONSE_ERRORS = (
    httpx.RequestError,
    httpx.StreamError,
    OSError,
    UnicodeDecodeError,
    json.JSONDecodeError,
)

# Methods sent with an explicit empty body when no content is provided
EMPTY_BODY_METHODS = ("POST", "PUT")


class WebServiceRequestBase:
    r"""Base class holding the configuration of a web service request.

    Args:
        url: The request URL. Only ``http`` and ``https`` URLs are
            accepted.
        settings: Optional settings shared with other requests.

    Raises:
        ValueError: If the URL scheme is not ``http`` or ``https``.

    Attributes:
        method: The HTTP method. Defaults to ``"GET"``.
        content: The request content.
        content_type: The content type of ``content``.
        if_match: The If-Match ETag.
        if_none_match: The If-None-Match ETag.
        if_modified_since: The If-Modified-Since date. Naive values are
            interpreted as UTC.
        timeout: The timeout. Overrides ``settings.default_timeout``.
        additional_headers: Headers added after the settings' default
            headers, for headers not exposed by other attributes.
        accept: The Accept header.
        referer: The Referer header.
        user_agent: The User-Agent header. Overrides
            ``settings.user_agent``.
        allows_request_content_compression: If ``True`` and it
            significantly reduces its length, the content is gzipped and
            its content type wrapped with
            ``application/x-vnd.logos.compressed; type="..."``.
        range: The byte range sent with the Range header.
        disable_auto_redirect: If ``True``, redirects are not followed.
        on_request_created: Callable invoked with the composed
            ``httpx.Request`` right before it is sent.
    """

    def __init__(
        self, url: str | httpx.URL, *, settings: WebServiceRequestSettings | None = None
    ) -> None:
        self._url = validate_url(url)
        self.settings = settings
        self._method: str | None = None
        self.content: bytes | str | None = None
        self.content_type: str | None = None
        self.if_match: str | None = None
        self.if_none_match: str | None = None
        self.if_modified_since: datetime | None = None
        self._timeout: float | httpx.Timeout | None = None
        self.additional_headers: HeaderCollection | None = None
        self.accept: str | None = None
        self.referer: str | None = None
        self.user_agent: str | None = None
        self.allows_request_content_compression = False
        self.range: ByteRange | None = None
        self.disable_auto_redirect = False
        self.on_request_created: Callable[[httpx.Request], None] | None = None

    @property
    def url(self) -> httpx.URL:
        """The request URL."""
        return self._url

    @property
    def method(self) -> str:
        """The HTTP method. Defaults to ``"GET"``."""
        return self._method or "GET"

    @method.setter
    def method(self, value: str | None) -> None:
        self._method = value.upper() if value else None

    @property
    def timeout(self) -> float | httpx.Timeout | None:
        return self._timeout

    @timeout.setter
    def timeout(self, value: float | httpx.Timeout | None) -> None:
        validate_timeout(value)
        self._timeout = value

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(method={self.method!r}, url={str(self._url)!r})"

    def create_web_request(
        self, client: httpx.AsyncClient, settings: WebServiceRequestSettings
    ) -> httpx.Request:
        """Compose the ``httpx.Request`` sent for this request.

        Headers are added in this order: the settings' default headers,
        the additional headers, Accept, User-Agent, Referer, connection
        headers, Host, Accept-Encoding, Authorization, conditional
        headers, Range, then the content type. ``on_request_created`` is
        called last.

        Args:
            client: The client used to build the request.
            settings: The effective settings.

        Returns:
            The composed request.
        """
        method = self.method
        headers = header_items(settings.default_headers)
        headers.extend(header_items(self.additional_headers))

        if self.accept:
            headers.append(("Accept", self.accept))

        user_agent = self.user_agent if self.user_agent is not None else settings.user_agent
        if user_agent:
            headers.append(("User-Agent", user_agent))

        if self.referer:
            headers.append(("Referer", self.referer))

        if settings.disable_100_continue:
            headers = [(name, value) for name, value in headers if name.lower() != "expect"]

        if settings.disable_keep_alive:
            headers.append(("Connection", "close"))

        if settings.host is not None:
            headers.append(("Host", settings.host))

        if not any(name.lower() == "accept-encoding" for name, _ in headers):
            headers.append(("Accept-Encoding", DEFAULT_ACCEPT_ENCODING))

        authorization_header = settings.create_authorization_header(
            WebServiceRequestInfo(method=method, url=self._url, headers=httpx.Headers(headers))
        )
        if authorization_header is not None:
            headers.append(("Authorization", authorization_header))

        if self.if_match is not None:
            headers.append(("If-Match", self.if_match))

        if self.if_modified_since is not None:
            headers.append(("If-Modified-Since", _format_http_date(self.if_modified_since)))

        if self.if_none_match is not None:
            headers.append(("If-None-Match", self.if_none_match))

        if self.range is not None:
            headers.append(("Range", self.range.to_header()))

        content, content_type, content_encoding = self.get_request_content(method)
        if content_type is not None:
            headers.append(("Content-Type", content_type))
        if content_encoding is not None:
            headers.append(("Content-Encoding", content_encoding))

        timeout = self._timeout if self._timeout is not None else settings.default_timeout
        request = client.build_request(
            method,
            self._url,
            headers=headers,
            content=content,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

        # Cookies come from the cookie manager only, never from the client's own jar
        if not any(name.lower() == "cookie" for name, _ in headers):
            request.headers.pop("Cookie", None)

        if settings.cookie_manager is not None:
            settings.cookie_manager.cookies.set_cookie_header(request)

        if self.on_request_created is not None:
            self.on_request_created(request)

        return request

    def get_request_content(
        self, method: str
    ) -> tuple[bytes | str | None, str | None, str | None]:
        """Return the content to send with the request.

        POST and PUT requests without content are sent with an explicit
        empty ``application/octet-stream`` body.

        Args:
            method: The HTTP method.

        Returns:
            A ``(content, content_type, content_encoding)`` tuple.
        """
        content = self.content
        content_type = self.content_type
        if content is None:
            if method in EMPTY_BODY_METHODS:
                return b"", OCTET_STREAM_CONTENT_TYPE, None
            return None, None, None

        if self.allows_request_content_compression:
            raw = content.encode("utf-8") if isinstance(content, str) else content
            compressed = compress_content(raw, content_type)
            if compressed is not None:
                return compressed[0], compressed[1], "gzip"
        return content, content_type, None


class WebServiceRequest(WebServiceRequestBase, Generic[T]):
    r"""A web service request producing a typed response.

    The request object is meant to be sent once. Sending it again is
    possible but logs a warning.

    Args:
        url: The request URL. Only ``http`` and ``https`` URLs are
            accepted.
        handler: The response handler producing the typed result.
        settings: Optional settings shared with other requests.

    Raises:
        ValueError: If the URL scheme is not ``http`` or ``https``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from webrequests import WebServiceRequest, WebServiceRequestSettings
        >>> from webrequests.handlers import BytesResponseHandler
        >>> async def main():  # doctest: +SKIP
        ...     request = WebServiceRequest(
        ...         "https://api.example.com/data",
        ...         BytesResponseHandler(),
        ...         settings=WebServiceRequestSettings(user_agent="my-app/1.0"),
        ...     )
        ...     request.timeout = 30.0
        ...     return await request.get_response()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        url: str | httpx.URL,
        handler: ResponseHandler[T],
        *,
        settings: WebServiceRequestSettings | None = None,
    ) -> None:
        super().__init__(url, settings=settings)
        self.handler = handler
        self._send_count = 0

    async def get_response(self) -> T:
        """Send the request and return the typed response.

        Returns:
            The value produced by the response handler.

        Raises:
            WebServiceError: If the request cannot be sent, the response
                is not handled, or handling the response fails.
            asyncio.CancelledError: If the task is cancelled while the
                response is being handled.
        """
        self._send_count += 1
        if self._send_count > 1:
            logger.warning(f"{self!r} is being sent {self._send_count} times")

        settings = self.settings if self.settings is not None else WebServiceRequestSettings()
        owns_client = settings.client is None
        client = settings.client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        detached_response: httpx.Response | None = None
        try:
            request = self.create_web_request(client, settings)
            with ExitStack() as stack:
                if settings.start_trace is not None:
                    trace = settings.start_trace(request)
                    if trace is not None:
                        stack.enter_context(trace)

                web_response = await self._send(client, request)
                info: ResponseHandlerInfo[T] = ResponseHandlerInfo(web_response)
                try:
                    return await self._handle_response(request, info, settings)
                finally:
                    if info.is_detached:
                        detached_response = web_response
        finally:
            if owns_client:
                if detached_response is not None and not detached_response.is_closed:
                    detached_response.stream = _ClientClosingStream(
                        detached_response.stream, client
                    )
                else:
                    await client.aclose()

    async def _send(self, client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
        logger.debug(f"Sending {request.method} request to {request.url}")
        try:
            return await client.send(
                request, stream=True, follow_redirects=not self.disable_auto_redirect
            )
        except httpx.RequestError as exc:
            raise WebServiceError(
                message=f"{request.method} request to {request.url} failed: {exc}",
                method=request.method,
                url=str(self.url),
                kind=ErrorKind.REQUEST,
                cause=exc,
            ) from exc

    async def _handle_response(
        self,
        request: httpx.Request,
        info: ResponseHandlerInfo[T],
        settings: WebServiceRequestSettings,
    ) -> T:
        web_response = info.web_response
        logger.debug(
            f"{request.method} request to {request.url} returned status {web_response.status_code}"
        )
        try:
            try:
                handled = await self.handler.handle(info)
            except WRAPPED_RESPONSE_ERRORS as exc:
                raise WebServiceError(
                    message=f"{request.method} request to {request.url} failed while "
                    f"handling the response: {exc}",
                    method=request.method,
                    url=str(self.url),
                    status_code=web_response.status_code,
                    cause=exc,
                ) from exc

            if not handled:
                _raise_if_cancellation_requested()
                raise WebServiceError(
                    message="Web response not handled.",
                    method=request.method,
                    url=str(self.url),
                    status_code=web_response.status_code,
                )
            _raise_if_cancellation_requested()

            try:
                set_cookies(settings.cookie_manager, request.url, web_response.headers)
            except CookieError as exc:
                raise WebServiceError(
                    message="Failure setting cookie.",
                    method=request.method,
                    url=str(self.url),
                    status_code=web_response.status_code,
                    cause=exc,
                ) from exc
            _raise_if_cancellation_requested()
        finally:
            if info.web_response is not None:
                await info.web_response.aclose()

        return info.response


class _ClientClosingStream(httpx.AsyncByteStream):
    r"""Response stream closing the pipeline-owned client together with
    a detached response."""

    def __init__(self, stream: httpx.AsyncByteStream, client: httpx.AsyncClient) -> None:
        self._stream = stream
        self._client = client

    async def __aiter__(self) -> AsyncIterator[bytes]:
        async for chunk in self._stream:
            yield chunk

    async def aclose(self) -> None:
        try:
            await self._stream.aclose()
        finally:
            await self._client.aclose()


def _raise_if_cancellation_requested() -> None:
    if is_cancellation_requested():
        raise asyncio.CancelledError


def _format_http_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return email.utils.format_datetime(value.astimezone(timezone.utc), usegmt=True)
