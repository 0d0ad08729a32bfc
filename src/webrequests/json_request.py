r"""JSON web service requests.

``JsonResponseHandler`` deserializes successful responses into a
declared type and raises ``WebServiceJsonError`` carrying the parsed
error body for error responses. ``JsonWebServiceRequest`` is a
``WebServiceRequest`` pre-wired with that handler.

Example:
    ```pycon
    >>> import asyncio
    >>> from pydantic import BaseModel
    >>> from webrequests import JsonWebServiceRequest
    >>> class Widget(BaseModel):
    ...     name: str
    ...
    >>> async def main():  # doctest: +SKIP
    ...     request = JsonWebServiceRequest("https://api.example.com/widgets/1", Widget)
    ...     return await request.get_response()
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["JsonResponseHandler", "JsonWebServiceRequest"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from webrequests.exceptions import WebServiceError, WebServiceJsonError
from webrequests.handlers import ResponseHandler
from webrequests.json_settings import JSON_CONTENT_TYPE, JsonSettings
from webrequests.request import WebServiceRequest

if TYPE_CHECKING:
    import httpx

    from webrequests.core.config import WebServiceRequestSettings
    from webrequests.info import ResponseHandlerInfo

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonResponseHandler(ResponseHandler[T]):
    r"""Handle JSON responses.

    Successful (2xx) responses are parsed and validated against
    ``response_type``; an empty body produces ``None``. Error (4xx/5xx)
    responses raise ``WebServiceJsonError`` with the body parsed as
    ``error_type`` when possible. Other responses are not handled.

    Args:
        response_type: The declared type of successful responses.
        error_type: The declared type of error bodies.
        json_settings: Optional JSON conversion options.
    """

    def __init__(
        self,
        response_type: type[T] | Any = Any,
        *,
        error_type: type[Any] | Any = Any,
        json_settings: JsonSettings | None = None,
    ) -> None:
        self.json_settings = json_settings if json_settings is not None else JsonSettings()
        self._response_adapter: TypeAdapter[T] = TypeAdapter(response_type)
        self._error_adapter: TypeAdapter[Any] = TypeAdapter(error_type)

    async def handle(self, info: ResponseHandlerInfo[T]) -> bool:
        web_response = info.web_response
        if web_response is None:
            return False
        request = info.request

        if web_response.is_success:
            body = await web_response.aread()
            if not body.strip():
                info.response = None
                return True
            try:
                info.response = self.json_settings.convert(
                    self.json_settings.loads(body), self._response_adapter
                )
            except (ValueError, ValidationError) as exc:
                raise WebServiceError(
                    message=f"{request.method} request to {request.url} returned an invalid "
                    f"JSON response: {exc}",
                    method=request.method,
                    url=str(request.url),
                    status_code=web_response.status_code,
                    response=web_response,
                    cause=exc,
                ) from exc
            return True

        if web_response.is_error:
            body = await web_response.aread()
            raise WebServiceJsonError(
                message=f"{request.method} request to {request.url} failed with status "
                f"{web_response.status_code}",
                method=request.method,
                url=str(request.url),
                status_code=web_response.status_code,
                response=web_response,
                error_payload=self._parse_error_payload(body),
            )

        return False

    def _parse_error_payload(self, body: bytes) -> Any:
        if not body.strip():
            return None
        try:
            return self.json_settings.convert(self.json_settings.loads(body), self._error_adapter)
        except (ValueError, ValidationError) as exc:
            logger.debug(f"Error response body is not a valid JSON error payload: {exc}")
            return None


class JsonWebServiceRequest(WebServiceRequest[T]):
    r"""A web service request exchanging JSON.

    The Accept header defaults to ``application/json``.

    Args:
        url: The request URL. Only ``http`` and ``https`` URLs are
            accepted.
        response_type: The declared type of successful responses.
        error_type: The declared type of error bodies.
        json_settings: Optional JSON conversion options, also used by
            ``set_json_content``.
        settings: Optional settings shared with other requests.
    """

    def __init__(
        self,
        url: str | httpx.URL,
        response_type: type[T] | Any = Any,
        *,
        error_type: type[Any] | Any = Any,
        json_settings: JsonSettings | None = None,
        settings: WebServiceRequestSettings | None = None,
    ) -> None:
        self.json_settings = json_settings if json_settings is not None else JsonSettings()
        super().__init__(
            url,
            JsonResponseHandler(
                response_type, error_type=error_type, json_settings=self.json_settings
            ),
            settings=settings,
        )
        self.accept = JSON_CONTENT_TYPE

    def set_json_content(self, value: Any) -> None:
        """Serialize a value as the JSON request content.

        Args:
            value: Any value supported by pydantic, including dataclasses
                and pydantic models.
        """
        self.content = self.json_settings.dumps(value)
        self.content_type = f"{JSON_CONTENT_TYPE}; charset=utf-8"
