r"""Define the structured errors raised by web service requests."""

from __future__ import annotations

__all__ = ["ErrorKind", "WebServiceError", "WebServiceJsonError"]

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class ErrorKind(Enum):
    """Phase of the request pipeline in which an error occurred.

    Attributes:
        REQUEST: The request could not be composed or sent.
        RESPONSE: The response could not be interpreted.
    """

    REQUEST = "request"
    RESPONSE = "response"


class WebServiceError(Exception):
    r"""Exception raised when a web service request fails.

    Args:
        message: A human-readable description of the failure.
        method: The HTTP method of the request.
        url: The request URL.
        kind: The pipeline phase in which the failure occurred.
        status_code: The HTTP status code of the response, if any.
        response: The response object, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from webrequests import WebServiceError
        >>> error = WebServiceError(
        ...     message="Web response not handled.",
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ... )
        >>> error.kind
        <ErrorKind.RESPONSE: 'response'>
        >>> error.method
        'GET'

        ```
    """

    def __init__(
        self,
        message: str,
        method: str,
        url: str,
        *,
        kind: ErrorKind = ErrorKind.RESPONSE,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = str(url)
        self.kind = kind
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(message={self.message!r}, method={self.method!r}, "
            f"url={self.url!r}, kind={self.kind.value!r}, status_code={self.status_code!r})"
        )


class WebServiceJsonError(WebServiceError):
    r"""Exception raised when a JSON web service returns an error status.

    Args:
        message: A human-readable description of the failure.
        method: The HTTP method of the request.
        url: The request URL.
        error_payload: The parsed JSON error body, or ``None`` if the body
            could not be parsed as the expected error type.
        **kwargs: Additional keyword arguments passed to
            ``WebServiceError``.
    """

    def __init__(
        self, message: str, method: str, url: str, *, error_payload: Any = None, **kwargs: Any
    ) -> None:
        super().__init__(message, method, url, **kwargs)
        self.error_payload = error_payload
