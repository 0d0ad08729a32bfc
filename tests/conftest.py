from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from webrequests import WebServiceRequestSettings

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Collect the requests received by the mock transport."""
    return []


@pytest.fixture
def make_settings(
    sent_requests: list[httpx.Request],
) -> Callable[..., WebServiceRequestSettings]:
    """Create settings whose client replies with a fixed response.

    The returned factory accepts the response status code, content and
    headers, plus any ``WebServiceRequestSettings`` field.
    """

    def factory(
        status_code: int = 200,
        content: bytes = b"",
        headers: dict[str, str] | list[tuple[str, str]] | None = None,
        **kwargs: object,
    ) -> WebServiceRequestSettings:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return httpx.Response(status_code, content=content, headers=headers)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return WebServiceRequestSettings(client=client, **kwargs)

    return factory


@pytest.fixture
def mock_handler() -> Mock:
    """Create a mock response handler returning ``True``."""
    return Mock(handle=AsyncMock(return_value=True))
