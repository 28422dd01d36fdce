"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - proxy_config: Proxy configuration pointing at a fake upstream URL
    - upstream: Scriptable stand-in for the upstream CV query service
    - app: Fresh FastAPI app wired to the fake upstream
    - async_client: HTTPX client for API testing
    - mock_session_id: Consistent session ID for tests
    - cv_pdf_bytes: A small valid PDF generated with pypdf
"""

import io
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from cv_query.api.app import create_app
from cv_query.proxy.config import ProxyConfig
from cv_query.proxy.service import QueryProxy, get_query_proxy

UPSTREAM_URL = "https://cv-api.test/query"


class FakeUpstream:
    """Records forwarded requests and answers with a scripted response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"answer": "ok"}
        )
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def respond(self, status_code: int = 200, **kwargs) -> None:
        """Answer every request with a fresh response built from these arguments."""
        self._handler = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, message: str = "Connection refused") -> None:
        """Make every request fail as if the host were unreachable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=request)

        self._handler = handler


@pytest.fixture
def mock_session_id() -> str:
    """Generate consistent session ID for testing.

    Returns:
        Predictable session ID for test assertions.
    """
    return "session_1700000000000_abc123def"


@pytest.fixture
def proxy_config() -> ProxyConfig:
    """Return proxy configuration aimed at the fake upstream."""
    return ProxyConfig(upstream_url=UPSTREAM_URL)


@pytest.fixture
def upstream() -> FakeUpstream:
    """Return a fake upstream that answers ``{"answer": "ok"}`` by default."""
    return FakeUpstream()


@pytest.fixture
def query_proxy(proxy_config: ProxyConfig, upstream: FakeUpstream) -> QueryProxy:
    """Return a QueryProxy that talks to the fake upstream."""
    return QueryProxy(config=proxy_config, transport=upstream.transport)


@pytest.fixture
def app(query_proxy: QueryProxy) -> FastAPI:
    """Create the FastAPI app with the proxy dependency overridden.

    Args:
        query_proxy: Proxy bound to the fake upstream.

    Returns:
        Configured application instance.
    """
    application = create_app()
    application.dependency_overrides[get_query_proxy] = lambda: query_proxy
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def cv_pdf_bytes() -> bytes:
    """Return a two-page PDF with title and author metadata."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=612, height=792)
    writer.add_metadata({"/Title": "Kees Hartley CV", "/Author": "Kees Hartley"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
