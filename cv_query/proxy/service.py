"""Query proxy service: validate, forward, and normalize upstream failures.

The proxy forwards exactly one JSON POST per incoming question. It keeps no
connection pool, cache, or session between calls, and never retries. The
upstream body is passed back untouched on success; every failure surfaces as
a QueryProxyError subclass whose message is safe to show to the user.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from cv_query.models.schemas import QueryRequest
from cv_query.proxy.config import ProxyConfig, get_proxy_config
from cv_query.proxy.errors import (
    QueryValidationError,
    UpstreamConnectionError,
    UpstreamResponseError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

CONNECTION_FAILED_MESSAGE = "Failed to connect to the CV query service"
INVALID_RESPONSE_MESSAGE = "The CV query service returned an invalid response"


def _format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into a single readable line.

    Args:
        error: The validation error raised for the request body.

    Returns:
        Messages joined by "; ", each prefixed with its field path.
    """
    parts: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts) or "Invalid request"


class QueryProxy:
    """Relays validated questions to the upstream CV query endpoint.

    Wraps a single outbound call with:
    - Request validation against QueryRequest
    - A fresh httpx client per call (no shared pool)
    - Status and body mapping to readable error messages
    """

    def __init__(
        self,
        config: ProxyConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the proxy.

        Args:
            config: Optional proxy configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, used to stub the upstream in tests.
        """
        self._config = config or get_proxy_config()
        self._transport = transport

    @property
    def upstream_url(self) -> str:
        return self._config.upstream_url

    def validate(self, body: bytes | str) -> QueryRequest:
        """Parse and validate a raw JSON request body.

        Args:
            body: The raw request body.

        Returns:
            The validated QueryRequest.

        Raises:
            QueryValidationError: If the body is not valid JSON or violates the schema.
        """
        try:
            return QueryRequest.model_validate_json(body)
        except ValidationError as e:
            raise QueryValidationError(_format_validation_error(e)) from e

    async def forward(self, request: QueryRequest) -> dict[str, Any]:
        """Send a validated request to the upstream service.

        Args:
            request: The validated query request.

        Returns:
            The upstream JSON object, unchanged.

        Raises:
            UpstreamStatusError: Upstream answered with a non-2xx status.
            UpstreamResponseError: Upstream 2xx body is not a JSON object.
            UpstreamConnectionError: Upstream could not be reached.
        """
        logger.info(
            f"Forwarding query for session {request.session_id} "
            f"({len(request.prompt)} chars) to {self.upstream_url}"
        )

        # No timeout: the upstream may need a long cold start
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            try:
                response = await client.post(self.upstream_url, json=request.model_dump())
            except httpx.RequestError as e:
                logger.warning(f"Upstream request failed: {e!r}")
                raise UpstreamConnectionError(str(e) or CONNECTION_FAILED_MESSAGE) from e

        if not response.is_success:
            message = self._status_error_message(response)
            logger.warning(f"Upstream returned {response.status_code}: {message}")
            raise UpstreamStatusError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Upstream returned non-JSON body ({len(response.content)} bytes)")
            raise UpstreamResponseError(INVALID_RESPONSE_MESSAGE) from e

        if not isinstance(data, dict):
            logger.warning(f"Upstream returned JSON {type(data).__name__}, expected object")
            raise UpstreamResponseError(INVALID_RESPONSE_MESSAGE)

        return data

    async def query(self, body: bytes | str) -> dict[str, Any]:
        """Validate a raw body and forward it.

        Args:
            body: The raw request body.

        Returns:
            The upstream JSON object, unchanged.

        Raises:
            QueryProxyError: Any validation or upstream failure.
        """
        request = self.validate(body)
        return await self.forward(request)

    def _status_error_message(self, response: httpx.Response) -> str:
        """Build the user-facing message for a non-2xx upstream response.

        Prefers the upstream ``detail`` field, then a generic status message,
        and falls back to the reason phrase when the body is not JSON.
        """
        if response.status_code == 404:
            return (
                "The CV query endpoint is not available. The backend service may not be "
                "deployed or the /query endpoint might not exist. Please verify the "
                f"backend is running at {self.upstream_url}"
            )

        try:
            data = response.json()
        except ValueError:
            return response.reason_phrase or f"API Error ({response.status_code})"

        detail = data.get("detail") if isinstance(data, dict) else None
        if not detail:
            return f"API Error ({response.status_code})"
        return detail if isinstance(detail, str) else json.dumps(detail)


# Module-level singleton instance
_query_proxy: QueryProxy | None = None


def get_query_proxy() -> QueryProxy:
    """Get or create the global query proxy.

    Returns:
        The QueryProxy instance.
    """
    global _query_proxy
    if _query_proxy is None:
        _query_proxy = QueryProxy()
    return _query_proxy
