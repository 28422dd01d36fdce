"""HTTP client the chat page uses to reach the query proxy."""

import os

import httpx

from cv_query.models.schemas import CVDocumentInfo, QueryRequest

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class QueryFailedError(Exception):
    """Raised when a question could not be answered, for any reason."""

    pass


class QueryClient:
    """Posts questions to ``/api/query`` and unwraps the response envelope."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def query(self, request: QueryRequest) -> str:
        """Send one question and return the answer text.

        Args:
            request: The validated question.

        Returns:
            The answer from the upstream service.

        Raises:
            QueryFailedError: On connection failure, a non-2xx status, a body
                that is not JSON, or an ``error`` field in the envelope.
        """
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post("/api/query", json=request.model_dump())
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                raise QueryFailedError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise QueryFailedError(f"Connection failed: {e}") from e
            except ValueError as e:
                raise QueryFailedError("Invalid response from server") from e

        if not isinstance(data, dict):
            raise QueryFailedError("Invalid response from server")
        if error := data.get("error"):
            raise QueryFailedError(str(error))

        answer = data.get("answer")
        if not isinstance(answer, str):
            raise QueryFailedError("Response did not include an answer")
        return answer

    async def cv_document(self) -> CVDocumentInfo:
        """Fetch metadata about the CV shown in the viewer panel.

        Raises:
            QueryFailedError: If the metadata is unavailable.
        """
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.get("/api/cv")
                response.raise_for_status()
                return CVDocumentInfo.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                raise QueryFailedError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise QueryFailedError(f"Connection failed: {e}") from e
            except ValueError as e:
                raise QueryFailedError("Invalid response from server") from e
