"""Query proxy endpoint for CV questions.

Validates the request, forwards it to the upstream service, and always
answers 200 with either the upstream body or an ``{"error": ...}`` envelope.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from cv_query.models.schemas import QueryRequest, QueryResponse
from cv_query.proxy.errors import QueryProxyError
from cv_query.proxy.service import CONNECTION_FAILED_MESSAGE, QueryProxy, get_query_proxy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["query"])


def _error_envelope(message: str) -> JSONResponse:
    """Wrap an error message in the uniform 200 response."""
    payload = QueryResponse(error=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=200, content=payload)


@router.post(
    "/query",
    response_model=QueryResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": QueryRequest.model_json_schema()}},
        }
    },
)
async def query(
    request: Request,
    proxy: QueryProxy = Depends(get_query_proxy),
) -> Any:
    """Forward a CV question to the upstream query service.

    The body is read raw so that validation failures are reported in the
    same envelope as upstream failures instead of FastAPI's 422.

    Args:
        request: The incoming request carrying ``{session_id, prompt}``.
        proxy: The query proxy dependency.

    Returns:
        The upstream JSON unchanged, or ``{"error": message}``. Status is always 200.
    """
    try:
        body = await request.body()
        data = await proxy.query(body)
    except QueryProxyError as e:
        return _error_envelope(str(e))
    except Exception as e:
        logger.exception("Unexpected error while relaying query")
        return _error_envelope(str(e) or CONNECTION_FAILED_MESSAGE)

    return JSONResponse(status_code=200, content=data)
