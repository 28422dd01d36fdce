"""Exceptions raised while relaying a query to the upstream service.

Every failure carries a human-readable message; the API layer turns it
into the ``{"error": ...}`` envelope.
"""


class QueryProxyError(Exception):
    """Base class for query proxy failures."""

    pass


class QueryValidationError(QueryProxyError):
    """Raised when the incoming request body does not match QueryRequest."""

    pass


class UpstreamStatusError(QueryProxyError):
    """Raised when the upstream service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamResponseError(QueryProxyError):
    """Raised when a 2xx upstream body is not a JSON object."""

    pass


class UpstreamConnectionError(QueryProxyError):
    """Raised when the upstream service cannot be reached."""

    pass
