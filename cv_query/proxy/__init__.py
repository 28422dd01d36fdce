"""Query proxy that relays CV questions to the upstream LLM service.

Responsibilities:
    - Request validation before any network call
    - Forwarding the validated body unchanged to the upstream endpoint
    - Mapping upstream failures to readable error messages

Holds no state between requests. Each call opens its own connection.
"""

from cv_query.proxy.config import ProxyConfig, get_proxy_config
from cv_query.proxy.errors import (
    QueryProxyError,
    QueryValidationError,
    UpstreamConnectionError,
    UpstreamResponseError,
    UpstreamStatusError,
)
from cv_query.proxy.service import QueryProxy, get_query_proxy

__all__ = [
    "ProxyConfig",
    "QueryProxy",
    "QueryProxyError",
    "QueryValidationError",
    "UpstreamConnectionError",
    "UpstreamResponseError",
    "UpstreamStatusError",
    "get_proxy_config",
    "get_query_proxy",
]
