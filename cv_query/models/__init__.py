"""Pydantic models for the chat session and the query proxy.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: Individual message in a conversation
    - ChatSessionState: Snapshot of one client session
    - QueryRequest: Payload forwarded to the CV query service
    - QueryResponse: Uniform envelope returned by the proxy
    - CVDocumentInfo: Metadata about the CV PDF
"""

from cv_query.models.schemas import (
    MAX_PROMPT_LENGTH,
    ChatSessionState,
    CVDocumentInfo,
    Message,
    QueryRequest,
    QueryResponse,
)

__all__ = [
    "MAX_PROMPT_LENGTH",
    "CVDocumentInfo",
    "ChatSessionState",
    "Message",
    "QueryRequest",
    "QueryResponse",
]
