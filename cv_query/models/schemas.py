"""Request, response, and message schemas shared by the proxy and the chat UI."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Shared by proxy validation and the UI's submit guard
MAX_PROMPT_LENGTH = 10000


class Message(BaseModel):
    """A single chat message in the conversation.

    Messages are created client-side and never change afterwards.

    Attributes:
        id: Unique message identifier.
        role: The speaker, either user or assistant.
        content: The message text.
        timestamp: ISO-8601 creation time.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message identifier")
    role: Literal["user", "assistant"] = Field(..., description="Message role")
    content: str = Field(..., description="The message content")
    timestamp: str = Field(..., description="ISO-8601 creation timestamp")


class ChatSessionState(BaseModel):
    """Snapshot of a client chat session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", description="Session correlation token")
    messages: list[Message] = Field(default_factory=list, description="Messages in order")


class QueryRequest(BaseModel):
    """Request payload for the query proxy endpoint.

    Forwarded unchanged to the upstream CV query service.

    Attributes:
        session_id: Opaque correlation token generated by the client.
        prompt: The user's question.
    """

    session_id: str = Field(..., description="Session ID passed through to the upstream service")
    prompt: str = Field(
        ...,
        min_length=1,
        max_length=MAX_PROMPT_LENGTH,
        description="The user's question about the CV",
    )


class QueryResponse(BaseModel):
    """Uniform response envelope returned by the proxy.

    Successful calls carry ``answer``; failed calls carry only ``error``.

    Attributes:
        answer: The upstream service's answer.
        error: Human-readable failure description.
    """

    answer: str | None = Field(None, description="The answer to the question")
    error: str | None = Field(None, description="Error message if the query failed")


class CVDocumentInfo(BaseModel):
    """Metadata for the CV document shown in the viewer panel.

    Attributes:
        filename: File name of the served PDF.
        pages: Number of pages in the document.
        title: Document title from the PDF metadata.
        author: Document author from the PDF metadata.
    """

    filename: str = Field(..., description="File name of the CV document")
    pages: int = Field(..., ge=1, description="Number of pages in the document")
    title: str | None = Field(None, description="Title from the PDF metadata")
    author: str | None = Field(None, description="Author from the PDF metadata")
