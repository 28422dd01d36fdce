"""Chat session state for a single page load.

Holds the ordered message history and mediates one request/response cycle
at a time. Nothing here touches NiceGUI, so the page stays a thin layer over
this state.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Literal

from cv_query.models.schemas import MAX_PROMPT_LENGTH, ChatSessionState, Message, QueryRequest
from cv_query.ui.client import QueryClient, QueryFailedError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "⚠️ Error: "
NEW_CHAT_CONFIRMATION = "Start a new conversation? Current chat will be lost."


def _make_id(prefix: str) -> str:
    """Build an id shaped ``<prefix>_<epoch millis>_<random>``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


def generate_session_id() -> str:
    return _make_id("session")


def generate_message_id() -> str:
    return _make_id("msg")


class ChatSession:
    """Manages chat state for one user session.

    Attributes:
        session_id: Correlation token, fixed for the session lifetime.
        messages: Messages in insertion order.
        input_value: Current content of the input field.
        is_pending: Whether a request is in flight.
    """

    def __init__(self, session_id: str | None = None) -> None:
        self._session_id = session_id or generate_session_id()
        self.messages: list[Message] = []
        self.input_value: str = ""
        self.is_pending: bool = False

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def has_messages(self) -> bool:
        return bool(self.messages)

    @property
    def can_submit(self) -> bool:
        """Whether the send control is enabled for the current input."""
        return (
            not self.is_pending
            and len(self.input_value) > 0
            and len(self.input_value) <= MAX_PROMPT_LENGTH
        )

    def _append(self, role: Literal["user", "assistant"], content: str) -> Message:
        message = Message(
            id=generate_message_id(),
            role=role,
            content=content,
            timestamp=datetime.now(UTC).isoformat(),
        )
        self.messages.append(message)
        return message

    def submit(self, prompt: str | None = None) -> QueryRequest | None:
        """Record a user turn and build the outbound request.

        Args:
            prompt: Text to send. Defaults to the current input value.

        Returns:
            The request to send, or None if the prompt is blank, too long,
            or a request is already pending.
        """
        text = (self.input_value if prompt is None else prompt).strip()
        if not text or len(text) > MAX_PROMPT_LENGTH or self.is_pending:
            return None

        self._append("user", text)
        self.input_value = ""
        self.is_pending = True
        return QueryRequest(session_id=self.session_id, prompt=text)

    def record_answer(self, answer: str) -> Message:
        """Append the assistant's answer and release the pending lock."""
        self.is_pending = False
        return self._append("assistant", answer)

    def record_error(self, error: str) -> Message:
        """Append a marked error message and release the pending lock."""
        self.is_pending = False
        return self._append("assistant", f"{ERROR_PREFIX}{error}")

    async def send(
        self,
        client: QueryClient,
        prompt: str | None = None,
        on_update: Callable[[], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> Message | None:
        """Run one full request/response cycle.

        Args:
            client: Client used to reach the query proxy.
            prompt: Text to send. Defaults to the current input value.
            on_update: Called after each change to the message list.
            on_error: Called with the error text when the query fails.

        Returns:
            The assistant message, or None if submission was rejected.
        """
        request = self.submit(prompt)
        if request is None:
            return None
        if on_update:
            on_update()

        try:
            answer = await client.query(request)
        except QueryFailedError as e:
            logger.warning(f"Query failed for session {self.session_id}: {e}")
            message = self._fail(str(e), on_error)
        except Exception as e:
            logger.exception(f"Unexpected error while querying for session {self.session_id}")
            message = self._fail(str(e) or type(e).__name__, on_error)
        else:
            message = self.record_answer(answer)

        if on_update:
            on_update()
        return message

    def _fail(self, error: str, on_error: Callable[[str], None] | None) -> Message:
        message = self.record_error(error)
        if on_error:
            on_error(error)
        return message

    async def new_chat(self, confirm: Callable[[str], Awaitable[bool]]) -> bool:
        """Clear the conversation after confirmation.

        Args:
            confirm: Asks the user the given question, resolving to their choice.
                     Only consulted when there are messages to lose.

        Returns:
            True if the session was reset.
        """
        if self.has_messages and not await confirm(NEW_CHAT_CONFIRMATION):
            return False

        self.messages.clear()
        self.input_value = ""
        return True

    def snapshot(self) -> ChatSessionState:
        return ChatSessionState(session_id=self.session_id, messages=list(self.messages))
