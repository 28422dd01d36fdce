"""Event wiring between the chat page widgets and the session state.

The page hands in its rendering and dialog callbacks; this class decides
when to send, when to reset, and where to scroll.
"""

from collections.abc import Awaitable, Callable

from cv_query.ui.client import QueryClient
from cv_query.ui.session import ChatSession

# Scroll targets as a fraction of content height
FIRST_RENDER_SCROLL = 0.2
UPDATE_SCROLL = 1.0


class ChatController:
    """Drives one chat page.

    Attributes:
        session: The session state rendered by the page.
    """

    def __init__(
        self,
        session: ChatSession,
        client: QueryClient,
        render: Callable[[], None],
        scroll_to: Callable[[float], None],
        notify_error: Callable[[str], None],
        confirm: Callable[[str], Awaitable[bool]],
    ) -> None:
        self.session = session
        self._client = client
        self._render = render
        self._scroll_to = scroll_to
        self._notify_error = notify_error
        self._confirm = confirm
        self._first_render = True

    def refresh(self) -> None:
        """Re-render the message list and scroll.

        The first render only scrolls part way so the intro panel stays
        visible; later renders scroll to the bottom.
        """
        self._render()
        if self._first_render:
            self._first_render = False
            self._scroll_to(FIRST_RENDER_SCROLL)
        else:
            self._scroll_to(UPDATE_SCROLL)

    async def send(self) -> None:
        """Send the current input, if the send control would be enabled."""
        if not self.session.can_submit:
            return
        await self.session.send(self._client, on_update=self.refresh, on_error=self._notify_error)

    async def new_chat(self) -> None:
        if await self.session.new_chat(self._confirm):
            self.refresh()

    def use_sample_question(self, text: str) -> None:
        self.session.input_value = text
