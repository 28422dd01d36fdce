"""NiceGUI chat page for asking questions about the CV."""

import os
from functools import partial

from nicegui import events, ui

from cv_query.models.schemas import MAX_PROMPT_LENGTH, Message
from cv_query.ui.client import QueryClient, QueryFailedError
from cv_query.ui.controller import ChatController
from cv_query.ui.formatting import escape_html, format_message_html, format_timestamp
from cv_query.ui.session import ChatSession

CV_PDF_URL = os.getenv("CV_PDF_URL", "/cv.pdf")

SAMPLE_QUESTIONS = [
    ("help_outline", "What are Kees' key technical skills?"),
    ("work", "List Kees' work experience"),
    ("menu_book", "Tell me about Kees' educational background"),
    ("mic", "How do you pronounce the name Kees?"),
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f8fafc; }

    .header { background: white; border-bottom: 1px solid #e5e7eb; }

    .brand-icon { background: rgba(37, 99, 235, 0.1); border-radius: 10px; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 4px 18px 18px;
        box-shadow: 0 4px 12px rgba(37, 99, 235, 0.25);
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 4px 18px 18px 18px;
    }

    .avatar-assistant { background: rgba(37, 99, 235, 0.1); }

    .sample-question {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
        cursor: pointer;
    }
    .sample-question:hover { border-color: rgba(37, 99, 235, 0.5); }

    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
        border-radius: 50%;
        animation: pulse-dot 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes pulse-dot {
        0%, 60%, 100% { opacity: 0.3; }
        30% { opacity: 1; }
    }

    .input-box {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #2563eb; }

    .message-code {
        font-family: 'Menlo', 'Monaco', monospace;
        background: #f3f4f6;
        color: #db2777;
        padding: 0.1rem 0.35rem;
        border-radius: 4px;
        font-size: 0.75rem;
    }

    kbd {
        padding: 0.1rem 0.35rem;
        background: #f3f4f6;
        border: 1px solid #e5e7eb;
        border-radius: 4px;
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    client = QueryClient()

    scroll_area: ui.scroll_area
    messages_container: ui.column
    input_field: ui.textarea
    char_count: ui.label

    def render_message(msg: Message) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"

        with ui.row().classes(f"w-full {align} no-wrap"), ui.column().classes("max-w-[80%] gap-1"):
            if is_user:
                with ui.element("div").classes("px-4 py-3 message-user"):
                    ui.html(escape_html(msg.content).replace("\n", "<br>"), sanitize=False).classes(
                        "text-sm"
                    )
            else:
                with ui.row().classes("gap-3 items-start no-wrap"):
                    with ui.element("div").classes(
                        "w-8 h-8 rounded-full flex items-center justify-center avatar-assistant"
                    ):
                        ui.icon("lightbulb").classes("text-blue-600 text-lg")
                    with ui.element("div").classes("px-4 py-3 message-assistant"):
                        ui.html(format_message_html(msg.content), sanitize=False)
            ui.label(format_timestamp(msg.timestamp)).classes(
                f"text-xs text-gray-400 px-1 {'self-end' if is_user else 'self-start ml-11'}"
            )

    def render_intro() -> None:
        with ui.column().classes("w-full items-center text-center py-12 gap-2"):
            with ui.element("div").classes("w-16 h-16 flex items-center justify-center brand-icon"):
                ui.icon("chat_bubble_outline").classes("text-blue-600 text-4xl")
            ui.label("Welcome to CV Query Assistant").classes("text-2xl font-semibold")
            ui.label(
                "I'm an AI agent using RAG to answer questions about Kees Hartley's CV. "
                "Ask me anything!"
            ).classes("text-gray-500 max-w-md mb-6")
            with ui.grid().classes("grid-cols-1 md:grid-cols-2 gap-3 w-full max-w-2xl"):
                for icon, text in SAMPLE_QUESTIONS:
                    with ui.row().classes("sample-question p-4 gap-3 items-start no-wrap").on(
                        "click", partial(use_sample_question, text)
                    ):
                        ui.icon(icon).classes("text-blue-600 text-xl")
                        ui.label(text).classes("text-sm font-medium text-left")

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-start no-wrap"):
            with ui.element("div").classes(
                "w-8 h-8 rounded-full flex items-center justify-center avatar-assistant"
            ):
                ui.icon("lightbulb").classes("text-blue-600 text-lg")
            with ui.element("div").classes("message-assistant px-4 py-4"), ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")

    def scroll_to(percent: float) -> None:
        # Wait for layout to settle before scrolling
        ui.timer(0.1, lambda: scroll_area.scroll_to(percent=percent, duration=0.3), once=True)

    def render_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.has_messages:
                render_intro()
            for msg in session.messages:
                render_message(msg)
            if session.is_pending:
                render_typing_indicator()
            ui.element("div").classes("h-24")

    def notify_error(error: str) -> None:
        ui.notify(f"Connection Error: {error}", type="negative")

    def update_char_count(e: events.ValueChangeEventArguments) -> None:
        over_limit = len(e.value or "") > MAX_PROMPT_LENGTH
        char_count.classes(
            add="text-red-600" if over_limit else "text-gray-400",
            remove="text-gray-400" if over_limit else "text-red-600",
        )

    def use_sample_question(text: str) -> None:
        controller.use_sample_question(text)
        input_field.run_method("focus")

    async def confirm(question: str) -> bool:
        with ui.dialog() as dialog, ui.card():
            ui.label(question)
            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("New Chat", on_click=lambda: dialog.submit(True))
        result = await dialog
        dialog.delete()
        return bool(result)

    controller = ChatController(
        session=session,
        client=client,
        render=render_messages,
        scroll_to=scroll_to,
        notify_error=notify_error,
        confirm=confirm,
    )

    async def open_cv_viewer() -> None:
        try:
            info = await client.cv_document()
            cv_subtitle.set_text(f"{info.pages} page(s) · Click here or press ESC to close")
        except QueryFailedError:
            cv_subtitle.set_text("Click here or press ESC to close")
        cv_dialog.open()

    # === CV viewer (closes on Escape and backdrop click) ===
    with ui.dialog().props("position=bottom full-width") as cv_dialog:
        with ui.card().classes("w-full p-0 gap-0").style("height: 90vh; max-width: 100vw"):
            with ui.row().classes(
                "w-full px-6 py-4 items-center justify-between border-b cursor-pointer"
            ).on("click", cv_dialog.close):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("description").classes("text-blue-600 text-xl")
                    with ui.column().classes("gap-0"):
                        ui.label("CV Document").classes("text-lg font-semibold")
                        cv_subtitle = ui.label("Click here or press ESC to close").classes(
                            "text-xs text-gray-500"
                        )
                ui.button(icon="close", on_click=cv_dialog.close).props("flat round dense")
            with ui.element("div").classes("w-full flex-grow flex justify-center p-6"):
                ui.element("iframe").props(f'src="{CV_PDF_URL}" title="CV Document"').classes(
                    "w-[90%] h-full rounded-lg border"
                )

    # === UI Layout ===
    with ui.column().classes("w-full gap-0").style("height: calc(100vh - 2rem)"):
        # Header
        with ui.row().classes("w-full header px-4 py-3 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                with ui.element("div").classes("w-10 h-10 flex items-center justify-center brand-icon"):
                    ui.icon("work").classes("text-blue-600 text-2xl")
                with ui.column().classes("gap-0"):
                    ui.label("CV Query Assistant").classes("text-base font-semibold")
                    ui.label("AI-powered resume insights").classes("text-xs text-gray-500")
            ui.button("New Chat", icon="add", on_click=controller.new_chat).props("unelevated color=grey-3 text-color=dark")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            messages_container = ui.column().classes("w-full max-w-3xl mx-auto px-4 py-6 gap-6")

        # Input
        with ui.column().classes("w-full border-t bg-white px-4 py-4"):
            with ui.column().classes("w-full max-w-3xl mx-auto gap-2"):
                with ui.row().classes("w-full gap-2 items-end no-wrap"):
                    with ui.element("div").classes("flex-grow input-box px-3 py-1"):
                        input_field = (
                            ui.textarea(
                                placeholder="Ask anything about the CV...",
                                on_change=update_char_count,
                            )
                            .bind_value(session, "input_value")
                            .props("autogrow borderless dense rows=1")
                            .classes("w-full")
                            .on("keydown.enter.exact.prevent", controller.send)
                        )
                    (
                        ui.button(icon="send", on_click=controller.send)
                        .props("round unelevated color=primary")
                        .bind_enabled_from(session, "can_submit")
                    )
                with ui.row().classes("w-full justify-between items-center px-1"):
                    ui.html(
                        "Press <kbd>Enter</kbd> to send, <kbd>Shift+Enter</kbd> for new line",
                        sanitize=False,
                    ).classes("text-xs text-gray-500")
                    char_count = ui.label().bind_text_from(
                        session, "input_value", lambda v: f"{len(v)} / {MAX_PROMPT_LENGTH}"
                    ).classes("text-xs text-gray-400")
                with ui.row().classes("w-full justify-center"):
                    ui.button("View CV (PDF)", icon="description", on_click=open_cv_viewer).props(
                        "outline"
                    )

    controller.refresh()


def main() -> None:
    ui.run(
        title="CV Query Assistant",
        favicon="💼",
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
    )


if __name__ == "__main__":
    main()
