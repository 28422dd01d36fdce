"""Message formatting helpers for chat display."""

from datetime import datetime


def escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_message_html(content: str) -> str:
    """Convert message text to HTML for chat display.

    Each line becomes a paragraph. Text between backticks becomes inline
    code; an unmatched trailing backtick still opens a code span, so the
    rest of the line renders as code.
    """
    paragraphs = []
    for line in content.split("\n"):
        parts = escape_html(line).split("`")
        rendered = "".join(
            part if i % 2 == 0 else f'<code class="message-code">{part}</code>'
            for i, part in enumerate(parts)
        )
        paragraphs.append(f'<p class="text-sm">{rendered}</p>')
    return "".join(paragraphs)


def format_timestamp(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as local ``hh:mm AM/PM``."""
    try:
        moment = datetime.fromisoformat(timestamp)
    except ValueError:
        return ""
    return moment.astimezone().strftime("%I:%M %p")
