"""
Escaping and shortening of user-supplied text.

Chat screens are sent as HTML (``safe_text``); the outbound alert uses
Telegram's legacy Markdown (``escape_markdown``).
"""
import html
import re

_MARKDOWN_SPECIAL = re.compile(r"([_*`\[])")


def safe_text(text: str | None) -> str:
    """HTML-escape a value for an HTML-mode message; None becomes ''"""
    if text is None:
        return ""
    return html.escape(str(text))


def escape_markdown(text: str | None) -> str:
    """Backslash the characters legacy Markdown treats as markup"""
    if text is None:
        return ""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", str(text))


def truncate_text(text: str, max_length: int = 50) -> str:
    """Shorten to ``max_length`` characters, ending with '...' when cut"""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
