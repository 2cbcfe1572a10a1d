# Utility functions

from imagebot.utils.helpers import (
    MARKDOWN_SPECIAL_CHARS,
    edit_message,
    escape_markdown,
    format_date,
    format_model,
    is_command,
    parse_command,
    truncate_text,
)

__all__ = [
    # Markdown
    "MARKDOWN_SPECIAL_CHARS",
    "escape_markdown",
    # Commands
    "is_command",
    "parse_command",
    # Telegram
    "edit_message",
    # Formatting
    "format_date",
    "format_model",
    "truncate_text",
]
