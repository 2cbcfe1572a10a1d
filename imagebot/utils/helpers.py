"""
Helper utility functions for the Telegram bot.

Contains parsing and formatting functions used across handlers and middlewares.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message
from aiogram.utils.text_decorations import markdown_decoration


# =============================================================================
# MARKDOWN ESCAPING
# =============================================================================

# Characters that carry meaning in Telegram MarkdownV2, backslash included
MARKDOWN_SPECIAL_CHARS = "_*[]()~`>#+-=|{}.!\\"


def escape_markdown(text: str) -> str:
    """
    Escape user-supplied text for embedding in a MarkdownV2 message.

    Examples:
        >>> escape_markdown("a_b*c")
        'a\\\\_b\\\\*c'
        >>> escape_markdown("C:\\\\dir")
        'C:\\\\\\\\dir'
        >>> escape_markdown("plain text")
        'plain text'
    """
    return markdown_decoration.quote(text)


# =============================================================================
# COMMAND PARSING
# =============================================================================

def is_command(text: Optional[str]) -> bool:
    """Whether a message text is a slash-command."""
    return bool(text) and text.startswith("/")


def parse_command(text: str) -> Tuple[str, List[str]]:
    """
    Split a command message into the command name and its arguments.

    The ``@botname`` suffix is dropped from the command.

    Examples:
        >>> parse_command("/echo@my_bot hello   world")
        ('/echo', ['hello', 'world'])
        >>> parse_command("/help")
        ('/help', [])
    """
    parts = text.split()
    if not parts:
        return "", []
    command = parts[0].split("@", 1)[0]
    return command, parts[1:]


# =============================================================================
# DATE/TIME FORMATTING
# =============================================================================

def format_date(dt: Optional[datetime]) -> str:
    """
    Format datetime for display.

    Returns:
        Date as YYYY-MM-DD, or "—" if dt is None
    """
    if dt is None:
        return "—"
    return dt.strftime("%Y-%m-%d")


# =============================================================================
# TEXT FORMATTING
# =============================================================================

def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length, adding suffix if truncated.

    Examples:
        >>> truncate_text("Hello World", 8)
        'Hello...'
        >>> truncate_text("Hi", 10)
        'Hi'
    """
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(suffix), 0)] + suffix


MODEL_LABELS = {
    "fast": "Fast",
    "high-quality": "High Quality",
}


def format_model(model: str) -> str:
    """Human-readable label of a model choice."""
    return MODEL_LABELS.get(model, model)


# =============================================================================
# TELEGRAM
# =============================================================================

async def edit_message(message: Message, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None) -> None:
    """Edit a message in place, ignoring Telegram's "message is not modified" error."""
    try:
        await message.edit_text(text=text, reply_markup=reply_markup)
    except TelegramBadRequest as e:
        if "message is not modified" not in str(e):
            raise
