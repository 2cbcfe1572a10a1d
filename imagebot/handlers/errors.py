"""Last-resort handler for exceptions that escaped every router."""

import logging
from typing import Optional, Tuple

from aiogram.exceptions import TelegramAPIError
from aiogram.types import ErrorEvent, Update

from imagebot.utils.messages import ERROR_GENERIC

logger = logging.getLogger(__name__)


def _origin(update: Optional[Update]) -> Tuple[Optional[int], Optional[int]]:
    """(user_id, chat_id) of the message or button press behind an update."""
    if update is None:
        return None, None
    if update.message:
        sender = update.message.from_user
        return (sender.id if sender else None), update.message.chat.id
    if update.callback_query:
        query = update.callback_query
        return query.from_user.id, (query.message.chat.id if query.message else None)
    return None, None


async def global_error_handler(event: ErrorEvent) -> bool:
    """
    Log the failure with its user and chat, then apologise to the chat.

    Returns True so aiogram treats the error as handled.
    """
    user_id, chat_id = _origin(event.update)

    logger.error(
        f"Unhandled {type(event.exception).__name__} in update handling: {event.exception}",
        extra={
            "user_id": user_id,
            "chat_id": chat_id,
            "update_type": event.update.event_type if event.update else None,
        },
        exc_info=event.exception,
    )

    if chat_id is None:
        return True

    # Avoid the circular import bot -> handlers -> errors -> bot
    from imagebot.bot import get_bot

    try:
        await get_bot().send_message(chat_id=chat_id, text=ERROR_GENERIC)
    except TelegramAPIError as e:
        logger.error(f"Could not notify chat {chat_id} about the error: {e}")

    return True
