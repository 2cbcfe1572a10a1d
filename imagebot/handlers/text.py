"""Fallbacks for text messages that no other handler took."""

import logging

from aiogram import Router, F
from aiogram.types import Message

from imagebot.utils.messages import UNKNOWN_COMMAND

logger = logging.getLogger(__name__)

router = Router(name="text")


@router.message(F.text.startswith("/"))
async def handle_unknown_command(message: Message) -> None:
    """Point users at /help for commands the bot does not know."""
    await message.answer(UNKNOWN_COMMAND)


@router.message(F.text)
async def handle_text(message: Message) -> None:
    """Ordinary chat: nothing to answer, only logged."""
    logger.debug(
        f"Text message received from user {message.from_user.id if message.from_user else None}: "
        f"{message.text[:100]}"
    )
