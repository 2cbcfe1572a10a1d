"""Handlers for /start and /help."""

import logging
from typing import Optional

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message
from aiogram.utils.text_decorations import html_decoration

from imagebot.db.models import User
from imagebot.utils.messages import HELP_MESSAGE, START_MESSAGE, WELCOME_BACK, WELCOME_NEW

logger = logging.getLogger(__name__)

router = Router(name="start")


@router.message(CommandStart())
async def cmd_start(
    message: Message,
    db_user: Optional[User] = None,
    db_user_created: bool = False,
) -> None:
    """
    Handle /start command.

    The user is registered by UserMiddleware; this only greets new and
    returning users differently.
    """
    user_tg = message.from_user
    if user_tg is None:
        return

    first_name = html_decoration.quote(user_tg.first_name)
    welcome = (WELCOME_NEW if db_user_created else WELCOME_BACK).format(first_name=first_name)

    await message.answer(START_MESSAGE.format(welcome=welcome))

    logger.info(
        f"Start command executed by user {user_tg.id} "
        f"(new user: {db_user_created}, registered: {db_user is not None})"
    )


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_MESSAGE)
