"""Handlers for /me (user profile) and /stats."""

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from aiogram.utils.text_decorations import html_decoration

from imagebot.db.database import get_session_maker
from imagebot.db.repositories import CommandLogRepository, UserRepository
from imagebot.utils.helpers import format_date
from imagebot.utils.messages import (
    ERROR_USER_NOT_FOUND,
    PROFILE_MESSAGE,
    STATS_MESSAGE,
    STATS_NO_COMMANDS,
    STATS_TOP_COMMAND,
)

logger = logging.getLogger(__name__)

router = Router(name="profile")


@router.message(Command("me"))
async def cmd_me(message: Message) -> None:
    """Show the user's profile with usage count and settings."""
    user_tg = message.from_user
    if user_tg is None:
        return

    session_maker = get_session_maker()

    async with session_maker() as session:
        user_repo = UserRepository(session)
        user = await user_repo.get_by_telegram_id(user_tg.id)

        if user is None:
            await message.answer(ERROR_USER_NOT_FOUND)
            return

        settings = await user_repo.get_settings(user_tg.id)
        commands_used = await CommandLogRepository(session).count_for_user(user_tg.id)

    quote = html_decoration.quote
    text = PROFILE_MESSAGE.format(
        first_name=quote(user.first_name or "—"),
        last_name=quote(user.last_name) if user.last_name else "Not set",
        username=f"@{quote(user.username)}" if user.username else "Not set",
        language=quote(user.language_code) if user.language_code else "Unknown",
        telegram_id=user.telegram_id,
        premium="✅ Yes" if user.is_premium else "❌ No",
        created=format_date(user.created_at),
        last_seen=format_date(user.last_seen_at),
        commands_used=commands_used,
        notifications="🔔 On" if settings is None or settings.notifications_enabled else "🔕 Off",
        timezone=settings.timezone if settings else "UTC",
    )

    await message.answer(text)


@router.message(Command("stats"))
async def cmd_stats(message: Message) -> None:
    """Show user activity and the most used commands of the last week."""
    session_maker = get_session_maker()

    async with session_maker() as session:
        user_stats = await UserRepository(session).get_activity_stats()
        command_stats = await CommandLogRepository(session).get_command_stats(days=7, limit=5)

    top_commands = "\n".join(
        STATS_TOP_COMMAND.format(index=i, command=html_decoration.quote(command), count=count)
        for i, (command, count) in enumerate(command_stats, 1)
    )

    await message.answer(
        STATS_MESSAGE.format(
            total_users=user_stats.total_users,
            active_today=user_stats.active_today,
            active_this_week=user_stats.active_this_week,
            top_commands=top_commands or STATS_NO_COMMANDS,
        )
    )
