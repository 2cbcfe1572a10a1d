"""Handlers for general settings (/settings, /notifications)."""

import logging
from typing import Optional

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from imagebot.db.database import get_session_maker
from imagebot.db.models import UserSettings
from imagebot.db.repositories import UserNotFoundError, UserRepository
from imagebot.keyboards.inline import CallbackData, settings_keyboard
from imagebot.utils.helpers import edit_message, format_model
from imagebot.utils.messages import (
    ERROR_USER_NOT_FOUND,
    NOTIFICATIONS_DISABLED,
    NOTIFICATIONS_ENABLED,
    NOTIFICATIONS_INVALID,
    NOTIFICATIONS_USAGE,
    SETTINGS_MESSAGE,
    SETTINGS_UPDATE_FAILED,
)

logger = logging.getLogger(__name__)

router = Router(name="settings")


def format_settings(settings: UserSettings) -> str:
    return SETTINGS_MESSAGE.format(
        notifications="🔔 On" if settings.notifications_enabled else "🔕 Off",
        timezone=settings.timezone,
        aspect_ratio=settings.default_aspect_ratio,
        image_size=settings.default_image_size,
        model=format_model(settings.default_model),
    )


async def load_settings(telegram_id: int) -> Optional[UserSettings]:
    session_maker = get_session_maker()
    async with session_maker() as session:
        return await UserRepository(session).get_settings(telegram_id)


@router.message(Command("settings"))
async def cmd_settings(message: Message) -> None:
    """Show the user's settings with an inline keyboard to change them."""
    user_tg = message.from_user
    if user_tg is None:
        return

    settings = await load_settings(user_tg.id)
    if settings is None:
        await message.answer(ERROR_USER_NOT_FOUND)
        return

    await message.answer(
        text=format_settings(settings),
        reply_markup=settings_keyboard(settings.notifications_enabled),
    )


@router.message(Command("notifications"))
async def cmd_notifications(message: Message, command_args: Optional[list[str]] = None) -> None:
    """Handle /notifications on|off."""
    user_tg = message.from_user
    if user_tg is None:
        return

    if not command_args:
        await message.answer(NOTIFICATIONS_USAGE)
        return

    value = command_args[0].lower()
    if value not in ("on", "off"):
        await message.answer(NOTIFICATIONS_INVALID)
        return

    enabled = value == "on"
    session_maker = get_session_maker()

    try:
        async with session_maker() as session:
            await UserRepository(session).update_settings(
                user_tg.id, notifications_enabled=enabled
            )
    except UserNotFoundError:
        await message.answer(ERROR_USER_NOT_FOUND)
        return
    except Exception:
        logger.exception(f"Failed to update notifications for user {user_tg.id}")
        await message.answer(SETTINGS_UPDATE_FAILED)
        return

    await message.answer(NOTIFICATIONS_ENABLED if enabled else NOTIFICATIONS_DISABLED)
    logger.info(f"User {user_tg.id} turned notifications {value}")


@router.callback_query(
    F.data.in_({CallbackData.SETTINGS_NOTIFICATIONS_ON, CallbackData.SETTINGS_NOTIFICATIONS_OFF})
)
async def toggle_notifications(callback: CallbackQuery) -> None:
    """Switch notifications from the settings keyboard."""
    enabled = callback.data == CallbackData.SETTINGS_NOTIFICATIONS_ON
    session_maker = get_session_maker()

    try:
        async with session_maker() as session:
            settings = await UserRepository(session).update_settings(
                callback.from_user.id, notifications_enabled=enabled
            )
    except Exception:
        logger.exception(f"Failed to update notifications for user {callback.from_user.id}")
        await callback.answer(SETTINGS_UPDATE_FAILED, show_alert=True)
        return

    await edit_message(
        callback.message,
        text=format_settings(settings),
        reply_markup=settings_keyboard(settings.notifications_enabled),
    )
    await callback.answer("🔔 Notifications on" if enabled else "🔕 Notifications off")


@router.callback_query(F.data.in_({CallbackData.SETTINGS_REFRESH, CallbackData.SETTINGS_BACK}))
async def refresh_settings(callback: CallbackQuery) -> None:
    """Redraw the settings view in place."""
    settings = await load_settings(callback.from_user.id)
    if settings is None:
        await callback.answer(ERROR_USER_NOT_FOUND, show_alert=True)
        return

    await edit_message(
        callback.message,
        text=format_settings(settings),
        reply_markup=settings_keyboard(settings.notifications_enabled),
    )
    await callback.answer()
