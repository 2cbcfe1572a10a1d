"""Handlers for image generation defaults (/image_settings and img:* buttons)."""

import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from imagebot.db.database import get_session_maker
from imagebot.db.repositories import ImagePreferences, UserRepository
from imagebot.keyboards.inline import (
    CallbackData,
    aspect_ratio_keyboard,
    image_settings_keyboard,
    image_size_keyboard,
    model_keyboard,
)
from imagebot.services.image_provider import ASPECT_RATIOS, IMAGE_SIZES, MODEL_CHOICES
from imagebot.utils.helpers import edit_message, format_model
from imagebot.utils.messages import (
    IMAGE_SETTINGS_MESSAGE,
    SELECT_ASPECT_RATIO,
    SELECT_IMAGE_SIZE,
    SELECT_MODEL,
    SETTINGS_UPDATE_FAILED,
)

logger = logging.getLogger(__name__)

router = Router(name="image_settings")


# setting name in callback data -> (settings column, allowed values)
IMAGE_SETTINGS = {
    "aspect": ("default_aspect_ratio", ASPECT_RATIOS),
    "size": ("default_image_size", IMAGE_SIZES),
    "model": ("default_model", MODEL_CHOICES),
}


def format_image_settings(preferences: ImagePreferences) -> str:
    return IMAGE_SETTINGS_MESSAGE.format(
        aspect_ratio=preferences.aspect_ratio,
        image_size=preferences.image_size,
        model=format_model(preferences.model),
    )


async def load_preferences(telegram_id: int) -> ImagePreferences:
    session_maker = get_session_maker()
    async with session_maker() as session:
        return await UserRepository(session).get_preferences(telegram_id)


async def show_choices(callback: CallbackQuery, setting: str) -> None:
    """Replace the message with the option list of one setting."""
    preferences = await load_preferences(callback.from_user.id)

    if setting == "aspect":
        text, markup = SELECT_ASPECT_RATIO, aspect_ratio_keyboard(preferences.aspect_ratio)
    elif setting == "size":
        text, markup = SELECT_IMAGE_SIZE, image_size_keyboard(preferences.image_size)
    else:
        text, markup = SELECT_MODEL, model_keyboard(preferences.model)

    await edit_message(callback.message, text=text, reply_markup=markup)


@router.message(Command("image_settings"))
async def cmd_image_settings(message: Message) -> None:
    """Show the user's image defaults with buttons to change them."""
    user_tg = message.from_user
    if user_tg is None:
        return

    preferences = await load_preferences(user_tg.id)
    await message.answer(
        text=format_image_settings(preferences),
        reply_markup=image_settings_keyboard(),
    )


@router.callback_query(
    F.data.in_({CallbackData.IMAGE_MAIN, CallbackData.IMAGE_REFRESH, CallbackData.IMAGE_BACK})
)
async def show_image_settings(callback: CallbackQuery) -> None:
    """Redraw the image settings overview in place."""
    preferences = await load_preferences(callback.from_user.id)
    await edit_message(
        callback.message,
        text=format_image_settings(preferences),
        reply_markup=image_settings_keyboard(),
    )
    await callback.answer()


@router.callback_query(
    F.data.in_({CallbackData.IMAGE_ASPECT, CallbackData.IMAGE_SIZE, CallbackData.IMAGE_MODEL})
)
async def choose_image_setting(callback: CallbackQuery) -> None:
    """Open the option list of the pressed setting."""
    setting = callback.data.removeprefix(CallbackData.IMAGE_PREFIX)
    await show_choices(callback, setting)
    await callback.answer()


@router.callback_query(F.data.startswith(CallbackData.IMAGE_SET_PREFIX))
async def apply_image_setting(callback: CallbackQuery) -> None:
    """
    Save a chosen option.

    Callback data is ``img:set:<setting>:<value>``; aspect ratio values
    contain a colon themselves.
    """
    payload = callback.data.removeprefix(CallbackData.IMAGE_SET_PREFIX)
    setting, _, value = payload.partition(":")

    if setting not in IMAGE_SETTINGS or value not in IMAGE_SETTINGS[setting][1]:
        logger.warning(f"Invalid image setting callback: {callback.data}")
        await callback.answer("❌ Invalid option", show_alert=True)
        return

    column = IMAGE_SETTINGS[setting][0]
    session_maker = get_session_maker()

    try:
        async with session_maker() as session:
            await UserRepository(session).update_settings(callback.from_user.id, **{column: value})
    except Exception:
        logger.exception(f"Failed to update {column} for user {callback.from_user.id}")
        await callback.answer(SETTINGS_UPDATE_FAILED, show_alert=True)
        return

    label = format_model(value) if setting == "model" else value
    await callback.answer(f"✅ {column.removeprefix('default_').replace('_', ' ').capitalize()} set to {label}")
    logger.info(f"User {callback.from_user.id} set {column} to {value}")

    await show_choices(callback, setting)
