"""Inline keyboards for the bot."""

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from imagebot.services.image_provider import ASPECT_RATIOS, IMAGE_SIZES, MODEL_CHOICES
from imagebot.utils.helpers import MODEL_LABELS


# Callback data prefixes
class CallbackData:
    """Callback data constants."""

    # Image settings
    IMAGE_PREFIX = "img:"
    IMAGE_MAIN = "img:main"
    IMAGE_ASPECT = "img:aspect"
    IMAGE_SIZE = "img:size"
    IMAGE_MODEL = "img:model"
    IMAGE_REFRESH = "img:refresh"
    IMAGE_BACK = "img:back"
    IMAGE_SET_PREFIX = "img:set:"

    # General settings
    SETTINGS_NOTIFICATIONS_ON = "settings:notif:on"
    SETTINGS_NOTIFICATIONS_OFF = "settings:notif:off"
    SETTINGS_REFRESH = "settings:refresh"
    SETTINGS_BACK = "settings:back"


ASPECT_RATIO_LABELS = {
    "1:1": "1:1 (Square)",
    "16:9": "16:9 (Wide)",
    "9:16": "9:16 (Portrait)",
    "4:3": "4:3 (Landscape)",
    "3:4": "3:4 (Portrait)",
}

IMAGE_SIZE_LABELS = {
    "1K": "1K (Faster)",
    "2K": "2K (Higher Quality)",
}


def _mark(label: str, selected: bool) -> str:
    return f"✅ {label}" if selected else label


def settings_keyboard(notifications_enabled: bool) -> InlineKeyboardMarkup:
    """
    Create the /settings keyboard.

    Layout:
    [Turn Off/On Notifications]
    [Image Settings]
    [Refresh]
    """
    builder = InlineKeyboardBuilder()

    if notifications_enabled:
        builder.row(
            InlineKeyboardButton(
                text="🔕 Turn Off Notifications",
                callback_data=CallbackData.SETTINGS_NOTIFICATIONS_OFF,
            )
        )
    else:
        builder.row(
            InlineKeyboardButton(
                text="🔔 Turn On Notifications",
                callback_data=CallbackData.SETTINGS_NOTIFICATIONS_ON,
            )
        )
    builder.row(
        InlineKeyboardButton(text="🎨 Image Settings", callback_data=CallbackData.IMAGE_MAIN)
    )
    builder.row(
        InlineKeyboardButton(text="🔄 Refresh", callback_data=CallbackData.SETTINGS_REFRESH)
    )

    return builder.as_markup()


def image_settings_keyboard() -> InlineKeyboardMarkup:
    """
    Create the /image_settings keyboard.

    Layout:
    [Aspect Ratio] [Image Size]
    [Model]
    [Refresh]
    [Back to Settings]
    """
    builder = InlineKeyboardBuilder()

    builder.row(
        InlineKeyboardButton(text="📐 Aspect Ratio", callback_data=CallbackData.IMAGE_ASPECT),
        InlineKeyboardButton(text="📏 Image Size", callback_data=CallbackData.IMAGE_SIZE),
    )
    builder.row(
        InlineKeyboardButton(text="🤖 Model", callback_data=CallbackData.IMAGE_MODEL)
    )
    builder.row(
        InlineKeyboardButton(text="🔄 Refresh", callback_data=CallbackData.IMAGE_REFRESH)
    )
    builder.row(
        InlineKeyboardButton(text="◀️ Back to Settings", callback_data=CallbackData.SETTINGS_BACK)
    )

    return builder.as_markup()


def _choice_keyboard(
    setting: str,
    options: tuple[str, ...],
    labels: dict[str, str],
    current: str,
) -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()

    for option in options:
        builder.row(
            InlineKeyboardButton(
                text=_mark(labels.get(option, option), option == current),
                callback_data=f"{CallbackData.IMAGE_SET_PREFIX}{setting}:{option}",
            )
        )
    builder.row(
        InlineKeyboardButton(text="◀️ Back", callback_data=CallbackData.IMAGE_BACK)
    )

    return builder.as_markup()


def aspect_ratio_keyboard(current: str) -> InlineKeyboardMarkup:
    """One button per aspect ratio, the current one checked."""
    return _choice_keyboard("aspect", ASPECT_RATIOS, ASPECT_RATIO_LABELS, current)


def image_size_keyboard(current: str) -> InlineKeyboardMarkup:
    """One button per image size, the current one checked."""
    return _choice_keyboard("size", IMAGE_SIZES, IMAGE_SIZE_LABELS, current)


def model_keyboard(current: str) -> InlineKeyboardMarkup:
    """One button per model choice, the current one checked."""
    return _choice_keyboard("model", MODEL_CHOICES, MODEL_LABELS, current)
