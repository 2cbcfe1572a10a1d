"""Keyboards package."""

from imagebot.keyboards.inline import (
    CallbackData,
    settings_keyboard,
    image_settings_keyboard,
    aspect_ratio_keyboard,
    image_size_keyboard,
    model_keyboard,
)

__all__ = [
    "CallbackData",
    "settings_keyboard",
    "image_settings_keyboard",
    "aspect_ratio_keyboard",
    "image_size_keyboard",
    "model_keyboard",
]
