"""Test doubles for Telegram objects and the image provider."""

from itertools import count
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

from imagebot.services.image_provider import GeneratedImage, ImageProvider


class FakeImageProvider(ImageProvider):
    """ImageProvider double returning a canned result or raising."""

    name = "fake"

    def __init__(
        self,
        available: bool = True,
        result: Optional[GeneratedImage] = None,
        error: Optional[Exception] = None,
    ):
        self.available = available
        self.result = result
        self.error = error
        self.calls = []

    def is_available(self) -> bool:
        return self.available

    async def generate(self, prompt, aspect_ratio="1:1", image_size="1K", model="high-quality"):
        self.calls.append(
            {"prompt": prompt, "aspect_ratio": aspect_ratio, "image_size": image_size, "model": model}
        )
        if self.error is not None:
            raise self.error
        return self.result


PNG_IMAGE = GeneratedImage(data=b"\x89PNG fake", mime_type="image/png", extension="png")


_message_ids = count(100)


def make_message(text: Optional[str], user_id: int = 1001, chat_id: Optional[int] = None) -> MagicMock:
    """
    Build a Message double.

    ``answer`` returns a new sent-message double with its own message_id,
    so the placeholder id can be checked against edit/delete calls.
    """
    message = MagicMock()
    message.text = text

    message.from_user = MagicMock()
    message.from_user.id = user_id
    message.from_user.first_name = "Test"
    message.from_user.username = "tester"

    message.chat = MagicMock()
    message.chat.id = chat_id if chat_id is not None else user_id
    message.chat.type = "private"

    async def answer(*args, **kwargs):
        return MagicMock(message_id=next(_message_ids))

    message.answer = AsyncMock(side_effect=answer)
    message.answer_photo = AsyncMock()
    message.bot = MagicMock()
    message.bot.edit_message_text = AsyncMock()
    message.bot.delete_message = AsyncMock()
    return message


def make_callback(data: str, user_id: int = 1001) -> MagicMock:
    """Build a CallbackQuery double."""
    callback = MagicMock()
    callback.data = data
    callback.from_user = MagicMock()
    callback.from_user.id = user_id
    callback.answer = AsyncMock()
    callback.message = MagicMock()
    callback.message.edit_text = AsyncMock()
    return callback
