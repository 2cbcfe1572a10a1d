"""Handlers for the prompt-to-image conversation (/prompt, free text, /cancel)."""

import logging

from aiogram import Router, F
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.enums import ParseMode
from aiogram.filters import Command
from aiogram.types import BufferedInputFile, Message

from imagebot.db.database import get_session_maker
from imagebot.db.repositories import ImagePreferences, UserRepository
from imagebot.services.image_provider import ImageProvider
from imagebot.services.prompt_tracker import PromptTracker
from imagebot.utils.helpers import escape_markdown, format_model, truncate_text
from imagebot.utils.messages import (
    PROMPT_CANCELLED,
    PROMPT_CAPTION_MD,
    PROMPT_EMPTY,
    PROMPT_ERROR,
    PROMPT_GENERATING,
    PROMPT_NO_IMAGE,
    PROMPT_NOTHING_PENDING,
    PROMPT_REQUEST,
    PROMPT_UNAVAILABLE,
)

logger = logging.getLogger(__name__)

router = Router(name="prompt")

# Telegram captions are capped at 1024 characters; escaping can double the prompt
CAPTION_PROMPT_LIMIT = 480


async def load_preferences(telegram_id: int) -> ImagePreferences:
    """Read the user's image defaults straight from the database."""
    session_maker = get_session_maker()
    async with session_maker() as session:
        return await UserRepository(session).get_preferences(telegram_id)


@router.message(Command("prompt"))
async def cmd_prompt(
    message: Message,
    prompt_tracker: PromptTracker,
    image_provider: ImageProvider,
) -> None:
    """
    Handle /prompt command.

    - Refuses when the image provider is not configured
    - Otherwise waits for the next text message and shows current settings
    """
    user_tg = message.from_user
    if user_tg is None:
        return

    if not image_provider.is_available():
        await message.answer(PROMPT_UNAVAILABLE)
        return

    preferences = await load_preferences(user_tg.id)
    await prompt_tracker.begin_waiting(user_tg.id)

    await message.answer(
        PROMPT_REQUEST.format(
            aspect_ratio=preferences.aspect_ratio,
            image_size=preferences.image_size,
            model=format_model(preferences.model),
        )
    )

    logger.info(f"Prompt command initiated by user {user_tg.id}")


async def handle_prompt_input(
    message: Message,
    prompt_tracker: PromptTracker,
    image_provider: ImageProvider,
) -> bool:
    """
    Treat a text message as an image prompt if the user is awaiting one.

    Returns:
        True if the message was consumed as a prompt, False if it is ordinary text.
    """
    user_tg = message.from_user
    if user_tg is None or message.text is None:
        return False

    if not await prompt_tracker.consume_if_waiting(user_tg.id):
        return False

    prompt = message.text.strip()

    if not prompt:
        await message.answer(PROMPT_EMPTY)
        return True

    status_message = await message.answer(PROMPT_GENERATING)
    chat_id = message.chat.id

    try:
        preferences = await load_preferences(user_tg.id)

        logger.info(
            f"Generating image for user {user_tg.id} "
            f"({preferences.aspect_ratio}, {preferences.image_size}, {preferences.model})"
        )

        image = await image_provider.generate(
            prompt,
            aspect_ratio=preferences.aspect_ratio,
            image_size=preferences.image_size,
            model=preferences.model,
        )

        if image is None:
            await message.bot.edit_message_text(
                text=PROMPT_NO_IMAGE,
                chat_id=chat_id,
                message_id=status_message.message_id,
            )
            return True

        await message.bot.delete_message(chat_id=chat_id, message_id=status_message.message_id)

        caption = PROMPT_CAPTION_MD.format(
            prompt=escape_markdown(truncate_text(prompt, CAPTION_PROMPT_LIMIT)),
        )
        await message.answer_photo(
            photo=BufferedInputFile(image.data, filename=f"generated-image.{image.extension}"),
            caption=caption,
            parse_mode=ParseMode.MARKDOWN_V2,
        )

        logger.info(f"Image sent successfully to user {user_tg.id}")

    except Exception:
        logger.exception(f"Error generating image for user {user_tg.id}")
        await _report_failure(message, status_message.message_id)

    return True


async def _report_failure(message: Message, status_message_id: int) -> None:
    """Show the failure in the placeholder, or in a new message if that is gone."""
    try:
        await message.bot.edit_message_text(
            text=PROMPT_ERROR,
            chat_id=message.chat.id,
            message_id=status_message_id,
        )
        return
    except Exception as e:
        logger.warning(f"Failed to edit status message: {e}")

    try:
        await message.answer(PROMPT_ERROR)
    except Exception as e:
        logger.error(f"Failed to send error message to user: {e}")


@router.message(F.text, ~F.text.startswith("/"))
async def capture_prompt(
    message: Message,
    prompt_tracker: PromptTracker,
    image_provider: ImageProvider,
) -> None:
    """Consume the message as a prompt or pass it on to ordinary text handling."""
    if not await handle_prompt_input(message, prompt_tracker, image_provider):
        raise SkipHandler()


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, prompt_tracker: PromptTracker) -> None:
    """Handle /cancel command."""
    user_tg = message.from_user
    if user_tg is None:
        return

    if await prompt_tracker.cancel(user_tg.id):
        await message.answer(PROMPT_CANCELLED)
        logger.info(f"User {user_tg.id} cancelled image generation")
    else:
        await message.answer(PROMPT_NOTHING_PENDING)
