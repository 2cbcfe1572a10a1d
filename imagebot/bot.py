"""Aiogram Bot and Dispatcher initialization."""

import logging
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand

from imagebot.config import config
from imagebot.services.image_provider import create_image_provider
from imagebot.services.prompt_tracker import PromptTracker

logger = logging.getLogger(__name__)

# Commands shown in the Telegram command menu
BOT_COMMANDS = [
    BotCommand(command="help", description="Show available commands"),
    BotCommand(command="stats", description="View bot statistics"),
    BotCommand(command="prompt", description="Generate an image from a text prompt"),
    BotCommand(command="cancel", description="Cancel a pending image request"),
    BotCommand(command="image_settings", description="Configure image generation defaults"),
]

# Bot instance - initialized lazily
_bot: Optional[Bot] = None
_dp: Optional[Dispatcher] = None


def get_bot() -> Bot:
    """Get or create the Bot instance."""
    global _bot
    if _bot is None:
        if not config.bot_token:
            raise ValueError("BOT_TOKEN is not configured")
        _bot = Bot(
            token=config.bot_token,
            default=DefaultBotProperties(parse_mode=ParseMode.HTML),
        )
        logger.info("Bot instance created")
    return _bot


def get_dispatcher() -> Dispatcher:
    """
    Get or create the Dispatcher.

    Handlers receive the shared ``prompt_tracker`` and ``image_provider``
    through the dispatcher's workflow data.
    """
    global _dp
    if _dp is None:
        # Import here to avoid circular imports
        from imagebot.handlers import register_all_handlers
        from imagebot.middlewares import register_middlewares

        _dp = Dispatcher(
            prompt_tracker=PromptTracker(timeout=config.prompt_timeout_seconds),
            image_provider=create_image_provider(),
        )
        register_middlewares(_dp)
        register_all_handlers(_dp)
        logger.info(f"Dispatcher created with {config.image_provider} image provider")
    return _dp


async def set_bot_commands(bot: Bot) -> None:
    """Publish the command menu."""
    await bot.set_my_commands(BOT_COMMANDS)
    logger.info("Bot commands menu set")


async def close_bot() -> None:
    """Close bot session."""
    global _bot
    if _bot is not None:
        await _bot.session.close()
        _bot = None
        logger.info("Bot session closed")
