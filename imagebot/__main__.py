"""Run the bot with long polling: ``python -m imagebot``."""

import asyncio
import logging

from imagebot.bot import close_bot, get_bot, get_dispatcher, set_bot_commands
from imagebot.config import config
from imagebot.db.database import close_db, init_db

logger = logging.getLogger(__name__)


async def main() -> None:
    logger.info(f"Starting Telegram bot ({config.environment}) with long polling...")

    await init_db()
    logger.info("Database initialized")

    bot = get_bot()
    dp = get_dispatcher()

    try:
        await set_bot_commands(bot)
    except Exception as e:
        logger.error(f"Failed to set bot commands: {e}")

    # A webhook left over from webhook mode would swallow updates
    await bot.delete_webhook(drop_pending_updates=False)

    try:
        logger.info("🤖 Bot is running!")
        await dp.start_polling(bot, handle_signals=True)
    finally:
        await close_bot()
        await close_db()
        logger.info("Shutdown complete")


def run() -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
