"""FastAPI application serving the bot over a Telegram webhook.

Routes:
- POST /webhook            Telegram updates
- GET  /health, /          liveness and service info
- GET  /admin/stats        usage statistics (X-Admin-API-Key)
- GET  /admin/users/{id}   one user's profile, preferences and recent commands
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional, Set

from aiogram import Bot
from aiogram.types import Update
from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response

from imagebot import __version__
from imagebot.bot import close_bot, get_bot, get_dispatcher, set_bot_commands
from imagebot.config import config
from imagebot.db.database import close_db, get_session_maker, init_db
from imagebot.db.repositories import CommandLogRepository, UserRepository

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"

# Updates still being handled; strong references keep the tasks alive
_update_tasks: Set[asyncio.Task] = set()


async def register_webhook(bot: Bot) -> None:
    """Point Telegram at this service. Failures are logged, startup continues."""
    if not config.webhook_url:
        logger.warning("WEBHOOK_URL is empty, Telegram will not deliver updates here")
        return

    url = config.webhook_url.rstrip("/") + WEBHOOK_PATH
    try:
        await bot.set_webhook(
            url=url,
            secret_token=config.webhook_secret_token or None,
            drop_pending_updates=True,
            request_timeout=config.telegram_request_timeout,
        )
    except Exception:
        logger.exception(f"Could not register webhook {url}")
    else:
        logger.info(f"Webhook registered: {url}")


async def unregister_webhook(bot: Bot) -> None:
    if not config.webhook_url:
        return
    try:
        await bot.delete_webhook(request_timeout=config.telegram_request_timeout)
    except Exception as e:
        logger.error(f"Could not remove webhook: {e}")
    else:
        logger.info("Webhook removed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the dispatcher, publish commands, register the webhook."""
    logger.info(f"Starting imagebot {__version__} ({config.environment})")

    await init_db()
    bot = get_bot()
    get_dispatcher()

    try:
        await set_bot_commands(bot)
    except Exception as e:
        logger.error(f"Could not publish command menu: {e}")

    await register_webhook(bot)

    yield

    logger.info("Stopping imagebot")
    await unregister_webhook(bot)
    if _update_tasks:
        logger.info(f"Waiting for {len(_update_tasks)} updates in progress")
        await asyncio.gather(*_update_tasks, return_exceptions=True)
    await close_bot()
    await close_db()


app = FastAPI(
    title="imagebot",
    description="Telegram bot that turns text prompts into images",
    version=__version__,
    lifespan=lifespan,
)


async def process_update(bot: Bot, update: Update) -> None:
    try:
        await get_dispatcher().feed_update(bot=bot, update=update)
    except Exception:
        logger.exception(f"Failed to process webhook update {update.update_id}")


@app.post(WEBHOOK_PATH)
async def telegram_webhook(
    request: Request,
    secret_token: Optional[str] = Header(default=None, alias="X-Telegram-Bot-Api-Secret-Token"),
) -> Response:
    """
    Accept one Telegram update and handle it in the background.

    Answers 200 right away, before the handlers run. Image generation can take
    longer than Telegram waits for a webhook reply, and an unanswered or failed
    call makes Telegram redeliver the same update.
    """
    if config.webhook_secret_token and secret_token != config.webhook_secret_token:
        logger.warning("Rejected webhook call with a wrong secret token")
        return Response(status_code=403)

    bot = get_bot()
    try:
        update = Update.model_validate(await request.json(), context={"bot": bot})
    except Exception:
        logger.exception("Received a malformed webhook update")
        return Response(status_code=200)

    task = asyncio.create_task(process_update(bot, update))
    _update_tasks.add(task)
    task.add_done_callback(_update_tasks.discard)

    return Response(status_code=200)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def index():
    return {"name": "imagebot", "version": __version__, "status": "running"}


# ============== Admin API ==============

def require_admin(api_key: Optional[str] = Header(default=None, alias="X-Admin-API-Key")) -> None:
    """Reject the request unless it carries the configured admin key."""
    if not config.admin_api_key or api_key != config.admin_api_key:
        raise HTTPException(status_code=403, detail="Forbidden")


@app.get("/admin/stats", dependencies=[Depends(require_admin)])
async def admin_stats():
    """User activity and the most used commands of the last week."""
    async with get_session_maker()() as session:
        activity = await UserRepository(session).get_activity_stats()
        top_commands = await CommandLogRepository(session).get_command_stats(days=7, limit=10)

    return {
        "total_users": activity.total_users,
        "active_today": activity.active_today,
        "active_this_week": activity.active_this_week,
        "top_commands": [{"command": command, "count": uses} for command, uses in top_commands],
    }


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


@app.get("/admin/users/{telegram_id}", dependencies=[Depends(require_admin)])
async def admin_user(telegram_id: int):
    """Profile, image preferences and the last ten commands of one user."""
    async with get_session_maker()() as session:
        users = UserRepository(session)
        user = await users.get_by_telegram_id(telegram_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        preferences = await users.get_preferences(telegram_id)
        history = await CommandLogRepository(session).get_user_history(telegram_id, limit=10)

    return {
        "id": user.id,
        "telegram_id": user.telegram_id,
        "username": user.username,
        "first_name": user.first_name,
        "is_premium": user.is_premium,
        "created_at": _isoformat(user.created_at),
        "last_seen_at": _isoformat(user.last_seen_at),
        "preferences": {
            "aspect_ratio": preferences.aspect_ratio,
            "image_size": preferences.image_size,
            "model": preferences.model,
        },
        "recent_commands": [
            {"command": entry.command, "args": entry.args, "created_at": _isoformat(entry.created_at)}
            for entry in history
        ],
    }
