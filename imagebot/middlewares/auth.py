"""Middleware that registers the sender in the database."""

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, User as TelegramUser

from imagebot.db.database import get_session_maker
from imagebot.db.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserMiddleware(BaseMiddleware):
    """
    Find or create the sender's profile and expose it to handlers.

    Handlers receive it as ``db_user`` and whether it was just registered as
    ``db_user_created``. A database failure is logged and the update is still
    handled, without ``db_user``.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_tg: TelegramUser | None = data.get("event_from_user")

        # Channel posts and some service updates have no sender
        if user_tg is None:
            return await handler(event, data)

        try:
            session_maker = get_session_maker()
            async with session_maker() as session:
                user_repo = UserRepository(session)
                user, created = await user_repo.get_or_create(
                    telegram_id=user_tg.id,
                    first_name=user_tg.first_name,
                    username=user_tg.username,
                    last_name=user_tg.last_name,
                    language_code=user_tg.language_code,
                    is_bot=user_tg.is_bot,
                    is_premium=user_tg.is_premium,
                )
            data["db_user"] = user
            data["db_user_created"] = created
            logger.debug(f"User authenticated: {user_tg.id} (@{user_tg.username})")
        except Exception:
            logger.exception(f"Failed to authenticate user {user_tg.id}")

        return await handler(event, data)
