"""Middleware that logs every incoming update."""

import logging
import time
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, Update

logger = logging.getLogger(__name__)


class UpdateLoggingMiddleware(BaseMiddleware):
    """Logs incoming updates and how long they took to process."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        start = time.monotonic()
        user = data.get("event_from_user")
        chat = data.get("event_chat")

        logger.debug(
            "Incoming update",
            extra={
                "update_type": event.event_type if isinstance(event, Update) else type(event).__name__,
                "chat_id": chat.id if chat else None,
                "user_id": user.id if user else None,
                "username": user.username if user else None,
            },
        )

        try:
            return await handler(event, data)
        finally:
            duration_ms = (time.monotonic() - start) * 1000
            logger.debug(f"Update processed in {duration_ms:.0f}ms")
