"""Middlewares for slash-commands: argument parsing and the audit log."""

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from imagebot.db.database import get_session_maker
from imagebot.db.repositories import CommandLogRepository
from imagebot.utils.helpers import is_command, parse_command

logger = logging.getLogger(__name__)


class CommandArgsMiddleware(BaseMiddleware):
    """Expose the whitespace-separated command arguments as ``command_args``."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if isinstance(event, Message) and is_command(event.text):
            _, args = parse_command(event.text)
            data["command_args"] = args
        return await handler(event, data)


class CommandAuditMiddleware(BaseMiddleware):
    """
    Record every command in the command log.

    Recording never blocks the command: failures are logged and swallowed.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if isinstance(event, Message) and is_command(event.text) and event.from_user:
            command, args = parse_command(event.text)
            try:
                session_maker = get_session_maker()
                async with session_maker() as session:
                    await CommandLogRepository(session).record(
                        telegram_id=event.from_user.id,
                        command=command,
                        args=" ".join(args) if args else None,
                        chat_id=event.chat.id,
                        chat_type=event.chat.type,
                    )
            except Exception:
                logger.exception(f"Failed to log command {command}")

        return await handler(event, data)
