"""Middleware chain: update logging, user registration, command parsing and audit."""

from aiogram import Dispatcher

from imagebot.middlewares.auth import UserMiddleware
from imagebot.middlewares.commands import CommandArgsMiddleware, CommandAuditMiddleware
from imagebot.middlewares.update_logging import UpdateLoggingMiddleware

__all__ = [
    "UserMiddleware",
    "CommandArgsMiddleware",
    "CommandAuditMiddleware",
    "UpdateLoggingMiddleware",
    "register_middlewares",
]


def register_middlewares(dp: Dispatcher) -> None:
    """Attach the middleware chain. Order matters: users exist before commands are logged."""
    dp.update.outer_middleware(UpdateLoggingMiddleware())

    user_middleware = UserMiddleware()
    dp.message.outer_middleware(user_middleware)
    dp.callback_query.outer_middleware(user_middleware)

    dp.message.outer_middleware(CommandArgsMiddleware())
    dp.message.outer_middleware(CommandAuditMiddleware())
