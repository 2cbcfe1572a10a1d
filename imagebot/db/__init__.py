"""Database module for the image bot."""

from imagebot.db.database import Base, get_session_maker, get_engine, get_session, init_db, close_db
from imagebot.db.models import User, UserSettings, CommandLog
from imagebot.db.repositories import (
    CommandLogRepository,
    ImagePreferences,
    UserNotFoundError,
    UserRepository,
)

__all__ = [
    "Base",
    "get_session_maker",
    "get_engine",
    "get_session",
    "init_db",
    "close_db",
    "User",
    "UserSettings",
    "CommandLog",
    "CommandLogRepository",
    "ImagePreferences",
    "UserNotFoundError",
    "UserRepository",
]
