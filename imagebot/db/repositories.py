"""Repository classes for database CRUD operations."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, List

from sqlalchemy import select, desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from imagebot.db.models import (
    CommandLog,
    User,
    UserSettings,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_MODEL,
)

logger = logging.getLogger(__name__)


# Columns of UserSettings that may be changed through update_settings()
SETTINGS_FIELDS = frozenset({
    "notifications_enabled",
    "timezone",
    "default_aspect_ratio",
    "default_image_size",
    "default_model",
})


class UserNotFoundError(Exception):
    """Raised when an operation targets a Telegram user that is not registered."""

    def __init__(self, telegram_id: int):
        self.telegram_id = telegram_id
        super().__init__(f"User {telegram_id} not found")


@dataclass(frozen=True)
class ImagePreferences:
    """Image generation defaults of a user."""

    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    image_size: str = DEFAULT_IMAGE_SIZE
    model: str = DEFAULT_MODEL


@dataclass(frozen=True)
class UserActivityStats:
    total_users: int
    active_today: int
    active_this_week: int


class UserRepository:
    """Repository for User and UserSettings CRUD operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        """Get user by Telegram ID."""
        result = await self.session.execute(
            select(User).where(User.telegram_id == telegram_id)
        )
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        telegram_id: int,
        first_name: str = "",
        username: Optional[str] = None,
        last_name: Optional[str] = None,
        language_code: Optional[str] = None,
        is_bot: bool = False,
        is_premium: Optional[bool] = None,
    ) -> tuple[User, bool]:
        """
        Get existing user or create a new one with default settings.

        An existing user has its profile fields refreshed and last_seen_at
        bumped.

        Returns:
            Tuple of (user, created) where created is True if new user was created.
        """
        user = await self.get_by_telegram_id(telegram_id)

        if user is None:
            user = User(
                telegram_id=telegram_id,
                username=username,
                first_name=first_name or "",
                last_name=last_name,
                language_code=language_code,
                is_bot=is_bot,
                is_premium=bool(is_premium),
                settings=UserSettings(),
            )
            self.session.add(user)
            try:
                await self.session.commit()
            except IntegrityError:
                # Another update from the same user registered it first
                await self.session.rollback()
                user = await self.get_by_telegram_id(telegram_id)
                if user is None:
                    raise
            else:
                await self.session.refresh(user)
                logger.info(f"Created new user {telegram_id}")
                return user, True

        user.username = username
        user.first_name = first_name or user.first_name
        user.last_name = last_name
        user.language_code = language_code
        user.is_premium = bool(is_premium)
        user.last_seen_at = func.now()
        await self.session.commit()
        await self.session.refresh(user)

        return user, False

    async def get_settings(self, telegram_id: int) -> Optional[UserSettings]:
        """Get settings row of a user, None if the user or row is missing."""
        result = await self.session.execute(
            select(UserSettings)
            .join(User, UserSettings.user_id == User.id)
            .where(User.telegram_id == telegram_id)
        )
        return result.scalar_one_or_none()

    async def get_preferences(self, telegram_id: int) -> ImagePreferences:
        """
        Get image generation defaults of a user.

        Missing users, missing settings rows and empty values all fall back
        to the global defaults.
        """
        settings = await self.get_settings(telegram_id)
        if settings is None:
            return ImagePreferences()

        return ImagePreferences(
            aspect_ratio=settings.default_aspect_ratio or DEFAULT_ASPECT_RATIO,
            image_size=settings.default_image_size or DEFAULT_IMAGE_SIZE,
            model=settings.default_model or DEFAULT_MODEL,
        )

    async def update_settings(self, telegram_id: int, **fields: Any) -> UserSettings:
        """
        Update some of the user's settings, creating the settings row if needed.

        Raises:
            UserNotFoundError: if the user is not registered
            ValueError: if an unknown settings field is given
        """
        unknown = set(fields) - SETTINGS_FIELDS
        if unknown:
            raise ValueError(f"Unknown settings fields: {', '.join(sorted(unknown))}")

        user = await self.get_by_telegram_id(telegram_id)
        if user is None:
            raise UserNotFoundError(telegram_id)

        settings = await self.get_settings(telegram_id)
        if settings is None:
            settings = UserSettings(user_id=user.id)
            self.session.add(settings)

        for name, value in fields.items():
            setattr(settings, name, value)

        await self.session.commit()
        await self.session.refresh(settings)

        return settings

    async def get_activity_stats(self, now: Optional[datetime] = None) -> UserActivityStats:
        """Count all users and the ones seen today and during the last week."""
        now = now or datetime.now(timezone.utc)
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_week = start_of_day - timedelta(days=7)

        total = await self.session.scalar(select(func.count(User.id)))
        today = await self.session.scalar(
            select(func.count(User.id)).where(User.last_seen_at >= start_of_day)
        )
        week = await self.session.scalar(
            select(func.count(User.id)).where(User.last_seen_at >= start_of_week)
        )

        return UserActivityStats(
            total_users=total or 0,
            active_today=today or 0,
            active_this_week=week or 0,
        )


class CommandLogRepository:
    """Repository for the command audit log."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(
        self,
        telegram_id: int,
        command: str,
        args: Optional[str],
        chat_id: int,
        chat_type: str,
    ) -> Optional[CommandLog]:
        """
        Append a command invocation to the log.

        Returns:
            Created CommandLog, or None when the user is not registered
        """
        user_id = await self.session.scalar(
            select(User.id).where(User.telegram_id == telegram_id)
        )
        if user_id is None:
            logger.warning(f"Cannot log command {command}: user {telegram_id} not found")
            return None

        entry = CommandLog(
            user_id=user_id,
            command=command,
            args=args or None,
            chat_id=chat_id,
            chat_type=chat_type,
        )
        self.session.add(entry)
        await self.session.commit()

        logger.debug(f"Command {command} logged for user {telegram_id}")
        return entry

    async def get_command_stats(
        self,
        days: int = 7,
        limit: int = 5,
        now: Optional[datetime] = None,
    ) -> List[tuple[str, int]]:
        """
        Get the most used commands.

        Args:
            days: Size of the window, counted back from now
            limit: Maximum number of commands to return

        Returns:
            List of (command, count) ordered by count descending
        """
        since = (now or datetime.now(timezone.utc)) - timedelta(days=days)
        count = func.count(CommandLog.id).label("uses")
        result = await self.session.execute(
            select(CommandLog.command, count)
            .where(CommandLog.created_at >= since)
            .group_by(CommandLog.command)
            .order_by(desc(count), CommandLog.command)
            .limit(limit)
        )
        return [(command, uses) for command, uses in result.all()]

    async def count_for_user(self, telegram_id: int) -> int:
        """Count commands a user has issued."""
        total = await self.session.scalar(
            select(func.count(CommandLog.id))
            .join(User, CommandLog.user_id == User.id)
            .where(User.telegram_id == telegram_id)
        )
        return total or 0

    async def get_user_history(
        self,
        telegram_id: int,
        limit: int = 10,
    ) -> List[CommandLog]:
        """Get a user's latest commands, newest first."""
        result = await self.session.execute(
            select(CommandLog)
            .join(User, CommandLog.user_id == User.id)
            .where(User.telegram_id == telegram_id)
            .order_by(desc(CommandLog.created_at), desc(CommandLog.id))
            .limit(limit)
        )
        return list(result.scalars().all())
