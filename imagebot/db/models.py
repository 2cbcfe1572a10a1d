"""SQLAlchemy models for the image bot."""

from datetime import datetime
from typing import Optional, List

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from imagebot.db.database import Base


DEFAULT_ASPECT_RATIO = "1:1"
DEFAULT_IMAGE_SIZE = "1K"
DEFAULT_MODEL = "high-quality"
DEFAULT_TIMEZONE = "UTC"


class User(Base):
    """User model representing a Telegram user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    telegram_id: Mapped[int] = mapped_column(
        BigInteger, unique=True, nullable=False, index=True
    )
    username: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    language_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    is_bot: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )
    last_seen_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )

    # Relationships
    settings: Mapped[Optional["UserSettings"]] = relationship(
        "UserSettings", back_populates="user", uselist=False, lazy="selectin",
        cascade="all, delete-orphan",
    )
    command_logs: Mapped[List["CommandLog"]] = relationship(
        "CommandLog", back_populates="user", lazy="raise",
        cascade="all, delete-orphan", passive_deletes=True,
    )


class UserSettings(Base):
    """Per-user preferences, including image generation defaults."""

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    notifications_enabled: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    timezone: Mapped[str] = mapped_column(
        String(64), default=DEFAULT_TIMEZONE, nullable=False
    )
    default_aspect_ratio: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_ASPECT_RATIO, nullable=False
    )
    default_image_size: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_IMAGE_SIZE, nullable=False
    )
    default_model: Mapped[str] = mapped_column(
        String(50), default=DEFAULT_MODEL, nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="settings")


class CommandLog(Base):
    """Append-only record of a command invocation."""

    __tablename__ = "command_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    command: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    args: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    chat_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    chat_type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )

    user: Mapped["User"] = relationship("User", back_populates="command_logs")
