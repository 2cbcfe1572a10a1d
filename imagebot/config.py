"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Telegram Bot
    bot_token: str
    webhook_url: str
    webhook_secret_token: str
    telegram_request_timeout: int

    # Database
    database_url: str

    # Image generation
    image_provider: str
    gemini_api_key: str
    openai_api_key: str

    # App settings
    environment: str
    log_level: str
    admin_api_key: str
    prompt_timeout_seconds: Optional[float]


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


def load_config() -> Config:
    """Load configuration from environment variables."""
    return Config(
        bot_token=os.getenv("BOT_TOKEN", ""),
        webhook_url=os.getenv("WEBHOOK_URL", ""),
        webhook_secret_token=os.getenv("WEBHOOK_SECRET_TOKEN", ""),
        telegram_request_timeout=int(os.getenv("TELEGRAM_REQUEST_TIMEOUT", "30")),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./dev.db"),
        image_provider=os.getenv("IMAGE_PROVIDER", "gemini").lower(),
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        environment=os.getenv("ENVIRONMENT", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        admin_api_key=os.getenv("ADMIN_API_KEY", ""),
        prompt_timeout_seconds=_optional_float(os.getenv("PROMPT_TIMEOUT_SECONDS")),
    )


# Global config instance
config = load_config()
