"""Telegram bot that turns text prompts into AI-generated images."""

__version__ = "1.0.0"
