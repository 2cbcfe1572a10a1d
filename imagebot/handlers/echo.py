"""Handler for /echo command."""

from typing import Optional

from aiogram import Router
from aiogram.enums import ParseMode
from aiogram.filters import Command
from aiogram.types import Message

from imagebot.utils.helpers import escape_markdown
from imagebot.utils.messages import ECHO_REPLY_MD, ECHO_USAGE

router = Router(name="echo")


@router.message(Command("echo"))
async def cmd_echo(message: Message, command_args: Optional[list[str]] = None) -> None:
    """Echo the command arguments back, escaped for MarkdownV2."""
    if not command_args:
        await message.answer(ECHO_USAGE)
        return

    text = " ".join(command_args)
    await message.answer(
        ECHO_REPLY_MD.format(text=escape_markdown(text)),
        parse_mode=ParseMode.MARKDOWN_V2,
    )
