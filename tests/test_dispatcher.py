"""End-to-end routing through the real dispatcher with a recording bot session."""

from datetime import datetime
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
from aiogram import Bot
from aiogram.client.session.base import BaseSession
from aiogram.enums import ParseMode
from aiogram.methods import DeleteMessage, SendMessage, SendPhoto, TelegramMethod
from aiogram.types import Chat, Message, Update

from imagebot.bot import get_dispatcher
from imagebot.db.repositories import CommandLogRepository
from imagebot.services.prompt_tracker import PromptTracker
from imagebot.utils.messages import (
    PROMPT_CANCELLED,
    PROMPT_GENERATING,
    UNKNOWN_COMMAND,
)

from tests.doubles import PNG_IMAGE, FakeImageProvider


class RecordingSession(BaseSession):
    """Bot session that records API calls instead of sending them."""

    def __init__(self):
        super().__init__()
        self.requests: List[TelegramMethod] = []

    async def close(self) -> None:
        pass

    async def make_request(self, bot: Bot, method: TelegramMethod, timeout: Optional[int] = None) -> Any:
        self.requests.append(method)
        if isinstance(method, (SendMessage, SendPhoto)):
            return Message(
                message_id=len(self.requests),
                date=datetime.now(),
                chat=Chat(id=method.chat_id, type="private"),
            )
        return True

    async def stream_content(
        self,
        url: str,
        headers: Optional[Dict[str, Any]] = None,
        timeout: int = 30,
        chunk_size: int = 65536,
        raise_for_status: bool = True,
    ) -> AsyncGenerator[bytes, None]:
        yield b""


class ChatSimulator:
    """Feeds text messages from one user into the dispatcher."""

    def __init__(self, bot: Bot, user_id: int = 2002):
        self.bot = bot
        self.user_id = user_id
        self._next_id = 0

    async def send(self, text: str) -> None:
        self._next_id += 1
        update = Update.model_validate(
            {
                "update_id": self._next_id,
                "message": {
                    "message_id": self._next_id,
                    "date": int(datetime.now().timestamp()),
                    "chat": {"id": self.user_id, "type": "private"},
                    "from": {"id": self.user_id, "is_bot": False, "first_name": "Linus"},
                    "text": text,
                },
            },
            context={"bot": self.bot},
        )
        await get_dispatcher().feed_update(bot=self.bot, update=update)


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def provider() -> FakeImageProvider:
    provider = FakeImageProvider(result=PNG_IMAGE)
    dp = get_dispatcher()
    dp["image_provider"] = provider
    dp["prompt_tracker"] = PromptTracker()
    return provider


@pytest.fixture
def chat(session, provider) -> ChatSimulator:
    return ChatSimulator(Bot(token="42:TEST-TOKEN", session=session))


def sent_texts(session: RecordingSession) -> List[str]:
    return [request.text for request in session.requests if isinstance(request, SendMessage)]


class TestDispatcherRouting:

    @pytest.mark.asyncio
    async def test_prompt_round_trip(self, db, chat, session, provider):
        await chat.send("/prompt")
        await chat.send("a_b*c")

        assert provider.calls[0]["prompt"] == "a_b*c"
        assert sent_texts(session)[1] == PROMPT_GENERATING
        assert any(isinstance(request, DeleteMessage) for request in session.requests)

        photo = session.requests[-1]
        assert isinstance(photo, SendPhoto)
        assert photo.parse_mode == ParseMode.MARKDOWN_V2
        assert photo.caption.endswith("a\\_b\\*c")

    @pytest.mark.asyncio
    async def test_text_without_prompt_is_ignored(self, db, chat, session, provider):
        await chat.send("just chatting")

        assert session.requests == []
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_unknown_command(self, db, chat, session):
        await chat.send("/frobnicate")

        assert sent_texts(session) == [UNKNOWN_COMMAND]

    @pytest.mark.asyncio
    async def test_cancel_returns_to_plain_chat(self, db, chat, session, provider):
        await chat.send("/prompt")
        await chat.send("/cancel")
        await chat.send("a cat")

        assert sent_texts(session)[-1] == PROMPT_CANCELLED
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_commands_while_waiting_keep_prompt_pending(self, db, chat, session, provider):
        await chat.send("/prompt")
        await chat.send("/help")
        await chat.send("a lighthouse")

        assert [call["prompt"] for call in provider.calls] == ["a lighthouse"]

    @pytest.mark.asyncio
    async def test_commands_are_audited(self, db, chat):
        await chat.send("/start")
        await chat.send("/echo hello")

        async with db() as session:
            history = await CommandLogRepository(session).get_user_history(chat.user_id)

        assert [(entry.command, entry.args) for entry in history] == [
            ("/echo", "hello"),
            ("/start", None),
        ]
