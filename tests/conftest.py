"""Shared fixtures: a throwaway SQLite database and an image provider double."""

import os
import tempfile

# Must happen before imagebot.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="imagebot-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["BOT_TOKEN"] = "123456:TEST-TOKEN"
os.environ["GEMINI_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["IMAGE_PROVIDER"] = "gemini"
os.environ["PROMPT_TIMEOUT_SECONDS"] = ""

import pytest
import pytest_asyncio

from imagebot.db.database import Base, close_db, get_engine, get_session_maker, init_db

from tests.doubles import PNG_IMAGE, FakeImageProvider


@pytest_asyncio.fixture
async def db():
    """Fresh schema per test; yields the session maker."""
    await init_db()
    yield get_session_maker()
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await close_db()


@pytest_asyncio.fixture
async def test_session(db):
    async with db() as session:
        yield session


@pytest.fixture
def provider() -> FakeImageProvider:
    return FakeImageProvider(result=PNG_IMAGE)
