"""
Shared pytest fixtures: a throwaway SQLite database, chat settings and an
application wired to a stub AI backend.
"""

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from apps.chat.config import ChatSettings
from apps.chat.db import get_chat_db
from apps.chat.routes.chat import get_ai_client, get_crisis_detector
from apps.chat.services import AIResponseClient, CrisisDetector
from apps.wellness.models import JournalEntry, MoodLog  # noqa: F401  (register tables)
from main import app as mindmate_app


async def no_sleep(delay: float) -> None:
    return None


@pytest.fixture
def chat_settings():
    """Settings with fast retries; never read from the environment file."""
    return ChatSettings(
        _env_file=None,
        AI_SERVICE_URL="http://ai.test/respond",
        AI_RETRY_BASE_DELAY=0.0,
    )


@pytest.fixture
def detector(chat_settings):
    return CrisisDetector(chat_settings.CRISIS_KEYWORDS, chat_settings.SAFETY_MESSAGE)


@pytest.fixture
def engine(tmp_path):
    # NullPool: connections never outlive the event loop that opened them
    return create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)


async def create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(engine, session_factory):
    await create_tables(engine)
    async with session_factory() as session:
        yield session


class StubResponder:
    """Records calls to the fake AI backend and answers with a fixed body."""

    def __init__(self, body=None, status_code=200):
        self.body = body if body is not None else {"response": "That sounds hard. Tell me more."}
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def responder():
    return StubResponder()


@pytest.fixture
def app(engine, session_factory, chat_settings, responder):
    """The MindMate application, wired to the test database and the stub AI backend."""

    async def override_db():
        await create_tables(engine)
        async with session_factory() as session:
            yield session

    def override_ai_client():
        return AIResponseClient(
            base_url=chat_settings.AI_SERVICE_URL,
            fallback_response=chat_settings.FALLBACK_RESPONSE,
            listening_prompt=chat_settings.LISTENING_PROMPT,
            timeout=1.0,
            max_attempts=3,
            base_delay=0.0,
            transport=httpx.MockTransport(responder),
            sleep=no_sleep,
        )

    mindmate_app.dependency_overrides[get_chat_db] = override_db
    mindmate_app.dependency_overrides[get_ai_client] = override_ai_client
    mindmate_app.dependency_overrides[get_crisis_detector] = lambda: CrisisDetector(
        chat_settings.CRISIS_KEYWORDS, chat_settings.SAFETY_MESSAGE
    )
    yield mindmate_app
    mindmate_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # Used without the context manager so startup never touches the configured database
    return TestClient(app)
