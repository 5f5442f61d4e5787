from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from apps.chat.config import get_chat_settings

# Import models so SQLAlchemy can discover them
from apps.chat.models import ChatSession, Message

settings = get_chat_settings()

connect_args = {}
if settings.DATABASE_URL.startswith("postgresql+asyncpg"):
    connect_args = {
        "server_settings": {
            "application_name": "mindmate_chat"
        },
        "ssl": False
    }

# Create async engine; no connection is opened until first use
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    pool_pre_ping=True,
    pool_recycle=300,
    connect_args=connect_args
)

# Create async session factory
AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def init_chat_db():
    async with engine.begin() as conn:
        # Import all models to ensure they're registered
        from apps.chat.models import ChatSession, Message
        from apps.wellness.models import JournalEntry, MoodLog

        await conn.run_sync(SQLModel.metadata.create_all)


async def get_chat_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
