import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from courtside.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Support both PostgreSQL and SQLite
database_url = settings.database_url

# Convert URL for async driver if needed
if database_url.startswith("sqlite:"):
    database_url = database_url.replace("sqlite:", "sqlite+aiosqlite:")
elif database_url.startswith("postgresql:") and "asyncpg" not in database_url:
    database_url = database_url.replace("postgresql:", "postgresql+asyncpg:")

engine_options = {"echo": settings.debug}
if "sqlite" in database_url:
    # SQLite connections must not outlive the event loop that opened them
    engine_options["poolclass"] = NullPool
else:
    engine_options["pool_pre_ping"] = True

engine = create_async_engine(database_url, **engine_options)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    # Register every model on Base.metadata before create_all
    import courtside.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def drop_db():
    import courtside.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
