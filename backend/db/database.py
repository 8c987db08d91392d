from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from core.config import settings


class Base(DeclarativeBase):
    pass


def _connect_args() -> dict:
    # asyncpg takes server settings per connection; other drivers get nothing
    if settings.database_url.startswith("postgresql+asyncpg") and settings.database_statement_timeout_ms:
        return {"server_settings": {"statement_timeout": str(settings.database_statement_timeout_ms)}}
    return {}


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    connect_args=_connect_args(),
)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables():
    # Import models so they register on Base.metadata
    from db.part_number import PartNumber  # noqa: F401
    from db.inventory import InventoryItem, PartNumberHistory  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session
