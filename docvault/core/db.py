from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from docvault.core.config import settings
from docvault.db.base import Base

# Async engine
engine = create_async_engine(settings.database_url, future=True, echo=settings.debug)

# Sessions
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Request-scoped session for FastAPI dependency injection
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_db():
    """Create tables for local runs; production schemas come from Alembic."""
    import docvault.db.models  # noqa: F401  registers the mappers

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_db(session: AsyncSession) -> bool:
    try:
        await session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


async def close_db():
    await engine.dispose()
