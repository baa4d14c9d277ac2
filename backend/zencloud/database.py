"""Async SQLAlchemy engine and session factory.

The engine is created once by the application lifespan and kept on
``app.state``. Routes get a fresh session per request:

    from zencloud.database import get_db

    @router.get("/items")
    async def list_items(db: AsyncSession = Depends(get_db)):
        result = await db.execute(select(Item))
        return result.scalars().all()
"""
import logging

from fastapi import HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from zencloud.config import Settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine | None:
    """Create the shared engine, or None when no credentials are configured."""
    url = settings.database_url
    if url is None:
        logger.warning("DB_USER or DB_PASS is not set; metadata store is disabled")
        return None

    kwargs = {"echo": False, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        kwargs.update(pool_size=10, max_overflow=20)
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request):
    """FastAPI dependency that yields an async DB session."""
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise HTTPException(status_code=503, detail="Metadata store is not configured")
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
