"""Engine and session factory shared by every unit of work."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from core.config import settings


def build_engine(url: str) -> AsyncEngine:
    """Pooled async engine. SQLite URLs get the driver's default pool."""
    options: dict = {"echo": settings.debug, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return create_async_engine(url, **options)


engine = build_engine(settings.async_database_url)

# Entities leave the session after commit, so nothing may expire
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def check_connection() -> None:
    """Round-trip a trivial query; raises if the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
