from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from influencehub.config import settings


def _engine_kwargs() -> dict:
    if settings.is_sqlite:
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    **_engine_kwargs(),
)
SessionLocal = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def init_db(bind: AsyncEngine | None = None) -> None:
    from influencehub.db import models  # noqa: F401  registers tables on Base.metadata

    async with (bind or engine).begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
