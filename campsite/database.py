"""Async SQLAlchemy engine, session factory, and declarative base."""

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from campsite.config import settings


def make_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine, applying the configured timeout for asyncpg."""
    if url.startswith("postgresql+asyncpg://"):
        kwargs.setdefault("pool_size", settings.db_pool_size)
        kwargs.setdefault("max_overflow", settings.db_max_overflow)
        kwargs.setdefault("connect_args", {"command_timeout": settings.db_statement_timeout_seconds})
    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True, **kwargs)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = make_engine(settings.async_database_url)

async_session_factory = make_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )


async def init_models(bind: AsyncEngine) -> None:
    """Create all tables. Local development only; production uses Alembic."""
    # Import models so they register on Base.metadata
    import campsite.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
