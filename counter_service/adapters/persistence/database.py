"""Async SQLAlchemy engine, session factory and declarative base."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from counter_service.config import settings


class Base(DeclarativeBase):
    pass


def build_engine(database_url: str | None = None, echo: bool = False) -> AsyncEngine:
    return create_async_engine(
        database_url or settings.database_url,
        echo=echo,
        pool_pre_ping=True,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)
