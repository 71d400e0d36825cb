"""
SQLAlchemy async 엔진 / 세션 팩토리.

연결 문자열은 StoreConfig로만 전달받는다 (환경 변수 직접 조회 없음).
    postgres://...          → postgresql+asyncpg://... 로 보정
    sqlite+aiosqlite:///x.db → 로컬 개발 / 테스트
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import StoreConfig


class Base(DeclarativeBase):
    pass


def normalize_database_url(url: str) -> str:
    """postgres:// 계열 URL을 asyncpg 드라이버 URL로 변환"""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def build_engine(config: StoreConfig) -> AsyncEngine:
    url = normalize_database_url(config.database_url)
    kwargs: dict = {"echo": config.echo}
    if not url.startswith("sqlite"):
        kwargs["pool_size"] = config.pool_size
        kwargs["max_overflow"] = config.max_overflow
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    """Create all tables (safe to call multiple times)."""
    from . import models  # noqa: F401  (테이블 등록)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
