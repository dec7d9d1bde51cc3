"""Database engine, session factory and request-scoped sessions"""

import re
import ssl
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.config import settings

_SSLMODE = re.compile(r"[?&]sslmode=([^&]+)", re.I)


def asyncpg_url(url: str) -> Tuple[str, Dict]:
    """
    Rewrite a ``postgresql://`` URL for asyncpg.

    asyncpg rejects ``sslmode``; a require/verify mode becomes an SSL context
    (encrypting, without certificate verification) in ``connect_args``.
    """
    url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    connect_args: Dict = {}
    match = _SSLMODE.search(url)
    if match:
        if match.group(1).lower() in ("require", "required", "verify-full", "verify-ca"):
            ctx = ssl.create_default_context()
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ctx
        url = _SSLMODE.sub("", url)
        if "?" not in url and "&" in url:
            url = url.replace("&", "?", 1)
    return url, connect_args


database_url, connect_args = asyncpg_url(settings.DATABASE_URL)

# pool_pre_ping drops connections the server has closed
engine = create_async_engine(
    database_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    echo=settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
)

# expire_on_commit=False: services return ORM objects after committing
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    One unit of work: commit on success, roll back on any exception.
    Services commit their own operations; the final commit here flushes
    anything left pending.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.

    A failed ledger or occupancy operation raises before its commit, and
    the rollback here discards whatever it had staged.
    """
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create tables directly (development only; deployments run Alembic)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
