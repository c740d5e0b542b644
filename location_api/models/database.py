"""
Database configuration and session management
"""
import re
import ssl
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from location_api.core.config import settings, normalize_database_url


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for SQLite (aiosqlite) or Postgres (asyncpg)"""
    database_url = normalize_database_url(database_url)

    if database_url.startswith("sqlite"):
        # SQLite serializes writes itself, the default pool is fine
        return create_async_engine(database_url, echo=echo)

    connect_args = {}

    # Handle SSL for cloud databases (Neon, Vercel, etc.)
    if "neon.tech" in database_url or "vercel" in database_url.lower():
        # Remove sslmode from URL if present (asyncpg doesn't support it)
        if "sslmode=" in database_url:
            database_url = re.sub(r'[?&]sslmode=[^&]*', '', database_url)
            database_url = database_url.replace('?&', '?').rstrip('?')

        # Create SSL context for asyncpg
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_context

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        connect_args=connect_args
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


# Create async engine
engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

# Async session factory
async_session_maker = build_session_maker(engine)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency for getting async database session"""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = engine):
    """Create tables if they do not exist"""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
