from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
import logging

from .config import settings

logger = logging.getLogger(__name__)

# ============================================================
# Async Database Engine
# ============================================================

def parse_database_url(url: str) -> tuple[str, dict]:
    """
    Parse database URL and extract SSL settings for asyncpg.
    Returns: (clean_url, ssl_settings)

    Non-PostgreSQL URLs (e.g. sqlite+aiosqlite) are returned untouched.
    """
    if not url.startswith('postgresql'):
        return url, {}

    # Remove sslmode and channel_binding from URL
    clean_url = url.split('?')[0]

    # Convert to asyncpg format
    clean_url = clean_url.replace(
        'postgresql+psycopg2://',
        'postgresql+asyncpg://'
    ).replace(
        'postgresql://',
        'postgresql+asyncpg://'
    )

    ssl_settings = {}
    if 'sslmode' in url:
        ssl_settings['ssl'] = 'require'

    return clean_url, ssl_settings


def build_async_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine, with pool tuning only where the driver supports it"""
    clean_url, ssl_config = parse_database_url(url)

    if not clean_url.startswith('postgresql+asyncpg'):
        return create_async_engine(clean_url, echo=echo, future=True)

    return create_async_engine(
        clean_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=5,
        pool_timeout=30,
        pool_recycle=1800,
        connect_args={
            "server_settings": {
                "application_name": "movie_catalog_api",
                "jit": "off",
            },
            "command_timeout": 60,
            "timeout": 10,
            **ssl_config,
        },
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Returned objects outlive their session
        autoflush=False,
    )


async_engine = build_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
AsyncSessionLocal = build_session_factory(async_engine)

# ============================================================
# Base Model
# ============================================================

Base = declarative_base()

# ============================================================
# Database Health Check
# ============================================================

async def check_db_health() -> bool:
    """
    Check if database is accessible and responsive.
    Returns True if healthy, False otherwise.
    """
    session = AsyncSessionLocal()
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
    finally:
        await session.close()

# ============================================================
# Startup/Shutdown Handlers
# ============================================================

async def init_db():
    try:
        logger.info("🔄 Checking database connection...")

        is_healthy = await check_db_health()
        if is_healthy:
            logger.info("✅ Database health check passed")
        else:
            logger.error("❌ Database health check failed")
            return

        if settings.DB_CREATE_ALL:
            # Import models so they register with Base.metadata
            from . import models  # noqa: F401

            async with async_engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("✅ Tables created (DB_CREATE_ALL)")

    except Exception as e:
        logger.error(f"❌ Database init failed: {e}", exc_info=True)
        raise


async def close_db():
    """
    Close database connections on shutdown.
    """
    try:
        logger.info("🔄 Closing database connections...")
        await async_engine.dispose()
        logger.info("✅ Database connections closed")
    except Exception as e:
        logger.error(f"❌ Error closing database: {e}")


__all__ = [
    'Base',
    'async_engine',
    'AsyncSessionLocal',
    'build_async_engine',
    'build_session_factory',
    'check_db_health',
    'init_db',
    'close_db',
]
