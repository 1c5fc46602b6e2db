"""
Shared fixtures: a fresh SQLite database per test (through aiosqlite),
services bound to it, and a mocked Telegram client.
"""

import os

# Settings require a DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./movie_catalog_test.db")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "")
os.environ.setdefault("TELEGRAM_CHAT_ID", "")

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from movie_catalog.database import Base, build_async_engine, build_session_factory
from movie_catalog.services.genre_service import GenreService
from movie_catalog.services.movie_service import MovieService
from movie_catalog.utils.telegram import TelegramService


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Create a file-backed SQLite database so concurrent sessions get their own connection."""
    engine = build_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def telegram():
    return AsyncMock(spec=TelegramService)


@pytest.fixture
def movie_service(session_factory, telegram):
    return MovieService(session_factory, telegram)


@pytest.fixture
def genre_service(session_factory, movie_service):
    return GenreService(session_factory, movie_service)


@pytest.fixture
def add(session_factory):
    """Persist ORM objects in one session and return them."""
    async def _add(*objects):
        async with session_factory() as db:
            db.add_all(objects)
            await db.commit()
        return objects
    return _add


@pytest_asyncio.fixture
async def bare_session_factory(tmp_path):
    """A database without tables, so every statement fails."""
    engine = build_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bare.db'}")

    yield build_session_factory(engine)

    await engine.dispose()
