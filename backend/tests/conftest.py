"""Pytest configuration and shared fixtures."""

import asyncio
import os
import tempfile

# Set test environment variables before importing the app
_TMP_DIR = tempfile.mkdtemp(prefix="qaplan-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/qaplan.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import qaplan.models  # noqa: F401
from qaplan.database import Base, get_db
from qaplan.main import app


def _make_engine(path):
    # NullPool: no connection outlives the event loop that opened it
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


async def _create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest_asyncio.fixture
async def db_session(tmp_path):
    """Session on a fresh SQLite database file."""
    engine = _make_engine(tmp_path / "plan.db")
    await _create_tables(engine)
    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def client(tmp_path):
    """API test client backed by a fresh SQLite database file."""
    engine = _make_engine(tmp_path / "api.db")
    asyncio.run(_create_tables(engine))
    session_maker = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_test_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()
