import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.api.deps import db_session
from app.db.base import Base
from app.db.session import build_sessionmaker
from app.main import create_app
from app.models import domain  # noqa: F401


@pytest.fixture
def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bug_rush.db'}", poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    yield build_sessionmaker(engine)
    asyncio.run(engine.dispose())


@pytest.fixture
def run(session_factory):
    """Run ``fn(db)`` in a fresh session and event loop, returning its result."""

    def _run(fn):
        async def scenario():
            async with session_factory() as db:
                return await fn(db)

        return asyncio.run(scenario())

    return _run


@pytest.fixture
def client(session_factory):
    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_session] = override_db_session
    return TestClient(app)
