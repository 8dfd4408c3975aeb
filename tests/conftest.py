from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import washdesk.db as db
from washdesk.app import create_app
from washdesk.db.models import Base


@pytest.fixture
def storage_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "storage"
    monkeypatch.setenv("WASHDESK_STORAGE_DIR", str(path))
    monkeypatch.setenv("WASHDESK_STORAGE_PUBLIC_BASE_URL", "/storage")
    return path


@pytest.fixture
async def test_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    db_path = tmp_path / "test.db"
    engine = db.create_engine(f"sqlite+aiosqlite:///{db_path}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db.SessionMaker = db.create_sessionmaker(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
async def client(test_engine: AsyncEngine, storage_dir: Path) -> AsyncIterator[AsyncClient]:
    _ = test_engine, storage_dir
    app = create_app()
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    _ = test_engine
    async with db.SessionMaker() as session:
        yield session
