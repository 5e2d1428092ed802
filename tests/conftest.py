import asyncio
import os
from types import SimpleNamespace
from typing import AsyncGenerator

# Settings are read at import time, so point them at test values first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_DIR"] = "logs/test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["SCAN_LIMIT"] = "10"
os.environ.setdefault("DATABASE_TEST_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from app.core.config import settings
from app.core.database import get_async_session
from app.core.exceptions import DuplicateKeyError
from app.db.base import Base
from app.models.qr.qr_code import QRCode  # noqa: F401

# Test database URL, in-memory sqlite unless DATABASE_TEST_URL points elsewhere
TEST_DATABASE_URL = settings.DATABASE_TEST_URL


@pytest.fixture
async def test_engine():
    """Fresh schema per test"""
    engine_options = {}
    if make_url(TEST_DATABASE_URL).get_backend_name() == "sqlite":
        engine_options.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
    engine = create_async_engine(TEST_DATABASE_URL, **engine_options)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Create test client"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        """Override database dependency for testing"""
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict:
    """Get authentication headers for the admin"""
    login_data = {
        "username": "admin",
        "password": "admin123",
    }

    response = await client.post("/api/admin/login", json=login_data)
    token = response.json()["data"]["accessToken"]

    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def fetch_record(session_maker):
    """Read a row straight from storage, bypassing the soft-delete filters"""
    async def _fetch(qr_code_id: str):
        async with session_maker() as session:
            result = await session.execute(select(QRCode).where(QRCode.qr_code_id == qr_code_id))
            return result.scalar_one_or_none()
    return _fetch


class InMemoryQRStore:
    """
    Dict-backed stand-in for QRCodeStore.

    find_one_and_update holds a lock across match and write and yields to the
    event loop inside it, so concurrent callers really do contend.
    """

    FIELD_ATTRS = {
        "qrCodeId": "qr_code_id",
        "url": "url",
        "isUsed": "is_used",
        "isActive": "is_active",
        "isDeleted": "is_deleted",
        "count": "count",
    }

    def __init__(self):
        self.records = {}
        self.lock = asyncio.Lock()
        self.observed_counts = []

    def add(self, qr_code_id, url=None, is_active=True, is_deleted=False, is_used=False, count=0):
        record = SimpleNamespace(
            qr_code_id=qr_code_id, url=url, is_used=is_used,
            is_active=is_active, is_deleted=is_deleted, count=count,
        )
        self.records[qr_code_id] = record
        return record

    def _matches(self, record, filters):
        return all(getattr(record, self.FIELD_ATTRS[k]) == v for k, v in filters.items())

    async def find_one(self, filters):
        return next((r for r in self.records.values() if self._matches(r, filters)), None)

    async def find_one_and_update(self, filters, values=None, increment=None):
        async with self.lock:
            record = await self.find_one(filters)
            if record is None:
                return None
            self.observed_counts.append(record.count)
            await asyncio.sleep(0)
            for field, value in (values or {}).items():
                setattr(record, self.FIELD_ATTRS[field], value)
            for field, delta in (increment or {}).items():
                attr = self.FIELD_ATTRS[field]
                setattr(record, attr, getattr(record, attr) + delta)
            return SimpleNamespace(**vars(record))

    async def existing_ids(self, qr_code_ids):
        return [i for i in qr_code_ids if i in self.records]

    async def insert_one(self, row):
        if row["qrCodeId"] in self.records:
            raise DuplicateKeyError([row["qrCodeId"]])
        return self.add(
            row["qrCodeId"], url=row.get("url"), is_active=row.get("isActive", True),
            is_used=row.get("isUsed", False),
        )

    async def insert_many(self, rows):
        duplicates = await self.existing_ids([r["qrCodeId"] for r in rows])
        if duplicates:
            raise DuplicateKeyError(duplicates)
        return [await self.insert_one(row) for row in rows]


@pytest.fixture
def memory_store() -> InMemoryQRStore:
    return InMemoryQRStore()
