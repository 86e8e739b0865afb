"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - repo fixture shares test_db: repository tests can assert through the same session
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from invoicing.db.base import Base
from invoicing.infrastructure.database import get_db, DatabaseSessionManager
from invoicing.infrastructure.invoice_repository import SqlAlchemyInvoiceRepository
import invoicing.infrastructure.database as db_module
from invoicing.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repo(test_db):
    return SqlAlchemyInvoiceRepository(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def invoice_payload():
    """Create body matching the canonical single-line invoice (total 100)."""
    return {
        "number": "INV-TEST-001",
        "date": "2026-01-15",
        "lines": [
            {"description": "Consulting", "quantity": 2, "unitPrice": 50},
        ],
    }


@pytest.fixture
async def created_invoice(client, invoice_payload):
    """POST the canonical invoice and return its full GET representation."""
    res = await client.post("/api/v1/invoices", json=invoice_payload)
    assert res.status_code == 201
    res = await client.get(f"/api/v1/invoices/{res.json()['id']}")
    return res.json()
