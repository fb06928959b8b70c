"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from billbook.config import reset_settings
from billbook.core.entities import Customer, Product
from billbook.core.interfaces.transaction import ITransactionScope, UnitOfWork
from billbook.infrastructure.storage.sqlite.connection import ConnectionPool
from billbook.infrastructure.storage.sqlite.migrations import initialize_database
from billbook.infrastructure.storage.sqlite.transaction import SQLiteTransactionScope

OWNER_ID = 1


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point settings at a per-test data dir and a known signing key."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def db_path(tmp_path: Path) -> Path:
    """Temporary database with all migrations applied."""
    path = tmp_path / "billbook_test.db"
    results = await initialize_database(path, create_backup_before=False)
    assert results and all(r.success for r in results)
    return path


@pytest.fixture
async def pool(db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    pool = ConnectionPool(db_path, pool_size=3, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def scope(pool: ConnectionPool) -> SQLiteTransactionScope:
    return SQLiteTransactionScope(pool)


@pytest.fixture
def make_product(scope: SQLiteTransactionScope) -> Callable[..., Awaitable[Product]]:
    """Factory that inserts a product directly through the repositories."""

    async def _make(
        name: str, stock: int, rate: float = 50.0, owner_id: int = OWNER_ID
    ) -> Product:
        async def create_product(uow: UnitOfWork) -> Product:
            return await uow.products.create(
                Product(owner_id=owner_id, name=name, rate=rate, stock=stock)
            )

        return await scope.run(create_product)

    return _make


@pytest.fixture
def make_customer(scope: SQLiteTransactionScope) -> Callable[..., Awaitable[Customer]]:
    async def _make(
        name: str = "Ravi", phone: str = "9000000001", owner_id: int = OWNER_ID
    ) -> Customer:
        async def create_customer(uow: UnitOfWork) -> Customer:
            return await uow.customers.create(
                Customer(owner_id=owner_id, name=name, phone=phone)
            )

        return await scope.run(create_customer)

    return _make


@pytest.fixture
def stock_of(scope: SQLiteTransactionScope) -> Callable[..., Awaitable[int]]:
    """Read a product's current stock."""

    async def _read(product_id: int, owner_id: int = OWNER_ID) -> int:
        async def read_stock(uow: UnitOfWork) -> int:
            product = await uow.products.get(product_id, owner_id)
            assert product is not None
            return product.stock

        return await scope.run(read_stock, read_only=True)

    return _read


@pytest.fixture
def invoice_count(scope: SQLiteTransactionScope) -> Callable[..., Awaitable[int]]:
    async def _count(owner_id: int = OWNER_ID) -> int:
        async def list_invoices(uow: UnitOfWork) -> int:
            return len(await uow.invoices.list_for_owner(owner_id))

        return await scope.run(list_invoices, read_only=True)

    return _count


class RecordingScope(ITransactionScope):
    """Runs work directly against mock repositories and records each call."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.calls: list[tuple[str, bool]] = []

    async def run(self, work, read_only=False):
        self.calls.append((work.__name__, read_only))
        return await work(self.uow)


@pytest.fixture
def mock_uow() -> UnitOfWork:
    return UnitOfWork(products=AsyncMock(), customers=AsyncMock(), invoices=AsyncMock())


@pytest.fixture
def recording_scope(mock_uow: UnitOfWork) -> RecordingScope:
    return RecordingScope(mock_uow)
