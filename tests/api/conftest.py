"""Fixtures for API tests."""

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from billbook.api.auth import create_access_token
from billbook.api.main import app
from billbook.core.entities import Customer, Invoice, InvoiceItem, Product

NOW = datetime(2024, 3, 1, 10, 0, 0)


@pytest.fixture
def sample_invoice() -> Invoice:
    return Invoice(
        id=1,
        owner_id=1,
        customer_id=1,
        customer_name="Ravi",
        invoice_number="INV-001",
        items=[
            InvoiceItem(
                id=1, invoice_id=1, product_id=1, product_name="A", quantity=3, rate=50.0
            ),
        ],
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def sample_product() -> Product:
    return Product(
        id=1, owner_id=1, name="A", rate=50.0, unit="pcs", stock=10,
        created_at=NOW, updated_at=NOW,
    )


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(
        id=1, owner_id=1, name="Ravi", phone="9000000001", created_at=NOW, updated_at=NOW
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(1)}"}


@pytest.fixture
def override():
    """Install dependency overrides for one test and clear them afterwards."""

    def _override(dependency, instance):
        app.dependency_overrides[dependency] = lambda: instance
        return instance

    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
