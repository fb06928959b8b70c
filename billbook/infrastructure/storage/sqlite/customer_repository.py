"""SQLite implementation of customer persistence."""

from datetime import datetime

import aiosqlite

from billbook.config import get_logger
from billbook.core.entities.customer import Customer
from billbook.core.interfaces.customer_repository import ICustomerRepository
from billbook.infrastructure.storage.sqlite.connection import parse_timestamp

logger = get_logger(__name__)


class SQLiteCustomerRepository(ICustomerRepository):
    """Customer repository bound to one transactional connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get(self, customer_id: int, owner_id: int) -> Customer | None:
        cursor = await self._conn.execute(
            "SELECT * FROM customers WHERE id = ? AND owner_id = ?",
            (customer_id, owner_id),
        )
        row = await cursor.fetchone()
        return self._row_to_customer(row) if row else None

    async def find_by_phone(self, phone: str, owner_id: int) -> Customer | None:
        cursor = await self._conn.execute(
            "SELECT * FROM customers WHERE phone = ? AND owner_id = ?",
            (phone, owner_id),
        )
        row = await cursor.fetchone()
        return self._row_to_customer(row) if row else None

    async def list_for_owner(self, owner_id: int) -> list[Customer]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM customers
            WHERE owner_id = ?
            ORDER BY created_at DESC, id DESC
            """,
            (owner_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_customer(row) for row in rows]

    async def create(self, customer: Customer) -> Customer:
        now = datetime.utcnow()
        customer.created_at = now
        customer.updated_at = now
        cursor = await self._conn.execute(
            """
            INSERT INTO customers (owner_id, name, phone, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                customer.owner_id,
                customer.name,
                customer.phone,
                customer.created_at.isoformat(),
                customer.updated_at.isoformat(),
            ),
        )
        customer.id = cursor.lastrowid
        logger.info("customer_created", customer_id=customer.id, owner_id=customer.owner_id)
        return customer

    async def update(self, customer: Customer) -> Customer:
        customer.updated_at = datetime.utcnow()
        await self._conn.execute(
            """
            UPDATE customers SET name = ?, phone = ?, updated_at = ?
            WHERE id = ? AND owner_id = ?
            """,
            (
                customer.name,
                customer.phone,
                customer.updated_at.isoformat(),
                customer.id,
                customer.owner_id,
            ),
        )
        logger.info("customer_updated", customer_id=customer.id)
        return customer

    async def delete(self, customer_id: int, owner_id: int) -> None:
        await self._conn.execute(
            "DELETE FROM customers WHERE id = ? AND owner_id = ?",
            (customer_id, owner_id),
        )
        logger.info("customer_deleted", customer_id=customer_id)

    @staticmethod
    def _row_to_customer(row: aiosqlite.Row) -> Customer:
        """Convert a database row to a Customer entity."""
        return Customer(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            phone=row["phone"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
