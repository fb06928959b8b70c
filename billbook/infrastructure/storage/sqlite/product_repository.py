"""SQLite implementation of product persistence."""

from datetime import datetime

import aiosqlite

from billbook.config import get_logger
from billbook.core.entities.product import Product
from billbook.core.interfaces.product_repository import IProductRepository
from billbook.infrastructure.storage.sqlite.connection import parse_timestamp

logger = get_logger(__name__)


class SQLiteProductRepository(IProductRepository):
    """Product repository bound to one transactional connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def find_by_name_and_owner(self, name: str, owner_id: int) -> Product | None:
        cursor = await self._conn.execute(
            "SELECT * FROM products WHERE name = ? AND owner_id = ?",
            (name, owner_id),
        )
        row = await cursor.fetchone()
        return self._row_to_product(row) if row else None

    async def get(self, product_id: int, owner_id: int) -> Product | None:
        cursor = await self._conn.execute(
            "SELECT * FROM products WHERE id = ? AND owner_id = ?",
            (product_id, owner_id),
        )
        row = await cursor.fetchone()
        return self._row_to_product(row) if row else None

    async def list_for_owner(
        self, owner_id: int, include_inactive: bool = False
    ) -> list[Product]:
        sql = "SELECT * FROM products WHERE owner_id = ?"
        if not include_inactive:
            sql += " AND is_active = 1"
        sql += " ORDER BY created_at DESC, id DESC"
        cursor = await self._conn.execute(sql, (owner_id,))
        rows = await cursor.fetchall()
        return [self._row_to_product(row) for row in rows]

    async def list_low_stock(self, owner_id: int, threshold: int) -> list[Product]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM products
            WHERE owner_id = ? AND is_active = 1 AND stock < ?
            ORDER BY stock ASC, name
            """,
            (owner_id, threshold),
        )
        rows = await cursor.fetchall()
        return [self._row_to_product(row) for row in rows]

    async def create(self, product: Product) -> Product:
        now = datetime.utcnow()
        product.created_at = now
        product.updated_at = now
        cursor = await self._conn.execute(
            """
            INSERT INTO products (
                owner_id, name, rate, unit, stock, is_active,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                product.owner_id,
                product.name,
                product.rate,
                product.unit,
                product.stock,
                int(product.is_active),
                product.created_at.isoformat(),
                product.updated_at.isoformat(),
            ),
        )
        product.id = cursor.lastrowid
        logger.info("product_created", product_id=product.id, owner_id=product.owner_id)
        return product

    async def update(self, product: Product) -> Product:
        product.updated_at = datetime.utcnow()
        await self._conn.execute(
            """
            UPDATE products SET
                name = ?,
                rate = ?,
                unit = ?,
                stock = ?,
                is_active = ?,
                updated_at = ?
            WHERE id = ? AND owner_id = ?
            """,
            (
                product.name,
                product.rate,
                product.unit,
                product.stock,
                int(product.is_active),
                product.updated_at.isoformat(),
                product.id,
                product.owner_id,
            ),
        )
        logger.info("product_updated", product_id=product.id)
        return product

    async def decrement_stock(self, product_id: int, quantity: int) -> bool:
        # Conditional on the row's current value, not on what the caller read
        cursor = await self._conn.execute(
            """
            UPDATE products SET
                stock = stock - ?,
                updated_at = ?
            WHERE id = ? AND stock >= ?
            """,
            (quantity, datetime.utcnow().isoformat(), product_id, quantity),
        )
        decremented = cursor.rowcount == 1
        logger.debug(
            "stock_decremented" if decremented else "stock_decrement_refused",
            product_id=product_id,
            quantity=quantity,
        )
        return decremented

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            rate=float(row["rate"]),
            unit=row["unit"],
            stock=int(row["stock"]),
            is_active=bool(row["is_active"]),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
