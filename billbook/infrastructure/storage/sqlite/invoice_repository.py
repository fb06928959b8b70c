"""SQLite implementation of invoice persistence."""

from datetime import datetime

import aiosqlite

from billbook.config import get_logger
from billbook.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from billbook.core.interfaces.invoice_repository import IInvoiceRepository
from billbook.infrastructure.storage.sqlite.connection import parse_timestamp

logger = get_logger(__name__)

_SELECT_WITH_CUSTOMER = """
    SELECT i.*, c.name AS customer_name
    FROM invoices i
    LEFT JOIN customers c ON c.id = i.customer_id
"""


class SQLiteInvoiceRepository(IInvoiceRepository):
    """Invoice repository bound to one transactional connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create_with_items(self, invoice: Invoice) -> Invoice:
        """Insert the invoice header and its items on the shared connection."""
        now = datetime.utcnow()
        invoice.created_at = now
        invoice.updated_at = now
        cursor = await self._conn.execute(
            """
            INSERT INTO invoices (
                owner_id, customer_id, invoice_number, status, total,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                invoice.owner_id,
                invoice.customer_id,
                invoice.invoice_number,
                invoice.status.value,
                invoice.total,
                invoice.created_at.isoformat(),
                invoice.updated_at.isoformat(),
            ),
        )
        invoice.id = cursor.lastrowid
        await self._insert_items(invoice)

        logger.info(
            "invoice_row_created",
            invoice_id=invoice.id,
            items=len(invoice.items),
            total=invoice.total,
        )
        return invoice

    async def get(self, invoice_id: int, owner_id: int) -> Invoice | None:
        cursor = await self._conn.execute(
            _SELECT_WITH_CUSTOMER + " WHERE i.id = ? AND i.owner_id = ?",
            (invoice_id, owner_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        items = await self._load_items(invoice_id)
        return self._row_to_invoice(row, items)

    async def find_by_number(self, invoice_number: str, owner_id: int) -> Invoice | None:
        cursor = await self._conn.execute(
            _SELECT_WITH_CUSTOMER + " WHERE i.invoice_number = ? AND i.owner_id = ?",
            (invoice_number, owner_id),
        )
        row = await cursor.fetchone()
        return self._row_to_invoice(row, []) if row else None

    async def list_for_owner(
        self, owner_id: int, with_items: bool = False
    ) -> list[Invoice]:
        cursor = await self._conn.execute(
            _SELECT_WITH_CUSTOMER
            + " WHERE i.owner_id = ? ORDER BY i.created_at DESC, i.id DESC",
            (owner_id,),
        )
        rows = await cursor.fetchall()

        invoices = []
        for row in rows:
            items = await self._load_items(row["id"]) if with_items else []
            invoices.append(self._row_to_invoice(row, items))
        return invoices

    async def replace_items(self, invoice: Invoice) -> Invoice:
        """Rewrite the header and swap all items; never edits items in place."""
        invoice.updated_at = datetime.utcnow()
        await self._conn.execute(
            "DELETE FROM invoice_items WHERE invoice_id = ?", (invoice.id,)
        )
        await self._conn.execute(
            """
            UPDATE invoices SET
                invoice_number = ?,
                customer_id = ?,
                total = ?,
                updated_at = ?
            WHERE id = ? AND owner_id = ?
            """,
            (
                invoice.invoice_number,
                invoice.customer_id,
                invoice.total,
                invoice.updated_at.isoformat(),
                invoice.id,
                invoice.owner_id,
            ),
        )
        await self._insert_items(invoice)
        logger.info("invoice_items_replaced", invoice_id=invoice.id, items=len(invoice.items))
        return invoice

    async def set_status(
        self, invoice_id: int, owner_id: int, status: InvoiceStatus
    ) -> None:
        await self._conn.execute(
            """
            UPDATE invoices SET status = ?, updated_at = ?
            WHERE id = ? AND owner_id = ?
            """,
            (status.value, datetime.utcnow().isoformat(), invoice_id, owner_id),
        )
        logger.info("invoice_status_set", invoice_id=invoice_id, status=status.value)

    async def delete(self, invoice_id: int, owner_id: int) -> None:
        await self._conn.execute(
            """
            DELETE FROM invoice_items
            WHERE invoice_id IN (SELECT id FROM invoices WHERE id = ? AND owner_id = ?)
            """,
            (invoice_id, owner_id),
        )
        await self._conn.execute(
            "DELETE FROM invoices WHERE id = ? AND owner_id = ?", (invoice_id, owner_id)
        )
        logger.info("invoice_deleted", invoice_id=invoice_id)

    async def delete_for_customer(self, customer_id: int, owner_id: int) -> int:
        await self._conn.execute(
            """
            DELETE FROM invoice_items
            WHERE invoice_id IN (
                SELECT id FROM invoices WHERE customer_id = ? AND owner_id = ?
            )
            """,
            (customer_id, owner_id),
        )
        cursor = await self._conn.execute(
            "DELETE FROM invoices WHERE customer_id = ? AND owner_id = ?",
            (customer_id, owner_id),
        )
        return cursor.rowcount

    async def _insert_items(self, invoice: Invoice) -> None:
        for item in invoice.items:
            item.invoice_id = invoice.id
            cursor = await self._conn.execute(
                """
                INSERT INTO invoice_items (
                    invoice_id, product_id, product_name,
                    quantity, rate, amount
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    item.invoice_id,
                    item.product_id,
                    item.product_name,
                    item.quantity,
                    item.rate,
                    item.amount,
                ),
            )
            item.id = cursor.lastrowid

    async def _load_items(self, invoice_id: int) -> list[InvoiceItem]:
        cursor = await self._conn.execute(
            "SELECT * FROM invoice_items WHERE invoice_id = ? ORDER BY id",
            (invoice_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_item(r) for r in rows]

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[InvoiceItem]) -> Invoice:
        """Convert a database row to an Invoice entity."""
        return Invoice(
            id=row["id"],
            owner_id=row["owner_id"],
            customer_id=row["customer_id"],
            customer_name=row["customer_name"],
            invoice_number=row["invoice_number"],
            status=InvoiceStatus(row["status"]),
            total=float(row["total"]),
            items=items,
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InvoiceItem:
        """Convert a database row to an InvoiceItem entity."""
        return InvoiceItem(
            id=row["id"],
            invoice_id=row["invoice_id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity=int(row["quantity"]),
            rate=float(row["rate"]),
            amount=float(row["amount"]),
        )
