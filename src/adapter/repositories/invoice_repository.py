"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.client import Client
from src.domain.exceptions import InvoiceNumberCollisionError
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoicing import (
    format_invoice_number,
    invoice_number_prefix,
    next_invoice_number,
    parse_invoice_sequence,
    to_money,
)
from src.domain.order import Order

SORTABLE_COLUMNS = {
    "created_at": Invoice.created_at,
    "amount": Invoice.amount,
    "issue_date": Invoice.issue_date,
    "due_date": Invoice.due_date,
    "invoice_number": Invoice.invoice_number,
}


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberCollisionError: unique constraint on invoice_number hit
        """
        self.session.add(invoice)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if "invoice_number" in str(e.orig).lower():
                raise InvoiceNumberCollisionError(invoice.invoice_number) from e
            raise
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        order_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Invoice, Client, Optional[Order]]], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    Invoice.invoice_number.ilike(pattern),
                    Client.name.ilike(pattern),
                    Client.email.ilike(pattern),
                    Order.description.ilike(pattern),
                )
            )
        if client_id is not None:
            conditions.append(Invoice.client_id == client_id)
        if order_id is not None:
            conditions.append(Invoice.order_id == order_id)
        if status is not None:
            conditions.append(Invoice.status == status)

        count_statement = (
            select(func.count())
            .select_from(Invoice)
            .join(Client, Invoice.client_id == Client.id)
            .outerjoin(Order, Invoice.order_id == Order.id)
            .where(*conditions)
        )
        total = (await self.session.execute(count_statement)).scalar_one()

        column = SORTABLE_COLUMNS.get(sort_by, Invoice.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()

        statement = (
            select(Invoice, Client, Order)
            .join(Client, Invoice.client_id == Client.id)
            .outerjoin(Order, Invoice.order_id == Order.id)
            .where(*conditions)
            .order_by(ordering, Invoice.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return [(row[0], row[1], row[2]) for row in result.all()], total

    async def generate_invoice_number(self, year: int) -> str:
        """
        Generate the next invoice number for a year

        Format: INV-YYYY-NNNNNN (e.g., INV-2025-000001). Custom numbers that
        share the prefix are skipped; among equal-length digit strings the
        lexicographic order is the numeric one, so the first canonical number
        in descending order is the current maximum.

        Returns:
            Candidate invoice number string
        """
        prefix = invoice_number_prefix(year)
        canonical_length = len(format_invoice_number(year, 0))

        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.invoice_number.like(f"{prefix}%"))
            .where(func.length(Invoice.invoice_number) == canonical_length)
            .order_by(Invoice.invoice_number.desc())
        )
        result = await self.session.execute(statement)
        current_max = next(
            (
                number
                for number in result.scalars()
                if parse_invoice_sequence(number, year) is not None
            ),
            None,
        )

        return next_invoice_number(year, current_max)

    async def get_overdue_candidate_ids(self, as_of: date) -> List[int]:
        statement = (
            select(Invoice.id)
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date < as_of)
            .order_by(Invoice.due_date, Invoice.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def mark_overdue(self, invoice_ids: List[int], as_of: date) -> List[int]:
        if not invoice_ids:
            return []

        # Re-check under lock; a payment may have landed since the scan
        locked = (
            select(Invoice.id)
            .where(Invoice.id.in_(invoice_ids))
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date < as_of)
            .with_for_update()
        )
        result = await self.session.execute(locked)
        ids = list(result.scalars().all())
        if not ids:
            return []

        statement = (
            update(Invoice)
            .where(Invoice.id.in_(ids))
            .values(status=InvoiceStatus.OVERDUE, updated_at=utc_now())
        )
        await self.session.execute(statement)
        return ids

    async def get_statistics(self, as_of: date) -> Dict:
        statement = (
            select(
                Invoice.status,
                func.count(Invoice.id),
                func.coalesce(func.sum(Invoice.amount), 0),
            )
            .group_by(Invoice.status)
        )
        rows = (await self.session.execute(statement)).all()

        counts = {status: 0 for status in InvoiceStatus}
        sums = {status: to_money(0) for status in InvoiceStatus}
        for status, count, total in rows:
            status = InvoiceStatus(status)
            counts[status] = count
            sums[status] = to_money(total)

        past_due_statement = (
            select(func.coalesce(func.sum(Invoice.amount), 0))
            .where(Invoice.status == InvoiceStatus.SENT)
            .where(Invoice.due_date < as_of)
        )
        past_due = (await self.session.execute(past_due_statement)).scalar_one()

        return {
            "counts": counts,
            "total_count": sum(counts.values()),
            "total_amount": sum(sums.values(), to_money(0)),
            "paid_amount": sums[InvoiceStatus.PAID],
            "overdue_amount": sums[InvoiceStatus.OVERDUE] + to_money(past_due),
        }
