"""SQLAlchemy Payment Repository Implementation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.invoicing import to_money
from src.domain.base import utc_now
from src.domain.payment import Payment, PaymentMethod


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository

    Callers lock the parent invoice before summing, so the sum read here
    is stable for the rest of the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[Payment]:
        statement = select(Payment).where(Payment.id == payment_id)
        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, payment: Payment) -> Payment:
        payment.updated_at = utc_now()
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def delete(self, payment: Payment) -> None:
        await self.session.delete(payment)
        await self.session.flush()

    async def get_by_invoice_id(self, invoice_id: int) -> List[Payment]:
        statement = (
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.paid_date.desc(), Payment.id.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def sum_for_invoice(
        self, invoice_id: int, exclude_payment_id: Optional[int] = None
    ) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.invoice_id == invoice_id)
        )
        if exclude_payment_id is not None:
            statement = statement.where(Payment.id != exclude_payment_id)
        result = await self.session.execute(statement)
        return to_money(result.scalar_one())

    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        method: Optional[PaymentMethod] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Payment, Invoice, Client]], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    Invoice.invoice_number.ilike(pattern),
                    Client.name.ilike(pattern),
                    Payment.notes.ilike(pattern),
                )
            )
        if client_id is not None:
            conditions.append(Invoice.client_id == client_id)
        if method is not None:
            conditions.append(Payment.method == method)
        if start_date is not None:
            conditions.append(Payment.paid_date >= start_date)
        if end_date is not None:
            conditions.append(Payment.paid_date <= end_date)

        count_statement = (
            select(func.count())
            .select_from(Payment)
            .join(Invoice, Payment.invoice_id == Invoice.id)
            .join(Client, Invoice.client_id == Client.id)
            .where(*conditions)
        )
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(Payment, Invoice, Client)
            .join(Invoice, Payment.invoice_id == Invoice.id)
            .join(Client, Invoice.client_id == Client.id)
            .where(*conditions)
            .order_by(Payment.paid_date.desc(), Payment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return [(row[0], row[1], row[2]) for row in result.all()], total
