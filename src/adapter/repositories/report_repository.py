"""SQLAlchemy Report Repository Implementation

Aggregates are grouped in SQL and merged per client in Python so the
queries stay portable between PostgreSQL and SQLite.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.report_repository import ReportRepository
from src.domain.client import Client
from src.domain.company import Company
from src.domain.invoice import Invoice
from src.domain.invoicing import to_money
from src.domain.order import Order
from src.domain.payment import Payment


class SqlAlchemyReportRepository(ReportRepository):
    """
    SQLAlchemy implementation of ReportRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _count(self, model, *conditions) -> int:
        statement = select(func.count()).select_from(model).where(*conditions)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_totals(self) -> Dict[str, int]:
        return {
            "clients": await self._count(Client),
            "companies": await self._count(Company),
            "orders": await self._count(Order),
            "invoices": await self._count(Invoice),
            "payments": await self._count(Payment),
        }

    async def count_created_since(self, since: datetime) -> Dict[str, int]:
        return {
            "clients": await self._count(Client, Client.created_at >= since),
            "orders": await self._count(Order, Order.created_at >= since),
            "invoices": await self._count(Invoice, Invoice.created_at >= since),
            "payments": await self._count(Payment, Payment.created_at >= since),
        }

    async def get_total_revenue(self) -> Decimal:
        statement = select(func.coalesce(func.sum(Payment.amount), 0))
        result = await self.session.execute(statement)
        return to_money(result.scalar_one())

    async def get_payments_since(self, start: date) -> List[Tuple[date, Decimal]]:
        statement = (
            select(Payment.paid_date, Payment.amount)
            .where(Payment.paid_date >= start)
            .order_by(Payment.paid_date)
        )
        result = await self.session.execute(statement)
        return [(paid_date, to_money(amount)) for paid_date, amount in result.all()]

    async def get_top_clients_by_order_revenue(self, limit: int = 10) -> List[Dict]:
        revenue = func.coalesce(func.sum(Payment.amount), 0)
        statement = (
            select(Client.id, Client.name, Client.email, revenue.label("revenue"))
            .join(Order, Order.client_id == Client.id)
            .join(Invoice, Invoice.order_id == Order.id)
            .join(Payment, Payment.invoice_id == Invoice.id)
            .group_by(Client.id, Client.name, Client.email)
            .order_by(revenue.desc(), Client.id)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return [
            {
                "client_id": client_id,
                "name": name,
                "email": email,
                "revenue": to_money(amount),
            }
            for client_id, name, email, amount in result.all()
        ]

    async def get_client_statistics(self) -> List[Dict]:
        clients = (
            await self.session.execute(select(Client).order_by(Client.id))
        ).scalars().all()

        order_rows = await self.session.execute(
            select(Order.client_id, func.count(Order.id), func.max(Order.created_at))
            .group_by(Order.client_id)
        )
        orders = {client_id: (count, last) for client_id, count, last in order_rows.all()}

        invoice_rows = await self.session.execute(
            select(Invoice.client_id, func.count(Invoice.id)).group_by(Invoice.client_id)
        )
        invoices = dict(invoice_rows.all())

        payment_rows = await self.session.execute(
            select(
                Invoice.client_id,
                func.count(Payment.id),
                func.coalesce(func.sum(Payment.amount), 0),
            )
            .join(Invoice, Payment.invoice_id == Invoice.id)
            .group_by(Invoice.client_id)
        )
        payments = {client_id: (count, total) for client_id, count, total in payment_rows.all()}

        statistics = []
        for client in clients:
            order_count, last_order = orders.get(client.id, (0, None))
            payment_count, revenue = payments.get(client.id, (0, 0))
            statistics.append(
                {
                    "client_id": client.id,
                    "name": client.name,
                    "email": client.email,
                    "created_at": client.created_at,
                    "total_orders": order_count,
                    "total_invoices": invoices.get(client.id, 0),
                    "total_payments": payment_count,
                    "total_revenue": to_money(revenue),
                    "last_order_date": last_order,
                }
            )
        return statistics
