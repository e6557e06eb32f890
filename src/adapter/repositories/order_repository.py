"""SQLAlchemy Order Repository Implementation

Implements order persistence using SQLAlchemy async session, with row
locking for the read-modify-write done during invoice generation.
"""

from datetime import date
from typing import List, Optional, Tuple
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.order_repository import OrderRepository
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.base import utc_now
from src.domain.order import Order, OrderFrequency, OrderStatus

SORTABLE_COLUMNS = {
    "created_at": Order.created_at,
    "amount": Order.amount,
    "start_date": Order.start_date,
    "next_invoice_date": Order.next_invoice_date,
    "description": Order.description,
}


class SqlAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Joined client data for listings
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """
        Retrieve order by ID with optional row-level locking

        Args:
            order_id: Order ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Order if found, None otherwise
        """
        statement = select(Order).where(Order.id == order_id)

        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, order: Order) -> Order:
        order.updated_at = utc_now()
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)
        return order

    async def delete(self, order: Order) -> None:
        await self.session.delete(order)
        await self.session.flush()

    async def list(
        self,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        frequency: Optional[OrderFrequency] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Order, Client]], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    Order.description.ilike(pattern),
                    Client.name.ilike(pattern),
                    Client.email.ilike(pattern),
                )
            )
        if client_id is not None:
            conditions.append(Order.client_id == client_id)
        if status is not None:
            conditions.append(Order.status == status)
        if frequency is not None:
            conditions.append(Order.frequency == frequency)

        count_statement = (
            select(func.count())
            .select_from(Order)
            .join(Client, Order.client_id == Client.id)
            .where(*conditions)
        )
        total = (await self.session.execute(count_statement)).scalar_one()

        column = SORTABLE_COLUMNS.get(sort_by, Order.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()

        statement = (
            select(Order, Client)
            .join(Client, Order.client_id == Client.id)
            .where(*conditions)
            .order_by(ordering, Order.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return [(row[0], row[1]) for row in result.all()], total

    async def get_due_order_ids(self, as_of: date) -> List[int]:
        statement = (
            select(Order.id)
            .where(Order.status == OrderStatus.ACTIVE)
            .where(Order.next_invoice_date <= as_of)
            .order_by(Order.next_invoice_date, Order.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_upcoming(self, start: date, end: date) -> List[Tuple[Order, Client]]:
        statement = (
            select(Order, Client)
            .join(Client, Order.client_id == Client.id)
            .where(Order.status == OrderStatus.ACTIVE)
            .where(Order.next_invoice_date >= start)
            .where(Order.next_invoice_date <= end)
            .order_by(Order.next_invoice_date, Order.id)
        )
        result = await self.session.execute(statement)
        return [(row[0], row[1]) for row in result.all()]

    async def count_invoices(self, order_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.order_id == order_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
