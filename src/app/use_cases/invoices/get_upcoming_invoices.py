"""GetUpcomingInvoices Use Case"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.domain.clock import Clock, SystemClock
from .dtos import UpcomingInvoiceDTO, UpcomingInvoicesResponseDTO

MAX_DAYS_AHEAD = 365


class GetUpcomingInvoices:
    """
    Use case: Active orders invoicing within the next days_ahead days

    The window is [today, today + days_ahead], both ends included.
    """

    def __init__(self, order_repo: OrderRepository, clock: Optional[Clock] = None):
        self.order_repo = order_repo
        self.clock = clock or SystemClock()

    async def execute(self, days_ahead: int = 7) -> Result[UpcomingInvoicesResponseDTO]:
        if days_ahead < 0 or days_ahead > MAX_DAYS_AHEAD:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"days_ahead must be between 0 and {MAX_DAYS_AHEAD}",
                    reason=f"days_ahead={days_ahead}",
                )
            )

        today = self.clock.today()
        rows = await self.order_repo.get_upcoming(today, today + timedelta(days=days_ahead))

        upcoming = [
            UpcomingInvoiceDTO(
                order_id=order.id,
                client_id=client.id,
                client_name=client.name,
                description=order.description,
                amount=order.amount,
                frequency=order.frequency.value,
                next_invoice_date=order.next_invoice_date,
                days_until=(order.next_invoice_date - today).days,
            )
            for order, client in rows
        ]
        return Return.ok(
            UpcomingInvoicesResponseDTO(
                days_ahead=days_ahead,
                total_amount=sum((item.amount for item in upcoming), Decimal("0.00")),
                upcoming=upcoming,
            )
        )
