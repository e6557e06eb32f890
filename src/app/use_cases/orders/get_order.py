"""GetOrder Use Case

Order detail with frequency text, revenue projection and upcoming dates.
"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.order_repository import OrderRepository
from src.domain.recurrence import describe_schedule
from .dtos import OrderDetailResponseDTO, ScheduleEntryDTO

UPCOMING_SCHEDULE_SIZE = 5


class GetOrder:
    """Use Case: View an order"""

    def __init__(self, order_repo: OrderRepository, client_repo: ClientRepository):
        self.order_repo = order_repo
        self.client_repo = client_repo

    async def execute(self, order_id: int) -> Result[OrderDetailResponseDTO]:
        """
        Load an order with its upcoming schedule

        Args:
            order_id: Order ID

        Returns:
            Result[OrderDetailResponseDTO]: Order detail or ORDER_NOT_FOUND
        """
        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(
                    code="ORDER_NOT_FOUND",
                    message=f"Order with ID {order_id} not found",
                )
            )

        client = await self.client_repo.get_by_id(order.client_id)
        invoice_count = await self.order_repo.count_invoices(order_id)
        schedule = describe_schedule(
            order.next_invoice_date,
            order.frequency,
            UPCOMING_SCHEDULE_SIZE,
            order.custom_days,
        )

        base = OrderDetailResponseDTO.from_entity(order, client)
        return Return.ok(
            base.model_copy(
                update={
                    "upcoming_schedule": [
                        ScheduleEntryDTO(scheduled_date=scheduled, description=label)
                        for scheduled, label in schedule
                    ],
                    "invoice_count": invoice_count,
                }
            )
        )
