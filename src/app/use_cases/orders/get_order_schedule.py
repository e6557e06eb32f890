"""GetOrderSchedule Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.domain.recurrence import describe_schedule, frequency_display_text
from .dtos import OrderScheduleResponseDTO, ScheduleEntryDTO

MAX_SCHEDULE_SIZE = 20


class GetOrderSchedule:
    """
    Use Case: Preview the next invoice dates of an order

    The preview starts at the stored next_invoice_date and holds at most
    20 entries.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    async def execute(self, order_id: int, count: int = 5) -> Result[OrderScheduleResponseDTO]:
        if count < 1 or count > MAX_SCHEDULE_SIZE:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"count must be between 1 and {MAX_SCHEDULE_SIZE}",
                    reason=f"count={count}",
                )
            )

        order = await self.order_repo.get_by_id(order_id)
        if not order:
            return Return.err(
                Error(
                    code="ORDER_NOT_FOUND",
                    message=f"Order with ID {order_id} not found",
                )
            )

        schedule = describe_schedule(
            order.next_invoice_date, order.frequency, count, order.custom_days
        )
        return Return.ok(
            OrderScheduleResponseDTO(
                order_id=order.id,
                frequency=order.frequency.value,
                frequency_display=frequency_display_text(order.frequency, order.custom_days),
                schedule=[
                    ScheduleEntryDTO(scheduled_date=scheduled, description=label)
                    for scheduled, label in schedule
                ],
            )
        )
