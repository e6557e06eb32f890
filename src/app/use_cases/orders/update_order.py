"""UpdateOrder Use Case

Edits an order and re-derives its next invoice date when the schedule
inputs change.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.order import OrderFrequency
from src.domain.recurrence import (
    calculate_next_invoice_date,
    validate_frequency_and_custom_days,
)
from .dtos import UpdateOrderCommandDTO, OrderResponseDTO

logger = logging.getLogger(__name__)


class UpdateOrder:
    """
    Use Case: Update an order

    Business Rules:
    1. Same frequency/custom_days and start date rules as creation
    2. A changed client must exist
    3. next_invoice_date is recomputed from start_date when frequency,
       custom_days or start_date change, and preserved otherwise
    4. Switching away from custom frequency drops the stored custom_days
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        client_repo: ClientRepository,
        clock: Optional[Clock] = None,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.client_repo = client_repo
        self.clock = clock or SystemClock()

    async def execute(
        self, order_id: int, command: UpdateOrderCommandDTO
    ) -> Result[OrderResponseDTO]:
        try:
            provided = command.model_fields_set

            # Step 1: Load order
            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order with ID {order_id} not found",
                    )
                )

            # Step 2: Resolve the effective schedule inputs
            frequency = command.frequency or order.frequency
            if "custom_days" in provided:
                custom_days = command.custom_days
            elif frequency == OrderFrequency.CUSTOM:
                custom_days = order.custom_days
            else:
                custom_days = None
            start_date = command.start_date or order.start_date

            validation = validate_frequency_and_custom_days(frequency, custom_days)
            if not validation.is_valid:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVALID_FREQUENCY_CUSTOM_DAYS",
                        message=validation.error,
                        reason=f"frequency={frequency.value}, custom_days={custom_days}",
                    )
                )

            # Step 3: Validate a changed start date
            start_changed = start_date != order.start_date
            today = self.clock.today()
            if start_changed and start_date < today:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVALID_START_DATE",
                        message="Start date cannot be in the past",
                        reason=f"start_date={start_date}, today={today}",
                    )
                )

            # Step 4: Validate a changed client
            client_id = command.client_id if command.client_id is not None else order.client_id
            client = await self.client_repo.get_by_id(client_id)
            if not client:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND",
                        message=f"Client with ID {client_id} not found",
                    )
                )

            # Step 5: Recompute the schedule when its inputs changed
            schedule_changed = (
                start_changed
                or frequency != order.frequency
                or custom_days != order.custom_days
            )
            if schedule_changed:
                order.next_invoice_date = calculate_next_invoice_date(
                    start_date, frequency, custom_days
                )

            # Step 6: Apply the remaining fields
            order.client_id = client_id
            order.frequency = frequency
            order.custom_days = custom_days
            order.start_date = start_date
            if command.description is not None:
                order.description = command.description
            if command.amount is not None:
                order.amount = command.amount
            if "lead_time_days" in provided:
                order.lead_time_days = command.lead_time_days

            updated_order = await self.order_repo.update(order)
            await self.uow.commit()

            if schedule_changed:
                logger.info(
                    f"Order {order_id} rescheduled, next invoice on {updated_order.next_invoice_date}"
                )
            return Return.ok(OrderResponseDTO.from_entity(updated_order, client))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_ORDER_FAILED",
                    message="Failed to update order",
                    reason=str(e),
                )
            )
