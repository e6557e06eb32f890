"""CreateOrder Use Case

Creates a recurring order and schedules its first invoice.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.order import Order, OrderFrequency, OrderStatus
from src.domain.recurrence import (
    calculate_next_invoice_date,
    validate_frequency_and_custom_days,
)
from .dtos import CreateOrderCommandDTO, OrderResponseDTO

logger = logging.getLogger(__name__)


class CreateOrder:
    """
    Use Case: Create a recurring order

    Business Rules:
    1. custom_days is required for custom frequency and forbidden otherwise
    2. The client must exist
    3. start_date cannot be in the past
    4. next_invoice_date is derived from start_date and frequency
    5. New orders are active

    Flow:
    1. Validate frequency/custom_days
    2. Check client exists
    3. Validate start date
    4. Compute next invoice date
    5. Persist and commit
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

    async def execute(self, command: CreateOrderCommandDTO) -> Result[OrderResponseDTO]:
        """
        Execute order creation

        Args:
            command: CreateOrderCommandDTO with client, amount and schedule

        Returns:
            Result[OrderResponseDTO]: Created order or error
        """
        try:
            # Step 1: Validate frequency and custom days
            validation = validate_frequency_and_custom_days(
                command.frequency, command.custom_days
            )
            if not validation.is_valid:
                return Return.err(
                    Error(
                        code="INVALID_FREQUENCY_CUSTOM_DAYS",
                        message=validation.error,
                        reason=f"frequency={command.frequency.value}, custom_days={command.custom_days}",
                    )
                )

            # Step 2: Client must exist
            client = await self.client_repo.get_by_id(command.client_id)
            if not client:
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND",
                        message=f"Client with ID {command.client_id} not found",
                    )
                )

            # Step 3: Start date cannot be in the past
            today = self.clock.today()
            if command.start_date < today:
                return Return.err(
                    Error(
                        code="INVALID_START_DATE",
                        message="Start date cannot be in the past",
                        reason=f"start_date={command.start_date}, today={today}",
                    )
                )

            # Step 4: Derive the first invoice date
            next_invoice_date = calculate_next_invoice_date(
                command.start_date, command.frequency, command.custom_days
            )

            # Step 5: Persist
            order = Order(
                client_id=command.client_id,
                description=command.description,
                amount=command.amount,
                frequency=command.frequency,
                custom_days=(
                    command.custom_days
                    if command.frequency == OrderFrequency.CUSTOM
                    else None
                ),
                start_date=command.start_date,
                next_invoice_date=next_invoice_date,
                lead_time_days=command.lead_time_days,
                status=OrderStatus.ACTIVE,
            )
            created_order = await self.order_repo.create(order)
            await self.uow.commit()

            logger.info(
                f"Created order {created_order.id} for client {client.id}, "
                f"next invoice on {next_invoice_date}"
            )
            return Return.ok(OrderResponseDTO.from_entity(created_order, client))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_ORDER_FAILED",
                    message="Failed to create order",
                    reason=str(e),
                )
            )
