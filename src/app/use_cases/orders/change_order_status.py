"""ChangeOrderStatus Use Case

Pauses, resumes or cancels an order.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.exceptions import InvalidStatusTransitionError
from src.domain.invoicing import ensure_order_transition
from .dtos import ChangeOrderStatusCommandDTO, OrderResponseDTO

logger = logging.getLogger(__name__)


class ChangeOrderStatus:
    """
    Use Case: Change order status

    Business Rules:
    1. active <-> paused
    2. active/paused -> cancelled
    3. cancelled is terminal
    4. next_invoice_date is kept as is, so a resumed order catches up
    """

    def __init__(self, uow: UnitOfWork, order_repo: OrderRepository):
        self.uow = uow
        self.order_repo = order_repo

    async def execute(
        self, order_id: int, command: ChangeOrderStatusCommandDTO
    ) -> Result[OrderResponseDTO]:
        try:
            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order with ID {order_id} not found",
                    )
                )

            try:
                ensure_order_transition(order.status, command.status)
            except InvalidStatusTransitionError as e:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=str(e),
                        reason=f"order_id={order_id}",
                    )
                )

            previous = order.status
            order.status = command.status
            updated_order = await self.order_repo.update(order)
            await self.uow.commit()

            logger.info(f"Order {order_id} status {previous.value} -> {command.status.value}")
            return Return.ok(OrderResponseDTO.from_entity(updated_order))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_ORDER_STATUS_FAILED",
                    message="Failed to change order status",
                    reason=str(e),
                )
            )
