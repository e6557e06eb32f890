"""DeleteOrder Use Case

Removes an order, or cancels it when invoices already reference it.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.order import OrderStatus
from .dtos import DeleteOrderResponseDTO

logger = logging.getLogger(__name__)


class DeleteOrder:
    """
    Use Case: Delete an order

    Orders with invoices keep their history: they are cancelled instead.
    """

    def __init__(self, uow: UnitOfWork, order_repo: OrderRepository):
        self.uow = uow
        self.order_repo = order_repo

    async def execute(self, order_id: int) -> Result[DeleteOrderResponseDTO]:
        try:
            order = await self.order_repo.get_by_id(order_id, for_update=True)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order with ID {order_id} not found",
                    )
                )

            invoice_count = await self.order_repo.count_invoices(order_id)
            if invoice_count > 0:
                if order.status != OrderStatus.CANCELLED:
                    order.status = OrderStatus.CANCELLED
                    await self.order_repo.update(order)
                await self.uow.commit()
                logger.info(f"Order {order_id} has {invoice_count} invoices, cancelled instead of deleted")
                return Return.ok(
                    DeleteOrderResponseDTO(
                        order_id=order_id,
                        deleted=False,
                        cancelled=True,
                        message="Order has invoices and was cancelled instead of deleted",
                    )
                )

            await self.order_repo.delete(order)
            await self.uow.commit()
            logger.info(f"Order {order_id} deleted")
            return Return.ok(
                DeleteOrderResponseDTO(
                    order_id=order_id,
                    deleted=True,
                    cancelled=False,
                    message="Order deleted",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_ORDER_FAILED",
                    message="Failed to delete order",
                    reason=str(e),
                )
            )
