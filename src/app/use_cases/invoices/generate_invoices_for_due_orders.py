"""GenerateInvoicesForDueOrders Use Case

Batch sweep generating invoices for every due order.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.domain.clock import Clock, SystemClock
from .dtos import GenerateInvoicesResultDTO, GenerationErrorDTO
from .generate_invoice_from_order import GenerateInvoiceFromOrder

logger = logging.getLogger(__name__)


class GenerateInvoicesForDueOrders:
    """
    Use Case: Generate invoices for all due orders

    Each order is generated in its own transaction, so one failing order
    never blocks the others and progress survives a crash. Running the
    sweep twice on the same day is harmless: generated orders are no
    longer due.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        generate_invoice: GenerateInvoiceFromOrder,
        clock: Optional[Clock] = None,
    ):
        self.order_repo = order_repo
        self.generate_invoice = generate_invoice
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[GenerateInvoicesResultDTO]:
        today = self.clock.today()
        try:
            order_ids = await self.order_repo.get_due_order_ids(today)
        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_DUE_INVOICES_FAILED",
                    message="Failed to load due orders",
                    reason=str(e),
                )
            )

        logger.info(f"Found {len(order_ids)} orders due for invoicing on {today}")

        invoice_ids = []
        errors = []
        for order_id in order_ids:
            result = await self.generate_invoice.execute(order_id)
            if result.is_ok():
                invoice_ids.append(result.value.id)
            else:
                logger.error(
                    f"Invoice generation failed for order {order_id}: "
                    f"{result.error.code} {result.error.reason or result.error.message}"
                )
                errors.append(GenerationErrorDTO(order_id=order_id, error=result.error.message))

        return Return.ok(
            GenerateInvoicesResultDTO(
                generated=len(invoice_ids),
                invoice_ids=invoice_ids,
                errors=errors,
            )
        )
