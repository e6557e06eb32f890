"""ChangeInvoiceStatus Use Case

Explicit status change requested by a user (send, cancel, mark paid,
reopen).
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.exceptions import InvalidStatusTransitionError
from src.domain.invoicing import apply_invoice_status, ensure_invoice_transition
from .dtos import ChangeInvoiceStatusCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class ChangeInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. draft -> sent/cancelled; sent -> paid/overdue/cancelled;
       overdue -> paid/cancelled; paid -> sent; cancelled is terminal
    2. Marking paid requires the payments to cover the amount
    3. Leaving paid requires the payments to fall short
    4. sent stamps sent_date, paid stamps paid_date, leaving paid clears it
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        clock: Optional[Clock] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.clock = clock or SystemClock()

    async def execute(
        self, invoice_id: int, command: ChangeInvoiceStatusCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            total_paid = await self.payment_repo.sum_for_invoice(invoice.id)
            try:
                ensure_invoice_transition(invoice.status, command.status, invoice.amount, total_paid)
            except InvalidStatusTransitionError as e:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=str(e),
                        reason=f"invoice_id={invoice_id}, total_paid={total_paid}",
                    )
                )

            previous = invoice.status
            apply_invoice_status(invoice, command.status, self.clock.today())
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice_id} status {previous.value} -> {command.status.value}")
            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_INVOICE_STATUS_FAILED",
                    message="Failed to change invoice status",
                    reason=str(e),
                )
            )
