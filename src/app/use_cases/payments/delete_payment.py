"""DeletePayment Use Case"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.invoice import InvoiceStatus
from src.domain.invoicing import reconcile_invoice_status
from .dtos import DeletePaymentResponseDTO
from .validation import payment_not_found

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Delete a payment

    A paid invoice left short by the deletion goes back to sent and loses
    its paid_date.
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

    async def execute(self, payment_id: int) -> Result[DeletePaymentResponseDTO]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(payment_not_found(payment_id))

            invoice_id = payment.invoice_id
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            # Re-read under the invoice lock, a concurrent delete may have removed it
            payment = await self.payment_repo.get_by_id(payment_id, for_update=True)
            if not payment:
                await self.uow.rollback()
                return Return.err(payment_not_found(payment_id))

            await self.payment_repo.delete(payment)
            remaining_paid = await self.payment_repo.sum_for_invoice(invoice.id)

            if invoice.status != InvoiceStatus.CANCELLED and reconcile_invoice_status(
                invoice, remaining_paid, None, self.clock.today()
            ):
                invoice = await self.invoice_repo.update(invoice)
                logger.info(f"Invoice {invoice.id} is now {invoice.status.value}")

            await self.uow.commit()

            return Return.ok(
                DeletePaymentResponseDTO(
                    deleted_payment_id=payment_id,
                    invoice_id=invoice.id,
                    invoice_status=invoice.status.value,
                    remaining_paid_amount=remaining_paid,
                    invoice_amount=invoice.amount,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_PAYMENT_FAILED",
                    message="Failed to delete payment",
                    reason=str(e),
                )
            )
