"""UpdatePayment Use Case

Edits a payment and re-reconciles its invoice.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.invoice import InvoiceStatus
from src.domain.invoicing import reconcile_invoice_status
from .dtos import (
    UpdatePaymentCommandDTO,
    PaymentMutationResponseDTO,
    PaymentResponseDTO,
    InvoicePaymentStateDTO,
    PaymentSummaryDTO,
)
from .validation import overpayment_error, payment_not_found, validate_payment_input

logger = logging.getLogger(__name__)


class UpdatePayment:
    """
    Use Case: Update a payment

    Business Rules:
    1. A new amount is checked against the sum of the other payments
    2. Full coverage marks the invoice paid
    3. A paid invoice that is no longer covered goes back to sent and
       loses its paid_date
    4. Amounts on cancelled invoices are frozen
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
        self, payment_id: int, command: UpdatePaymentCommandDTO
    ) -> Result[PaymentMutationResponseDTO]:
        try:
            invalid = validate_payment_input(command.amount, command.notes)
            if invalid:
                return Return.err(invalid)

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

            new_amount = command.amount if command.amount is not None else payment.amount
            if invoice.status == InvoiceStatus.CANCELLED and new_amount != payment.amount:
                error = Error(
                    code="INVOICE_CANCELLED",
                    message="Cannot change payment amounts on a cancelled invoice",
                    reason=f"invoice_id={invoice_id}",
                )
                await self.uow.rollback()
                return Return.err(error)

            other_payments = await self.payment_repo.sum_for_invoice(
                invoice_id, exclude_payment_id=payment_id
            )
            if other_payments + new_amount > invoice.amount:
                error = overpayment_error(
                    invoice.amount,
                    other_payments,
                    "Other payments total",
                    "Maximum payment amount",
                    reason=f"payment_id={payment_id}, amount={new_amount}",
                )
                await self.uow.rollback()
                return Return.err(error)

            payment.amount = new_amount
            if command.method is not None:
                payment.method = command.method
            if command.paid_date is not None:
                payment.paid_date = command.paid_date
            if "notes" in command.model_fields_set:
                payment.notes = command.notes
            payment = await self.payment_repo.update(payment)

            total_paid = other_payments + new_amount
            if invoice.status != InvoiceStatus.CANCELLED and reconcile_invoice_status(
                invoice, total_paid, payment.paid_date, self.clock.today()
            ):
                invoice = await self.invoice_repo.update(invoice)
                logger.info(f"Invoice {invoice.id} is now {invoice.status.value}")

            await self.uow.commit()

            return Return.ok(
                PaymentMutationResponseDTO(
                    payment=PaymentResponseDTO.from_entity(payment),
                    invoice=InvoicePaymentStateDTO.from_entity(invoice),
                    payment_summary=PaymentSummaryDTO.build(invoice.amount, total_paid),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PAYMENT_FAILED",
                    message="Failed to update payment",
                    reason=str(e),
                )
            )
