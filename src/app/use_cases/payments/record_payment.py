"""RecordPayment Use Case

Records a payment against an invoice and reconciles the invoice status.
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
from src.domain.payment import Payment
from .dtos import (
    RecordPaymentCommandDTO,
    PaymentMutationResponseDTO,
    PaymentResponseDTO,
    InvoicePaymentStateDTO,
    PaymentSummaryDTO,
)
from .validation import overpayment_error, validate_payment_input

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a payment

    Business Rules:
    1. amount must be > 0
    2. Payments never sum above the invoice amount
    3. Cancelled invoices accept no payments
    4. Full coverage marks the invoice paid with the payment date
    5. A partial payment on a draft invoice promotes it to sent

    Flow:
    1. Validate input
    2. Lock invoice (SELECT FOR UPDATE)
    3. Check for overpayment against the current sum
    4. Create payment
    5. Reconcile invoice status
    6. Commit transaction
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
        self, command: RecordPaymentCommandDTO
    ) -> Result[PaymentMutationResponseDTO]:
        """
        Execute payment recording

        Args:
            command: RecordPaymentCommandDTO with invoice, amount and method

        Returns:
            Result[PaymentMutationResponseDTO]: Payment, invoice state and summary
        """
        try:
            # Step 1: Validate input
            invalid = validate_payment_input(command.amount, command.notes)
            if invalid:
                return Return.err(invalid)

            # Step 2: Lock invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                    )
                )

            if invoice.status == InvoiceStatus.CANCELLED:
                error = Error(
                    code="INVOICE_CANCELLED",
                    message="Cannot record a payment on a cancelled invoice",
                    reason=f"invoice_id={invoice.id}",
                )
                await self.uow.rollback()
                return Return.err(error)

            # Step 3: Overpayment check
            already_paid = await self.payment_repo.sum_for_invoice(invoice.id)
            if already_paid + command.amount > invoice.amount:
                error = overpayment_error(
                    invoice.amount,
                    already_paid,
                    "Already paid",
                    "Maximum additional payment",
                    reason=f"invoice_id={invoice.id}, amount={command.amount}",
                )
                await self.uow.rollback()
                return Return.err(error)

            # Step 4: Create payment
            today = self.clock.today()
            payment = await self.payment_repo.create(
                Payment(
                    invoice_id=invoice.id,
                    amount=command.amount,
                    method=command.method,
                    paid_date=command.paid_date or today,
                    notes=command.notes,
                )
            )

            # Step 5: Reconcile invoice status
            total_paid = already_paid + command.amount
            if reconcile_invoice_status(invoice, total_paid, payment.paid_date, today):
                invoice = await self.invoice_repo.update(invoice)
                logger.info(f"Invoice {invoice.id} is now {invoice.status.value}")

            # Step 6: Commit transaction
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
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
