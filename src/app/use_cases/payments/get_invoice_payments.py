"""GetInvoicePayments Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.invoicing import to_money
from .dtos import (
    InvoicePaymentsResponseDTO,
    InvoicePaymentStateDTO,
    PaymentResponseDTO,
    PaymentSummaryDTO,
)


class GetInvoicePayments:
    """Use case: Payment history of an invoice, newest first"""

    def __init__(self, invoice_repo: InvoiceRepository, payment_repo: PaymentRepository):
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: int) -> Result[InvoicePaymentsResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        payments = await self.payment_repo.get_by_invoice_id(invoice_id)
        total_paid = to_money(sum((payment.amount for payment in payments), 0))

        return Return.ok(
            InvoicePaymentsResponseDTO(
                invoice=InvoicePaymentStateDTO.from_entity(invoice),
                payments=[PaymentResponseDTO.from_entity(payment) for payment in payments],
                summary=PaymentSummaryDTO.build(invoice.amount, total_paid, len(payments)),
            )
        )
