"""GetInvoice Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases.payments.dtos import PaymentResponseDTO, PaymentSummaryDTO
from src.domain.invoicing import to_money
from .dtos import InvoiceDetailResponseDTO


class GetInvoice:
    """Use case: Invoice detail with client, order and payment history"""

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
    ):
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.order_repo = order_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceDetailResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        client = await self.client_repo.get_by_id(invoice.client_id)
        order = await self.order_repo.get_by_id(invoice.order_id) if invoice.order_id else None
        payments = await self.payment_repo.get_by_invoice_id(invoice_id)
        total_paid = to_money(sum((payment.amount for payment in payments), 0))

        detail = InvoiceDetailResponseDTO.from_entity(invoice, client, order)
        return Return.ok(
            detail.model_copy(
                update={
                    "payments": [PaymentResponseDTO.from_entity(payment) for payment in payments],
                    "payment_summary": PaymentSummaryDTO.build(
                        invoice.amount, total_paid, len(payments)
                    ),
                }
            )
        )
