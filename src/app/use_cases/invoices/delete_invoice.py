"""DeleteInvoice Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.invoice import InvoiceStatus
from .dtos import DeleteInvoiceResponseDTO


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Only drafts without payments can be removed; anything else has been
    seen by the client and must be cancelled instead.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: int) -> Result[DeleteInvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT:
                error = Error(
                    code="INVOICE_DELETE_NOT_ALLOWED",
                    message="Only draft invoices can be deleted",
                    reason=f"status={invoice.status.value}",
                )
                await self.uow.rollback()
                return Return.err(error)

            if await self.payment_repo.sum_for_invoice(invoice_id) > 0:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVOICE_DELETE_NOT_ALLOWED",
                        message="Invoices with payments cannot be deleted",
                    )
                )

            await self.invoice_repo.delete(invoice)
            await self.uow.commit()
            return Return.ok(DeleteInvoiceResponseDTO(invoice_id=invoice_id, deleted=True))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
