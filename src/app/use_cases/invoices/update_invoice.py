"""UpdateInvoice Use Case"""

from typing import Iterable
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.invoice import InvoiceStatus
from src.domain.invoicing import is_whole_cents
from .create_invoice import DEFAULT_CURRENCIES
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO


class UpdateInvoice:
    """
    Use Case: Edit a draft invoice

    Business Rules:
    1. Only draft invoices can be edited
    2. amount must be > 0
    3. currency must be supported
    4. due_date cannot precede issue_date
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        supported_currencies: Iterable[str] = DEFAULT_CURRENCIES,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.supported_currencies = {currency.upper() for currency in supported_currencies}

    async def execute(
        self, invoice_id: int, command: UpdateInvoiceCommandDTO
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

            error = self._validate(invoice, command)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            if command.amount is not None:
                invoice.amount = command.amount
            if command.currency is not None:
                invoice.currency = command.currency.upper()
            if command.issue_date is not None:
                invoice.issue_date = command.issue_date
            if command.due_date is not None:
                invoice.due_date = command.due_date
            if "notes" in command.model_fields_set:
                invoice.notes = command.notes

            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()
            return Return.ok(InvoiceResponseDTO.from_entity(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )

    def _validate(self, invoice, command: UpdateInvoiceCommandDTO):
        if invoice.status != InvoiceStatus.DRAFT:
            return Error(
                code="INVOICE_UPDATE_NOT_ALLOWED",
                message="Only draft invoices can be edited",
                reason=f"status={invoice.status.value}",
            )
        if command.amount is not None and command.amount <= 0:
            return Error(
                code="INVALID_AMOUNT",
                message="Invoice amount must be greater than 0",
                reason=f"amount={command.amount}",
            )
        if command.amount is not None and not is_whole_cents(command.amount):
            return Error(
                code="INVALID_AMOUNT",
                message="Invoice amount cannot have more than 2 decimal places",
                reason=f"amount={command.amount}",
            )
        if command.currency is not None and command.currency.upper() not in self.supported_currencies:
            return Error(
                code="INVALID_CURRENCY",
                message=f"Currency {command.currency.upper()} is not supported",
            )
        issue_date = command.issue_date or invoice.issue_date
        due_date = command.due_date or invoice.due_date
        if due_date < issue_date:
            return Error(
                code="INVALID_DATES",
                message="Due date cannot be before issue date",
                reason=f"issue_date={issue_date}, due_date={due_date}",
            )
        return None
