"""CreateInvoice Use Case

Creates a manual draft invoice, optionally linked to one of the client's
orders.
"""

import logging
from typing import Iterable, Optional
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.exceptions import InvoiceNumberCollisionError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoicing import DEFAULT_LEAD_TIME_DAYS, calculate_invoice_due_date, is_whole_cents
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_CURRENCIES = ("USD", "EUR", "GBP", "BTC", "ETH")


class CreateInvoice:
    """
    Use Case: Create a manual invoice

    Business Rules:
    1. amount must be > 0 and the currency supported
    2. Client, company and order (when given) must exist
    3. A linked order must belong to the same client
    4. due_date cannot precede issue_date
    5. A custom invoice number must be unused; otherwise one is generated
       (INV-YYYY-NNNNNN), retrying on collision
    6. Invoice is created with status=draft
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        company_repo: CompanyRepository,
        order_repo: OrderRepository,
        clock: Optional[Clock] = None,
        max_retries: int = 3,
        supported_currencies: Iterable[str] = DEFAULT_CURRENCIES,
        default_currency: str = "USD",
        default_lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.company_repo = company_repo
        self.order_repo = order_repo
        self.clock = clock or SystemClock()
        self.max_retries = max(max_retries, 1)
        self.supported_currencies = {currency.upper() for currency in supported_currencies}
        self.default_currency = default_currency
        self.default_lead_time_days = default_lead_time_days

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with client, amount and dates

        Returns:
            Result[InvoiceResponseDTO]: Created invoice or error
        """
        last_collision = None
        for attempt in range(1, self.max_retries + 1):
            try:
                return await self._create(command)
            except InvoiceNumberCollisionError as e:
                await self.uow.rollback()
                last_collision = e
                if command.invoice_number:
                    return Return.err(
                        Error(
                            code="INVOICE_NUMBER_TAKEN",
                            message=f"Invoice number {command.invoice_number} already exists",
                            reason=str(e),
                        )
                    )
                logger.warning(
                    f"Invoice number collision (attempt {attempt}/{self.max_retries}): {e}"
                )
            except Exception as e:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="CREATE_INVOICE_FAILED",
                        message="Failed to create invoice",
                        reason=str(e),
                    )
                )

        return Return.err(
            Error(
                code="INVOICE_NUMBER_COLLISION",
                message="Could not allocate a unique invoice number, please retry",
                reason=str(last_collision),
            )
        )

    async def _create(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        # Step 1: Validate amount and currency
        if command.amount <= 0:
            return Return.err(
                Error(
                    code="INVALID_AMOUNT",
                    message="Invoice amount must be greater than 0",
                    reason=f"amount={command.amount}",
                )
            )

        if not is_whole_cents(command.amount):
            return Return.err(
                Error(
                    code="INVALID_AMOUNT",
                    message="Invoice amount cannot have more than 2 decimal places",
                    reason=f"amount={command.amount}",
                )
            )

        currency = (command.currency or self.default_currency).upper()
        if currency not in self.supported_currencies:
            return Return.err(
                Error(
                    code="INVALID_CURRENCY",
                    message=f"Currency {currency} is not supported",
                    reason=f"supported={sorted(self.supported_currencies)}",
                )
            )

        # Step 2: Client must exist
        client = await self.client_repo.get_by_id(command.client_id)
        if not client:
            return Return.err(
                Error(
                    code="CLIENT_NOT_FOUND",
                    message=f"Client with ID {command.client_id} not found",
                )
            )

        # Step 3: Resolve issuing company
        if command.company_id is not None:
            company = await self.company_repo.get_by_id(command.company_id)
            if not company:
                return Return.err(
                    Error(
                        code="COMPANY_NOT_FOUND",
                        message=f"Company with ID {command.company_id} not found",
                    )
                )
        else:
            company = await self.company_repo.get_default()
            if not company:
                return Return.err(
                    Error(
                        code="NO_ACTIVE_COMPANY",
                        message="No active company found to issue the invoice",
                    )
                )

        # Step 4: A linked order must belong to the client
        order = None
        if command.order_id is not None:
            order = await self.order_repo.get_by_id(command.order_id)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order with ID {command.order_id} not found",
                    )
                )
            if order.client_id != client.id:
                return Return.err(
                    Error(
                        code="ORDER_CLIENT_MISMATCH",
                        message="Order does not belong to the selected client",
                        reason=f"order.client_id={order.client_id}, client_id={client.id}",
                    )
                )

        # Step 5: Dates
        issue_date = command.issue_date or self.clock.today()
        lead_time_days = order.lead_time_days if order else None
        due_date = command.due_date or calculate_invoice_due_date(
            issue_date, lead_time_days, self.default_lead_time_days
        )
        if due_date < issue_date:
            return Return.err(
                Error(
                    code="INVALID_DATES",
                    message="Due date cannot be before issue date",
                    reason=f"issue_date={issue_date}, due_date={due_date}",
                )
            )

        # Step 6: Invoice number
        if command.invoice_number:
            if await self.invoice_repo.get_by_invoice_number(command.invoice_number):
                return Return.err(
                    Error(
                        code="INVOICE_NUMBER_TAKEN",
                        message=f"Invoice number {command.invoice_number} already exists",
                    )
                )
            invoice_number = command.invoice_number
        else:
            invoice_number = await self.invoice_repo.generate_invoice_number(issue_date.year)

        # Step 7: Persist
        invoice = await self.invoice_repo.create(
            Invoice(
                client_id=client.id,
                company_id=company.id,
                order_id=order.id if order else None,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                amount=command.amount,
                currency=currency,
                issue_date=issue_date,
                due_date=due_date,
                notes=command.notes,
            )
        )
        await self.uow.commit()

        logger.info(f"Created manual invoice {invoice.invoice_number} for client {client.id}")
        return Return.ok(InvoiceResponseDTO.from_entity(invoice, client, order))
