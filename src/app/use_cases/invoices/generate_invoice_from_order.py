"""GenerateInvoiceFromOrder Use Case

Turns a due recurring order into a draft invoice and advances the order
to its next invoice date in the same transaction.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from src.domain.exceptions import InvoiceNumberCollisionError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoicing import (
    DEFAULT_LEAD_TIME_DAYS,
    calculate_invoice_due_date,
    can_generate_invoice_from_order,
)
from src.domain.recurrence import calculate_next_invoice_date
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)


class GenerateInvoiceFromOrder:
    """
    Use Case: Generate the next invoice of a recurring order

    Business Rules:
    1. Only active orders whose next_invoice_date has arrived generate
    2. The invoice copies the order amount and client, status=draft
    3. Due date = issue date + order lead time (default 30 days)
    4. Issuer is the default company, else the first active one
    5. The order's next_invoice_date advances by one period
    6. Invoice creation and date advance commit together
    7. An invoice number collision rolls back and retries with a fresh
       number, up to max_retries attempts

    Flow:
    1. Lock order (SELECT FOR UPDATE)
    2. Check the order may generate
    3. Resolve issuing company
    4. Allocate invoice number
    5. Create draft invoice
    6. Advance order schedule
    7. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        invoice_repo: InvoiceRepository,
        company_repo: CompanyRepository,
        clock: Optional[Clock] = None,
        max_retries: int = 3,
        default_lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
        currency: str = "USD",
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.invoice_repo = invoice_repo
        self.company_repo = company_repo
        self.clock = clock or SystemClock()
        self.max_retries = max(max_retries, 1)
        self.default_lead_time_days = default_lead_time_days
        self.currency = currency

    async def execute(self, order_id: int) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice generation

        Args:
            order_id: Order to invoice

        Returns:
            Result[InvoiceResponseDTO]: Created invoice or error
        """
        last_collision = None
        for attempt in range(1, self.max_retries + 1):
            try:
                return await self._generate(order_id)
            except InvoiceNumberCollisionError as e:
                await self.uow.rollback()
                last_collision = e
                logger.warning(
                    f"Invoice number collision for order {order_id} "
                    f"(attempt {attempt}/{self.max_retries}): {e}"
                )
            except Exception as e:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="GENERATE_INVOICE_FAILED",
                        message="Failed to generate invoice",
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

    async def _generate(self, order_id: int) -> Result[InvoiceResponseDTO]:
        # Step 1: Lock order
        order = await self.order_repo.get_by_id(order_id, for_update=True)
        if not order:
            return Return.err(
                Error(
                    code="ORDER_NOT_FOUND",
                    message=f"Order with ID {order_id} not found",
                )
            )

        # Step 2: Check the order may generate
        today = self.clock.today()
        check = can_generate_invoice_from_order(order, today)
        if not check.allowed:
            error = Error(
                code="INVOICE_GENERATION_NOT_ALLOWED",
                message=check.reason,
                reason=f"order_id={order_id}, status={order.status.value}",
            )
            await self.uow.rollback()
            return Return.err(error)

        # Step 3: Resolve issuing company
        company = await self.company_repo.get_default()
        if not company:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="NO_ACTIVE_COMPANY",
                    message="No active company found to issue the invoice",
                )
            )

        # Step 4: Allocate invoice number
        invoice_number = await self.invoice_repo.generate_invoice_number(today.year)

        # Step 5: Create draft invoice
        invoice = await self.invoice_repo.create(
            Invoice(
                client_id=order.client_id,
                company_id=company.id,
                order_id=order.id,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                amount=order.amount,
                currency=self.currency,
                issue_date=today,
                due_date=calculate_invoice_due_date(
                    today, order.lead_time_days, self.default_lead_time_days
                ),
            )
        )

        # Step 6: Advance order schedule
        previous_date = order.next_invoice_date
        order.next_invoice_date = calculate_next_invoice_date(
            previous_date, order.frequency, order.custom_days
        )
        await self.order_repo.update(order)

        # Step 7: Commit transaction
        await self.uow.commit()

        logger.info(
            f"Generated invoice {invoice.invoice_number} from order {order.id}, "
            f"next invoice {previous_date} -> {order.next_invoice_date}"
        )
        return Return.ok(InvoiceResponseDTO.from_entity(invoice, order=order))
