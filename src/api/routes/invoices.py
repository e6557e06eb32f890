"""Invoice API Routes

FastAPI routes for the invoice lifecycle: manual invoices, generation from
orders, status changes, the overdue sweep and invoice statistics.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
    ChangeInvoiceStatusRequestSchema,
)
from src.app.use_cases.invoices import (
    CreateInvoice,
    UpdateInvoice,
    ChangeInvoiceStatus,
    DeleteInvoice,
    GetInvoice,
    ListInvoices,
    GenerateInvoicesForDueOrders,
    MarkOverdueInvoices,
    GetInvoiceStatistics,
    GetUpcomingInvoices,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    ChangeInvoiceStatusCommandDTO,
    InvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    GenerateInvoicesResultDTO,
    MarkOverdueResultDTO,
    InvoiceStatisticsDTO,
    UpcomingInvoicesResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    DeleteInvoiceResponseDTO,
)
from src.app.use_cases.payments import GetInvoicePayments, InvoicePaymentsResponseDTO
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyCompanyRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyPaymentRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import build_generate_invoice, get_clock, get_session
from src.domain.clock import Clock
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get("/statistics", response_model=InvoiceStatisticsDTO)
async def get_invoice_statistics(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Invoice counts per status with total, paid and overdue amounts"""
    result = await GetInvoiceStatistics(SqlAlchemyInvoiceRepository(session), clock).execute()
    return result.value


@router.get("/upcoming", response_model=UpcomingInvoicesResponseDTO)
async def get_upcoming_invoices(
    days_ahead: int = Query(default=7, description="Look-ahead window in days (0-365)"),
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Active orders whose next invoice falls within the window"""
    result = await GetUpcomingInvoices(SqlAlchemyOrderRepository(session), clock).execute(days_ahead)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/generate-due", response_model=GenerateInvoicesResultDTO)
async def generate_due_invoices(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Generate invoices for every active order that is due.

    Orders are processed one at a time; failures are reported in `errors`
    without stopping the batch.

    **Example response:**
    ```json
    {
      "generated": 2,
      "invoice_ids": [10, 11],
      "errors": [{"order_id": 7, "error": "No active company found to issue the invoice"}]
    }
    ```
    """
    use_case = GenerateInvoicesForDueOrders(
        SqlAlchemyOrderRepository(session),
        build_generate_invoice(session, clock),
        clock,
    )
    result = await use_case.execute()
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/mark-overdue", response_model=MarkOverdueResultDTO)
async def mark_overdue_invoices(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Move sent invoices past their due date to overdue"""
    use_case = MarkOverdueInvoices(
        SqlAlchemyUnitOfWork(session), SqlAlchemyInvoiceRepository(session), clock
    )
    result = await use_case.execute()
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/generate/{order_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def generate_invoice_from_order(
    order_id: int,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Generate the due invoice of one order"""
    result = await build_generate_invoice(session, clock).execute(order_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Invoice number already used",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NUMBER_TAKEN",
                            "message": "Invoice number INV-2025-000001 already exists"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Create a manual draft invoice.

    **Request body:**
    - `client_id` (required): Billed client
    - `amount` (required): Invoice total (must be > 0)
    - `company_id` (optional): Issuer, defaults to the default company
    - `order_id` (optional): Must belong to the client
    - `invoice_number` (optional): Generated as INV-YYYY-NNNNNN when omitted
    - `currency`, `issue_date`, `due_date`, `notes` (optional)
    """
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyCompanyRepository(session),
        SqlAlchemyOrderRepository(session),
        clock=clock,
        max_retries=ApplicationConfig.INVOICE_NUMBER_MAX_RETRIES,
        supported_currencies=ApplicationConfig.SUPPORTED_CURRENCIES,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        default_lead_time_days=ApplicationConfig.DEFAULT_LEAD_TIME_DAYS,
    )
    result = await use_case.execute(CreateInvoiceCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    search: Optional[str] = Query(default=None, description="Match invoice number, client or order"),
    client_id: Optional[int] = Query(default=None),
    order_id: Optional[int] = Query(default=None),
    invoice_status: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    sort_by: str = Query(default="created_at"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
):
    query = ListInvoicesQueryDTO(
        search=search,
        client_id=client_id,
        order_id=order_id,
        status=invoice_status,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session), ApplicationConfig.MAX_PAGE_SIZE).execute(query)
    return result.value


@router.get("/{invoice_id}", response_model=InvoiceDetailResponseDTO)
async def get_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Invoice detail with payments and payment summary"""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{invoice_id}", response_model=InvoiceResponseDTO)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Edit a draft invoice"""
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        supported_currencies=ApplicationConfig.SUPPORTED_CURRENCIES,
    )
    command = UpdateInvoiceCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(invoice_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={
        409: {
            "description": "Transition not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot change status from cancelled to sent"
                        }
                    }
                }
            }
        }
    }
)
async def change_invoice_status(
    invoice_id: int,
    request: ChangeInvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Send, cancel, mark paid or reopen an invoice"""
    use_case = ChangeInvoiceStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        clock,
    )
    result = await use_case.execute(invoice_id, ChangeInvoiceStatusCommandDTO(status=request.status))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{invoice_id}", response_model=DeleteInvoiceResponseDTO)
async def delete_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a draft invoice without payments"""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/{invoice_id}/payments", response_model=InvoicePaymentsResponseDTO)
async def get_invoice_payments(invoice_id: int, session: AsyncSession = Depends(get_session)):
    use_case = GetInvoicePayments(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyPaymentRepository(session)
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
