"""Payment API Routes

FastAPI routes for recording and correcting payments. Every mutation
reconciles the invoice status in the same transaction.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.payment_request import RecordPaymentRequestSchema, UpdatePaymentRequestSchema
from src.app.use_cases.payments import (
    RecordPayment,
    UpdatePayment,
    DeletePayment,
    GetInvoicePayments,
    ListPayments,
    RecordPaymentCommandDTO,
    UpdatePaymentCommandDTO,
    PaymentMutationResponseDTO,
    DeletePaymentResponseDTO,
    InvoicePaymentsResponseDTO,
    ListPaymentsQueryDTO,
    ListPaymentsResponseDTO,
)
from src.adapter.repositories import SqlAlchemyInvoiceRepository, SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_clock, get_session
from src.domain.clock import Clock
from src.domain.payment import PaymentMethod

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=PaymentMutationResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Invalid amount or overpayment",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "OVERPAYMENT",
                            "message": "Payment amount would exceed invoice total. Invoice amount: $100.00, Already paid: $0.00, Maximum additional payment: $100.00"
                        }
                    }
                }
            }
        },
        404: {"description": "Invoice not found"},
        409: {"description": "Invoice is cancelled"},
    }
)
async def record_payment(
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Record a payment against an invoice.

    The invoice becomes `paid` once payments cover its amount; a partial
    payment on a draft moves it to `sent`.
    """
    use_case = RecordPayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        clock,
    )
    result = await use_case.execute(RecordPaymentCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListPaymentsResponseDTO)
async def list_payments(
    search: Optional[str] = Query(default=None, description="Match invoice number, client name or notes"),
    client_id: Optional[int] = Query(default=None),
    method: Optional[PaymentMethod] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
):
    query = ListPaymentsQueryDTO(
        search=search,
        client_id=client_id,
        method=method,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )
    result = await ListPayments(SqlAlchemyPaymentRepository(session), ApplicationConfig.MAX_PAGE_SIZE).execute(query)
    return result.value


@router.get("/invoice/{invoice_id}", response_model=InvoicePaymentsResponseDTO)
async def get_payments_for_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Payment history and totals of one invoice"""
    use_case = GetInvoicePayments(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyPaymentRepository(session)
    )
    result = await use_case.execute(invoice_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{payment_id}", response_model=PaymentMutationResponseDTO)
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Correct a payment; the invoice status is reconciled afterwards"""
    use_case = UpdatePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        clock,
    )
    command = UpdatePaymentCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(payment_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{payment_id}", response_model=DeletePaymentResponseDTO)
async def delete_payment(
    payment_id: int,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Remove a payment; a paid invoice falls back to sent when no longer covered"""
    use_case = DeletePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
        clock,
    )
    result = await use_case.execute(payment_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
