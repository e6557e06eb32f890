"""Order API Routes

FastAPI routes for recurring orders: CRUD, status changes, schedule preview
and on-demand invoice generation.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.order_request import (
    CreateOrderRequestSchema,
    UpdateOrderRequestSchema,
    ChangeOrderStatusRequestSchema,
)
from src.app.use_cases.invoices import InvoiceResponseDTO
from src.app.use_cases.orders import (
    CreateOrder,
    UpdateOrder,
    ChangeOrderStatus,
    DeleteOrder,
    GetOrder,
    GetOrderSchedule,
    ListOrders,
    CreateOrderCommandDTO,
    UpdateOrderCommandDTO,
    ChangeOrderStatusCommandDTO,
    OrderResponseDTO,
    OrderDetailResponseDTO,
    OrderScheduleResponseDTO,
    ListOrdersQueryDTO,
    ListOrdersResponseDTO,
    DeleteOrderResponseDTO,
)
from src.adapter.repositories import SqlAlchemyClientRepository, SqlAlchemyOrderRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import build_generate_invoice, get_clock, get_session
from src.domain.clock import Clock
from src.domain.order import OrderFrequency, OrderStatus

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Invalid frequency or start date",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_FREQUENCY_CUSTOM_DAYS",
                            "message": "Custom frequency requires custom_days"
                        }
                    }
                }
            }
        },
        404: {"description": "Client not found"},
    }
)
async def create_order(
    request: CreateOrderRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Create a recurring order.

    **Request body:**
    - `client_id` (required): Client being billed
    - `description` (required): What is being billed
    - `amount` (required): Amount per occurrence (must be > 0)
    - `frequency` (required): weekly, biweekly, monthly, quarterly, annually or custom
    - `custom_days` (custom only): Interval in days, 1-365
    - `start_date` (required): Not before today
    - `lead_time_days` (optional): Payment terms of generated invoices

    The first invoice is scheduled one period after `start_date`.
    """
    use_case = CreateOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyClientRepository(session),
        clock,
    )
    result = await use_case.execute(CreateOrderCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListOrdersResponseDTO)
async def list_orders(
    search: Optional[str] = Query(default=None, description="Match description, client name or email"),
    client_id: Optional[int] = Query(default=None),
    order_status: Optional[OrderStatus] = Query(default=None, alias="status"),
    frequency: Optional[OrderFrequency] = Query(default=None),
    sort_by: str = Query(default="created_at"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
):
    """List orders with their client"""
    query = ListOrdersQueryDTO(
        search=search,
        client_id=client_id,
        status=order_status,
        frequency=frequency,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    result = await ListOrders(SqlAlchemyOrderRepository(session), ApplicationConfig.MAX_PAGE_SIZE).execute(query)
    return result.value


@router.get("/{order_id}", response_model=OrderDetailResponseDTO)
async def get_order(order_id: int, session: AsyncSession = Depends(get_session)):
    """Order detail with the next five invoice dates"""
    use_case = GetOrder(SqlAlchemyOrderRepository(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(order_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{order_id}", response_model=OrderResponseDTO)
async def update_order(
    order_id: int,
    request: UpdateOrderRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Update an order.

    Changing frequency, custom_days or start_date reschedules the next
    invoice from the start date; other edits keep the current schedule.
    """
    use_case = UpdateOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyClientRepository(session),
        clock,
    )
    command = UpdateOrderCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(order_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.patch("/{order_id}/status", response_model=OrderResponseDTO)
async def change_order_status(
    order_id: int,
    request: ChangeOrderStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Pause, resume or cancel an order"""
    use_case = ChangeOrderStatus(SqlAlchemyUnitOfWork(session), SqlAlchemyOrderRepository(session))
    result = await use_case.execute(order_id, ChangeOrderStatusCommandDTO(status=request.status))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{order_id}", response_model=DeleteOrderResponseDTO)
async def delete_order(order_id: int, session: AsyncSession = Depends(get_session)):
    """Delete an order, or cancel it when invoices reference it"""
    use_case = DeleteOrder(SqlAlchemyUnitOfWork(session), SqlAlchemyOrderRepository(session))
    result = await use_case.execute(order_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/{order_id}/schedule", response_model=OrderScheduleResponseDTO)
async def get_order_schedule(
    order_id: int,
    count: int = Query(default=5, description="Number of dates (1-20)"),
    session: AsyncSession = Depends(get_session),
):
    result = await GetOrderSchedule(SqlAlchemyOrderRepository(session)).execute(order_id, count)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{order_id}/generate-invoice",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Order inactive or not yet due",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_GENERATION_NOT_ALLOWED",
                            "message": "Next invoice is not due until 2025-03-01"
                        }
                    }
                }
            }
        }
    }
)
async def generate_invoice_for_order(
    order_id: int,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Generate the due invoice of an order and advance its schedule"""
    result = await build_generate_invoice(session, clock).execute(order_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
