"""Data Transfer Objects for Order Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.common import PaginationDTO
from src.domain.client import Client
from src.domain.order import Order, OrderFrequency, OrderStatus
from src.domain.recurrence import (
    calculate_estimated_annual_revenue,
    frequency_display_text,
)


class CreateOrderCommandDTO(BaseModel):
    """
    Command DTO for creating a recurring order

    Used as input to CreateOrder use case.
    """

    client_id: int = Field(
        ...,
        description="Client being billed"
    )

    description: str = Field(
        ...,
        min_length=1,
        description="What is being billed"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount per occurrence (must be > 0)"
    )

    frequency: OrderFrequency = Field(
        ...,
        description="Billing frequency"
    )

    custom_days: Optional[int] = Field(
        default=None,
        description="Interval in days, only for custom frequency (1-365)"
    )

    start_date: date = Field(
        ...,
        description="First day of the order, not before today"
    )

    lead_time_days: Optional[int] = Field(
        default=None,
        ge=0,
        description="Payment terms in days for generated invoices"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 1,
                "description": "Website maintenance",
                "amount": "100.00",
                "frequency": "monthly",
                "custom_days": None,
                "start_date": "2025-01-01",
                "lead_time_days": 15
            }
        }


class UpdateOrderCommandDTO(BaseModel):
    """
    Command DTO for updating an order

    Only the fields explicitly set are applied; custom_days and
    lead_time_days may be set to null to clear them.
    """

    client_id: Optional[int] = Field(default=None, description="New client")
    description: Optional[str] = Field(default=None, min_length=1, description="New description")
    amount: Optional[Decimal] = Field(default=None, gt=0, description="New amount (must be > 0)")
    frequency: Optional[OrderFrequency] = Field(default=None, description="New frequency")
    custom_days: Optional[int] = Field(default=None, description="New custom interval in days")
    start_date: Optional[date] = Field(default=None, description="New start date")
    lead_time_days: Optional[int] = Field(default=None, ge=0, description="New payment terms in days")


class ChangeOrderStatusCommandDTO(BaseModel):
    """Command DTO for pausing, resuming or cancelling an order"""

    status: OrderStatus = Field(
        ...,
        description="Target status (active, paused, cancelled)"
    )


class OrderResponseDTO(BaseModel):
    """
    Response DTO for order operations

    Returned by CreateOrder, UpdateOrder, ChangeOrderStatus and ListOrders.
    """

    id: int = Field(..., description="Order ID")
    client_id: int = Field(..., description="Client ID")
    client_name: Optional[str] = Field(default=None, description="Client name")
    client_email: Optional[str] = Field(default=None, description="Client email")
    description: str = Field(..., description="What is being billed")
    amount: Decimal = Field(..., description="Amount per occurrence")
    frequency: str = Field(..., description="Billing frequency")
    frequency_display: str = Field(..., description="Human readable frequency")
    custom_days: Optional[int] = Field(default=None, description="Custom interval in days")
    start_date: date = Field(..., description="Order start date")
    next_invoice_date: date = Field(..., description="Next invoice generation date")
    lead_time_days: Optional[int] = Field(default=None, description="Payment terms in days")
    status: str = Field(..., description="Order status")
    estimated_annual_revenue: Decimal = Field(..., description="Projected revenue over a year")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_entity(cls, order: Order, client: Optional[Client] = None) -> "OrderResponseDTO":
        return cls(
            id=order.id,
            client_id=order.client_id,
            client_name=client.name if client else None,
            client_email=client.email if client else None,
            description=order.description,
            amount=order.amount,
            frequency=order.frequency.value,
            frequency_display=frequency_display_text(order.frequency, order.custom_days),
            custom_days=order.custom_days,
            start_date=order.start_date,
            next_invoice_date=order.next_invoice_date,
            lead_time_days=order.lead_time_days,
            status=order.status.value,
            estimated_annual_revenue=calculate_estimated_annual_revenue(
                order.amount, order.frequency, order.custom_days
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "client_id": 1,
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "description": "Website maintenance",
                "amount": "100.00",
                "frequency": "monthly",
                "frequency_display": "Monthly",
                "custom_days": None,
                "start_date": "2025-01-01",
                "next_invoice_date": "2025-02-01",
                "lead_time_days": 15,
                "status": "active",
                "estimated_annual_revenue": "1200.00",
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }


class ScheduleEntryDTO(BaseModel):
    """One upcoming invoice date"""

    scheduled_date: date = Field(..., description="Invoice date")
    description: str = Field(..., description="Display label")


class OrderDetailResponseDTO(OrderResponseDTO):
    """Order with its upcoming schedule and invoice count"""

    upcoming_schedule: List[ScheduleEntryDTO] = Field(
        default_factory=list,
        description="Next invoice dates"
    )

    invoice_count: int = Field(
        default=0,
        description="Invoices generated from this order"
    )


class OrderScheduleResponseDTO(BaseModel):
    """Response DTO for GetOrderSchedule"""

    order_id: int = Field(..., description="Order ID")
    frequency: str = Field(..., description="Billing frequency")
    frequency_display: str = Field(..., description="Human readable frequency")
    schedule: List[ScheduleEntryDTO] = Field(..., description="Upcoming invoice dates")


class ListOrdersQueryDTO(BaseModel):
    """Filters, sorting and paging for ListOrders"""

    search: Optional[str] = Field(default=None, description="Match description, client name or email")
    client_id: Optional[int] = Field(default=None, description="Filter by client")
    status: Optional[OrderStatus] = Field(default=None, description="Filter by status")
    frequency: Optional[OrderFrequency] = Field(default=None, description="Filter by frequency")
    sort_by: str = Field(default="created_at", description="Sort column")
    sort_order: str = Field(default="desc", description="asc or desc")
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Page size (max 100)")


class ListOrdersResponseDTO(BaseModel):
    """Paginated order list"""

    orders: List[OrderResponseDTO] = Field(..., description="Orders on this page")
    pagination: PaginationDTO = Field(..., description="Page metadata")


class DeleteOrderResponseDTO(BaseModel):
    """
    Response DTO for DeleteOrder

    Orders with invoices are cancelled instead of removed.
    """

    order_id: int = Field(..., description="Order ID")
    deleted: bool = Field(..., description="True when the row was removed")
    cancelled: bool = Field(..., description="True when the order was cancelled instead")
    message: str = Field(..., description="Outcome description")
