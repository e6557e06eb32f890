"""Request schemas for Order API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.invoicing import is_whole_cents
from src.domain.order import OrderFrequency, OrderStatus


def _check_amount(v):
    if v is not None and v <= 0:
        raise ValueError("Amount must be greater than 0")
    if v is not None and not is_whole_cents(v):
        raise ValueError("Amount cannot have more than 2 decimal places")
    return v


class CreateOrderRequestSchema(BaseModel):
    """
    Request schema for creating a recurring order

    Used for POST /orders endpoint.
    """

    client_id: int = Field(..., gt=0, description="Client being billed")
    description: str = Field(..., min_length=1, max_length=500, description="What is being billed")
    amount: Decimal = Field(..., description="Amount per occurrence (must be > 0)")
    frequency: OrderFrequency = Field(..., description="weekly, biweekly, monthly, quarterly, annually or custom")
    custom_days: Optional[int] = Field(default=None, description="Interval in days for custom frequency")
    start_date: date = Field(..., description="First day of the order")
    lead_time_days: Optional[int] = Field(default=None, ge=0, le=365, description="Payment terms in days")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if not v.strip():
            raise ValueError("Description cannot be blank")
        return v.strip()

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        return _check_amount(v)

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 1,
                "description": "Website maintenance",
                "amount": "100.00",
                "frequency": "monthly",
                "start_date": "2025-01-01",
                "lead_time_days": 15
            }
        }


class UpdateOrderRequestSchema(BaseModel):
    """
    Request schema for updating an order

    Used for PUT /orders/{order_id}. Omitted fields keep their value.
    """

    client_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    amount: Optional[Decimal] = Field(default=None)
    frequency: Optional[OrderFrequency] = Field(default=None)
    custom_days: Optional[int] = Field(default=None)
    start_date: Optional[date] = Field(default=None)
    lead_time_days: Optional[int] = Field(default=None, ge=0, le=365)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        return _check_amount(v)


class ChangeOrderStatusRequestSchema(BaseModel):
    """Request schema for PATCH /orders/{order_id}/status"""

    status: OrderStatus = Field(..., description="active, paused or cancelled")
