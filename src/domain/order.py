"""Order Domain Entity

Recurring order: a promise to bill a client a fixed amount on a schedule.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Date
from src.domain.base import BaseModel, IdType, utc_now


class OrderFrequency(str, Enum):
    """Billing frequency of a recurring order"""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
    CUSTOM = "custom"


class OrderStatus(str, Enum):
    """Order status types"""
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class Order(BaseModel, table=True):
    """
    Order - Recurring billing agreement with a client

    Domain Rules:
    - amount must be > 0
    - custom_days is set if and only if frequency is custom (range 1-365)
    - next_invoice_date is derived from start_date and frequency, never
      entered directly, and only moves forward as invoices are generated
    - Only active orders generate invoices
    - Status transitions: active <-> paused, active/paused -> cancelled
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_client_id', 'client_id'),
        Index('ix_orders_status_next_invoice_date', 'status', 'next_invoice_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique order identifier (auto-increment)"
    )

    client_id: int = Field(
        sa_column=Column(IdType, ForeignKey("clients.id"), nullable=False),
        description="Client being billed"
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="What is being billed"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount billed per occurrence (precision: 18,2)"
    )

    frequency: OrderFrequency = Field(
        description="Billing frequency"
    )

    custom_days: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Interval in days, only for custom frequency"
    )

    start_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the order starts"
    )

    next_invoice_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the next invoice becomes due for generation"
    )

    lead_time_days: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Payment terms in days for generated invoices"
    )

    status: OrderStatus = Field(
        default=OrderStatus.ACTIVE,
        description="Order status (active, paused, cancelled)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Order creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "client_id": 1,
                "description": "Website maintenance",
                "amount": "100.00",
                "frequency": "monthly",
                "custom_days": None,
                "start_date": "2025-01-01",
                "next_invoice_date": "2025-02-01",
                "lead_time_days": 15,
                "status": "active",
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }
