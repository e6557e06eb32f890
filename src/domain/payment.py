"""Payment Domain Entity

Money received against an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Date
from src.domain.base import BaseModel, IdType, utc_now


class PaymentMethod(str, Enum):
    """How a payment was made"""
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    CHECK = "check"
    CASH = "cash"
    OTHER = "other"


class Payment(BaseModel, table=True):
    """
    Payment - Full or partial settlement of an invoice

    Domain Rules:
    - amount must be > 0
    - The payments of an invoice never sum above the invoice amount
    - notes are at most 500 characters
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_invoice_id', 'invoice_id'),
        Index('ix_payments_paid_date', 'paid_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique payment identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id"), nullable=False),
        description="Invoice being paid"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Payment amount (precision: 18,2)"
    )

    method: PaymentMethod = Field(
        description="Payment method"
    )

    paid_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the money was received"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Free-form notes (max 500 characters)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Payment creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Last update timestamp"
    )
