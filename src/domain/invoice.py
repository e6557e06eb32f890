"""Invoice Domain Entity

Tracks billing invoices and payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Date, Text
from src.domain.base import BaseModel, IdType, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(BaseModel, table=True):
    """
    Invoice - Amount owed by a client

    Domain Rules:
    - invoice_number must be unique (INV-YYYY-NNNNNN)
    - order_id is empty for manually created invoices
    - status is paid if and only if the payments cover the amount
    - paid_date is set exactly while status is paid
    - Status transitions: draft -> sent -> paid/overdue, overdue -> paid,
      paid -> sent, and anything but paid -> cancelled
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_client_id', 'client_id'),
        Index('ix_invoices_order_id', 'order_id'),
        Index('ix_invoices_status_due_date', 'status', 'due_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    client_id: int = Field(
        sa_column=Column(IdType, ForeignKey("clients.id"), nullable=False),
        description="Billed client"
    )

    company_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("companies.id"), nullable=True),
        description="Issuing company"
    )

    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("orders.id"), nullable=True),
        description="Originating order, empty for manual invoices"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2025-000001)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue, cancelled)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Invoice total (precision: 18,2)"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    sent_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Date the invoice was sent"
    )

    paid_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Date the invoice became fully paid"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form notes"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Invoice creation timestamp"
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
                "company_id": 1,
                "order_id": 1,
                "invoice_number": "INV-2025-000001",
                "status": "draft",
                "amount": "100.00",
                "currency": "USD",
                "issue_date": "2025-02-01",
                "due_date": "2025-03-03",
                "sent_date": None,
                "paid_date": None,
                "notes": None,
                "created_at": "2025-02-01T00:00:00Z",
                "updated_at": "2025-02-01T00:00:00Z"
            }
        }
