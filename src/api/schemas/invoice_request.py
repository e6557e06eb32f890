"""Request schemas for Invoice API"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.invoice import InvoiceStatus


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating a manual invoice

    Used for POST /invoices endpoint. Range checks on amount, currency and
    dates are done by the use case so they surface with their own codes.
    """

    client_id: int = Field(..., gt=0, description="Billed client")
    company_id: Optional[int] = Field(default=None, gt=0, description="Issuing company")
    order_id: Optional[int] = Field(default=None, gt=0, description="Related order")
    invoice_number: Optional[str] = Field(default=None, max_length=50, description="Custom invoice number")
    amount: Decimal = Field(..., description="Invoice total")
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3, description="Currency code")
    issue_date: Optional[date] = Field(default=None, description="Issue date")
    due_date: Optional[date] = Field(default=None, description="Due date")
    notes: Optional[str] = Field(default=None, description="Notes")

    @field_validator("invoice_number")
    @classmethod
    def validate_invoice_number(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return v.upper() if v else v


class UpdateInvoiceRequestSchema(BaseModel):
    """Request schema for PUT /invoices/{invoice_id}"""

    amount: Optional[Decimal] = Field(default=None)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    issue_date: Optional[date] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class ChangeInvoiceStatusRequestSchema(BaseModel):
    """Request schema for PATCH /invoices/{invoice_id}/status"""

    status: InvoiceStatus = Field(..., description="draft, sent, paid, overdue or cancelled")
