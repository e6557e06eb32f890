"""Request schemas for Payment API"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.payment import PaymentMethod


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /payments endpoint. The amount is checked against the
    invoice balance by the use case.
    """

    invoice_id: int = Field(..., gt=0, description="Invoice being paid")
    amount: Decimal = Field(..., description="Payment amount (must be > 0)")
    method: PaymentMethod = Field(..., description="bank_transfer, credit_card, check, cash or other")
    paid_date: Optional[date] = Field(default=None, description="Date received, defaults to today")
    notes: Optional[str] = Field(default=None, description="Notes (max 500 characters)")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "amount": "60.00",
                "method": "bank_transfer",
                "paid_date": "2025-02-10"
            }
        }


class UpdatePaymentRequestSchema(BaseModel):
    """Request schema for PUT /payments/{payment_id}"""

    amount: Optional[Decimal] = Field(default=None)
    method: Optional[PaymentMethod] = Field(default=None)
    paid_date: Optional[date] = Field(default=None)
    notes: Optional[str] = Field(default=None)
