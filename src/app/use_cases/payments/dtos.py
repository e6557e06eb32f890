"""Data Transfer Objects for Payment Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.common import PaginationDTO
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.invoicing import is_fully_paid, remaining_amount
from src.domain.payment import Payment, PaymentMethod

MAX_NOTES_LENGTH = 500


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment against an invoice

    amount is range-checked by the use case so direct callers get a
    VALIDATION_ERROR result rather than an exception.
    """

    invoice_id: int = Field(
        ...,
        description="Invoice being paid"
    )

    amount: Decimal = Field(
        ...,
        description="Payment amount (must be > 0)"
    )

    method: PaymentMethod = Field(
        ...,
        description="Payment method"
    )

    paid_date: Optional[date] = Field(
        default=None,
        description="Date received, defaults to today"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-form notes (max 500 characters)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "amount": "60.00",
                "method": "bank_transfer",
                "paid_date": "2025-02-10",
                "notes": "Wire ref 4411"
            }
        }


class UpdatePaymentCommandDTO(BaseModel):
    """Command DTO for editing a payment; unset fields are left as is"""

    amount: Optional[Decimal] = Field(default=None, description="New amount (must be > 0)")
    method: Optional[PaymentMethod] = Field(default=None, description="New payment method")
    paid_date: Optional[date] = Field(default=None, description="New received date")
    notes: Optional[str] = Field(default=None, description="New notes (max 500 characters)")


class PaymentResponseDTO(BaseModel):
    """A single payment"""

    id: int = Field(..., description="Payment ID")
    invoice_id: int = Field(..., description="Invoice ID")
    amount: Decimal = Field(..., description="Payment amount")
    method: str = Field(..., description="Payment method")
    paid_date: date = Field(..., description="Date received")
    notes: Optional[str] = Field(default=None, description="Notes")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponseDTO":
        return cls(
            id=payment.id,
            invoice_id=payment.invoice_id,
            amount=payment.amount,
            method=payment.method.value,
            paid_date=payment.paid_date,
            notes=payment.notes,
            created_at=payment.created_at,
        )


class PaymentSummaryDTO(BaseModel):
    """Payment totals of one invoice"""

    invoice_amount: Decimal = Field(..., description="Invoice total")
    total_paid: Decimal = Field(..., description="Sum of payments")
    remaining_amount: Decimal = Field(..., description="Amount still owed")
    is_fully_paid: bool = Field(..., description="Whether payments cover the invoice")
    payment_count: Optional[int] = Field(default=None, description="Number of payments")

    @classmethod
    def build(
        cls, invoice_amount: Decimal, total_paid: Decimal, payment_count: Optional[int] = None
    ) -> "PaymentSummaryDTO":
        return cls(
            invoice_amount=invoice_amount,
            total_paid=total_paid,
            remaining_amount=remaining_amount(invoice_amount, total_paid),
            is_fully_paid=is_fully_paid(invoice_amount, total_paid),
            payment_count=payment_count,
        )


class InvoicePaymentStateDTO(BaseModel):
    """Invoice status after a payment mutation"""

    id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    status: str = Field(..., description="Invoice status")
    amount: Decimal = Field(..., description="Invoice total")
    currency: str = Field(..., description="Currency code")
    due_date: date = Field(..., description="Due date")
    paid_date: Optional[date] = Field(default=None, description="Date fully paid")

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoicePaymentStateDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            status=invoice.status.value,
            amount=invoice.amount,
            currency=invoice.currency,
            due_date=invoice.due_date,
            paid_date=invoice.paid_date,
        )


class PaymentMutationResponseDTO(BaseModel):
    """
    Response DTO for RecordPayment and UpdatePayment

    Carries the payment, the reconciled invoice and its payment summary.
    """

    payment: PaymentResponseDTO = Field(..., description="Recorded payment")
    invoice: InvoicePaymentStateDTO = Field(..., description="Invoice after reconciliation")
    payment_summary: PaymentSummaryDTO = Field(..., description="Invoice payment totals")

    class Config:
        json_schema_extra = {
            "example": {
                "payment": {
                    "id": 2,
                    "invoice_id": 1,
                    "amount": "40.00",
                    "method": "bank_transfer",
                    "paid_date": "2025-02-20",
                    "notes": None,
                    "created_at": "2025-02-20T09:00:00Z"
                },
                "invoice": {
                    "id": 1,
                    "invoice_number": "INV-2025-000001",
                    "status": "paid",
                    "amount": "100.00",
                    "currency": "USD",
                    "due_date": "2025-03-03",
                    "paid_date": "2025-02-20"
                },
                "payment_summary": {
                    "invoice_amount": "100.00",
                    "total_paid": "100.00",
                    "remaining_amount": "0.00",
                    "is_fully_paid": True,
                    "payment_count": None
                }
            }
        }


class DeletePaymentResponseDTO(BaseModel):
    """Response DTO for DeletePayment"""

    deleted_payment_id: int = Field(..., description="Removed payment ID")
    invoice_id: int = Field(..., description="Invoice ID")
    invoice_status: str = Field(..., description="Invoice status after reconciliation")
    remaining_paid_amount: Decimal = Field(..., description="Sum of the remaining payments")
    invoice_amount: Decimal = Field(..., description="Invoice total")


class InvoicePaymentsResponseDTO(BaseModel):
    """Payment history of one invoice"""

    invoice: InvoicePaymentStateDTO = Field(..., description="Invoice")
    payments: List[PaymentResponseDTO] = Field(..., description="Payments, newest first")
    summary: PaymentSummaryDTO = Field(..., description="Totals")


class PaymentListItemDTO(PaymentResponseDTO):
    """Payment with its invoice number and client"""

    invoice_number: str = Field(..., description="Invoice number")
    client_id: int = Field(..., description="Client ID")
    client_name: str = Field(..., description="Client name")

    @classmethod
    def from_row(cls, payment: Payment, invoice: Invoice, client: Client) -> "PaymentListItemDTO":
        base = PaymentResponseDTO.from_entity(payment).model_dump()
        return cls(
            **base,
            invoice_number=invoice.invoice_number,
            client_id=client.id,
            client_name=client.name,
        )


class ListPaymentsQueryDTO(BaseModel):
    """Filters and paging for ListPayments"""

    search: Optional[str] = Field(default=None, description="Match invoice number, client name or notes")
    client_id: Optional[int] = Field(default=None, description="Filter by client")
    method: Optional[PaymentMethod] = Field(default=None, description="Filter by method")
    start_date: Optional[date] = Field(default=None, description="paid_date lower bound")
    end_date: Optional[date] = Field(default=None, description="paid_date upper bound")
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Page size (max 100)")


class ListPaymentsResponseDTO(BaseModel):
    """Paginated payment list"""

    payments: List[PaymentListItemDTO] = Field(..., description="Payments on this page")
    pagination: PaginationDTO = Field(..., description="Page metadata")
