"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.common import PaginationDTO
from src.app.use_cases.payments.dtos import PaymentResponseDTO, PaymentSummaryDTO
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.order import Order


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating a manual invoice

    Used as input to CreateInvoice use case. Invoices generated from
    orders go through GenerateInvoiceFromOrder instead.
    """

    client_id: int = Field(
        ...,
        description="Billed client"
    )

    company_id: Optional[int] = Field(
        default=None,
        description="Issuing company, defaults to the default company"
    )

    order_id: Optional[int] = Field(
        default=None,
        description="Related order, must belong to the client"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        description="Custom invoice number, generated when omitted"
    )

    amount: Decimal = Field(
        ...,
        description="Invoice total (must be > 0)"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Currency code, defaults to USD"
    )

    issue_date: Optional[date] = Field(
        default=None,
        description="Issue date, defaults to today"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Due date, defaults to issue date plus payment terms"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-form notes"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 1,
                "company_id": 1,
                "order_id": None,
                "invoice_number": None,
                "amount": "250.00",
                "currency": "USD",
                "issue_date": "2025-02-01",
                "due_date": "2025-03-03",
                "notes": "One-off consulting"
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """Command DTO for editing a draft invoice; unset fields are left as is"""

    amount: Optional[Decimal] = Field(default=None, description="New total (must be > 0)")
    currency: Optional[str] = Field(default=None, description="New currency code")
    issue_date: Optional[date] = Field(default=None, description="New issue date")
    due_date: Optional[date] = Field(default=None, description="New due date")
    notes: Optional[str] = Field(default=None, description="New notes")


class ChangeInvoiceStatusCommandDTO(BaseModel):
    """Command DTO for an explicit invoice status change"""

    status: InvoiceStatus = Field(
        ...,
        description="Target status"
    )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by GenerateInvoiceFromOrder, CreateInvoice, UpdateInvoice,
    ChangeInvoiceStatus and ListInvoices.
    """

    id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Unique invoice number")
    client_id: int = Field(..., description="Client ID")
    client_name: Optional[str] = Field(default=None, description="Client name")
    client_email: Optional[str] = Field(default=None, description="Client email")
    company_id: Optional[int] = Field(default=None, description="Issuing company ID")
    order_id: Optional[int] = Field(default=None, description="Originating order ID")
    order_description: Optional[str] = Field(default=None, description="Originating order description")
    status: str = Field(..., description="Invoice status")
    amount: Decimal = Field(..., description="Invoice total")
    currency: str = Field(..., description="Currency code")
    issue_date: date = Field(..., description="Issue date")
    due_date: date = Field(..., description="Due date")
    sent_date: Optional[date] = Field(default=None, description="Date sent")
    paid_date: Optional[date] = Field(default=None, description="Date fully paid")
    notes: Optional[str] = Field(default=None, description="Notes")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        client: Optional[Client] = None,
        order: Optional[Order] = None,
    ) -> "InvoiceResponseDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            client_name=client.name if client else None,
            client_email=client.email if client else None,
            company_id=invoice.company_id,
            order_id=invoice.order_id,
            order_description=order.description if order else None,
            status=invoice.status.value,
            amount=invoice.amount,
            currency=invoice.currency,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            sent_date=invoice.sent_date,
            paid_date=invoice.paid_date,
            notes=invoice.notes,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_number": "INV-2025-000001",
                "client_id": 1,
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "company_id": 1,
                "order_id": 1,
                "order_description": "Website maintenance",
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


class InvoiceDetailResponseDTO(InvoiceResponseDTO):
    """Invoice with its payments and payment totals"""

    payments: List[PaymentResponseDTO] = Field(default_factory=list, description="Payments, newest first")
    payment_summary: Optional[PaymentSummaryDTO] = Field(default=None, description="Payment totals")


class GenerationErrorDTO(BaseModel):
    """One order the batch generation could not invoice"""

    order_id: int = Field(..., description="Order ID")
    error: str = Field(..., description="Reason the invoice was not generated")


class GenerateInvoicesResultDTO(BaseModel):
    """
    Result DTO for GenerateInvoicesForDueOrders

    Per-order failures are collected here rather than failing the batch.
    """

    generated: int = Field(..., description="Invoices created")
    invoice_ids: List[int] = Field(default_factory=list, description="IDs of the created invoices")
    errors: List[GenerationErrorDTO] = Field(default_factory=list, description="Per-order failures")

    class Config:
        json_schema_extra = {
            "example": {
                "generated": 2,
                "invoice_ids": [10, 11],
                "errors": [{"order_id": 7, "error": "No active company found"}]
            }
        }


class MarkOverdueResultDTO(BaseModel):
    """Result DTO for MarkOverdueInvoices"""

    marked: int = Field(..., description="Invoices moved to overdue")
    invoice_ids: List[int] = Field(default_factory=list, description="IDs moved to overdue")


class InvoiceStatisticsDTO(BaseModel):
    """Invoice counts and amounts"""

    total_count: int = Field(..., description="All invoices")
    counts_by_status: Dict[str, int] = Field(..., description="Invoice count per status")
    total_amount: Decimal = Field(..., description="Sum of all invoice amounts")
    paid_amount: Decimal = Field(..., description="Sum of paid invoice amounts")
    overdue_amount: Decimal = Field(..., description="Sum of overdue and past-due sent invoice amounts")

    class Config:
        json_schema_extra = {
            "example": {
                "total_count": 12,
                "counts_by_status": {"draft": 2, "sent": 4, "paid": 5, "overdue": 1, "cancelled": 0},
                "total_amount": "1200.00",
                "paid_amount": "500.00",
                "overdue_amount": "100.00"
            }
        }


class UpcomingInvoiceDTO(BaseModel):
    """An order due for invoicing soon"""

    order_id: int = Field(..., description="Order ID")
    client_id: int = Field(..., description="Client ID")
    client_name: str = Field(..., description="Client name")
    description: str = Field(..., description="Order description")
    amount: Decimal = Field(..., description="Expected invoice amount")
    frequency: str = Field(..., description="Order frequency")
    next_invoice_date: date = Field(..., description="Scheduled generation date")
    days_until: int = Field(..., description="Days from today")


class UpcomingInvoicesResponseDTO(BaseModel):
    """Orders invoicing within the look-ahead window"""

    days_ahead: int = Field(..., description="Look-ahead window in days")
    total_amount: Decimal = Field(..., description="Sum of expected invoice amounts")
    upcoming: List[UpcomingInvoiceDTO] = Field(..., description="Orders ordered by date")


class ListInvoicesQueryDTO(BaseModel):
    """Filters, sorting and paging for ListInvoices"""

    search: Optional[str] = Field(default=None, description="Match invoice number, client or order")
    client_id: Optional[int] = Field(default=None, description="Filter by client")
    order_id: Optional[int] = Field(default=None, description="Filter by order")
    status: Optional[InvoiceStatus] = Field(default=None, description="Filter by status")
    sort_by: str = Field(default="created_at", description="Sort column")
    sort_order: str = Field(default="desc", description="asc or desc")
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Page size (max 100)")


class ListInvoicesResponseDTO(BaseModel):
    """Paginated invoice list"""

    invoices: List[InvoiceResponseDTO] = Field(..., description="Invoices on this page")
    pagination: PaginationDTO = Field(..., description="Page metadata")


class DeleteInvoiceResponseDTO(BaseModel):
    """Response DTO for DeleteInvoice"""

    invoice_id: int = Field(..., description="Removed invoice ID")
    deleted: bool = Field(..., description="Always true on success")
