"""Invoice lifecycle use cases"""
from .generate_invoice_from_order import GenerateInvoiceFromOrder
from .generate_invoices_for_due_orders import GenerateInvoicesForDueOrders
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .change_invoice_status import ChangeInvoiceStatus
from .delete_invoice import DeleteInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .mark_overdue_invoices import MarkOverdueInvoices
from .get_invoice_statistics import GetInvoiceStatistics
from .get_upcoming_invoices import GetUpcomingInvoices
from .dtos import (
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    ChangeInvoiceStatusCommandDTO,
    InvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    GenerationErrorDTO,
    GenerateInvoicesResultDTO,
    MarkOverdueResultDTO,
    InvoiceStatisticsDTO,
    UpcomingInvoiceDTO,
    UpcomingInvoicesResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    DeleteInvoiceResponseDTO,
)

__all__ = [
    "GenerateInvoiceFromOrder",
    "GenerateInvoicesForDueOrders",
    "CreateInvoice",
    "UpdateInvoice",
    "ChangeInvoiceStatus",
    "DeleteInvoice",
    "GetInvoice",
    "ListInvoices",
    "MarkOverdueInvoices",
    "GetInvoiceStatistics",
    "GetUpcomingInvoices",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "ChangeInvoiceStatusCommandDTO",
    "InvoiceResponseDTO",
    "InvoiceDetailResponseDTO",
    "GenerationErrorDTO",
    "GenerateInvoicesResultDTO",
    "MarkOverdueResultDTO",
    "InvoiceStatisticsDTO",
    "UpcomingInvoiceDTO",
    "UpcomingInvoicesResponseDTO",
    "ListInvoicesQueryDTO",
    "ListInvoicesResponseDTO",
    "DeleteInvoiceResponseDTO",
]
