from .client_repository import ClientRepository
from .company_repository import CompanyRepository
from .order_repository import OrderRepository
from .invoice_repository import InvoiceRepository
from .payment_repository import PaymentRepository
from .report_repository import ReportRepository

__all__ = [
    "ClientRepository",
    "CompanyRepository",
    "OrderRepository",
    "InvoiceRepository",
    "PaymentRepository",
    "ReportRepository",
]
