from .client_repository import SqlAlchemyClientRepository
from .company_repository import SqlAlchemyCompanyRepository
from .order_repository import SqlAlchemyOrderRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .report_repository import SqlAlchemyReportRepository

__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyReportRepository",
]
