"""Background workers for billing service"""
from .invoice_generator import InvoiceGeneratorWorker
from .overdue_marker import OverdueMarkerWorker

__all__ = ["InvoiceGeneratorWorker", "OverdueMarkerWorker"]
