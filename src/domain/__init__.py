from .base import BaseModel, IdType, utc_now
from .client import Client
from .company import Company
from .order import Order, OrderFrequency, OrderStatus
from .invoice import Invoice, InvoiceStatus
from .payment import Payment, PaymentMethod

__all__ = [
    "BaseModel",
    "IdType",
    "utc_now",
    "Client",
    "Company",
    "Order",
    "OrderFrequency",
    "OrderStatus",
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentMethod",
]
