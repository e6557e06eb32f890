"""Payment reconciliation use cases"""
from .record_payment import RecordPayment
from .update_payment import UpdatePayment
from .delete_payment import DeletePayment
from .get_invoice_payments import GetInvoicePayments
from .list_payments import ListPayments
from .dtos import (
    RecordPaymentCommandDTO,
    UpdatePaymentCommandDTO,
    PaymentResponseDTO,
    PaymentSummaryDTO,
    InvoicePaymentStateDTO,
    PaymentMutationResponseDTO,
    DeletePaymentResponseDTO,
    InvoicePaymentsResponseDTO,
    PaymentListItemDTO,
    ListPaymentsQueryDTO,
    ListPaymentsResponseDTO,
)

__all__ = [
    "RecordPayment",
    "UpdatePayment",
    "DeletePayment",
    "GetInvoicePayments",
    "ListPayments",
    "RecordPaymentCommandDTO",
    "UpdatePaymentCommandDTO",
    "PaymentResponseDTO",
    "PaymentSummaryDTO",
    "InvoicePaymentStateDTO",
    "PaymentMutationResponseDTO",
    "DeletePaymentResponseDTO",
    "InvoicePaymentsResponseDTO",
    "PaymentListItemDTO",
    "ListPaymentsQueryDTO",
    "ListPaymentsResponseDTO",
]
