"""Mapping from use case errors to HTTP responses"""

from typing import Optional
from fastapi import status
from libs.result import Error

BAD_REQUEST_CODES = {
    "VALIDATION_ERROR",
    "INVALID_FREQUENCY_CUSTOM_DAYS",
    "INVALID_START_DATE",
    "INVALID_AMOUNT",
    "INVALID_CURRENCY",
    "INVALID_DATES",
    "ORDER_CLIENT_MISMATCH",
    "OVERPAYMENT",
}

CONFLICT_CODES = {
    "INVOICE_GENERATION_NOT_ALLOWED",
    "INVALID_STATUS_TRANSITION",
    "INVOICE_UPDATE_NOT_ALLOWED",
    "INVOICE_DELETE_NOT_ALLOWED",
    "INVOICE_CANCELLED",
    "NO_ACTIVE_COMPANY",
    "CLIENT_HAS_ORDERS",
    "COMPANY_HAS_ACTIVE_INVOICES",
    "INVOICE_NUMBER_TAKEN",
    "INVOICE_NUMBER_COLLISION",
}


def status_code_for(code: str) -> int:
    if code in BAD_REQUEST_CODES:
        return status.HTTP_400_BAD_REQUEST
    if code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ClientError(Exception):
    """
    Raised by routes when a use case returns an error

    The app's exception handler renders it as
    {"error": {"code": ..., "message": ...}}; reason is logged only.

    Args:
        error: Error returned by the use case
        status_code: Explicit HTTP status, derived from error.code when omitted
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_code_for(error.code)

    def to_dict(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
