"""Domain exceptions raised by the pure billing rules"""


class BillingDomainError(Exception):
    """Base class for billing rule violations"""
    pass


class InvalidFrequencyError(BillingDomainError):
    """Frequency/custom_days combination cannot produce a date"""
    pass


class InvalidStatusTransitionError(BillingDomainError):
    """Requested status change is not allowed from the current status"""

    def __init__(self, current, target, message: str = None):
        self.current = current
        self.target = target
        super().__init__(
            message or f"Cannot change status from {current.value} to {target.value}"
        )


class InvoiceNumberCollisionError(BillingDomainError):
    """Invoice number already taken by a concurrent writer"""

    def __init__(self, invoice_number: str):
        self.invoice_number = invoice_number
        super().__init__(f"Invoice number {invoice_number} already exists")
