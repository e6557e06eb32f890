"""Notification Service Interface

Defines the contract for alerting about billing events raised by the
background sweeps.
"""

from abc import ABC, abstractmethod
from src.domain.invoice import Invoice


class NotificationService(ABC):
    """
    Abstract notification service for sending billing alerts

    Implementations can send notifications via:
    - Log output
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_overdue_invoice_alert(self, invoice: Invoice) -> bool:
        """
        Send alert for an invoice that just became overdue

        Args:
            invoice: Invoice now in overdue status

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass

    @abstractmethod
    async def send_generation_failure_alert(self, order_id: int, error: str) -> bool:
        """
        Send alert for an order whose recurring invoice could not be generated

        Args:
            order_id: Order that failed
            error: Error message from the generation attempt

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
