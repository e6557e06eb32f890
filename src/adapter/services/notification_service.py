"""Notification Service Implementations

Provides concrete implementations for sending billing alerts.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs alerts

    Useful for development and testing, or as a fallback.
    """

    async def send_overdue_invoice_alert(self, invoice: Invoice) -> bool:
        logger.warning(
            f"[OVERDUE INVOICE] Invoice: {invoice.invoice_number}, "
            f"Client: {invoice.client_id}, "
            f"Amount: {invoice.amount} {invoice.currency}, "
            f"Due: {invoice.due_date.isoformat()}"
        )
        return True

    async def send_generation_failure_alert(self, order_id: int, error: str) -> bool:
        logger.warning(f"[GENERATION FAILED] Order: {order_id}, Error: {error}")
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that sends alerts via HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST alerts to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def _post(self, payload: dict, subject: str) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(f"Webhook notification sent for {subject} to {self.webhook_url}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook notification for {subject}: {e}")
            return False

    async def send_overdue_invoice_alert(self, invoice: Invoice) -> bool:
        payload = {
            "type": "invoice_overdue",
            "invoice_id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "client_id": invoice.client_id,
            "order_id": invoice.order_id,
            "amount": str(invoice.amount),
            "currency": invoice.currency,
            "issue_date": invoice.issue_date.isoformat(),
            "due_date": invoice.due_date.isoformat(),
        }
        return await self._post(payload, f"invoice {invoice.invoice_number}")

    async def send_generation_failure_alert(self, order_id: int, error: str) -> bool:
        payload = {
            "type": "invoice_generation_failed",
            "order_id": order_id,
            "error": error,
        }
        return await self._post(payload, f"order {order_id}")


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def _fan_out(self, method: str, *args) -> bool:
        success = False
        for service in self.services:
            try:
                if await getattr(service, method)(*args):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success

    async def send_overdue_invoice_alert(self, invoice: Invoice) -> bool:
        """
        Send overdue alert to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        return await self._fan_out("send_overdue_invoice_alert", invoice)

    async def send_generation_failure_alert(self, order_id: int, error: str) -> bool:
        return await self._fan_out("send_generation_failure_alert", order_id, error)


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
