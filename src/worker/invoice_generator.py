"""Recurring Invoice Generation Worker

Periodically generates invoices for every active order whose next invoice
date has arrived. Can be run as a standalone script or integrated with a
scheduler.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.company_repository import SqlAlchemyCompanyRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.use_cases.invoices import (
    GenerateInvoiceFromOrder,
    GenerateInvoicesForDueOrders,
    GenerateInvoicesResultDTO,
)
from src.domain.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


class InvoiceGeneratorWorker:
    """
    Background worker for recurring invoice generation

    Features:
    - Generates one draft invoice per due order, each in its own transaction
    - Sends an alert for every order that could not be invoiced
    - Safe to re-run: invoiced orders are no longer due
    - Can run once or continuously (default: hourly)

    Usage:
        worker = InvoiceGeneratorWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        notification_service: Optional[NotificationService] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            notification_service: Alert channel (defaults to logging, plus
                the webhook when NOTIFICATION_WEBHOOK is set)
            clock: Time source (defaults to the system clock)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.notification_service = notification_service or create_notification_service(
            ApplicationConfig.NOTIFICATION_WEBHOOK
        )
        self.clock = clock or SystemClock()

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("InvoiceGeneratorWorker initialized")

    async def run_once(self) -> GenerateInvoicesResultDTO:
        """
        Generate invoices for all due orders once

        Returns:
            GenerateInvoicesResultDTO with created invoice IDs and per-order errors
        """
        if not ApplicationConfig.INVOICE_GENERATION_ENABLED:
            logger.info("Invoice generation is disabled, skipping")
            return GenerateInvoicesResultDTO(generated=0, invoice_ids=[], errors=[])

        async with self.async_session_factory() as session:
            generate_invoice = GenerateInvoiceFromOrder(
                uow=SqlAlchemyUnitOfWork(session),
                order_repo=SqlAlchemyOrderRepository(session),
                invoice_repo=SqlAlchemyInvoiceRepository(session),
                company_repo=SqlAlchemyCompanyRepository(session),
                clock=self.clock,
                max_retries=ApplicationConfig.INVOICE_NUMBER_MAX_RETRIES,
                default_lead_time_days=ApplicationConfig.DEFAULT_LEAD_TIME_DAYS,
                currency=ApplicationConfig.DEFAULT_CURRENCY,
            )
            use_case = GenerateInvoicesForDueOrders(
                order_repo=SqlAlchemyOrderRepository(session),
                generate_invoice=generate_invoice,
                clock=self.clock,
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Invoice generation failed: {result.error.message}")
                raise RuntimeError(f"Invoice generation failed: {result.error.message}")

            response = result.value

            for error in response.errors:
                await self.notification_service.send_generation_failure_alert(
                    error.order_id, error.error
                )

            return response

    async def run_forever(self, interval_seconds: int = 3600):
        """
        Run generation continuously at the given interval

        Args:
            interval_seconds: Seconds between runs (default: 1 hour)
        """
        logger.info(f"Starting continuous invoice generation with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Generation cycle complete. Generated {result.generated} invoices, "
                    f"{len(result.errors)} failures"
                )
            except Exception as e:
                logger.error(f"Generation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("InvoiceGeneratorWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.invoice_generator --once
        python -m src.worker.invoice_generator --interval 600
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Recurring Invoice Generation Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.INVOICE_GENERATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 3600 = 1 hour)"
    )
    args = parser.parse_args()

    worker = InvoiceGeneratorWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Invoice generation complete:")
            print(f"  Invoices generated: {result.generated}")
            print(f"  Failures: {len(result.errors)}")
            for error in result.errors:
                print(f"  - Order {error.order_id}: {error.error}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
