"""Overdue Invoice Worker

Daily sweep moving sent invoices past their due date to overdue and
alerting on each one.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.use_cases.invoices import MarkOverdueInvoices, MarkOverdueResultDTO
from src.domain.clock import Clock, SystemClock

logger = logging.getLogger(__name__)


class OverdueMarkerWorker:
    """
    Background worker for the overdue sweep

    Only invoices changed by this run are alerted, so re-running the sweep
    never repeats an alert.

    Usage:
        worker = OverdueMarkerWorker()
        result = await worker.run_once()

        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        notification_service: Optional[NotificationService] = None,
        clock: Optional[Clock] = None,
    ):
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.notification_service = notification_service or create_notification_service(
            ApplicationConfig.NOTIFICATION_WEBHOOK
        )
        self.clock = clock or SystemClock()

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("OverdueMarkerWorker initialized")

    async def run_once(self) -> MarkOverdueResultDTO:
        """
        Mark overdue invoices once and alert on each

        Returns:
            MarkOverdueResultDTO with the IDs moved to overdue
        """
        if not ApplicationConfig.OVERDUE_SWEEP_ENABLED:
            logger.info("Overdue sweep is disabled, skipping")
            return MarkOverdueResultDTO(marked=0, invoice_ids=[])

        async with self.async_session_factory() as session:
            invoice_repo = SqlAlchemyInvoiceRepository(session)
            use_case = MarkOverdueInvoices(
                uow=SqlAlchemyUnitOfWork(session),
                invoice_repo=invoice_repo,
                clock=self.clock,
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Overdue sweep failed: {result.error.message}")
                raise RuntimeError(f"Overdue sweep failed: {result.error.message}")

            response = result.value

            for invoice_id in response.invoice_ids:
                invoice = await invoice_repo.get_by_id(invoice_id)
                if invoice:
                    await self.notification_service.send_overdue_invoice_alert(invoice)

            return response

    async def run_forever(self, interval_seconds: int = 86400):
        logger.info(f"Starting continuous overdue sweep with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(f"Overdue sweep complete. Marked {result.marked} invoices")
            except Exception as e:
                logger.error(f"Overdue sweep failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueMarkerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.overdue_marker --once
        python -m src.worker.overdue_marker --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.OVERDUE_SWEEP_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    args = parser.parse_args()

    worker = OverdueMarkerWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print(f"Overdue sweep complete: {result.marked} invoices marked overdue")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
