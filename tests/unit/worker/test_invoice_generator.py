"""Unit tests for InvoiceGeneratorWorker

Tests cover:
- Worker initialization with configuration
- run_once wiring of the generation use cases
- Alerts for orders that could not be invoiced
- Disabled generation and use case failures
- run_forever loop and shutdown
"""

import asyncio
import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Error, Return
from src.app.use_cases.invoices.dtos import GenerateInvoicesResultDTO, GenerationErrorDTO
from src.domain.clock import FixedClock
from src.worker.invoice_generator import InvoiceGeneratorWorker


@pytest.fixture
def mock_session():
    """Mock async session"""
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    return session


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.send_generation_failure_alert = AsyncMock()
    return service


@pytest.fixture
def worker_patches(mock_session):
    """Patch engine, session factory and use cases of the worker module"""
    with patch("src.worker.invoice_generator.create_async_engine") as create_engine, \
            patch("src.worker.invoice_generator.sessionmaker") as session_maker, \
            patch("src.worker.invoice_generator.ApplicationConfig") as app_config, \
            patch("src.worker.invoice_generator.GenerateInvoiceFromOrder") as generate_one, \
            patch("src.worker.invoice_generator.GenerateInvoicesForDueOrders") as generate_due:
        engine = MagicMock()
        engine.dispose = AsyncMock()
        create_engine.return_value = engine
        session_maker.return_value = MagicMock(return_value=mock_session)
        app_config.DB_URI = "sqlite+aiosqlite://"
        app_config.INVOICE_GENERATION_ENABLED = True
        app_config.INVOICE_NUMBER_MAX_RETRIES = 3
        app_config.DEFAULT_LEAD_TIME_DAYS = 30
        app_config.DEFAULT_CURRENCY = "USD"
        yield {
            "create_engine": create_engine,
            "engine": engine,
            "config": app_config,
            "generate_one": generate_one,
            "generate_due": generate_due,
        }


class TestInvoiceGeneratorWorkerInit:
    """Test worker initialization"""

    def test_uses_configured_db_uri(self, worker_patches, mock_notification_service):
        # Act
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)

        # Assert
        assert worker.db_uri == "sqlite+aiosqlite://"
        worker_patches["create_engine"].assert_called_once_with(
            "sqlite+aiosqlite://", echo=False, future=True
        )

    def test_custom_db_uri(self, worker_patches, mock_notification_service):
        worker = InvoiceGeneratorWorker(
            db_uri="postgresql+asyncpg://custom/db",
            notification_service=mock_notification_service,
        )

        assert worker.db_uri == "postgresql+asyncpg://custom/db"


@pytest.mark.asyncio
class TestInvoiceGeneratorWorkerRunOnce:
    """Test a single generation run"""

    async def test_run_once_returns_result(self, worker_patches, mock_notification_service):
        """
        Given: Two due orders generate successfully
        When: run_once is called
        Then: The result is returned and no alert is sent
        """
        # Arrange
        expected = GenerateInvoicesResultDTO(generated=2, invoice_ids=[10, 11], errors=[])
        worker_patches["generate_due"].return_value.execute = AsyncMock(return_value=Return.ok(expected))
        clock = FixedClock(date(2025, 2, 1))
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service, clock=clock)

        # Act
        result = await worker.run_once()

        # Assert
        assert result == expected
        generate_kwargs = worker_patches["generate_one"].call_args.kwargs
        assert generate_kwargs["clock"] is clock
        assert generate_kwargs["max_retries"] == 3
        assert generate_kwargs["currency"] == "USD"
        mock_notification_service.send_generation_failure_alert.assert_not_called()

    async def test_alerts_on_failed_orders(self, worker_patches, mock_notification_service):
        expected = GenerateInvoicesResultDTO(
            generated=1,
            invoice_ids=[10],
            errors=[GenerationErrorDTO(order_id=7, error="No active company found to issue the invoice")],
        )
        worker_patches["generate_due"].return_value.execute = AsyncMock(return_value=Return.ok(expected))
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)

        await worker.run_once()

        mock_notification_service.send_generation_failure_alert.assert_called_once_with(
            7, "No active company found to issue the invoice"
        )

    async def test_disabled_generation_skips(self, worker_patches, mock_notification_service):
        worker_patches["config"].INVOICE_GENERATION_ENABLED = False
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)

        result = await worker.run_once()

        assert result.generated == 0
        worker_patches["generate_due"].assert_not_called()

    async def test_use_case_error_raises(self, worker_patches, mock_notification_service):
        worker_patches["generate_due"].return_value.execute = AsyncMock(
            return_value=Return.err(Error(code="GENERATE_DUE_INVOICES_FAILED", message="Failed to load due orders"))
        )
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)

        with pytest.raises(RuntimeError, match="Failed to load due orders"):
            await worker.run_once()


@pytest.mark.asyncio
class TestInvoiceGeneratorWorkerLifecycle:
    """Test continuous execution and shutdown"""

    async def test_run_forever_survives_failed_cycle(self, worker_patches, mock_notification_service):
        # Arrange
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)
        worker.run_once = AsyncMock(side_effect=[Exception("connection refused"), GenerateInvoicesResultDTO(generated=0)])

        # Act
        with patch("src.worker.invoice_generator.asyncio.sleep", new=AsyncMock(side_effect=[None, asyncio.CancelledError()])):
            with pytest.raises(asyncio.CancelledError):
                await worker.run_forever(interval_seconds=1)

        # Assert
        assert worker.run_once.call_count == 2

    async def test_shutdown_disposes_engine(self, worker_patches, mock_notification_service):
        worker = InvoiceGeneratorWorker(notification_service=mock_notification_service)

        await worker.shutdown()

        worker_patches["engine"].dispose.assert_called_once()
