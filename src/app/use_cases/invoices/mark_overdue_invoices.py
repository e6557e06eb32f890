"""MarkOverdueInvoices Use Case"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.clock import Clock, SystemClock
from .dtos import MarkOverdueResultDTO

logger = logging.getLogger(__name__)


class MarkOverdueInvoices:
    """
    Use Case: Flag sent invoices past their due date as overdue

    Idempotent: a second run on the same day finds nothing to update.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        clock: Optional[Clock] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[MarkOverdueResultDTO]:
        try:
            today = self.clock.today()
            candidate_ids = await self.invoice_repo.get_overdue_candidate_ids(today)
            updated_ids = await self.invoice_repo.mark_overdue(candidate_ids, today)
            await self.uow.commit()

            if updated_ids:
                logger.info(f"Marked {len(updated_ids)} invoices overdue as of {today}")
            return Return.ok(MarkOverdueResultDTO(marked=len(updated_ids), invoice_ids=updated_ids))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )
