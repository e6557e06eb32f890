"""GetInvoiceStatistics Use Case"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.clock import Clock, SystemClock
from .dtos import InvoiceStatisticsDTO


class GetInvoiceStatistics:
    """Use case: Invoice counts per status with total, paid and overdue sums"""

    def __init__(self, invoice_repo: InvoiceRepository, clock: Optional[Clock] = None):
        self.invoice_repo = invoice_repo
        self.clock = clock or SystemClock()

    async def execute(self) -> Result[InvoiceStatisticsDTO]:
        stats = await self.invoice_repo.get_statistics(self.clock.today())
        return Return.ok(
            InvoiceStatisticsDTO(
                total_count=stats["total_count"],
                counts_by_status={status.value: count for status, count in stats["counts"].items()},
                total_amount=stats["total_amount"],
                paid_amount=stats["paid_amount"],
                overdue_amount=stats["overdue_amount"],
            )
        )
