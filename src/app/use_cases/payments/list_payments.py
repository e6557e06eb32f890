"""ListPayments Use Case"""

from libs.result import Result, Return
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases.common import PaginationDTO, normalize_paging
from .dtos import ListPaymentsQueryDTO, ListPaymentsResponseDTO, PaymentListItemDTO


class ListPayments:
    """Use case: Search payments, newest paid_date first"""

    def __init__(self, payment_repo: PaymentRepository, max_page_size: int = 100):
        self.payment_repo = payment_repo
        self.max_page_size = max_page_size

    async def execute(self, query: ListPaymentsQueryDTO) -> Result[ListPaymentsResponseDTO]:
        page, limit, offset = normalize_paging(query.page, query.limit, self.max_page_size)

        rows, total = await self.payment_repo.list(
            search=query.search,
            client_id=query.client_id,
            method=query.method,
            start_date=query.start_date,
            end_date=query.end_date,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListPaymentsResponseDTO(
                payments=[
                    PaymentListItemDTO.from_row(payment, invoice, client)
                    for payment, invoice, client in rows
                ],
                pagination=PaginationDTO.build(page, limit, total),
            )
        )
