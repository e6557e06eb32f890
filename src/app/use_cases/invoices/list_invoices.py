"""ListInvoices Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.common import PaginationDTO, normalize_paging
from .dtos import InvoiceResponseDTO, ListInvoicesQueryDTO, ListInvoicesResponseDTO


class ListInvoices:
    """Use case: Search and page through invoices"""

    def __init__(self, invoice_repo: InvoiceRepository, max_page_size: int = 100):
        self.invoice_repo = invoice_repo
        self.max_page_size = max_page_size

    async def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        page, limit, offset = normalize_paging(query.page, query.limit, self.max_page_size)

        rows, total = await self.invoice_repo.list(
            search=query.search,
            client_id=query.client_id,
            order_id=query.order_id,
            status=query.status,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[
                    InvoiceResponseDTO.from_entity(invoice, client, order)
                    for invoice, client, order in rows
                ],
                pagination=PaginationDTO.build(page, limit, total),
            )
        )
