"""ListOrders Use Case"""

from libs.result import Result, Return
from src.app.repositories.order_repository import OrderRepository
from src.app.use_cases.common import PaginationDTO, normalize_paging
from .dtos import ListOrdersQueryDTO, ListOrdersResponseDTO, OrderResponseDTO


class ListOrders:
    """
    Use case: Search and page through orders

    Orders are joined with their client so the search covers client name
    and email.
    """

    def __init__(self, order_repo: OrderRepository, max_page_size: int = 100):
        self.order_repo = order_repo
        self.max_page_size = max_page_size

    async def execute(self, query: ListOrdersQueryDTO) -> Result[ListOrdersResponseDTO]:
        page, limit, offset = normalize_paging(query.page, query.limit, self.max_page_size)

        rows, total = await self.order_repo.list(
            search=query.search,
            client_id=query.client_id,
            status=query.status,
            frequency=query.frequency,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListOrdersResponseDTO(
                orders=[OrderResponseDTO.from_entity(order, client) for order, client in rows],
                pagination=PaginationDTO.build(page, limit, total),
            )
        )
