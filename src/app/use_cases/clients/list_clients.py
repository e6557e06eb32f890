"""ListClients Use Case"""

from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases.common import PaginationDTO, normalize_paging
from .dtos import ClientResponseDTO, ListClientsQueryDTO, ListClientsResponseDTO


class ListClients:
    """Use case: Search and page through clients, newest first"""

    def __init__(self, client_repo: ClientRepository, max_page_size: int = 100):
        self.client_repo = client_repo
        self.max_page_size = max_page_size

    async def execute(self, query: ListClientsQueryDTO) -> Result[ListClientsResponseDTO]:
        page, limit, offset = normalize_paging(query.page, query.limit, self.max_page_size)
        clients, total = await self.client_repo.list(
            search=query.search, limit=limit, offset=offset
        )
        return Return.ok(
            ListClientsResponseDTO(
                clients=[ClientResponseDTO.from_entity(client) for client in clients],
                pagination=PaginationDTO.build(page, limit, total),
            )
        )
