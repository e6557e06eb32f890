"""GetClient Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from .dtos import ClientResponseDTO


class GetClient:
    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, client_id: int) -> Result[ClientResponseDTO]:
        client = await self.client_repo.get_by_id(client_id)
        if not client:
            return Return.err(
                Error(
                    code="CLIENT_NOT_FOUND",
                    message=f"Client with ID {client_id} not found",
                )
            )
        return Return.ok(ClientResponseDTO.from_entity(client))
