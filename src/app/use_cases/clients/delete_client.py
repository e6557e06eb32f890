"""DeleteClient Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import DeleteClientResponseDTO

logger = logging.getLogger(__name__)


class DeleteClient:
    """
    Use Case: Remove a client

    Refused while the client still owns orders.
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, client_id: int) -> Result[DeleteClientResponseDTO]:
        try:
            client = await self.client_repo.get_by_id(client_id)
            if not client:
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND",
                        message=f"Client with ID {client_id} not found",
                    )
                )

            order_count = await self.client_repo.count_orders(client_id)
            if order_count > 0:
                return Return.err(
                    Error(
                        code="CLIENT_HAS_ORDERS",
                        message="Cannot delete client with existing orders",
                        reason=f"client_id={client_id}, orders={order_count}",
                    )
                )

            await self.client_repo.delete(client)
            await self.uow.commit()

            logger.info(f"Deleted client {client_id}")
            return Return.ok(DeleteClientResponseDTO(client_id=client_id, deleted=True))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_CLIENT_FAILED",
                    message="Failed to delete client",
                    reason=str(e),
                )
            )
