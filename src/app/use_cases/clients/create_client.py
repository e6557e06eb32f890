"""CreateClient Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.client import Client
from .dtos import CreateClientCommandDTO, ClientResponseDTO

logger = logging.getLogger(__name__)


class CreateClient:
    """Use Case: Register a client to bill"""

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, command: CreateClientCommandDTO) -> Result[ClientResponseDTO]:
        try:
            if "@" not in command.email:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message="A valid email address is required",
                        reason=f"email={command.email}",
                    )
                )

            client = await self.client_repo.create(
                Client(
                    name=command.name.strip(),
                    email=command.email.strip(),
                    company=command.company,
                    phone=command.phone,
                    address=command.address,
                )
            )
            await self.uow.commit()

            logger.info(f"Created client {client.id}")
            return Return.ok(ClientResponseDTO.from_entity(client))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_CLIENT_FAILED",
                    message="Failed to create client",
                    reason=str(e),
                )
            )
