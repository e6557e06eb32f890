"""UpdateClient Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UpdateClientCommandDTO, ClientResponseDTO

OPTIONAL_FIELDS = ("company", "phone", "address")


class UpdateClient:
    """Use Case: Edit a client"""

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(
        self, client_id: int, command: UpdateClientCommandDTO
    ) -> Result[ClientResponseDTO]:
        try:
            client = await self.client_repo.get_by_id(client_id)
            if not client:
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND",
                        message=f"Client with ID {client_id} not found",
                    )
                )

            if command.email is not None and "@" not in command.email:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message="A valid email address is required",
                        reason=f"email={command.email}",
                    )
                )

            if command.name is not None:
                client.name = command.name.strip()
            if command.email is not None:
                client.email = command.email.strip()
            # Optional contact fields may be cleared with an explicit null
            for field in OPTIONAL_FIELDS:
                if field in command.model_fields_set:
                    setattr(client, field, getattr(command, field))

            updated_client = await self.client_repo.update(client)
            await self.uow.commit()
            return Return.ok(ClientResponseDTO.from_entity(updated_client))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_CLIENT_FAILED",
                    message="Failed to update client",
                    reason=str(e),
                )
            )
