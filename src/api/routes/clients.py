"""Client API Routes"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.client_request import CreateClientRequestSchema, UpdateClientRequestSchema
from src.app.use_cases.clients import (
    CreateClient,
    UpdateClient,
    GetClient,
    ListClients,
    DeleteClient,
    CreateClientCommandDTO,
    UpdateClientCommandDTO,
    ClientResponseDTO,
    ListClientsQueryDTO,
    ListClientsResponseDTO,
    DeleteClientResponseDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post("", response_model=ClientResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_client(
    request: CreateClientRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Register a client"""
    use_case = CreateClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(CreateClientCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListClientsResponseDTO)
async def list_clients(
    search: Optional[str] = Query(default=None, description="Match name, email or company"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
):
    """List clients, newest first"""
    use_case = ListClients(SqlAlchemyClientRepository(session), ApplicationConfig.MAX_PAGE_SIZE)
    result = await use_case.execute(ListClientsQueryDTO(search=search, page=page, limit=limit))
    return result.value


@router.get("/{client_id}", response_model=ClientResponseDTO)
async def get_client(client_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetClient(SqlAlchemyClientRepository(session)).execute(client_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{client_id}", response_model=ClientResponseDTO)
async def update_client(
    client_id: int,
    request: UpdateClientRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Edit a client; omitted fields keep their value"""
    use_case = UpdateClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    command = UpdateClientCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(client_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete(
    "/{client_id}",
    response_model=DeleteClientResponseDTO,
    responses={
        409: {
            "description": "Client still has orders",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CLIENT_HAS_ORDERS",
                            "message": "Cannot delete client with existing orders"
                        }
                    }
                }
            }
        }
    }
)
async def delete_client(client_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a client that has no orders"""
    use_case = DeleteClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(client_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
