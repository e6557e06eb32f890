"""Client management use cases"""
from .create_client import CreateClient
from .update_client import UpdateClient
from .get_client import GetClient
from .list_clients import ListClients
from .delete_client import DeleteClient
from .dtos import (
    CreateClientCommandDTO,
    UpdateClientCommandDTO,
    ClientResponseDTO,
    ListClientsQueryDTO,
    ListClientsResponseDTO,
    DeleteClientResponseDTO,
)

__all__ = [
    "CreateClient",
    "UpdateClient",
    "GetClient",
    "ListClients",
    "DeleteClient",
    "CreateClientCommandDTO",
    "UpdateClientCommandDTO",
    "ClientResponseDTO",
    "ListClientsQueryDTO",
    "ListClientsResponseDTO",
    "DeleteClientResponseDTO",
]
