"""Data Transfer Objects for Client Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.use_cases.common import PaginationDTO
from src.domain.client import Client


class CreateClientCommandDTO(BaseModel):
    """
    Command DTO for creating a client

    Used as input to CreateClient use case.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Client display name"
    )

    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Billing email"
    )

    company: Optional[str] = Field(default=None, max_length=255, description="Client's company name")
    phone: Optional[str] = Field(default=None, max_length=50, description="Phone number")
    address: Optional[str] = Field(default=None, description="Postal address")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Corp",
                "email": "billing@acme.test",
                "company": "Acme Corporation",
                "phone": "+1 555 0100",
                "address": "1 Main St"
            }
        }


class UpdateClientCommandDTO(BaseModel):
    """Command DTO for editing a client; unset fields are left as is"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255, description="New name")
    email: Optional[str] = Field(default=None, min_length=3, max_length=255, description="New email")
    company: Optional[str] = Field(default=None, max_length=255, description="New company name")
    phone: Optional[str] = Field(default=None, max_length=50, description="New phone number")
    address: Optional[str] = Field(default=None, description="New address")


class ClientResponseDTO(BaseModel):
    """A client"""

    id: int = Field(..., description="Client ID")
    name: str = Field(..., description="Client display name")
    email: str = Field(..., description="Billing email")
    company: Optional[str] = Field(default=None, description="Client's company name")
    phone: Optional[str] = Field(default=None, description="Phone number")
    address: Optional[str] = Field(default=None, description="Postal address")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponseDTO":
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            company=client.company,
            phone=client.phone,
            address=client.address,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class ListClientsQueryDTO(BaseModel):
    """Search and paging for ListClients"""

    search: Optional[str] = Field(default=None, description="Match name, email or company")
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Page size (max 100)")


class ListClientsResponseDTO(BaseModel):
    """Paginated client list"""

    clients: List[ClientResponseDTO] = Field(..., description="Clients on this page")
    pagination: PaginationDTO = Field(..., description="Page metadata")


class DeleteClientResponseDTO(BaseModel):
    """Response DTO for DeleteClient"""

    client_id: int = Field(..., description="Removed client ID")
    deleted: bool = Field(..., description="Always true on success")
