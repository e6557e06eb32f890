"""Client Domain Entity

Customer that places recurring orders and receives invoices.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, String, Text
from src.domain.base import BaseModel, IdType, utc_now


class Client(BaseModel, table=True):
    """
    Client - Billed customer

    Domain Rules:
    - name and email are required
    - A client owns its orders and invoices
    - A client can only be deleted while it has no orders
    """

    __tablename__ = "clients"
    __table_args__ = (
        Index('ix_clients_email', 'email'),
        Index('ix_clients_name', 'name'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique client identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client display name"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Billing contact email"
    )

    company: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Client's company name"
    )

    phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Contact phone number"
    )

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Postal address"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Client creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Acme Corp",
                "email": "billing@acme.test",
                "company": "Acme Corporation",
                "phone": "+1 555 0100",
                "address": "1 Main St, Springfield",
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }
