"""Company Domain Entity

The issuing business printed on invoices.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import DateTime, Boolean, String, Text
from src.domain.base import BaseModel, IdType, utc_now


class Company(BaseModel, table=True):
    """
    Company - Invoice issuer

    Domain Rules:
    - At most one company is flagged is_default
    - Generated invoices use the default company, falling back to the
      first active one
    """

    __tablename__ = "companies"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique company identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Legal company name"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Company contact email"
    )

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Street address"
    )

    city: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="City"
    )

    country: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Country"
    )

    tax_code: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Tax / VAT registration code"
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
        description="Whether the company may issue invoices"
    )

    is_default: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Whether this company issues generated invoices"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Company creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Last update timestamp"
    )
