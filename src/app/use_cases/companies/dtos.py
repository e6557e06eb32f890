"""Data Transfer Objects for Company Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.company import Company


class CreateCompanyCommandDTO(BaseModel):
    """Command DTO for registering an issuing company"""

    name: str = Field(..., min_length=1, max_length=255, description="Legal name")
    email: str = Field(..., min_length=3, max_length=255, description="Contact email printed on invoices")
    address: Optional[str] = Field(default=None, description="Street address")
    city: Optional[str] = Field(default=None, max_length=100, description="City")
    country: Optional[str] = Field(default=None, max_length=100, description="Country")
    tax_code: Optional[str] = Field(default=None, max_length=50, description="Tax identifier")
    is_default: bool = Field(default=False, description="Make this the default issuing company")


class UpdateCompanyCommandDTO(BaseModel):
    """Command DTO for editing a company; unset fields are left as is"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255, description="Legal name")
    email: Optional[str] = Field(default=None, min_length=3, max_length=255, description="Contact email")
    address: Optional[str] = Field(default=None, description="Street address")
    city: Optional[str] = Field(default=None, max_length=100, description="City")
    country: Optional[str] = Field(default=None, max_length=100, description="Country")
    tax_code: Optional[str] = Field(default=None, max_length=50, description="Tax identifier")
    is_active: Optional[bool] = Field(default=None, description="Reactivate or deactivate the company")


class CompanyResponseDTO(BaseModel):
    """An issuing company"""

    id: int = Field(..., description="Company ID")
    name: str = Field(..., description="Legal name")
    email: str = Field(..., description="Contact email")
    address: Optional[str] = Field(default=None, description="Street address")
    city: Optional[str] = Field(default=None, description="City")
    country: Optional[str] = Field(default=None, description="Country")
    tax_code: Optional[str] = Field(default=None, description="Tax identifier")
    is_active: bool = Field(..., description="Whether the company can issue invoices")
    is_default: bool = Field(..., description="Whether generated invoices use this company")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, company: Company) -> "CompanyResponseDTO":
        return cls(
            id=company.id,
            name=company.name,
            email=company.email,
            address=company.address,
            city=company.city,
            country=company.country,
            tax_code=company.tax_code,
            is_active=company.is_active,
            is_default=company.is_default,
            created_at=company.created_at,
        )


class ListCompaniesResponseDTO(BaseModel):
    companies: List[CompanyResponseDTO] = Field(..., description="All companies")
