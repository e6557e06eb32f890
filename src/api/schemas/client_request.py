"""Request schemas for Client and Company API"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _check_email(v):
    if v is None:
        return v
    v = v.strip()
    local, _, domain = v.partition("@")
    if not local or "." not in domain:
        raise ValueError("Invalid email address")
    return v


class CreateClientRequestSchema(BaseModel):
    """Request schema for POST /clients"""

    name: str = Field(..., min_length=1, max_length=255, description="Client display name")
    email: str = Field(..., max_length=255, description="Billing email")
    company: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)


class UpdateClientRequestSchema(BaseModel):
    """Request schema for PUT /clients/{client_id}"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)


class CreateCompanyRequestSchema(BaseModel):
    """Request schema for POST /companies"""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None, max_length=100)
    country: Optional[str] = Field(default=None, max_length=100)
    tax_code: Optional[str] = Field(default=None, max_length=50)
    is_default: bool = Field(default=False)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)


class UpdateCompanyRequestSchema(BaseModel):
    """Request schema for PUT/PATCH /companies/{company_id}"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None, max_length=100)
    country: Optional[str] = Field(default=None, max_length=100)
    tax_code: Optional[str] = Field(default=None, max_length=50)
    is_active: Optional[bool] = Field(default=None)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)
