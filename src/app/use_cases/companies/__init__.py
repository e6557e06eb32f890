"""Issuing company use cases"""
from .create_company import CreateCompany
from .get_company import GetCompany
from .list_companies import ListCompanies
from .update_company import UpdateCompany
from .deactivate_company import DeactivateCompany
from .set_default_company import SetDefaultCompany
from .dtos import (
    CreateCompanyCommandDTO,
    UpdateCompanyCommandDTO,
    CompanyResponseDTO,
    ListCompaniesResponseDTO,
)

__all__ = [
    "CreateCompany",
    "GetCompany",
    "ListCompanies",
    "UpdateCompany",
    "DeactivateCompany",
    "SetDefaultCompany",
    "CreateCompanyCommandDTO",
    "UpdateCompanyCommandDTO",
    "CompanyResponseDTO",
    "ListCompaniesResponseDTO",
]
