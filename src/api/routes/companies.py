"""Company API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.schemas.client_request import CreateCompanyRequestSchema, UpdateCompanyRequestSchema
from src.app.use_cases.companies import (
    CreateCompany,
    DeactivateCompany,
    GetCompany,
    ListCompanies,
    SetDefaultCompany,
    UpdateCompany,
    CreateCompanyCommandDTO,
    UpdateCompanyCommandDTO,
    CompanyResponseDTO,
    ListCompaniesResponseDTO,
)
from src.adapter.repositories.company_repository import SqlAlchemyCompanyRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_company(
    request: CreateCompanyRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Register an issuing company.

    The first company, or one created with `is_default: true`, becomes the
    company used for generated invoices.
    """
    use_case = CreateCompany(SqlAlchemyUnitOfWork(session), SqlAlchemyCompanyRepository(session))
    result = await use_case.execute(CreateCompanyCommandDTO(**request.model_dump()))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListCompaniesResponseDTO)
async def list_companies(session: AsyncSession = Depends(get_session)):
    result = await ListCompanies(SqlAlchemyCompanyRepository(session)).execute()
    return result.value


@router.get("/{company_id}", response_model=CompanyResponseDTO)
async def get_company(company_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetCompany(SqlAlchemyCompanyRepository(session)).execute(company_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{company_id}", response_model=CompanyResponseDTO)
@router.patch("/{company_id}", response_model=CompanyResponseDTO)
async def update_company(
    company_id: int,
    request: UpdateCompanyRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Edit a company. Only the fields present in the body change.

    `is_active: false` is refused with 409 COMPANY_HAS_ACTIVE_INVOICES while
    the company has draft, sent or overdue invoices.
    """
    use_case = UpdateCompany(SqlAlchemyUnitOfWork(session), SqlAlchemyCompanyRepository(session))
    command = UpdateCompanyCommandDTO(**request.model_dump(exclude_unset=True))
    result = await use_case.execute(company_id, command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{company_id}", response_model=CompanyResponseDTO)
async def deactivate_company(company_id: int, session: AsyncSession = Depends(get_session)):
    """Deactivate a company; it stays attached to the invoices it issued"""
    use_case = DeactivateCompany(SqlAlchemyUnitOfWork(session), SqlAlchemyCompanyRepository(session))
    result = await use_case.execute(company_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put("/{company_id}/default", response_model=CompanyResponseDTO)
async def set_default_company(company_id: int, session: AsyncSession = Depends(get_session)):
    """Make a company the default issuer"""
    use_case = SetDefaultCompany(SqlAlchemyUnitOfWork(session), SqlAlchemyCompanyRepository(session))
    result = await use_case.execute(company_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
