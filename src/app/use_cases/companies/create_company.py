"""CreateCompany Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.company import Company
from .dtos import CreateCompanyCommandDTO, CompanyResponseDTO

logger = logging.getLogger(__name__)


class CreateCompany:
    """
    Use Case: Register an issuing company

    Business Rules:
    1. The first company becomes the default automatically
    2. Creating a company with is_default=true clears the flag elsewhere
       in the same transaction
    """

    def __init__(self, uow: UnitOfWork, company_repo: CompanyRepository):
        self.uow = uow
        self.company_repo = company_repo

    async def execute(self, command: CreateCompanyCommandDTO) -> Result[CompanyResponseDTO]:
        try:
            existing = await self.company_repo.list_all()
            is_default = command.is_default or not existing

            company = await self.company_repo.create(
                Company(
                    name=command.name.strip(),
                    email=command.email.strip(),
                    address=command.address,
                    city=command.city,
                    country=command.country,
                    tax_code=command.tax_code,
                    is_active=True,
                    is_default=is_default,
                )
            )
            if is_default:
                await self.company_repo.clear_default(except_company_id=company.id)

            await self.uow.commit()
            logger.info(f"Created company {company.id} (default={is_default})")
            return Return.ok(CompanyResponseDTO.from_entity(company))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_COMPANY_FAILED",
                    message="Failed to create company",
                    reason=str(e),
                )
            )
