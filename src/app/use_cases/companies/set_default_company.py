"""SetDefaultCompany Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CompanyResponseDTO

logger = logging.getLogger(__name__)


class SetDefaultCompany:
    """
    Use Case: Choose the company that issues generated invoices

    Clearing the previous default and setting the new one happen in one
    transaction, so at most one company is ever the default.
    """

    def __init__(self, uow: UnitOfWork, company_repo: CompanyRepository):
        self.uow = uow
        self.company_repo = company_repo

    async def execute(self, company_id: int) -> Result[CompanyResponseDTO]:
        try:
            company = await self.company_repo.get_by_id(company_id)
            if not company:
                return Return.err(
                    Error(
                        code="COMPANY_NOT_FOUND",
                        message=f"Company with ID {company_id} not found",
                    )
                )

            await self.company_repo.clear_default(except_company_id=company_id)
            company.is_default = True
            company.is_active = True
            updated_company = await self.company_repo.update(company)
            await self.uow.commit()

            logger.info(f"Company {company_id} is now the default")
            return Return.ok(CompanyResponseDTO.from_entity(updated_company))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SET_DEFAULT_COMPANY_FAILED",
                    message="Failed to set default company",
                    reason=str(e),
                )
            )
