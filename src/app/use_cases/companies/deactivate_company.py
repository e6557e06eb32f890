"""DeactivateCompany Use Case

Companies are never removed: invoices keep pointing at their issuer, so
deleting a company only takes it out of the issuing rotation.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.company import Company
from .dtos import CompanyResponseDTO

logger = logging.getLogger(__name__)


async def check_can_deactivate(company: Company, company_repo: CompanyRepository) -> Optional[Error]:
    """COMPANY_HAS_ACTIVE_INVOICES while draft, sent or overdue invoices remain"""
    open_invoices = await company_repo.count_open_invoices(company.id)
    if open_invoices:
        return Error(
            code="COMPANY_HAS_ACTIVE_INVOICES",
            message=(
                "Cannot deactivate a company with active invoices. "
                "Please complete or cancel all invoices first."
            ),
            reason=f"company_id={company.id}, open_invoices={open_invoices}",
        )
    return None


def deactivate(company: Company) -> None:
    """Take the company out of rotation; a deactivated company is never the default"""
    company.is_active = False
    company.is_default = False


class DeactivateCompany:
    """
    Use Case: Deactivate an issuing company

    Business Rules:
    1. Refused while the company has draft, sent or overdue invoices
    2. The company loses its default flag, so generated invoices fall
       back to the first remaining active company
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

            blocked = await check_can_deactivate(company, self.company_repo)
            if blocked:
                return Return.err(blocked)

            deactivate(company)
            updated_company = await self.company_repo.update(company)
            await self.uow.commit()

            logger.info(f"Company {company_id} deactivated")
            return Return.ok(CompanyResponseDTO.from_entity(updated_company))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DEACTIVATE_COMPANY_FAILED",
                    message="Failed to deactivate company",
                    reason=str(e),
                )
            )
