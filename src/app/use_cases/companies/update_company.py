"""UpdateCompany Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from src.app.services.unit_of_work import UnitOfWork
from .deactivate_company import check_can_deactivate, deactivate
from .dtos import UpdateCompanyCommandDTO, CompanyResponseDTO

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = ("address", "city", "country", "tax_code")


class UpdateCompany:
    """
    Use Case: Edit an issuing company

    Setting is_active to false follows the DeactivateCompany rules.
    """

    def __init__(self, uow: UnitOfWork, company_repo: CompanyRepository):
        self.uow = uow
        self.company_repo = company_repo

    async def execute(
        self, company_id: int, command: UpdateCompanyCommandDTO
    ) -> Result[CompanyResponseDTO]:
        try:
            company = await self.company_repo.get_by_id(company_id)
            if not company:
                return Return.err(
                    Error(
                        code="COMPANY_NOT_FOUND",
                        message=f"Company with ID {company_id} not found",
                    )
                )

            if command.email is not None and "@" not in command.email:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message="A valid email address is required",
                        reason=f"email={command.email}",
                    )
                )

            if command.is_active is False and company.is_active:
                blocked = await check_can_deactivate(company, self.company_repo)
                if blocked:
                    return Return.err(blocked)
                deactivate(company)
            elif command.is_active:
                company.is_active = True

            if command.name is not None:
                company.name = command.name.strip()
            if command.email is not None:
                company.email = command.email.strip()
            for field in OPTIONAL_FIELDS:
                if field in command.model_fields_set:
                    setattr(company, field, getattr(command, field))

            updated_company = await self.company_repo.update(company)
            await self.uow.commit()
            return Return.ok(CompanyResponseDTO.from_entity(updated_company))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_COMPANY_FAILED",
                    message="Failed to update company",
                    reason=str(e),
                )
            )
