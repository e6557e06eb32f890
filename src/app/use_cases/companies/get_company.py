"""GetCompany Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.company_repository import CompanyRepository
from .dtos import CompanyResponseDTO


class GetCompany:
    def __init__(self, company_repo: CompanyRepository):
        self.company_repo = company_repo

    async def execute(self, company_id: int) -> Result[CompanyResponseDTO]:
        company = await self.company_repo.get_by_id(company_id)
        if not company:
            return Return.err(
                Error(
                    code="COMPANY_NOT_FOUND",
                    message=f"Company with ID {company_id} not found",
                )
            )
        return Return.ok(CompanyResponseDTO.from_entity(company))
