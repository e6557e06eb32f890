"""ListCompanies Use Case"""

from libs.result import Result, Return
from src.app.repositories.company_repository import CompanyRepository
from .dtos import CompanyResponseDTO, ListCompaniesResponseDTO


class ListCompanies:
    def __init__(self, company_repo: CompanyRepository):
        self.company_repo = company_repo

    async def execute(self) -> Result[ListCompaniesResponseDTO]:
        companies = await self.company_repo.list_all()
        return Return.ok(
            ListCompaniesResponseDTO(
                companies=[CompanyResponseDTO.from_entity(company) for company in companies]
            )
        )
