"""SQLAlchemy Company Repository Implementation"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.company_repository import CompanyRepository
from src.domain.base import utc_now
from src.domain.company import Company
from src.domain.invoice import Invoice, InvoiceStatus

OPEN_INVOICE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class SqlAlchemyCompanyRepository(CompanyRepository):
    """
    SQLAlchemy implementation of CompanyRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, company: Company) -> Company:
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def get_by_id(self, company_id: int) -> Optional[Company]:
        statement = select(Company).where(Company.id == company_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, company: Company) -> Company:
        company.updated_at = utc_now()
        self.session.add(company)
        await self.session.flush()
        await self.session.refresh(company)
        return company

    async def list_all(self) -> List[Company]:
        statement = select(Company).order_by(Company.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_default(self) -> Optional[Company]:
        statement = (
            select(Company)
            .where(Company.is_active == True)  # noqa: E712
            .order_by(Company.is_default.desc(), Company.id)
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def clear_default(self, except_company_id: Optional[int] = None) -> None:
        statement = (
            update(Company)
            .where(Company.is_default == True)  # noqa: E712
            .values(is_default=False, updated_at=utc_now())
        )
        if except_company_id is not None:
            statement = statement.where(Company.id != except_company_id)
        await self.session.execute(statement)

    async def count_open_invoices(self, company_id: int) -> int:
        statement = (
            select(func.count(Invoice.id))
            .where(Invoice.company_id == company_id)
            .where(Invoice.status.in_(OPEN_INVOICE_STATUSES))
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
