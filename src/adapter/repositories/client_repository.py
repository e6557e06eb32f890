"""SQLAlchemy Client Repository Implementation"""

from typing import List, Optional, Tuple
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.base import utc_now
from src.domain.client import Client
from src.domain.order import Order


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def get_by_id(self, client_id: int) -> Optional[Client]:
        statement = select(Client).where(Client.id == client_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, client: Client) -> Client:
        client.updated_at = utc_now()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        await self.session.delete(client)
        await self.session.flush()

    async def list(
        self,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Client], int]:
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    Client.name.ilike(pattern),
                    Client.email.ilike(pattern),
                    Client.company.ilike(pattern),
                )
            )

        count_statement = select(func.count()).select_from(Client).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(Client)
            .where(*conditions)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def count_orders(self, client_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(Order)
            .where(Order.client_id == client_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
