"""고객/현장 레포지토리.

Customer and faena repositories — DB queries for customers and faenas.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer, Faena
from app.repositories.base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):

    def __init__(self) -> None:
        super().__init__(Customer)

    async def get_all_by_name(self, db: AsyncSession) -> Sequence[Customer]:
        result = await db.execute(select(Customer).order_by(Customer.name))
        return result.scalars().all()


class FaenaRepository(BaseRepository[Faena]):

    def __init__(self) -> None:
        super().__init__(Faena)

    async def get_by_customer(
        self, db: AsyncSession, customer_id: UUID
    ) -> Sequence[Faena]:
        query: Select = (
            select(Faena)
            .where(Faena.customer_id == customer_id)
            .order_by(Faena.name)
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스
customer_repository: CustomerRepository = CustomerRepository()
faena_repository: FaenaRepository = FaenaRepository()
