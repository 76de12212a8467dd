"""고객/현장 서비스.

Customer Service — CRUD for customers and their faenas (work sites).
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer, Faena
from app.repositories.customer_repository import customer_repository, faena_repository
from app.repositories.work_order_repository import work_order_repository
from app.utils.exceptions import BadRequestError, NotFoundError


class CustomerService:

    async def get_customer(self, db: AsyncSession, customer_id: UUID) -> Customer:
        customer: Customer | None = await customer_repository.get_by_id(db, customer_id)
        if customer is None:
            raise NotFoundError("고객을 찾을 수 없습니다 (Customer not found)")
        return customer

    async def list_customers(self, db: AsyncSession) -> Sequence[Customer]:
        return await customer_repository.get_all_by_name(db)

    async def create_customer(self, db: AsyncSession, data: dict[str, Any]) -> Customer:
        return await customer_repository.create(db, data)

    async def update_customer(self, db: AsyncSession, customer_id: UUID, update_data: dict[str, Any]) -> Customer:
        customer: Customer = await self.get_customer(db, customer_id)
        return await customer_repository.update(db, customer.id, update_data)

    async def delete_customer(self, db: AsyncSession, customer_id: UUID) -> None:
        """고객과 현장을 삭제합니다. 작업 지시가 있으면 거부합니다.

        Delete a customer with its faenas. Refused while work orders exist.
        """
        customer: Customer = await self.get_customer(db, customer_id)
        if await work_order_repository.exists(db, {"customer_id": customer.id}):
            raise BadRequestError(
                "작업 지시가 있는 고객은 삭제할 수 없습니다 "
                "(Cannot delete a customer with work orders)"
            )
        for faena in await faena_repository.get_by_customer(db, customer.id):
            await faena_repository.delete(db, faena.id)
        await customer_repository.delete(db, customer.id)

    async def list_faenas(self, db: AsyncSession, customer_id: UUID) -> Sequence[Faena]:
        customer: Customer = await self.get_customer(db, customer_id)
        return await faena_repository.get_by_customer(db, customer.id)

    async def create_faena(self, db: AsyncSession, customer_id: UUID, data: dict[str, Any]) -> Faena:
        customer: Customer = await self.get_customer(db, customer_id)
        return await faena_repository.create(db, {**data, "customer_id": customer.id})

    async def update_faena(self, db: AsyncSession, faena_id: UUID, update_data: dict[str, Any]) -> Faena:
        faena: Faena | None = await faena_repository.get_by_id(db, faena_id)
        if faena is None:
            raise NotFoundError("현장을 찾을 수 없습니다 (Faena not found)")
        return await faena_repository.update(db, faena.id, update_data)

    def build_customer_response(self, customer: Customer) -> dict:
        return {
            "id": str(customer.id),
            "name": customer.name,
            "tax_id": customer.tax_id,
            "created_at": customer.created_at,
        }

    def build_faena_response(self, faena: Faena) -> dict:
        return {
            "id": str(faena.id),
            "customer_id": str(faena.customer_id),
            "name": faena.name,
            "location": faena.location,
            "is_active": faena.is_active,
            "created_at": faena.created_at,
        }


# 싱글턴 인스턴스
customer_service: CustomerService = CustomerService()
