"""관리자 고객 라우터 — 고객 및 현장(faena) CRUD 엔드포인트.

Admin Customer Router — CRUD endpoints for customers and the faenas
(work sites) they own.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    FaenaCreate,
    FaenaResponse,
    FaenaUpdate,
)
from app.services.customer_service import customer_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """고객 목록을 이름순으로 조회합니다 (List customers by name)."""
    customers = await customer_service.list_customers(db)
    return [customer_service.build_customer_response(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    customer = await customer_service.get_customer(db, customer_id)
    return customer_service.build_customer_response(customer)


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    customer = await customer_service.create_customer(db, data.model_dump())
    await db.commit()
    return customer_service.build_customer_response(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: UUID,
    data: CustomerUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    customer = await customer_service.update_customer(db, customer_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return customer_service.build_customer_response(customer)


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    customer_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """고객과 현장을 삭제합니다. 작업 지시가 있으면 거부됩니다.

    Delete a customer and its faenas. Refused while work orders exist.
    """
    await customer_service.delete_customer(db, customer_id)
    await db.commit()
    return {"message": "고객이 삭제되었습니다 (Customer deleted)"}


# === 현장 (Faena) ===

@router.get("/{customer_id}/faenas", response_model=list[FaenaResponse])
async def list_faenas(
    customer_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    faenas = await customer_service.list_faenas(db, customer_id)
    return [customer_service.build_faena_response(f) for f in faenas]


@router.post("/{customer_id}/faenas", response_model=FaenaResponse, status_code=201)
async def create_faena(
    customer_id: UUID,
    data: FaenaCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    faena = await customer_service.create_faena(db, customer_id, data.model_dump())
    await db.commit()
    return customer_service.build_faena_response(faena)


@router.put("/faenas/{faena_id}", response_model=FaenaResponse)
async def update_faena(
    faena_id: UUID,
    data: FaenaUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    faena = await customer_service.update_faena(db, faena_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return customer_service.build_faena_response(faena)
