"""관리자 작업 지시 라우터 — 작업 지시 생성(일자 확장), 조회, 수정, 삭제.

Admin Work Order Router — Endpoints for work orders. Creating a work
order expands its date range into days; creating one from a service also
seeds the service's tasks onto those days.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.work_order import (
    DaySummaryResponse,
    StatusUpdate,
    WorkOrderCreate,
    WorkOrderDetailResponse,
    WorkOrderFromServiceCreate,
    WorkOrderResponse,
    WorkOrderUpdate,
)
from app.services.work_order_service import work_order_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_work_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
    customer_id: Annotated[UUID | None, Query(description="고객 필터")] = None,
    faena_id: Annotated[UUID | None, Query(description="현장 필터")] = None,
    status: Annotated[str | None, Query(description="상태 필터")] = None,
    date_from: Annotated[date | None, Query(description="기간 시작")] = None,
    date_to: Annotated[date | None, Query(description="기간 종료")] = None,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """작업 지시 목록을 필터링하여 조회합니다.

    List work orders. The date filters select work orders overlapping the
    given range.
    """
    work_orders, total = await work_order_service.list_work_orders(
        db,
        customer_id=customer_id,
        faena_id=faena_id,
        status=status,
        date_from=date_from,
        date_to=date_to,
        page=page,
        per_page=per_page,
    )

    items: list[dict] = []
    for wo in work_orders:
        items.append(await work_order_service.build_response(db, wo))

    return {
        "items": items,
        "total": total,
        "page": page,
        "per_page": per_page,
    }


@router.post("", response_model=WorkOrderDetailResponse, status_code=201)
async def create_work_order(
    data: WorkOrderCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업 지시를 생성하고 기간을 일자로 확장합니다.

    Create a work order and expand its date range into days.
    """
    work_order = await work_order_service.create_work_order(
        db,
        customer_id=data.customer_id,
        faena_id=data.faena_id,
        start_date=data.start_date,
        end_date=data.end_date,
        required_people_per_day=data.required_people_per_day,
        name=data.name,
        service_id=data.service_id,
        notes=data.notes,
    )
    await db.commit()
    return await work_order_service.get_work_order_detail(db, work_order.id)


@router.post("/from-service", response_model=WorkOrderDetailResponse, status_code=201)
async def create_work_order_from_service(
    data: WorkOrderFromServiceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """서비스 기본값으로 작업 지시를 생성합니다.

    Create a work order from a service, seeding its tasks onto every day.
    """
    work_order = await work_order_service.create_from_service(
        db,
        service_id=data.service_id,
        customer_id=data.customer_id,
        faena_id=data.faena_id,
        start_date=data.start_date,
        end_date=data.end_date,
        required_people_per_day=data.required_people_per_day,
        name=data.name,
        notes=data.notes,
    )
    await db.commit()
    return await work_order_service.get_work_order_detail(db, work_order.id)


@router.get("/{work_order_id}", response_model=WorkOrderDetailResponse)
async def get_work_order(
    work_order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    return await work_order_service.get_work_order_detail(db, work_order_id)


@router.put("/{work_order_id}", response_model=WorkOrderResponse)
async def update_work_order(
    work_order_id: UUID,
    data: WorkOrderUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    work_order = await work_order_service.update_work_order(db, work_order_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return await work_order_service.build_response(db, work_order)


@router.patch("/{work_order_id}/status", response_model=WorkOrderResponse)
async def update_work_order_status(
    work_order_id: UUID,
    data: StatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    work_order = await work_order_service.update_status(db, work_order_id, data.status)
    await db.commit()
    return await work_order_service.build_response(db, work_order)


@router.delete("/{work_order_id}", response_model=MessageResponse)
async def delete_work_order(
    work_order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """초안/취소 상태의 작업 지시를 하위 데이터와 함께 삭제합니다.

    Delete a draft or cancelled work order with everything under it.
    """
    await work_order_service.delete_work_order(db, work_order_id)
    await db.commit()
    return {"message": "작업 지시가 삭제되었습니다 (Work order deleted)"}


@router.get("/{work_order_id}/days", response_model=list[DaySummaryResponse])
async def list_work_order_days(
    work_order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    return await work_order_service.list_days(db, work_order_id)
