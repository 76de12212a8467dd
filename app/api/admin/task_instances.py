"""관리자 작업 인스턴스 라우터 (Admin task instance read endpoints)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.task_instance import TaskInstanceDetailResponse
from app.services.task_instance_service import task_instance_service

router: APIRouter = APIRouter()


@router.get("/{instance_id}", response_model=TaskInstanceDetailResponse)
async def get_task_instance(
    instance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업 인스턴스와 필드별 응답을 조회합니다.

    Any worker's instance detail with its fields and recorded answers.
    """
    return await task_instance_service.get_with_responses(db, instance_id)
