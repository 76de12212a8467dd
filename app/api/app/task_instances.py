"""앱 작업 인스턴스 라우터 — 필드 응답 저장 및 완료 처리.

App Task Instance Router — The calling worker reads one of their task
instances, records field answers and marks it complete. Instances of
other workers are reported as not found.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_worker
from app.database import get_db
from app.models.user import User
from app.schemas.task_instance import (
    FieldResponseResponse,
    FieldResponseUpsert,
    MarkCompleteRequest,
    TaskInstanceDetailResponse,
    TaskInstanceResponse,
)
from app.services.task_instance_service import task_instance_service

router: APIRouter = APIRouter()


@router.get("/{instance_id}", response_model=TaskInstanceDetailResponse)
async def get_my_task(
    instance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_worker)],
) -> dict:
    """작업 인스턴스와 필드별 응답을 조회합니다.

    Instance detail with the template's fields and my answers.
    """
    return await task_instance_service.get_with_responses(db, instance_id, current_user.external_id)


@router.put("/{instance_id}/responses", response_model=FieldResponseResponse)
async def save_field_response(
    instance_id: UUID,
    data: FieldResponseUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_worker)],
) -> dict:
    """필드 응답을 저장합니다. 완료된 작업은 수정할 수 없습니다.

    Save the answer to one field. Completed instances are read-only.
    """
    # 본인 인스턴스 확인 — Ownership check before writing
    await task_instance_service.get_instance(db, instance_id, current_user.external_id)
    response = await task_instance_service.upsert_field_response(
        db,
        instance_id,
        data.field_template_id,
        data.value,
        answered_by=current_user.external_id,
    )
    await db.commit()
    return task_instance_service.build_field_response(response)


@router.post("/{instance_id}/complete", response_model=TaskInstanceResponse)
async def complete_my_task(
    instance_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_worker)],
    data: Annotated[MarkCompleteRequest | None, Body()] = None,
) -> dict:
    """필수 필드 확인 후 작업을 완료 처리합니다.

    Mark the instance completed once every required field is answered.
    """
    instance = await task_instance_service.mark_complete(
        db,
        instance_id,
        user_identity=current_user.external_id,
        client_timezone=data.client_timezone if data else None,
    )
    await db.commit()
    return task_instance_service.build_response(instance)
