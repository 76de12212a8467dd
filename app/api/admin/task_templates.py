"""관리자 작업 템플릿 라우터 — 템플릿, 필드 템플릿, 필드 조건 엔드포인트.

Admin Task Template Router — Endpoints for task templates, their ordered
field templates and the visibility conditions between fields.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse, ReorderRequest
from app.schemas.template import (
    FieldConditionCreate,
    FieldConditionResponse,
    FieldTemplateCreate,
    FieldTemplateResponse,
    FieldTemplateUpdate,
    TaskTemplateCreate,
    TaskTemplateResponse,
    TaskTemplateUpdate,
)
from app.services.task_template_service import task_template_service

router: APIRouter = APIRouter()


# === 필드 템플릿 / 조건 단건 (Single field / condition) ===

@router.put("/fields/{field_id}", response_model=FieldTemplateResponse)
async def update_field(
    field_id: UUID,
    data: FieldTemplateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    field = await task_template_service.update_field(db, field_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return task_template_service.build_field_response(field)


@router.delete("/fields/{field_id}", response_model=MessageResponse)
async def delete_field(
    field_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """필드를 삭제하고 남은 필드 순서를 압축합니다.

    Delete a field with its conditions and compact the remaining order.
    """
    await task_template_service.delete_field(db, field_id)
    await db.commit()
    return {"message": "필드가 삭제되었습니다 (Field deleted)"}


@router.post("/conditions", response_model=FieldConditionResponse, status_code=201)
async def create_condition(
    data: FieldConditionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    condition = await task_template_service.create_condition(
        db,
        data.child_field_id,
        data.parent_field_id,
        data.operator,
        data.value,
        data.condition_group,
    )
    await db.commit()
    return task_template_service.build_condition_response(condition)


@router.delete("/conditions/{condition_id}", response_model=MessageResponse)
async def delete_condition(
    condition_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await task_template_service.delete_condition(db, condition_id)
    await db.commit()
    return {"message": "필드 조건이 삭제되었습니다 (Field condition deleted)"}


# === 작업 템플릿 (Task templates) ===

@router.get("", response_model=list[TaskTemplateResponse])
async def list_task_templates(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: Annotated[str | None, Query(description="분류 필터")] = None,
    is_active: Annotated[bool | None, Query(description="활성 상태 필터")] = None,
) -> list[dict]:
    templates = await task_template_service.list_task_templates(db, category, is_active)
    return [task_template_service.build_template_response(t) for t in templates]


@router.get("/{task_template_id}", response_model=TaskTemplateResponse)
async def get_task_template(
    task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    template = await task_template_service.get_task_template(db, task_template_id)
    return task_template_service.build_template_response(template)


@router.post("", response_model=TaskTemplateResponse, status_code=201)
async def create_task_template(
    data: TaskTemplateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    template = await task_template_service.create_task_template(db, data.model_dump())
    await db.commit()
    return task_template_service.build_template_response(template)


@router.put("/{task_template_id}", response_model=TaskTemplateResponse)
async def update_task_template(
    task_template_id: UUID,
    data: TaskTemplateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    template = await task_template_service.update_task_template(
        db, task_template_id, data.model_dump(exclude_unset=True)
    )
    await db.commit()
    return task_template_service.build_template_response(template)


@router.delete("/{task_template_id}", response_model=MessageResponse)
async def delete_task_template(
    task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await task_template_service.delete_task_template(db, task_template_id)
    await db.commit()
    return {"message": "작업 템플릿이 삭제되었습니다 (Task template deleted)"}


# === 템플릿 하위 필드/조건 (Fields and conditions of a template) ===

@router.get("/{task_template_id}/fields", response_model=list[FieldTemplateResponse])
async def list_fields(
    task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    fields = await task_template_service.list_fields(db, task_template_id)
    return [task_template_service.build_field_response(f) for f in fields]


@router.post("/{task_template_id}/fields", response_model=FieldTemplateResponse, status_code=201)
async def create_field(
    task_template_id: UUID,
    data: FieldTemplateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """템플릿 끝에 필드를 추가합니다 (Append a field to the template)."""
    field = await task_template_service.create_field(db, task_template_id, data.model_dump())
    await db.commit()
    return task_template_service.build_field_response(field)


@router.put("/{task_template_id}/fields/reorder", response_model=list[FieldTemplateResponse])
async def reorder_fields(
    task_template_id: UUID,
    data: ReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    fields = await task_template_service.reorder_fields(db, task_template_id, data.ids)
    await db.commit()
    return [task_template_service.build_field_response(f) for f in fields]


@router.get("/{task_template_id}/conditions", response_model=list[FieldConditionResponse])
async def list_conditions(
    task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    conditions = await task_template_service.list_conditions(db, task_template_id)
    return [task_template_service.build_condition_response(c) for c in conditions]
