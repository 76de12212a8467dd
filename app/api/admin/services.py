"""관리자 서비스 라우터 — 서비스, 서비스 작업, 작업 의존성 엔드포인트.

Admin Service Router — Endpoints for the service catalog: services, the
task templates each service runs (routine tasks) and the prerequisite
edges between those tasks.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.service import (
    ServiceCreate,
    ServiceResponse,
    ServiceTaskDependencyCreate,
    ServiceTaskDependencyResponse,
    ServiceTaskTemplateCreate,
    ServiceTaskTemplateResponse,
    ServiceTaskTemplateUpdate,
    ServiceUpdate,
)
from app.services.dependency_service import dependency_service
from app.services.service_catalog_service import service_catalog_service

router: APIRouter = APIRouter()


# === 서비스 작업 의존성 (Service task dependencies) ===
# 고정 경로를 먼저 등록 — Static paths are registered before /{service_id}

@router.post("/dependencies", response_model=ServiceTaskDependencyResponse, status_code=201)
async def create_dependency(
    data: ServiceTaskDependencyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """서비스 작업 간 선행 관계를 생성합니다.

    Create a prerequisite edge between two task templates of the same
    service. A cycle is answered with 409.
    """
    edge = await dependency_service.create_service_task_dependency(
        db,
        data.service_task_template_id,
        data.depends_on_service_task_template_id,
    )
    await db.commit()
    return dependency_service.build_response(edge)


@router.delete("/dependencies/{dependency_id}", response_model=MessageResponse)
async def delete_dependency(
    dependency_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await dependency_service.remove_dependency(db, dependency_id)
    await db.commit()
    return {"message": "의존성이 삭제되었습니다 (Dependency deleted)"}


@router.get("/task-templates/{service_task_template_id}/dependencies", response_model=list[ServiceTaskDependencyResponse])
async def list_task_dependencies(
    service_task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """서비스 작업의 선행 작업 목록 (Prerequisites of one service task)."""
    edges = await dependency_service.list_by_dependent(db, service_task_template_id)
    return [dependency_service.build_response(e) for e in edges]


@router.delete("/task-templates/{service_task_template_id}/dependencies", response_model=MessageResponse)
async def delete_task_dependencies(
    service_task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업이 참여하는 모든 간선을 삭제합니다 (Drop every edge touching the task)."""
    removed: int = await dependency_service.remove_all_for_task(db, service_task_template_id)
    await db.commit()
    return {"message": f"의존성 {removed}건이 삭제되었습니다 ({removed} dependencies deleted)"}


# === 서비스 작업 (Service task templates) ===

@router.put("/task-templates/{service_task_template_id}", response_model=ServiceTaskTemplateResponse)
async def update_service_task_template(
    service_task_template_id: UUID,
    data: ServiceTaskTemplateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    service_task = await service_catalog_service.update_service_task_template(
        db, service_task_template_id, data.model_dump(exclude_unset=True)
    )
    await db.commit()
    return await service_catalog_service.build_service_task_response(db, service_task)


@router.delete("/task-templates/{service_task_template_id}", response_model=ServiceTaskTemplateResponse)
async def remove_service_task_template(
    service_task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """서비스 작업을 비활성화합니다. 기존 인스턴스는 유지됩니다.

    Deactivate a routine task. Existing task instances are kept.
    """
    service_task = await service_catalog_service.remove_task_template_from_service(db, service_task_template_id)
    await db.commit()
    return await service_catalog_service.build_service_task_response(db, service_task)


# === 서비스 (Services) ===

@router.get("", response_model=list[ServiceResponse])
async def list_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    is_active: Annotated[bool | None, Query(description="활성 상태 필터")] = None,
) -> list[dict]:
    services = await service_catalog_service.list_services(db, is_active)
    return [service_catalog_service.build_service_response(s) for s in services]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    service = await service_catalog_service.get_service(db, service_id)
    return service_catalog_service.build_service_response(service)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    service = await service_catalog_service.create_service(db, data.model_dump())
    await db.commit()
    return service_catalog_service.build_service_response(service)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    service = await service_catalog_service.update_service(db, service_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return service_catalog_service.build_service_response(service)


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service_catalog_service.delete_service(db, service_id)
    await db.commit()
    return {"message": "서비스가 삭제되었습니다 (Service deleted)"}


@router.get("/{service_id}/task-templates", response_model=list[ServiceTaskTemplateResponse])
async def list_service_task_templates(
    service_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    include_inactive: bool = False,
) -> list[dict]:
    service_tasks = await service_catalog_service.list_service_task_templates(db, service_id, include_inactive)
    return [await service_catalog_service.build_service_task_response(db, st) for st in service_tasks]


@router.post("/{service_id}/task-templates", response_model=ServiceTaskTemplateResponse, status_code=201)
async def add_service_task_template(
    service_id: UUID,
    data: ServiceTaskTemplateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """서비스에 작업 템플릿을 추가합니다.

    Add a routine task to a service. Days already linked to the service
    receive instances for their assigned workers.
    """
    service_task = await service_catalog_service.add_task_template_to_service(
        db,
        service_id,
        data.task_template_id,
        order=data.order,
        is_required=data.is_required,
        day_number=data.day_number,
    )
    await db.commit()
    return await service_catalog_service.build_service_task_response(db, service_task)


@router.get("/{service_id}/dependencies", response_model=list[ServiceTaskDependencyResponse])
async def list_service_dependencies(
    service_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    await service_catalog_service.get_service(db, service_id)
    edges = await dependency_service.list_by_service(db, service_id)
    return [dependency_service.build_response(e) for e in edges]
