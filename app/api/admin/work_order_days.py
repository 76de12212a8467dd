"""관리자 작업 일자 라우터 — 일자 연결, 배정, 적용 작업, 인스턴스 엔드포인트.

Admin Work Order Day Router — Endpoints hanging off a single work order
day: day updates, service links (routine tasks), task template links
(standalone tasks), reordering, worker assignments, the applicable task
preview and the day's task instances.

Link removal is a soft deactivation; the response reports how many task
instances under the link already carry work.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse, RemovalResponse, ReorderRequest
from app.schemas.task_instance import TaskInstanceResponse
from app.schemas.work_order import (
    ApplicableTasksResponse,
    AssignmentCreate,
    AssignmentResponse,
    BulkAssignmentRequest,
    DayDependencyResponse,
    DayDetailResponse,
    DayNotesUpdate,
    DayServiceAdd,
    DayServiceResponse,
    DaySummaryResponse,
    DayTaskTemplateAdd,
    DayTaskTemplateResponse,
    RequiredPeopleUpdate,
    StatusUpdate,
)
from app.services.applicability_service import ApplicableTasks, applicability_service
from app.services.assignment_service import assignment_service
from app.services.day_link_service import day_link_service
from app.services.task_instance_materializer import task_instance_materializer
from app.services.task_instance_service import task_instance_service
from app.services.work_order_service import work_order_service

router: APIRouter = APIRouter()


# ---------------------------------------------------------------------------
# 일자 — Day
# ---------------------------------------------------------------------------

@router.get("/{day_id}", response_model=DayDetailResponse)
async def get_day(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """일자 상세 — 배정 작업자 포함 (Day detail with assigned workers)."""
    return await work_order_service.get_day_detail(db, day_id)


@router.patch("/{day_id}/status", response_model=DaySummaryResponse)
async def update_day_status(
    day_id: UUID,
    data: StatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    day = await work_order_service.update_day_status(db, day_id, data.status)
    await db.commit()
    return await work_order_service.build_day_summary(db, day)


@router.patch("/{day_id}/notes", response_model=DaySummaryResponse)
async def update_day_notes(
    day_id: UUID,
    data: DayNotesUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    day = await work_order_service.update_day_notes(db, day_id, data.notes)
    await db.commit()
    return await work_order_service.build_day_summary(db, day)


@router.patch("/{day_id}/required-people", response_model=DaySummaryResponse)
async def update_required_people(
    day_id: UUID,
    data: RequiredPeopleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    day = await work_order_service.update_required_people(db, day_id, data.required_people)
    await db.commit()
    return await work_order_service.build_day_summary(db, day)


# ---------------------------------------------------------------------------
# 일자-서비스 연결 — Service links
# ---------------------------------------------------------------------------

@router.delete("/services/{link_id}", response_model=RemovalResponse)
async def remove_day_service(
    link_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """일자-서비스 연결을 비활성화합니다.

    Deactivate a service link. Task instances under it are kept and the
    ones already carrying work are counted.
    """
    orphaned: int = await day_link_service.remove_service_from_day(db, link_id)
    await db.commit()
    return {
        "message": "서비스 연결이 해제되었습니다 (Service unlinked from day)",
        "orphaned_count": orphaned,
    }


@router.get("/{day_id}/services", response_model=list[DayServiceResponse])
async def list_day_services(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    include_inactive: bool = False,
) -> list[dict]:
    links = await day_link_service.list_day_services(db, day_id, include_inactive)
    return [await day_link_service.build_service_link_response(db, link) for link in links]


@router.post("/{day_id}/services", response_model=DayServiceResponse, status_code=201)
async def add_day_service(
    day_id: UUID,
    data: DayServiceAdd,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """일자에 서비스를 연결하고 배정 작업자의 인스턴스를 생성합니다.

    Link a service to the day and materialize its routine tasks for every
    assigned worker.
    """
    link = await day_link_service.add_service_to_day(db, day_id, data.service_id, data.order)
    await db.commit()
    return await day_link_service.build_service_link_response(db, link)


@router.put("/{day_id}/services/reorder", response_model=list[DayServiceResponse])
async def reorder_day_services(
    day_id: UUID,
    data: ReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    links = await day_link_service.reorder_services(db, day_id, data.ids)
    await db.commit()
    return [await day_link_service.build_service_link_response(db, link) for link in links]


# ---------------------------------------------------------------------------
# 일자-작업 템플릿 연결 — Task template links
# ---------------------------------------------------------------------------

@router.get("/{day_id}/task-templates", response_model=list[DayTaskTemplateResponse])
async def list_day_task_templates(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    include_inactive: bool = False,
) -> list[dict]:
    links = await day_link_service.list_day_task_templates(db, day_id, include_inactive)
    return [await day_link_service.build_task_template_link_response(db, link) for link in links]


@router.post("/{day_id}/task-templates", response_model=DayTaskTemplateResponse, status_code=201)
async def add_day_task_template(
    day_id: UUID,
    data: DayTaskTemplateAdd,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    link = await day_link_service.add_task_template_to_day(
        db, day_id, data.task_template_id, data.order, data.is_required
    )
    await db.commit()
    return await day_link_service.build_task_template_link_response(db, link)


@router.put("/{day_id}/task-templates/reorder", response_model=list[DayTaskTemplateResponse])
async def reorder_day_task_templates(
    day_id: UUID,
    data: ReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    links = await day_link_service.reorder_task_templates(db, day_id, data.ids)
    await db.commit()
    return [await day_link_service.build_task_template_link_response(db, link) for link in links]


@router.delete("/{day_id}/task-templates/{task_template_id}", response_model=RemovalResponse)
async def remove_day_task_template(
    day_id: UUID,
    task_template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    orphaned: int = await day_link_service.remove_task_template_from_day(db, day_id, task_template_id)
    await db.commit()
    return {
        "message": "작업 템플릿 연결이 해제되었습니다 (Task template unlinked from day)",
        "orphaned_count": orphaned,
    }


@router.get("/{day_id}/dependencies", response_model=list[DayDependencyResponse])
async def list_day_dependencies(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    edges = await day_link_service.list_day_dependencies(db, day_id)
    return [day_link_service.build_dependency_response(e) for e in edges]


# ---------------------------------------------------------------------------
# 배정 — Assignments
# ---------------------------------------------------------------------------

@router.get("/{day_id}/assignments", response_model=list[AssignmentResponse])
async def list_assignments(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    assignments = await assignment_service.list_assignments(db, day_id)
    return [await assignment_service.build_response(db, a) for a in assignments]


@router.post("/{day_id}/assignments", response_model=AssignmentResponse, status_code=201)
async def assign_user(
    day_id: UUID,
    data: AssignmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """작업자를 배정하고 작업 인스턴스를 생성합니다.

    Assign a worker to the day and materialize their task instances.
    """
    assignment = await assignment_service.assign_user(db, day_id, data.user_id)
    await db.commit()
    return await assignment_service.build_response(db, assignment)


@router.post("/{day_id}/assignments/bulk", response_model=list[AssignmentResponse], status_code=201)
async def bulk_assign(
    day_id: UUID,
    data: BulkAssignmentRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    assignments = await assignment_service.bulk_assign(db, day_id, data.user_ids)
    await db.commit()
    return [await assignment_service.build_response(db, a) for a in assignments]


@router.put("/{day_id}/assignments", response_model=list[AssignmentResponse])
async def replace_assignments(
    day_id: UUID,
    data: BulkAssignmentRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """일자의 배정 작업자를 목록으로 교체합니다 (Replace the day's worker set)."""
    assignments = await assignment_service.replace_assignments(db, day_id, data.user_ids)
    await db.commit()
    return [await assignment_service.build_response(db, a) for a in assignments]


@router.delete("/{day_id}/assignments/{user_id}", response_model=MessageResponse)
async def unassign_user(
    day_id: UUID,
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await assignment_service.unassign_user(db, day_id, user_id)
    await db.commit()
    return {"message": "배정이 해제되었습니다 (Assignment removed)"}


# ---------------------------------------------------------------------------
# 적용 작업 및 인스턴스 — Applicable tasks and instances
# ---------------------------------------------------------------------------

@router.get("/{day_id}/applicable-tasks", response_model=ApplicableTasksResponse)
async def get_applicable_tasks(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """일자에 적용되는 루틴/독립 작업 미리보기.

    Preview the routine and standalone tasks that apply to the day.
    """
    applicable: ApplicableTasks = await applicability_service.get_applicable_tasks_for_day(db, day_id)
    return {
        "routine_tasks": [
            {
                "day_service_link_id": str(t.day_service_link_id),
                "service_task_template_id": str(t.service_task_template_id),
                "task_template_id": str(t.task_template_id),
                "display_name": t.display_name,
            }
            for t in applicable.routine_tasks
        ],
        "standalone_tasks": [
            {
                "link_id": str(t.link_id),
                "task_template_id": str(t.task_template_id),
                "display_name": t.display_name,
            }
            for t in applicable.standalone_tasks
        ],
        "total": len(applicable),
    }


@router.get("/{day_id}/task-instances", response_model=list[TaskInstanceResponse])
async def list_day_instances(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    instances = await task_instance_service.list_by_day(db, day_id)
    return [task_instance_service.build_response(i) for i in instances]


@router.get("/{day_id}/orphaned-instances", response_model=list[TaskInstanceResponse])
async def list_orphaned_instances(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    """출처 연결이 비활성화된 인스턴스 (Instances whose origin link is inactive)."""
    await work_order_service.get_day(db, day_id)
    instances = await task_instance_materializer.list_orphaned_instances(db, day_id)
    return [task_instance_service.build_response(i) for i in instances]
