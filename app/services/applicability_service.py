"""작업 적용성 판정 서비스.

Applicability Service — Computes the tasks that apply to a work order day.
Two sources feed a day:
    - routine tasks: active service task templates of every active service
      linked to the day, filtered by day number
    - standalone tasks: active task templates linked directly to the day
"""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.template import TaskTemplate
from app.models.work_order import WorkOrderDay
from app.repositories.day_link_repository import day_service_repository, day_task_template_repository
from app.repositories.service_repository import service_task_template_repository
from app.repositories.task_template_repository import task_template_repository
from app.repositories.work_order_repository import work_order_day_repository
from app.utils.exceptions import NotFoundError


@dataclass(frozen=True)
class RoutineTask:
    """서비스를 통해 적용되는 작업 (Task applying through a service linked to the day)."""

    day_service_link_id: UUID
    service_task_template_id: UUID
    task_template_id: UUID
    display_name: str | None


@dataclass(frozen=True)
class StandaloneTask:
    """일자에 직접 연결된 작업 (Task linked directly to the day)."""

    link_id: UUID
    task_template_id: UUID
    display_name: str | None


@dataclass
class ApplicableTasks:
    routine_tasks: list[RoutineTask] = field(default_factory=list)
    standalone_tasks: list[StandaloneTask] = field(default_factory=list)


def applies_on_day(day_number: int | None, target_day_number: int) -> bool:
    """일차 적용 규칙 — 일차 미지정이면 모든 날, 지정이면 해당 일차에만.

    Day-number rule: an unset day number applies to every day, a set one
    only to the matching day.
    """
    return day_number is None or day_number == target_day_number


class ApplicabilityService:
    """작업 적용성 판정 서비스 (Applicability resolver)."""

    async def get_applicable_tasks_for_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
    ) -> ApplicableTasks:
        """일자에 적용되는 루틴/독립 작업을 계산합니다.

        Compute the routine and standalone tasks applying to a day.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)

        Returns:
            ApplicableTasks: 루틴 및 독립 작업 목록 (Routine and standalone tasks)

        Raises:
            NotFoundError: 일자가 없을 때 (When the day does not exist)
        """
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            raise NotFoundError("작업 일자를 찾을 수 없습니다 (Work order day not found)")
        return await self.resolve_for_day(db, day)

    async def resolve_for_day(
        self,
        db: AsyncSession,
        day: WorkOrderDay,
    ) -> ApplicableTasks:
        """이미 조회한 일자에 대해 적용 작업을 계산합니다 (Resolve for a loaded day)."""
        # 루틴 — Routine tasks via active service links
        routine_rows: list[tuple[UUID, UUID, UUID]] = []
        for link in await day_service_repository.get_by_day(db, day.id, active_only=True):
            service_tasks = await service_task_template_repository.get_by_service(db, link.service_id, active_only=True)
            for service_task in service_tasks:
                if not applies_on_day(service_task.day_number, day.day_number):
                    continue
                routine_rows.append((link.id, service_task.id, service_task.task_template_id))

        # 독립 — Standalone links are already day scoped
        standalone_links = await day_task_template_repository.get_by_day(db, day.id, active_only=True)

        template_ids: set[UUID] = {row[2] for row in routine_rows}
        template_ids.update(link.task_template_id for link in standalone_links)
        templates: dict[UUID, TaskTemplate] = await task_template_repository.get_by_ids(db, list(template_ids))

        def _name(task_template_id: UUID) -> str | None:
            template: TaskTemplate | None = templates.get(task_template_id)
            return template.name if template is not None else None

        return ApplicableTasks(
            routine_tasks=[
                RoutineTask(
                    day_service_link_id=link_id,
                    service_task_template_id=service_task_id,
                    task_template_id=task_template_id,
                    display_name=_name(task_template_id),
                )
                for link_id, service_task_id, task_template_id in routine_rows
            ],
            standalone_tasks=[
                StandaloneTask(
                    link_id=link.id,
                    task_template_id=link.task_template_id,
                    display_name=_name(link.task_template_id),
                )
                for link in standalone_links
            ],
        )


# 싱글턴 인스턴스
applicability_service: ApplicabilityService = ApplicabilityService()
