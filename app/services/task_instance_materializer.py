"""작업 인스턴스 생성기 — 작업자별 작업 인스턴스를 멱등하게 생성.

Task Instance Materializer — Idempotently creates one task instance per
(day, user, origin). Called after structural changes: assigning a worker,
linking a service or a task template to a day, or adding a routine task to
a service.

Rules:
    - query-before-insert on (day, user) filtered by the origin foreign key
    - ``instance_label`` snapshots the template name at creation time
    - a vanished day, user or template skips that tuple, the batch continues
    - existing instances are never deleted or rewritten
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import ServiceTaskTemplate
from app.models.task_instance import RoutineOrigin, StandaloneOrigin, TaskInstance
from app.models.template import TaskTemplate
from app.models.work_order import WorkOrderDay, WorkOrderDayService, WorkOrderDayTaskTemplate
from app.repositories.assignment_repository import assignment_repository
from app.repositories.day_link_repository import day_service_repository, day_task_template_repository
from app.repositories.service_repository import service_task_template_repository
from app.repositories.task_instance_repository import task_instance_repository
from app.repositories.task_template_repository import task_template_repository
from app.repositories.user_repository import user_repository
from app.repositories.work_order_repository import work_order_day_repository
from app.services.applicability_service import ApplicableTasks, applicability_service, applies_on_day


class TaskInstanceMaterializer:
    """작업 인스턴스 생성기 (Task instance materializer)."""

    async def _create_if_missing(
        self,
        db: AsyncSession,
        day_id: UUID,
        user_identity: str,
        task_template_id: UUID,
        origin: RoutineOrigin | StandaloneOrigin,
    ) -> TaskInstance | None:
        """출처별 인스턴스가 없으면 생성합니다.

        Create the instance for (day, user, origin) unless one exists.

        Returns:
            TaskInstance | None: 새로 생성된 인스턴스, 건너뛰면 None
                                 (The new instance, or None when skipped)
        """
        if isinstance(origin, RoutineOrigin):
            existing = await task_instance_repository.find_routine(
                db, day_id, user_identity, origin.service_task_template_id
            )
        else:
            existing = await task_instance_repository.find_standalone(
                db, day_id, user_identity, origin.work_order_day_task_template_id
            )
        if existing is not None:
            return None

        template: TaskTemplate | None = await task_template_repository.get_by_id(db, task_template_id)
        if template is None:
            return None

        data: dict = {
            "work_order_day_id": day_id,
            "user_id": user_identity,
            "task_template_id": task_template_id,
            "status": "draft",
            # 생성 시점 이름 스냅샷 — Snapshot, not kept in sync with renames
            "instance_label": template.name,
        }
        if isinstance(origin, RoutineOrigin):
            data["work_order_day_service_id"] = origin.work_order_day_service_id
            data["service_task_template_id"] = origin.service_task_template_id
        else:
            data["work_order_day_task_template_id"] = origin.work_order_day_task_template_id
        return await task_instance_repository.create(db, data)

    async def materialize_for_assigned_user(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_identity: str,
        applicable: ApplicableTasks | None = None,
    ) -> list[TaskInstance]:
        """배정된 작업자 한 명에 대해 일자의 모든 적용 작업을 생성합니다.

        Fan out over every applicable task of the day for one worker.
        ``applicable`` may be precomputed when several workers are assigned
        to the same day in one call.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)
            user_identity: 작업자 외부 식별자 (Worker identity string)
            applicable: 미리 계산된 적용 작업 (Precomputed applicable tasks, optional)

        Returns:
            list[TaskInstance]: 새로 생성된 인스턴스 (Newly created instances)
        """
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            return []
        if await user_repository.get_by_external_id(db, user_identity) is None:
            return []
        if applicable is None:
            applicable = await applicability_service.resolve_for_day(db, day)

        created: list[TaskInstance] = []
        for routine in applicable.routine_tasks:
            instance = await self._create_if_missing(
                db,
                day.id,
                user_identity,
                routine.task_template_id,
                RoutineOrigin(routine.day_service_link_id, routine.service_task_template_id),
            )
            if instance is not None:
                created.append(instance)
        for standalone in applicable.standalone_tasks:
            instance = await self._create_if_missing(
                db,
                day.id,
                user_identity,
                standalone.task_template_id,
                StandaloneOrigin(standalone.link_id),
            )
            if instance is not None:
                created.append(instance)
        return created

    async def _routine_fan_out(
        self,
        db: AsyncSession,
        day: WorkOrderDay,
        link: WorkOrderDayService,
        service_tasks: Sequence[ServiceTaskTemplate],
    ) -> list[TaskInstance]:
        created: list[TaskInstance] = []
        identities: list[str] = await assignment_repository.get_assigned_identities(db, day.id)
        for service_task in service_tasks:
            if not service_task.is_active or not applies_on_day(service_task.day_number, day.day_number):
                continue
            for identity in identities:
                instance = await self._create_if_missing(
                    db,
                    day.id,
                    identity,
                    service_task.task_template_id,
                    RoutineOrigin(link.id, service_task.id),
                )
                if instance is not None:
                    created.append(instance)
        return created

    async def materialize_for_day_service(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        day_service_link_id: UUID,
    ) -> list[TaskInstance]:
        """일자-서비스 연결 하나에 대해 배정된 모든 작업자의 인스턴스를 생성합니다.

        Fan out over every assigned worker for one routine link, applying
        the day-number rule to the service's active task templates.
        """
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        link: WorkOrderDayService | None = await day_service_repository.get_by_id(db, day_service_link_id)
        if day is None or link is None or not link.is_active:
            return []
        service_tasks = await service_task_template_repository.get_by_service(db, link.service_id, active_only=True)
        return await self._routine_fan_out(db, day, link, service_tasks)

    async def materialize_for_standalone_task(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        day_task_template_id: UUID,
    ) -> list[TaskInstance]:
        """일자-작업 템플릿 연결 하나에 대해 배정된 모든 작업자의 인스턴스를 생성합니다.

        Fan out over every assigned worker for one standalone link.
        """
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        link: WorkOrderDayTaskTemplate | None = await day_task_template_repository.get_by_id(db, day_task_template_id)
        if day is None or link is None or not link.is_active:
            return []

        created: list[TaskInstance] = []
        for identity in await assignment_repository.get_assigned_identities(db, day.id):
            instance = await self._create_if_missing(
                db, day.id, identity, link.task_template_id, StandaloneOrigin(link.id)
            )
            if instance is not None:
                created.append(instance)
        return created

    async def materialize_for_new_routine_task(
        self,
        db: AsyncSession,
        service_task_template_id: UUID,
    ) -> list[TaskInstance]:
        """서비스에 새 루틴 작업이 추가되었을 때 기존 일자에 인스턴스를 생성합니다.

        Backfill a newly added (or reactivated) service task template onto
        every day its service is actively linked to, honouring its day
        number, for every worker assigned to those days.
        """
        service_task: ServiceTaskTemplate | None = await service_task_template_repository.get_by_id(db, service_task_template_id)
        if service_task is None or not service_task.is_active:
            return []

        created: list[TaskInstance] = []
        for link in await day_service_repository.get_active_by_service(db, service_task.service_id):
            day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, link.work_order_day_id)
            if day is None:
                continue
            created.extend(await self._routine_fan_out(db, day, link, [service_task]))
        return created

    async def count_orphaned_instances(
        self,
        db: AsyncSession,
        link: WorkOrderDayService | WorkOrderDayTaskTemplate,
    ) -> int:
        """연결 아래 작업 기록(응답 또는 완료)이 있는 인스턴스 수.

        Number of instances under the link that already carry work: at least
        one field response, or status ``completed``. Informational only.
        """
        if isinstance(link, WorkOrderDayService):
            column = TaskInstance.work_order_day_service_id
        else:
            column = TaskInstance.work_order_day_task_template_id
        return await task_instance_repository.count_with_work(db, column, link.id)

    async def list_orphaned_instances(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
    ) -> list[TaskInstance]:
        """출처 연결이 비활성이거나 사라진 일자의 인스턴스 목록.

        Instances of the day whose origin link is inactive or missing.
        """
        instances = await task_instance_repository.get_by_day(db, work_order_day_id)
        service_links = {
            link.id: link for link in await day_service_repository.get_by_day(db, work_order_day_id, active_only=False)
        }
        template_links = {
            link.id: link for link in await day_task_template_repository.get_by_day(db, work_order_day_id, active_only=False)
        }

        orphaned: list[TaskInstance] = []
        for instance in instances:
            origin = instance.origin
            if isinstance(origin, RoutineOrigin):
                link = service_links.get(origin.work_order_day_service_id)
            else:
                link = template_links.get(origin.work_order_day_task_template_id)
            if link is None or not link.is_active:
                orphaned.append(instance)
        return orphaned


# 싱글턴 인스턴스
task_instance_materializer: TaskInstanceMaterializer = TaskInstanceMaterializer()
