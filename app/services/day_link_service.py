"""작업 일자 연결 서비스 — 일자-서비스 및 일자-작업 템플릿 연결 관리.

Day Link Service — Manages the links hanging off a work order day:
routine service links and standalone task template links.
Adding a link materializes instances for the workers already assigned;
removing one is a soft deactivation that reports how many instances under it
already carry work. Instances are never deleted here.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import Service
from app.models.template import TaskTemplate
from app.models.work_order import WorkOrderDay, WorkOrderDayService, WorkOrderDayTaskDependency, WorkOrderDayTaskTemplate
from app.repositories.day_link_repository import day_service_repository, day_task_dependency_repository, day_task_template_repository
from app.repositories.service_repository import service_repository
from app.repositories.task_template_repository import task_template_repository
from app.repositories.work_order_repository import work_order_day_repository
from app.services.task_instance_materializer import task_instance_materializer
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class DayLinkService:
    """작업 일자 연결 서비스 (Day link manager)."""

    async def _get_day(self, db: AsyncSession, work_order_day_id: UUID) -> WorkOrderDay:
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            raise NotFoundError("작업 일자를 찾을 수 없습니다 (Work order day not found)")
        return day

    # ------------------------------------------------------------------
    # 일자-서비스 연결 — Routine links
    # ------------------------------------------------------------------

    async def add_service_to_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        service_id: UUID,
        order: int | None = None,
    ) -> WorkOrderDayService:
        """일자에 서비스를 연결합니다.

        Link a service to a day. An inactive link for the same pair is
        reactivated instead of duplicated; either way the assigned workers'
        instances are materialized. Default order appends after the active
        links.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)
            service_id: 서비스 UUID (Service UUID)
            order: 정렬 순서, 선택 (Display order, optional)

        Returns:
            WorkOrderDayService: 활성 연결 (The active link)

        Raises:
            NotFoundError: 일자 또는 서비스가 없을 때 (Day or service missing)
            DuplicateError: 활성 연결이 이미 있을 때 (Active link already exists)
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        service: Service | None = await service_repository.get_by_id(db, service_id)
        if service is None:
            raise NotFoundError("서비스를 찾을 수 없습니다 (Service not found)")

        existing: WorkOrderDayService | None = await day_service_repository.get_by_day_and_service(db, day.id, service_id)
        if existing is not None and existing.is_active:
            raise DuplicateError("이미 일자에 연결된 서비스입니다 (Service is already linked to this day)")

        if existing is not None:
            # 비활성 연결 재활성화 — Reactivate the soft-removed link
            patch: dict = {"is_active": True}
            if order is not None:
                patch["order"] = order
            link = await day_service_repository.update(db, existing.id, patch)
        else:
            if order is None:
                order = await day_service_repository.count_active(db, day.id)
            link = await day_service_repository.create(db, {
                "work_order_day_id": day.id,
                "service_id": service_id,
                "order": order,
                "is_active": True,
            })

        await task_instance_materializer.materialize_for_day_service(db, day.id, link.id)
        return link

    async def remove_service_from_day(
        self,
        db: AsyncSession,
        link_id: UUID,
    ) -> int:
        """일자-서비스 연결을 비활성화합니다.

        Soft-deactivate a routine link. Always succeeds for an existing link.

        Returns:
            int: 작업 기록이 있는 인스턴스 수 (Orphaned instance count)

        Raises:
            NotFoundError: 연결이 없을 때 (When the link does not exist)
        """
        link: WorkOrderDayService | None = await day_service_repository.get_by_id(db, link_id)
        if link is None:
            raise NotFoundError("일자-서비스 연결을 찾을 수 없습니다 (Day service link not found)")
        await day_service_repository.update(db, link.id, {"is_active": False})
        return await task_instance_materializer.count_orphaned_instances(db, link)

    async def reorder_services(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        link_ids: list[UUID],
    ) -> Sequence[WorkOrderDayService]:
        """서비스 연결 순서를 목록 위치대로 다시 매깁니다.

        Set ``order`` to each link's position in ``link_ids``. A partial list
        only touches the links it names; the rest keep their order.

        Raises:
            NotFoundError: 일자 또는 연결이 없을 때 (Day or a link missing)
            BadRequestError: 다른 일자의 연결일 때 (A link belongs to another day)
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        links: list[WorkOrderDayService] = []
        for link_id in link_ids:
            link: WorkOrderDayService | None = await day_service_repository.get_by_id(db, link_id)
            if link is None:
                raise NotFoundError(f"일자-서비스 연결을 찾을 수 없습니다 (Day service link {link_id} not found)")
            if link.work_order_day_id != day.id:
                raise BadRequestError(f"다른 일자의 연결입니다 (Link {link_id} does not belong to this day)")
            links.append(link)

        for index, link in enumerate(links):
            link.order = index
        await db.flush()
        return await day_service_repository.get_by_day(db, day.id, active_only=False)

    async def list_day_services(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        include_inactive: bool = False,
    ) -> Sequence[WorkOrderDayService]:
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        return await day_service_repository.get_by_day(db, day.id, active_only=not include_inactive)

    # ------------------------------------------------------------------
    # 일자-작업 템플릿 연결 — Standalone links
    # ------------------------------------------------------------------

    async def add_task_template_to_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        task_template_id: UUID,
        order: int | None = None,
        is_required: bool = False,
    ) -> WorkOrderDayTaskTemplate:
        """일자에 작업 템플릿을 직접 연결합니다.

        Link a task template directly to a day and materialize it for every
        assigned worker. An inactive link is reactivated.

        Raises:
            NotFoundError: 일자 또는 템플릿이 없을 때 (Day or template missing)
            DuplicateError: 활성 연결이 이미 있을 때 (Active link already exists)
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        template: TaskTemplate | None = await task_template_repository.get_by_id(db, task_template_id)
        if template is None:
            raise NotFoundError("작업 템플릿을 찾을 수 없습니다 (Task template not found)")

        existing: WorkOrderDayTaskTemplate | None = await day_task_template_repository.get_by_day_and_template(db, day.id, task_template_id)
        if existing is not None and existing.is_active:
            raise DuplicateError("이미 일자에 연결된 작업 템플릿입니다 (Task template is already linked to this day)")

        if existing is not None:
            patch: dict = {"is_active": True, "is_required": is_required}
            if order is not None:
                patch["order"] = order
            link = await day_task_template_repository.update(db, existing.id, patch)
        else:
            if order is None:
                order = await day_task_template_repository.count_active(db, day.id)
            link = await day_task_template_repository.create(db, {
                "work_order_day_id": day.id,
                "task_template_id": task_template_id,
                "order": order,
                "is_required": is_required,
                "is_active": True,
            })

        await task_instance_materializer.materialize_for_standalone_task(db, day.id, link.id)
        return link

    async def remove_task_template_from_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        task_template_id: UUID,
    ) -> int:
        """일자-작업 템플릿 연결을 비활성화하고 고아 인스턴스 수를 반환합니다.

        Soft-deactivate a standalone link and return its orphaned count.
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        link: WorkOrderDayTaskTemplate | None = await day_task_template_repository.get_by_day_and_template(db, day.id, task_template_id)
        if link is None:
            raise NotFoundError("일자-작업 템플릿 연결을 찾을 수 없습니다 (Day task template link not found)")
        await day_task_template_repository.update(db, link.id, {"is_active": False})
        return await task_instance_materializer.count_orphaned_instances(db, link)

    async def reorder_task_templates(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        link_ids: list[UUID],
    ) -> Sequence[WorkOrderDayTaskTemplate]:
        """작업 템플릿 연결 순서를 목록 위치대로 다시 매깁니다 (partial lists allowed)."""
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        links: list[WorkOrderDayTaskTemplate] = []
        for link_id in link_ids:
            link: WorkOrderDayTaskTemplate | None = await day_task_template_repository.get_by_id(db, link_id)
            if link is None:
                raise NotFoundError(f"일자-작업 템플릿 연결을 찾을 수 없습니다 (Day task template link {link_id} not found)")
            if link.work_order_day_id != day.id:
                raise BadRequestError(f"다른 일자의 연결입니다 (Link {link_id} does not belong to this day)")
            links.append(link)

        for index, link in enumerate(links):
            link.order = index
        await db.flush()
        return await day_task_template_repository.get_by_day(db, day.id, active_only=False)

    async def list_day_task_templates(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        include_inactive: bool = False,
    ) -> Sequence[WorkOrderDayTaskTemplate]:
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        return await day_task_template_repository.get_by_day(db, day.id, active_only=not include_inactive)

    async def list_day_dependencies(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
    ) -> Sequence[WorkOrderDayTaskDependency]:
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        return await day_task_dependency_repository.get_by_day(db, day.id)

    async def build_service_link_response(self, db: AsyncSession, link: WorkOrderDayService) -> dict:
        service: Service | None = await service_repository.get_by_id(db, link.service_id)
        return {
            "id": str(link.id),
            "work_order_day_id": str(link.work_order_day_id),
            "service_id": str(link.service_id),
            "service_name": service.name if service else "",
            "order": link.order,
            "is_active": link.is_active,
            "created_at": link.created_at,
        }

    async def build_task_template_link_response(self, db: AsyncSession, link: WorkOrderDayTaskTemplate) -> dict:
        template: TaskTemplate | None = await task_template_repository.get_by_id(db, link.task_template_id)
        return {
            "id": str(link.id),
            "work_order_day_id": str(link.work_order_day_id),
            "task_template_id": str(link.task_template_id),
            "task_template_name": template.name if template else "",
            "order": link.order,
            "is_required": link.is_required,
            "is_active": link.is_active,
            "created_at": link.created_at,
        }


    def build_dependency_response(self, edge: WorkOrderDayTaskDependency) -> dict:
        return {
            "id": str(edge.id),
            "work_order_day_id": str(edge.work_order_day_id),
            "work_order_day_task_template_id": str(edge.work_order_day_task_template_id),
            "depends_on_work_order_day_task_template_id": str(edge.depends_on_work_order_day_task_template_id),
        }

# 싱글턴 인스턴스
day_link_service: DayLinkService = DayLinkService()
