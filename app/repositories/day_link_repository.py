"""작업 일자 연결 레포지토리 — 일자-서비스, 일자-작업 템플릿, 일자 의존성 쿼리.

Day Link Repository — DB queries for the association tables hanging off a
work order day: routine service links, standalone task template links and
per-day dependency edges. Links are soft-deleted through ``is_active``.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.work_order import WorkOrderDayService, WorkOrderDayTaskDependency, WorkOrderDayTaskTemplate
from app.repositories.base import BaseRepository


class DayServiceRepository(BaseRepository[WorkOrderDayService]):
    """일자-서비스 연결 레포지토리 (Routine link repository)."""

    def __init__(self) -> None:
        super().__init__(WorkOrderDayService)

    async def get_by_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        active_only: bool = True,
    ) -> Sequence[WorkOrderDayService]:
        """일자의 서비스 연결을 순서대로 조회합니다.

        Retrieve a day's service links ordered by ``order``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)
            active_only: 활성 연결만 조회 (Only active links when True)

        Returns:
            Sequence[WorkOrderDayService]: 연결 목록 (Links)
        """
        query: Select = select(WorkOrderDayService).where(WorkOrderDayService.work_order_day_id == work_order_day_id)
        if active_only:
            query = query.where(WorkOrderDayService.is_active.is_(True))
        result = await db.execute(query.order_by(WorkOrderDayService.order, WorkOrderDayService.created_at))
        return result.scalars().all()

    async def get_by_day_and_service(
        self, db: AsyncSession, work_order_day_id: UUID, service_id: UUID
    ) -> WorkOrderDayService | None:
        query: Select = select(WorkOrderDayService).where(
            WorkOrderDayService.work_order_day_id == work_order_day_id,
            WorkOrderDayService.service_id == service_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_by_service(
        self, db: AsyncSession, service_id: UUID
    ) -> Sequence[WorkOrderDayService]:
        query: Select = (
            select(WorkOrderDayService)
            .where(
                WorkOrderDayService.service_id == service_id,
                WorkOrderDayService.is_active.is_(True),
            )
            .order_by(WorkOrderDayService.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def count_active(self, db: AsyncSession, work_order_day_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(WorkOrderDayService)
            .where(
                WorkOrderDayService.work_order_day_id == work_order_day_id,
                WorkOrderDayService.is_active.is_(True),
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def count_by_service(self, db: AsyncSession, service_id: UUID) -> int:
        """비활성 포함 서비스 연결 수 (Day links to the service, inactive included)."""
        query: Select = (
            select(func.count())
            .select_from(WorkOrderDayService)
            .where(WorkOrderDayService.service_id == service_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_by_days(self, db: AsyncSession, day_ids: Sequence[UUID]) -> None:
        if not day_ids:
            return
        await db.execute(delete(WorkOrderDayService).where(WorkOrderDayService.work_order_day_id.in_(list(day_ids))))
        await db.flush()


class DayTaskTemplateRepository(BaseRepository[WorkOrderDayTaskTemplate]):
    """일자-작업 템플릿 연결 레포지토리 (Standalone link repository)."""

    def __init__(self) -> None:
        super().__init__(WorkOrderDayTaskTemplate)

    async def get_by_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        active_only: bool = True,
    ) -> Sequence[WorkOrderDayTaskTemplate]:
        query: Select = select(WorkOrderDayTaskTemplate).where(WorkOrderDayTaskTemplate.work_order_day_id == work_order_day_id)
        if active_only:
            query = query.where(WorkOrderDayTaskTemplate.is_active.is_(True))
        result = await db.execute(query.order_by(WorkOrderDayTaskTemplate.order, WorkOrderDayTaskTemplate.created_at))
        return result.scalars().all()

    async def get_by_day_and_template(
        self, db: AsyncSession, work_order_day_id: UUID, task_template_id: UUID
    ) -> WorkOrderDayTaskTemplate | None:
        query: Select = select(WorkOrderDayTaskTemplate).where(
            WorkOrderDayTaskTemplate.work_order_day_id == work_order_day_id,
            WorkOrderDayTaskTemplate.task_template_id == task_template_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_active(self, db: AsyncSession, work_order_day_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(WorkOrderDayTaskTemplate)
            .where(
                WorkOrderDayTaskTemplate.work_order_day_id == work_order_day_id,
                WorkOrderDayTaskTemplate.is_active.is_(True),
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def count_by_task_template(self, db: AsyncSession, task_template_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(WorkOrderDayTaskTemplate)
            .where(WorkOrderDayTaskTemplate.task_template_id == task_template_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_by_days(self, db: AsyncSession, day_ids: Sequence[UUID]) -> None:
        if not day_ids:
            return
        await db.execute(delete(WorkOrderDayTaskTemplate).where(WorkOrderDayTaskTemplate.work_order_day_id.in_(list(day_ids))))
        await db.flush()


class DayTaskDependencyRepository(BaseRepository[WorkOrderDayTaskDependency]):
    """일자별 작업 의존성 레포지토리 (Per-day dependency repository)."""

    def __init__(self) -> None:
        super().__init__(WorkOrderDayTaskDependency)

    async def get_by_day(
        self, db: AsyncSession, work_order_day_id: UUID
    ) -> Sequence[WorkOrderDayTaskDependency]:
        query: Select = (
            select(WorkOrderDayTaskDependency)
            .where(WorkOrderDayTaskDependency.work_order_day_id == work_order_day_id)
            .order_by(WorkOrderDayTaskDependency.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def delete_by_days(self, db: AsyncSession, day_ids: Sequence[UUID]) -> None:
        if not day_ids:
            return
        await db.execute(delete(WorkOrderDayTaskDependency).where(WorkOrderDayTaskDependency.work_order_day_id.in_(list(day_ids))))
        await db.flush()


# 싱글턴 인스턴스
day_service_repository: DayServiceRepository = DayServiceRepository()
day_task_template_repository: DayTaskTemplateRepository = DayTaskTemplateRepository()
day_task_dependency_repository: DayTaskDependencyRepository = DayTaskDependencyRepository()
