"""작업 인스턴스 레포지토리 — 인스턴스 및 필드 응답 쿼리.

Task Instance Repository — DB queries for task instances and field responses.
The (day, user) index backs every idempotency lookup; the origin-specific
foreign key narrows it to one instance.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, case, delete, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task_instance import FieldResponse, TaskInstance
from app.repositories.base import BaseRepository


class TaskInstanceRepository(BaseRepository[TaskInstance]):
    """작업 인스턴스 레포지토리 (Task instance repository)."""

    def __init__(self) -> None:
        super().__init__(TaskInstance)

    async def find_routine(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_id: str,
        service_task_template_id: UUID,
    ) -> TaskInstance | None:
        """루틴 출처 인스턴스를 조회합니다 (Existing routine-origin instance, if any)."""
        query: Select = select(TaskInstance).where(
            TaskInstance.work_order_day_id == work_order_day_id,
            TaskInstance.user_id == user_id,
            TaskInstance.service_task_template_id == service_task_template_id,
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def find_standalone(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_id: str,
        work_order_day_task_template_id: UUID,
    ) -> TaskInstance | None:
        """독립 출처 인스턴스를 조회합니다 (Existing standalone-origin instance, if any)."""
        query: Select = select(TaskInstance).where(
            TaskInstance.work_order_day_id == work_order_day_id,
            TaskInstance.user_id == user_id,
            TaskInstance.work_order_day_task_template_id == work_order_day_task_template_id,
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_by_day(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_id: str | None = None,
    ) -> Sequence[TaskInstance]:
        query: Select = select(TaskInstance).where(TaskInstance.work_order_day_id == work_order_day_id)
        if user_id is not None:
            query = query.where(TaskInstance.user_id == user_id)
        result = await db.execute(query.order_by(TaskInstance.created_at))
        return result.scalars().all()

    async def get_by_days(
        self, db: AsyncSession, day_ids: Sequence[UUID]
    ) -> Sequence[TaskInstance]:
        if not day_ids:
            return []
        result = await db.execute(
            select(TaskInstance).where(TaskInstance.work_order_day_id.in_(list(day_ids)))
        )
        return result.scalars().all()

    async def count_with_work(self, db: AsyncSession, link_column: Any, link_id: UUID) -> int:
        """연결 아래 작업 기록이 있는 인스턴스 수.

        Count instances under a link that are completed or have at least one
        field response.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            link_column: 출처 FK 컬럼 (Origin foreign key column on TaskInstance)
            link_id: 연결 UUID (Link UUID)

        Returns:
            int: 고아 인스턴스 수 (Number of instances carrying work)
        """
        has_response = exists().where(FieldResponse.task_instance_id == TaskInstance.id)
        query: Select = (
            select(func.count())
            .select_from(TaskInstance)
            .where(
                link_column == link_id,
                or_(TaskInstance.status == "completed", has_response),
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def count_by_day(self, db: AsyncSession, work_order_day_id: UUID) -> tuple[int, int]:
        """(전체, 완료) 인스턴스 수 (Total and completed instance counts for a day)."""
        query: Select = select(
            func.count(TaskInstance.id),
            func.coalesce(func.sum(case((TaskInstance.status == "completed", 1), else_=0)), 0),
        ).where(TaskInstance.work_order_day_id == work_order_day_id)
        total, completed = (await db.execute(query)).one()
        return total or 0, completed or 0

    async def delete_by_days(self, db: AsyncSession, day_ids: Sequence[UUID]) -> None:
        if not day_ids:
            return
        await db.execute(delete(TaskInstance).where(TaskInstance.work_order_day_id.in_(list(day_ids))))
        await db.flush()


class FieldResponseRepository(BaseRepository[FieldResponse]):
    """필드 응답 레포지토리 (Field response repository)."""

    def __init__(self) -> None:
        super().__init__(FieldResponse)

    async def get_by_instance(
        self, db: AsyncSession, task_instance_id: UUID
    ) -> Sequence[FieldResponse]:
        result = await db.execute(
            select(FieldResponse)
            .where(FieldResponse.task_instance_id == task_instance_id)
            .order_by(FieldResponse.created_at)
        )
        return result.scalars().all()

    async def get_by_instance_and_field(
        self, db: AsyncSession, task_instance_id: UUID, field_template_id: UUID
    ) -> FieldResponse | None:
        result = await db.execute(
            select(FieldResponse).where(
                FieldResponse.task_instance_id == task_instance_id,
                FieldResponse.field_template_id == field_template_id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_by_instances(self, db: AsyncSession, instance_ids: Sequence[UUID]) -> None:
        if not instance_ids:
            return
        await db.execute(delete(FieldResponse).where(FieldResponse.task_instance_id.in_(list(instance_ids))))
        await db.flush()


# 싱글턴 인스턴스
task_instance_repository: TaskInstanceRepository = TaskInstanceRepository()
field_response_repository: FieldResponseRepository = FieldResponseRepository()
