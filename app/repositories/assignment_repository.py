"""작업자 배정 레포지토리 — 일자별 작업자 배정 DB 쿼리 담당.

Assignment Repository — Handles work order day assignment queries.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.models.work_order import WorkOrderDay, WorkOrderDayAssignment
from app.repositories.base import BaseRepository


class AssignmentRepository(BaseRepository[WorkOrderDayAssignment]):
    """작업자 배정 레포지토리.

    Work order day assignment repository.

    Extends:
        BaseRepository[WorkOrderDayAssignment]
    """

    def __init__(self) -> None:
        super().__init__(WorkOrderDayAssignment)

    async def get_by_day(
        self, db: AsyncSession, work_order_day_id: UUID
    ) -> Sequence[WorkOrderDayAssignment]:
        query: Select = (
            select(WorkOrderDayAssignment)
            .where(WorkOrderDayAssignment.work_order_day_id == work_order_day_id)
            .order_by(WorkOrderDayAssignment.assigned_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_day_and_user(
        self, db: AsyncSession, work_order_day_id: UUID, user_id: UUID
    ) -> WorkOrderDayAssignment | None:
        query: Select = select(WorkOrderDayAssignment).where(
            WorkOrderDayAssignment.work_order_day_id == work_order_day_id,
            WorkOrderDayAssignment.user_id == user_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_assigned_identities(
        self, db: AsyncSession, work_order_day_id: UUID
    ) -> list[str]:
        """일자에 배정된 활성 작업자의 외부 식별자 목록.

        External identities of the active workers assigned to a day, in
        assignment order. Assignments whose user row is gone are skipped.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)

        Returns:
            list[str]: 외부 식별자 목록 (Identity strings)
        """
        query: Select = (
            select(User.external_id)
            .join(WorkOrderDayAssignment, WorkOrderDayAssignment.user_id == User.id)
            .where(
                WorkOrderDayAssignment.work_order_day_id == work_order_day_id,
                User.is_active.is_(True),
            )
            .order_by(WorkOrderDayAssignment.assigned_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_days_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Sequence[WorkOrderDay]:
        """사용자가 배정된 일자를 날짜순으로 조회합니다 (Days a user is assigned to)."""
        query: Select = (
            select(WorkOrderDay)
            .join(WorkOrderDayAssignment, WorkOrderDayAssignment.work_order_day_id == WorkOrderDay.id)
            .where(WorkOrderDayAssignment.user_id == user_id)
        )
        if date_from is not None:
            query = query.where(WorkOrderDay.day_date >= date_from)
        if date_to is not None:
            query = query.where(WorkOrderDay.day_date <= date_to)
        result = await db.execute(query.order_by(WorkOrderDay.day_date))
        return result.scalars().all()

    async def delete_by_days(self, db: AsyncSession, day_ids: Sequence[UUID]) -> None:
        if not day_ids:
            return
        await db.execute(delete(WorkOrderDayAssignment).where(WorkOrderDayAssignment.work_order_day_id.in_(list(day_ids))))
        await db.flush()


# 싱글턴 인스턴스
assignment_repository: AssignmentRepository = AssignmentRepository()
