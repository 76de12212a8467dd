"""작업자 배정 서비스 — 일자별 작업자 배정 비즈니스 로직.

Assignment Service — Business logic for assigning field workers to work
order days. Every assignment triggers materialization of the worker's task
instances for that day; unassigning keeps the instances already created.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.models.work_order import WorkOrderDay, WorkOrderDayAssignment
from app.repositories.assignment_repository import assignment_repository
from app.repositories.user_repository import user_repository
from app.repositories.work_order_repository import work_order_day_repository
from app.services.applicability_service import ApplicableTasks, applicability_service
from app.services.task_instance_materializer import task_instance_materializer
from app.utils.exceptions import BadRequestError, NotFoundError


class AssignmentService:
    """작업자 배정 서비스.

    Work order day assignment service handling assign, unassign, bulk
    assign and replacement of a day's worker set.
    """

    async def _get_day(self, db: AsyncSession, work_order_day_id: UUID) -> WorkOrderDay:
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            raise NotFoundError("작업 일자를 찾을 수 없습니다 (Work order day not found)")
        return day

    async def _get_user(self, db: AsyncSession, user_id: UUID) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("사용자를 찾을 수 없습니다 (User not found)")
        if not user.is_active:
            raise BadRequestError("비활성 사용자는 배정할 수 없습니다 (Inactive users cannot be assigned)")
        return user

    async def assign_user(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_id: UUID,
        assigned_by: UUID | None = None,
        applicable: ApplicableTasks | None = None,
    ) -> WorkOrderDayAssignment:
        """작업자를 일자에 배정하고 작업 인스턴스를 생성합니다.

        Assign a worker to a day and materialize their task instances. An
        existing assignment is returned as is, and materialization still
        runs so a retried call fills any gap without duplicating.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            work_order_day_id: 일자 UUID (Day UUID)
            user_id: 사용자 UUID (User UUID)
            assigned_by: 배정자 UUID (Assigning administrator, optional)
            applicable: 미리 계산된 적용 작업 (Precomputed applicable tasks, optional)

        Returns:
            WorkOrderDayAssignment: 배정 (The assignment)

        Raises:
            NotFoundError: 일자 또는 사용자 없음 (Day or user missing)
            BadRequestError: 비활성 사용자 (Inactive user)
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        user: User = await self._get_user(db, user_id)

        assignment: WorkOrderDayAssignment | None = await assignment_repository.get_by_day_and_user(db, day.id, user.id)
        if assignment is None:
            assignment = await assignment_repository.create(db, {
                "work_order_day_id": day.id,
                "user_id": user.id,
                "assigned_by": assigned_by,
            })

        await task_instance_materializer.materialize_for_assigned_user(db, day.id, user.external_id, applicable)
        return assignment

    async def unassign_user(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_id: UUID,
    ) -> None:
        """배정을 해제합니다. 생성된 인스턴스는 유지됩니다 (Instances are kept)."""
        assignment: WorkOrderDayAssignment | None = await assignment_repository.get_by_day_and_user(db, work_order_day_id, user_id)
        if assignment is None:
            raise NotFoundError("배정을 찾을 수 없습니다 (Assignment not found)")
        await assignment_repository.delete(db, assignment.id)

    async def bulk_assign(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_ids: list[UUID],
        assigned_by: UUID | None = None,
    ) -> list[WorkOrderDayAssignment]:
        """여러 작업자를 한 번에 배정합니다.

        Assign several workers to one day. The applicable tasks are resolved
        once and shared across all workers.
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        # 사용자 검증을 먼저 — Validate every user before the first write
        for user_id in user_ids:
            await self._get_user(db, user_id)

        applicable: ApplicableTasks = await applicability_service.resolve_for_day(db, day)
        assignments: list[WorkOrderDayAssignment] = []
        for user_id in dict.fromkeys(user_ids):
            assignments.append(await self.assign_user(db, day.id, user_id, assigned_by, applicable))
        return assignments

    async def replace_assignments(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
        user_ids: list[UUID],
        assigned_by: UUID | None = None,
    ) -> list[WorkOrderDayAssignment]:
        """일자의 작업자 집합을 주어진 목록으로 교체합니다.

        Make the day's assigned workers exactly ``user_ids``: assignments
        not in the list are removed, new ones are created and materialized.
        """
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        for user_id in user_ids:
            await self._get_user(db, user_id)
        wanted: set[UUID] = set(user_ids)
        for assignment in await assignment_repository.get_by_day(db, day.id):
            if assignment.user_id not in wanted:
                await assignment_repository.delete(db, assignment.id)
        return await self.bulk_assign(db, day.id, user_ids, assigned_by)

    async def list_assignments(
        self,
        db: AsyncSession,
        work_order_day_id: UUID,
    ) -> Sequence[WorkOrderDayAssignment]:
        day: WorkOrderDay = await self._get_day(db, work_order_day_id)
        return await assignment_repository.get_by_day(db, day.id)

    async def list_days_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Sequence[WorkOrderDay]:
        """작업자가 배정된 일자를 날짜순으로 반환합니다 (Days the worker is assigned to)."""
        return await assignment_repository.get_days_for_user(db, user_id, date_from, date_to)

    async def build_response(self, db: AsyncSession, assignment: WorkOrderDayAssignment) -> dict:
        user: User | None = await user_repository.get_by_id(db, assignment.user_id)
        return {
            "id": str(assignment.id),
            "work_order_day_id": str(assignment.work_order_day_id),
            "user_id": str(assignment.user_id),
            "user_external_id": user.external_id if user else None,
            "user_name": user.full_name if user else None,
            "assigned_at": assignment.assigned_at,
            "assigned_by": str(assignment.assigned_by) if assignment.assigned_by else None,
        }


# 싱글턴 인스턴스
assignment_service: AssignmentService = AssignmentService()
