"""작업 지시 레포지토리 — 작업 지시 및 일자 쿼리.

Work Order Repository — DB queries for work orders and their days.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.work_order import WorkOrder, WorkOrderDay
from app.repositories.base import BaseRepository


class WorkOrderRepository(BaseRepository[WorkOrder]):
    """작업 지시 레포지토리 (Work order repository)."""

    def __init__(self) -> None:
        super().__init__(WorkOrder)

    def build_list_query(
        self,
        customer_id: UUID | None = None,
        faena_id: UUID | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Select:
        """필터 조건으로 목록 쿼리를 생성합니다.

        Build the list query. ``date_from``/``date_to`` select work orders
        whose date range overlaps the given window.

        Args:
            customer_id: 고객 필터 (Customer filter)
            faena_id: 현장 필터 (Faena filter)
            status: 상태 필터 (Status filter)
            date_from: 기간 시작 (Window start, inclusive)
            date_to: 기간 종료 (Window end, inclusive)

        Returns:
            Select: 시작일 역순 정렬 쿼리 (Query ordered by start date, newest first)
        """
        query: Select = select(WorkOrder)
        if customer_id is not None:
            query = query.where(WorkOrder.customer_id == customer_id)
        if faena_id is not None:
            query = query.where(WorkOrder.faena_id == faena_id)
        if status is not None:
            query = query.where(WorkOrder.status == status)
        # 기간 겹침 — Range overlap
        if date_from is not None:
            query = query.where(WorkOrder.end_date >= date_from)
        if date_to is not None:
            query = query.where(WorkOrder.start_date <= date_to)
        return query.order_by(WorkOrder.start_date.desc(), WorkOrder.created_at.desc())

    async def count_by_service(self, db: AsyncSession, service_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(WorkOrder)
            .where(WorkOrder.service_id == service_id)
        )
        return (await db.execute(query)).scalar() or 0


class WorkOrderDayRepository(BaseRepository[WorkOrderDay]):
    """작업 일자 레포지토리 (Work order day repository)."""

    def __init__(self) -> None:
        super().__init__(WorkOrderDay)

    async def get_by_work_order(
        self, db: AsyncSession, work_order_id: UUID
    ) -> Sequence[WorkOrderDay]:
        """작업 지시의 일자를 일차 순으로 조회합니다 (Days ordered by day number)."""
        query: Select = (
            select(WorkOrderDay)
            .where(WorkOrderDay.work_order_id == work_order_id)
            .order_by(WorkOrderDay.day_number)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def delete_by_work_order(self, db: AsyncSession, work_order_id: UUID) -> None:
        await db.execute(delete(WorkOrderDay).where(WorkOrderDay.work_order_id == work_order_id))
        await db.flush()


# 싱글턴 인스턴스
work_order_repository: WorkOrderRepository = WorkOrderRepository()
work_order_day_repository: WorkOrderDayRepository = WorkOrderDayRepository()
