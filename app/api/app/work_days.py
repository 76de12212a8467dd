"""앱 작업 일자 라우터 — 작업자 본인의 배정 일자와 작업 목록.

App Work Day Router — The calling worker's assigned days and the task
instances materialized for them on a day.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_worker
from app.database import get_db
from app.models.user import User
from app.schemas.task_instance import TaskInstanceResponse
from app.schemas.work_order import DaySummaryResponse
from app.services.assignment_service import assignment_service
from app.services.task_instance_service import task_instance_service
from app.services.work_order_service import work_order_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[DaySummaryResponse])
async def list_my_days(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_worker)],
    date_from: Annotated[date | None, Query(description="기간 시작")] = None,
    date_to: Annotated[date | None, Query(description="기간 종료")] = None,
) -> list[dict]:
    """내가 배정된 작업 일자 목록을 조회합니다.

    List the days the current worker is assigned to, by date.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 식별된 작업자 (Identified worker)
        date_from: 기간 시작, 포함 (Window start, inclusive)
        date_to: 기간 종료, 포함 (Window end, inclusive)

    Returns:
        list[dict]: 일자 요약 목록 (Day summaries)
    """
    days = await assignment_service.list_days_for_user(db, current_user.id, date_from, date_to)
    return [await work_order_service.build_day_summary(db, day) for day in days]


@router.get("/{day_id}/tasks", response_model=list[TaskInstanceResponse])
async def list_my_tasks_for_day(
    day_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_worker)],
) -> list[dict]:
    """해당 일자의 내 작업 인스턴스 (My task instances on the day)."""
    await work_order_service.get_day(db, day_id)
    instances = await task_instance_service.list_for_user_on_day(db, day_id, current_user.external_id)
    return [task_instance_service.build_response(i) for i in instances]
