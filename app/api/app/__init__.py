"""앱 API 라우터 패키지 — 모든 앱(작업자용) 엔드포인트 통합.

App API Router package — Aggregates all app-facing (field worker)
endpoints into a single router for inclusion in the FastAPI application.
Every endpoint identifies the worker through the ``X-User-Id`` header.

Included routers:
    - work_days: 내 배정 일자와 작업 (My assigned days and their tasks)
    - task_instances: 필드 응답 및 완료 (Field answers and completion)
"""

from fastapi import APIRouter

from app.api.app.work_days import router as work_days_router
from app.api.app.task_instances import router as task_instances_router

app_router: APIRouter = APIRouter()

# 내 작업 일자: /my/days 하위 (My days)
app_router.include_router(work_days_router, prefix="/my/days", tags=["App Work Days"])
# 내 작업: /my/tasks 하위 (My task instances)
app_router.include_router(task_instances_router, prefix="/my/tasks", tags=["App Task Instances"])
