"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers (Catalog):
    - customers: 고객/현장 관리 (Customer and faena management)
    - users: 작업자 관리 (Field worker records)
    - services: 서비스, 서비스 작업, 의존성 (Services, routine tasks, dependencies)
    - task_templates: 작업 템플릿, 필드, 조건 (Task templates, fields, conditions)
    - lookups: 조회 엔티티 (Lookup entity types and entities)

Included routers (Scheduling):
    - work_orders: 작업 지시 생성/조회/삭제 (Work order expansion and lifecycle)
    - work_order_days: 일자 연결, 배정, 적용 작업 (Day links, assignments, applicability)
    - task_instances: 작업 인스턴스 조회 (Task instance detail)
"""

from fastapi import APIRouter

# Catalog 라우터 임포트
from app.api.admin.customers import router as customers_router
from app.api.admin.users import router as users_router
from app.api.admin.services import router as services_router
from app.api.admin.task_templates import router as task_templates_router
from app.api.admin.lookups import router as lookups_router

# Scheduling 라우터 임포트
from app.api.admin.work_orders import router as work_orders_router
from app.api.admin.work_order_days import router as work_order_days_router
from app.api.admin.task_instances import router as task_instances_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# Catalog 라우터 등록 — Register catalog routers
# ---------------------------------------------------------------------------
admin_router.include_router(customers_router, prefix="/customers", tags=["Customers"])
admin_router.include_router(users_router, prefix="/users", tags=["Users"])
admin_router.include_router(services_router, prefix="/services", tags=["Services"])
admin_router.include_router(task_templates_router, prefix="/task-templates", tags=["Task Templates"])
admin_router.include_router(lookups_router, prefix="/lookups", tags=["Lookups"])

# ---------------------------------------------------------------------------
# Scheduling 라우터 등록 — Register scheduling routers
# ---------------------------------------------------------------------------
admin_router.include_router(work_orders_router, prefix="/work-orders", tags=["Work Orders"])
# 작업 일자: /work-order-days/{day_id} 하위 (Day-scoped endpoints)
admin_router.include_router(work_order_days_router, prefix="/work-order-days", tags=["Work Order Days"])
admin_router.include_router(task_instances_router, prefix="/task-instances", tags=["Task Instances"])
