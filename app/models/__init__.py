"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
``create_all`` in tests.

Modules:
    customer: 고객 및 현장 (Customer, Faena)
    user: 작업자 (User)
    template: 작업 템플릿, 필드 템플릿, 필드 조건 (TaskTemplate, FieldTemplate, FieldCondition)
    lookup: 조회 엔티티 유형 및 엔티티 (LookupEntityType, LookupEntity)
    service: 서비스, 서비스 작업, 서비스 작업 의존성 (Service, ServiceTaskTemplate, ServiceTaskDependency)
    work_order: 작업 지시, 일자, 배정, 일자 연결 (WorkOrder, days, assignments, day links)
    task_instance: 작업 인스턴스 및 필드 응답 (TaskInstance, FieldResponse)
"""

from app.models.customer import Customer, Faena
from app.models.user import User
from app.models.template import TaskTemplate, FieldTemplate, FieldCondition
from app.models.lookup import LookupEntityType, LookupEntity
from app.models.service import Service, ServiceTaskTemplate, ServiceTaskDependency
from app.models.work_order import WorkOrder, WorkOrderDay, WorkOrderDayAssignment, WorkOrderDayService, WorkOrderDayTaskTemplate, WorkOrderDayTaskDependency
from app.models.task_instance import TaskInstance, FieldResponse, RoutineOrigin, StandaloneOrigin

__all__ = [
    "Customer", "Faena",
    "User",
    "TaskTemplate", "FieldTemplate", "FieldCondition",
    "LookupEntityType", "LookupEntity",
    "Service", "ServiceTaskTemplate", "ServiceTaskDependency",
    "WorkOrder", "WorkOrderDay", "WorkOrderDayAssignment", "WorkOrderDayService", "WorkOrderDayTaskTemplate", "WorkOrderDayTaskDependency",
    "TaskInstance", "FieldResponse", "RoutineOrigin", "StandaloneOrigin",
]
