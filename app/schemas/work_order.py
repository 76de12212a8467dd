"""작업 지시 관련 Pydantic 요청/응답 스키마 정의.

Work order Pydantic request/response schema definitions.
Covers work orders, their days, day links (services and task templates),
day dependencies, worker assignments and applicable task previews.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


# === 작업 지시 (Work order) 스키마 ===

class WorkOrderCreate(BaseModel):
    """작업 지시 생성 요청 스키마.

    Work order creation request. The inclusive date range is expanded into
    one day per calendar day.

    Attributes:
        customer_id: 고객 UUID (Customer)
        faena_id: 현장 UUID, 고객 소속 (Faena, must belong to the customer)
        service_id: 서비스 UUID, 선택 (Service to seed tasks from, optional)
        name: 작업 지시 이름 (Work order name)
        start_date: 시작일 (First day)
        end_date: 종료일, 포함 (Last day, inclusive)
        required_people_per_day: 일자별 필요 인원 (Workers needed per day)
        notes: 메모 (Notes, optional)
    """

    customer_id: UUID
    faena_id: UUID
    service_id: UUID | None = None
    name: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    required_people_per_day: int = 1
    notes: str | None = None


class WorkOrderFromServiceCreate(BaseModel):
    """서비스 기반 작업 지시 생성 요청 스키마.

    Work order creation from a service. Name and people count fall back to
    the service defaults.
    """

    service_id: UUID
    customer_id: UUID
    faena_id: UUID
    start_date: date
    end_date: date
    required_people_per_day: int | None = None
    name: str | None = None
    notes: str | None = None


class WorkOrderUpdate(BaseModel):
    name: str | None = None
    notes: str | None = None


class StatusUpdate(BaseModel):
    """상태 변경 요청 스키마 (Status change request)."""

    status: str


class WorkOrderResponse(BaseModel):
    id: str
    customer_id: str
    customer_name: str
    faena_id: str
    faena_name: str
    service_id: str | None
    service_name: str | None
    name: str
    status: str  # draft, scheduled, in_progress, completed, cancelled
    start_date: date
    end_date: date
    notes: str | None
    created_at: datetime
    updated_at: datetime


# === 작업 일자 (Work order day) 스키마 ===

class DaySummaryResponse(BaseModel):
    """작업 일자 요약 응답 스키마.

    Day summary with assignment, link and instance counts.
    """

    id: str
    work_order_id: str
    day_date: date
    day_number: int  # 1부터 시작 (1-based)
    status: str
    required_people: int | None
    notes: str | None
    assignment_count: int
    service_count: int
    task_template_count: int
    task_instance_count: int
    completed_instance_count: int


class DayAssigneeResponse(BaseModel):
    id: str
    user_id: str
    user_external_id: str | None
    user_name: str | None
    assigned_at: datetime


class DayDetailResponse(DaySummaryResponse):
    assignments: list[DayAssigneeResponse] = []


class WorkOrderDetailResponse(WorkOrderResponse):
    days: list[DaySummaryResponse] = []


class DayNotesUpdate(BaseModel):
    notes: str | None = None


class RequiredPeopleUpdate(BaseModel):
    required_people: int


# === 일자 연결 (Day link) 스키마 ===

class DayServiceAdd(BaseModel):
    """일자-서비스 연결 요청 스키마 (Link a service to a day)."""

    service_id: UUID
    order: int | None = None


class DayServiceResponse(BaseModel):
    id: str
    work_order_day_id: str
    service_id: str
    service_name: str
    order: int
    is_active: bool
    created_at: datetime


class DayTaskTemplateAdd(BaseModel):
    """일자-작업 템플릿 연결 요청 스키마 (Link a task template to a day)."""

    task_template_id: UUID
    order: int | None = None
    is_required: bool = False


class DayTaskTemplateResponse(BaseModel):
    id: str
    work_order_day_id: str
    task_template_id: str
    task_template_name: str
    order: int
    is_required: bool
    is_active: bool
    created_at: datetime


class DayDependencyResponse(BaseModel):
    id: str
    work_order_day_id: str
    work_order_day_task_template_id: str
    depends_on_work_order_day_task_template_id: str


# === 배정 (Assignment) 스키마 ===

class AssignmentCreate(BaseModel):
    """작업자 배정 요청 스키마 (Assign one worker)."""

    user_id: UUID


class BulkAssignmentRequest(BaseModel):
    """다중 배정/교체 요청 스키마 (Assign or replace several workers)."""

    user_ids: list[UUID]


class AssignmentResponse(BaseModel):
    id: str
    work_order_day_id: str
    user_id: str
    user_external_id: str | None
    user_name: str | None
    assigned_at: datetime
    assigned_by: str | None


# === 적용 작업 (Applicable tasks) 스키마 ===

class RoutineTaskResponse(BaseModel):
    day_service_link_id: str
    service_task_template_id: str
    task_template_id: str
    display_name: str | None


class StandaloneTaskResponse(BaseModel):
    link_id: str
    task_template_id: str
    display_name: str | None


class ApplicableTasksResponse(BaseModel):
    """일자 적용 작업 응답 스키마.

    Tasks applying to a day: routine tasks through linked services and
    standalone tasks linked directly.
    """

    routine_tasks: list[RoutineTaskResponse]
    standalone_tasks: list[StandaloneTaskResponse]
    total: int
