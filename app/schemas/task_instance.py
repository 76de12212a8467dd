"""작업 인스턴스 관련 Pydantic 요청/응답 스키마 정의.

Task instance Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TaskInstanceResponse(BaseModel):
    """작업 인스턴스 응답 스키마.

    Task instance response. Exactly one origin is populated: the routine
    pair (``work_order_day_service_id``, ``service_task_template_id``) or
    ``work_order_day_task_template_id``.

    Attributes:
        user_id: 작업자 외부 식별자 (Worker external identity)
        origin_type: routine 또는 standalone (Origin kind)
        instance_label: 생성 시점 템플릿 이름 (Template name at creation)
    """

    id: str
    work_order_day_id: str
    user_id: str
    task_template_id: str
    origin_type: str
    work_order_day_service_id: str | None
    service_task_template_id: str | None
    work_order_day_task_template_id: str | None
    status: str  # draft, completed
    instance_label: str | None
    started_at: datetime | None
    completed_at: datetime | None
    completed_tz: str | None
    created_at: datetime


class InstanceFieldResponse(BaseModel):
    field_template_id: str
    label: str
    field_type: str
    order: int
    is_required: bool
    value: str | None
    answered_by: str | None


class TaskInstanceDetailResponse(TaskInstanceResponse):
    fields: list[InstanceFieldResponse] = []


class FieldResponseUpsert(BaseModel):
    """필드 응답 저장 요청 스키마 (Save the answer to one field)."""

    field_template_id: UUID
    value: str | None = None


class FieldResponseResponse(BaseModel):
    id: str
    task_instance_id: str
    field_template_id: str
    value: str | None
    answered_by: str
    updated_at: datetime


class MarkCompleteRequest(BaseModel):
    """완료 처리 요청 스키마.

    Attributes:
        client_timezone: 작업자 IANA 타임존, 선택 (Worker IANA timezone, optional)
    """

    client_timezone: str | None = None

