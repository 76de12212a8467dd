"""서비스 관련 Pydantic 요청/응답 스키마 정의.

Service, service task template and service task dependency Pydantic
request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


# === 서비스 (Service) 스키마 ===

class ServiceCreate(BaseModel):
    """서비스 생성 요청 스키마.

    Attributes:
        name: 서비스 이름 (Service name)
        description: 설명 (Description, optional)
        default_days: 기본 일수 (Default work order length in days)
        required_people: 기본 필요 인원 (Default workers per day)
    """

    name: str = Field(..., min_length=1)
    description: str | None = None
    default_days: int = Field(1, ge=1)
    required_people: int = Field(1, ge=1)


class ServiceUpdate(BaseModel):
    """서비스 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = None
    description: str | None = None
    default_days: int | None = None
    required_people: int | None = None
    is_active: bool | None = None


class ServiceResponse(BaseModel):
    id: str
    name: str
    description: str | None
    default_days: int
    required_people: int
    is_active: bool
    created_at: datetime


# === 서비스 작업 (Service task template) 스키마 ===

class ServiceTaskTemplateCreate(BaseModel):
    """서비스 작업 추가 요청 스키마.

    Attributes:
        task_template_id: 작업 템플릿 UUID (Task template)
        order: 정렬 순서, 생략 시 맨 뒤 (Display order, appended when omitted)
        is_required: 필수 여부 (Required flag)
        day_number: 적용 일차, 생략 시 모든 일자 (Day number; every day when omitted)
    """

    task_template_id: UUID
    order: int | None = None
    is_required: bool = False
    day_number: int | None = None


class ServiceTaskTemplateUpdate(BaseModel):
    order: int | None = None
    is_required: bool | None = None
    day_number: int | None = None


class ServiceTaskTemplateResponse(BaseModel):
    id: str
    service_id: str
    task_template_id: str
    task_template_name: str
    order: int
    is_required: bool
    day_number: int | None
    is_active: bool
    created_at: datetime


# === 서비스 작업 의존성 (Service task dependency) 스키마 ===

class ServiceTaskDependencyCreate(BaseModel):
    """의존성 생성 요청 스키마.

    Attributes:
        service_task_template_id: 후행 작업 (Dependent service task)
        depends_on_service_task_template_id: 선행 작업 (Prerequisite service task)
    """

    service_task_template_id: UUID
    depends_on_service_task_template_id: UUID


class ServiceTaskDependencyResponse(BaseModel):
    id: str
    service_id: str
    service_task_template_id: str
    depends_on_service_task_template_id: str
    created_at: datetime
