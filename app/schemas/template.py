"""작업 템플릿 관련 Pydantic 요청/응답 스키마 정의.

Task template, field template and field condition Pydantic
request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


# === 작업 템플릿 (Task template) 스키마 ===

class TaskTemplateCreate(BaseModel):
    """작업 템플릿 생성 요청 스키마.

    Attributes:
        name: 템플릿 이름 (Template name)
        description: 설명 (Description, optional)
        category: 분류 (Category, optional)
        is_repeatable: 반복 가능 여부 (Repeatable flag)
    """

    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    is_repeatable: bool = False


class TaskTemplateUpdate(BaseModel):
    """작업 템플릿 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    is_repeatable: bool | None = None
    is_active: bool | None = None


class TaskTemplateResponse(BaseModel):
    id: str
    name: str
    description: str | None
    category: str | None
    is_repeatable: bool
    is_active: bool
    created_at: datetime


# === 필드 템플릿 (Field template) 스키마 ===

class FieldTemplateCreate(BaseModel):
    """필드 템플릿 생성 요청 스키마.

    Field template creation request schema. The new field is appended at
    the end of the template, so no order is accepted here.

    Attributes:
        label: 필드 라벨 (Label)
        field_type: 필드 유형 (One of text, number, boolean, date, attachment,
                    displayText, select, userSelect)
        is_required: 필수 여부 (Required flag)
    """

    label: str = Field(..., min_length=1)
    field_type: str  # 필드 유형 (Field type)
    is_required: bool = False
    default_value: str | None = None
    placeholder: str | None = None
    subheader: str | None = None
    display_style: str | None = None
    condition_logic: str | None = Field(None, pattern=r"^(AND|OR)$")


class FieldTemplateUpdate(BaseModel):
    """필드 템플릿 수정 요청 스키마 (부분 업데이트)."""

    label: str | None = None
    field_type: str | None = None
    is_required: bool | None = None
    default_value: str | None = None
    placeholder: str | None = None
    subheader: str | None = None
    display_style: str | None = None
    condition_logic: str | None = Field(None, pattern=r"^(AND|OR)$")


class FieldTemplateResponse(BaseModel):
    id: str
    task_template_id: str
    label: str
    field_type: str
    order: int
    is_required: bool
    default_value: str | None
    placeholder: str | None
    subheader: str | None
    display_style: str | None
    condition_logic: str | None


# === 필드 조건 (Field condition) 스키마 ===

class FieldConditionCreate(BaseModel):
    """필드 조건 생성 요청 스키마.

    Attributes:
        child_field_id: 표시 여부가 결정되는 필드 (Field being shown or hidden)
        parent_field_id: 응답을 검사할 필드 (Earlier field whose answer is tested)
        operator: 연산자 (Comparison operator)
        value: 비교값, includes는 목록 (Comparison value; a list for includes)
        condition_group: 조건 그룹 (Condition group number)
    """

    child_field_id: UUID
    parent_field_id: UUID
    operator: str
    value: str | list[str]
    condition_group: int = 0


class FieldConditionResponse(BaseModel):
    id: str
    child_field_id: str
    parent_field_id: str
    operator: str
    value: str | list[str]
    condition_group: int
