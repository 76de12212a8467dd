"""작업 템플릿 관련 SQLAlchemy ORM 모델 정의.

Task template SQLAlchemy ORM model definitions.
A task template is a reusable unit of work whose form is made of ordered
field templates. Field conditions show or hide a child field depending on
the answer given to an earlier (parent) field.

Tables:
    - task_templates: 작업 템플릿 (Reusable task definitions)
    - field_templates: 필드 템플릿 (Ordered form fields of a task template)
    - field_conditions: 필드 조건 (Visibility conditions between fields)
"""

import uuid
from datetime import datetime, timezone
from typing import Any
from sqlalchemy import JSON, String, Boolean, DateTime, Integer, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 허용 필드 유형 — Supported field types
FIELD_TYPES: tuple[str, ...] = (
    "text",
    "number",
    "boolean",
    "date",
    "attachment",
    "displayText",
    "select",
    "userSelect",
)

# 허용 조건 연산자 — Supported condition operators
CONDITION_OPERATORS: tuple[str, ...] = (
    "equals",
    "notEquals",
    "contains",
    "isEmpty",
    "isNotEmpty",
    "greaterThan",
    "lessThan",
    "greaterOrEqual",
    "lessOrEqual",
    "before",
    "after",
    "onOrBefore",
    "onOrAfter",
    "includes",
)


class TaskTemplate(Base):
    """작업 템플릿 모델 — 동적 폼을 가진 재사용 가능한 작업 정의.

    Task template model — Reusable definition of work with a configurable form.
    Its name is snapshotted into each task instance's label at creation time.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 템플릿 이름 (Template name)
        description: 설명 (Description, optional)
        category: 분류 (Category, optional)
        is_repeatable: 반복 가능 여부 (Whether a worker may fill it more than once)
        is_active: 활성 여부 (Active flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "task_templates"

    # 템플릿 고유 식별자 — Template unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 템플릿 이름 — Template display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 설명 — Optional description
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 분류 — Optional category used for filtering in the admin UI
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    # 반복 가능 여부 — Repeatable tasks can be filled several times per day
    is_repeatable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # 활성 여부 — Active flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class FieldTemplate(Base):
    """필드 템플릿 모델 — 작업 폼의 개별 필드.

    Field template model — One field of a task template's form.
    ``order`` is a contiguous 0-based sequence within the task template;
    deleting a field compacts the remaining siblings.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        task_template_id: 소속 작업 템플릿 FK (Parent task template)
        label: 필드 라벨 (Field label)
        field_type: 필드 유형 (One of FIELD_TYPES)
        order: 정렬 순서 (0-based display order)
        is_required: 필수 여부 (Required to mark an instance complete)
        default_value: 기본값 (Default value, optional)
        placeholder: 플레이스홀더 (Placeholder, optional)
        subheader: 부제목 (Subheader, optional)
        display_style: 표시 스타일 (Display style hint, optional)
        condition_logic: 조건 결합 방식 ("AND" / "OR" / None)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "field_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 작업 템플릿 FK — Parent task template (CASCADE: 템플릿 삭제 시 필드도 삭제)
    task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("task_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    field_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # 정렬 순서 — Display order (0-based, contiguous after deletions)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    placeholder: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subheader: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_style: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 조건 결합 방식 — How this field's conditions combine ("AND" / "OR")
    condition_logic: Mapped[str | None] = mapped_column(String(3), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class FieldCondition(Base):
    """필드 조건 모델 — 부모 필드 응답에 따른 자식 필드 표시 조건.

    Field condition model — Shows the child field only when the parent
    field's answer satisfies ``operator``/``value``. Parent and child belong
    to the same task template and the parent comes first in order.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        child_field_id: 자식 필드 FK (Field being shown or hidden)
        parent_field_id: 부모 필드 FK (Field whose answer is tested)
        operator: 연산자 (One of CONDITION_OPERATORS)
        value: 비교값 (String or list of strings)
        condition_group: 조건 그룹 번호 (Group number for combined conditions)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "field_conditions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    child_field_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("field_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_field_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("field_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    operator: Mapped[str] = mapped_column(String(30), nullable=False)
    # 비교값 — Comparison value; a list for "includes"
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
    condition_group: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
