"""서비스 관련 SQLAlchemy ORM 모델 정의.

Service SQLAlchemy ORM model definitions.
A service bundles task templates ("routine" tasks) with default scheduling
parameters. Task templates inside one service may depend on each other;
those prerequisite edges must always form a DAG.

Tables:
    - services: 서비스 (Reusable bundles of task templates)
    - service_task_templates: 서비스-작업 템플릿 연결 (Service ↔ task template links)
    - service_task_dependencies: 서비스 작업 의존성 (Prerequisite edges within a service)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Service(Base):
    """서비스 모델 — 작업 템플릿 묶음과 기본 일정 파라미터.

    Service model — Reusable bundle of task templates.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 서비스 이름 (Service name)
        description: 설명 (Description, optional)
        default_days: 기본 일수 (Default number of days for a work order)
        required_people: 기본 필요 인원 (Default workers per day)
        is_active: 활성 여부 (Active flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "services"

    # 서비스 고유 식별자 — Service unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 기본 일수 — Default work order length when created from this service
    default_days: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    # 기본 필요 인원 — Default workers per day
    required_people: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class ServiceTaskTemplate(Base):
    """서비스-작업 템플릿 연결 모델 — 루틴 작업 정의.

    Service task template model — Binds a task template to a service.
    When ``day_number`` is set the task applies only to that day number of a
    work order; when unset it applies to every day the service occupies.
    Removal is a soft deactivation.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        service_id: 서비스 FK (Owning service)
        task_template_id: 작업 템플릿 FK (Linked task template)
        order: 정렬 순서 (Display order)
        is_required: 필수 여부 (Required flag)
        day_number: 적용 일차, 선택 (1-based day number filter, optional)
        is_active: 활성 여부 (Soft-delete flag)
        created_at: 생성 일시 UTC (Creation timestamp)

    Constraints:
        uq_service_task_template: 서비스당 작업 템플릿 1개 (One row per service + template)
    """

    __tablename__ = "service_task_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 서비스 FK — Owning service (CASCADE: 서비스 삭제 시 연결도 삭제)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    # 작업 템플릿 FK — Linked task template
    task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("task_templates.id"), nullable=False, index=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # 적용 일차 — Applies only to this day number when set, to every day otherwise
    day_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # 활성 여부 — Soft-delete flag (never hard-deleted while referenced by instances)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("service_id", "task_template_id", name="uq_service_task_template"),
    )


class ServiceTaskDependency(Base):
    """서비스 작업 의존성 모델 — 선행 작업 간선.

    Service task dependency model — Directed edge from a dependent service
    task template to its prerequisite, scoped to one service.
    The edge set of a service is kept acyclic; self-edges and duplicate
    edges are rejected.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        service_id: 서비스 FK (Scope service)
        service_task_template_id: 후행 작업 FK (Dependent task)
        depends_on_service_task_template_id: 선행 작업 FK (Prerequisite task)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "service_task_dependencies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    # 후행 작업 FK — Dependent service task template
    service_task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("service_task_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    # 선행 작업 FK — Prerequisite service task template
    depends_on_service_task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("service_task_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("service_task_template_id", "depends_on_service_task_template_id", name="uq_service_task_dependency"),
    )
