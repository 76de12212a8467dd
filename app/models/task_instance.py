"""작업 인스턴스 관련 SQLAlchemy ORM 모델 정의.

Task instance SQLAlchemy ORM model definitions.
A task instance is one worker's concrete occurrence of a task on one work
order day. It originates either from a routine link (day service + service
task template) or from a standalone link (day task template), never both.

Tables:
    - task_instances: 작업 인스턴스 (Per-worker task occurrences)
    - field_responses: 필드 응답 (Worker answers to template fields)
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, String, DateTime, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

TASK_INSTANCE_STATUSES: tuple[str, ...] = ("draft", "completed")


@dataclass(frozen=True)
class RoutineOrigin:
    """루틴 출처 — 일자-서비스 연결을 통해 생성된 인스턴스.

    Routine origin: the instance came from a service linked to the day.
    """

    work_order_day_service_id: uuid.UUID
    service_task_template_id: uuid.UUID


@dataclass(frozen=True)
class StandaloneOrigin:
    """독립 출처 — 일자에 직접 연결된 작업 템플릿 (Task template linked directly to the day)."""

    work_order_day_task_template_id: uuid.UUID


TaskOrigin = RoutineOrigin | StandaloneOrigin


class TaskInstance(Base):
    """작업 인스턴스 모델 — 작업자 한 명의 하루 작업.

    Task instance model — The unit of field work.
    At most one instance exists per (day, user, origin); the unique
    constraints below back the query-before-insert check done by the
    materializer. ``instance_label`` is a snapshot of the task template
    name taken at creation and is not updated on later renames.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        work_order_day_id: 일자 FK (Day)
        user_id: 작업자 외부 식별자 (Worker identity string)
        task_template_id: 작업 템플릿 FK (Task template)
        work_order_day_service_id: 루틴 출처 일자-서비스 FK (Routine origin link)
        service_task_template_id: 루틴 출처 서비스 작업 FK (Routine origin template)
        work_order_day_task_template_id: 독립 출처 FK (Standalone origin link)
        status: 상태 ("draft" / "completed")
        instance_label: 표시 이름 스냅샷 (Display name snapshot)
        started_at: 시작 일시 (First response timestamp)
        completed_at: 완료 일시 (Completion timestamp)
        completed_tz: 완료 시 작업자 타임존 (Worker timezone at completion)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "task_instances"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 일자 FK — Day (CASCADE: 일자 삭제 시 인스턴스도 삭제)
    work_order_day_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_days.id", ondelete="CASCADE"), nullable=False, index=True)
    # 작업자 외부 식별자 — Opaque worker identity (users.external_id)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("task_templates.id"), nullable=False)
    # 루틴 출처 — Routine origin pair (both set or both null)
    work_order_day_service_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("work_order_day_services.id"), nullable=True, index=True)
    service_task_template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("service_task_templates.id"), nullable=True)
    # 독립 출처 — Standalone origin link
    work_order_day_task_template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("work_order_day_task_templates.id"), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    # 표시 이름 스냅샷 — Template name captured at creation
    instance_label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_tz: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        # 정확히 하나의 출처만 허용 — Exactly one origin populated
        CheckConstraint(
            "(work_order_day_service_id IS NOT NULL AND service_task_template_id IS NOT NULL"
            " AND work_order_day_task_template_id IS NULL)"
            " OR (work_order_day_service_id IS NULL AND service_task_template_id IS NULL"
            " AND work_order_day_task_template_id IS NOT NULL)",
            name="ck_task_instance_single_origin",
        ),
        UniqueConstraint("work_order_day_id", "user_id", "service_task_template_id", name="uq_task_instance_routine"),
        UniqueConstraint("work_order_day_id", "user_id", "work_order_day_task_template_id", name="uq_task_instance_standalone"),
    )

    @property
    def origin(self) -> TaskOrigin:
        """출처를 태그드 유니온으로 반환합니다 (Origin as a tagged union)."""
        if self.work_order_day_task_template_id is not None:
            return StandaloneOrigin(self.work_order_day_task_template_id)
        return RoutineOrigin(self.work_order_day_service_id, self.service_task_template_id)

    @property
    def origin_type(self) -> str:
        return "standalone" if isinstance(self.origin, StandaloneOrigin) else "routine"


class FieldResponse(Base):
    """필드 응답 모델 — 작업 인스턴스의 필드별 답변.

    Field response model — A worker's answer to one field of a task instance.

    Constraints:
        uq_field_response: 인스턴스당 필드 1개 응답 (One answer per instance + field)
    """

    __tablename__ = "field_responses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    task_instance_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("task_instances.id", ondelete="CASCADE"), nullable=False, index=True)
    field_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("field_templates.id", ondelete="CASCADE"), nullable=False)
    # 응답 값 — Serialized answer (lists and dates are sent as strings)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 응답자 — Identity of the worker who answered
    answered_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("task_instance_id", "field_template_id", name="uq_field_response"),
    )
