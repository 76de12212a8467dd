"""작업 지시 관련 SQLAlchemy ORM 모델 정의.

Work order SQLAlchemy ORM model definitions.
A work order spans an inclusive calendar date range that is expanded into
one WorkOrderDay per calendar day. Days carry routine services, standalone
task templates, per-day dependencies and worker assignments.

Tables:
    - work_orders: 작업 지시 (Scheduled engagements with a customer)
    - work_order_days: 작업 일자 (One row per calendar day of a work order)
    - work_order_day_assignments: 일자별 작업자 배정 (Worker ↔ day assignments)
    - work_order_day_services: 일자-서비스 연결 (Routine links, soft-deletable)
    - work_order_day_task_templates: 일자-작업 템플릿 연결 (Standalone links, soft-deletable)
    - work_order_day_task_dependencies: 일자별 작업 의존성 (Per-day dependency edges)
"""

import uuid
from datetime import date, datetime, timezone
from sqlalchemy import String, Boolean, Date, DateTime, Integer, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 상태 값 — Allowed status values
WORK_ORDER_STATUSES: tuple[str, ...] = ("draft", "scheduled", "in_progress", "completed", "cancelled")
DELETABLE_WORK_ORDER_STATUSES: tuple[str, ...] = ("draft", "cancelled")
WORK_ORDER_DAY_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed")


class WorkOrder(Base):
    """작업 지시 모델 — 고객 현장에 대한 기간 작업.

    Work order model — A scheduled engagement with a customer at one faena
    over an inclusive date range (start_date <= end_date).
    Deletable only in ``draft`` or ``cancelled`` status.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        customer_id: 고객 FK (Customer)
        faena_id: 현장 FK (Faena, must belong to the customer)
        service_id: 서비스 FK, 선택 (Service the work order was seeded from)
        name: 작업 지시 이름 (Name)
        status: 상태 (One of WORK_ORDER_STATUSES)
        start_date: 시작일 (First calendar day, UTC)
        end_date: 종료일 (Last calendar day, UTC, inclusive)
        notes: 메모 (Notes, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "work_orders"

    # 작업 지시 고유 식별자 — Work order unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("customers.id"), nullable=False, index=True)
    faena_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("faenas.id"), nullable=False, index=True)
    # 서비스 FK — Service the work order was expanded from (optional)
    service_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("services.id"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 진행 상태 — "draft" → "scheduled" → "in_progress" → "completed" (or "cancelled")
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class WorkOrderDay(Base):
    """작업 일자 모델 — 작업 지시의 하루.

    Work order day model — One calendar day of a work order.
    ``day_number`` is 1-based, unique and contiguous within the work order,
    assigned in ascending calendar order by the expansion step.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        work_order_id: 작업 지시 FK (Owning work order)
        day_date: 날짜 (Calendar date, UTC midnight)
        day_number: 일차 (1-based day number)
        status: 상태 (One of WORK_ORDER_DAY_STATUSES)
        required_people: 필요 인원 (Workers needed, optional)
        notes: 메모 (Notes, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Constraints:
        uq_work_order_day_number: 작업 지시 내 일차 고유 (Unique day number per work order)
    """

    __tablename__ = "work_order_days"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 작업 지시 FK — Owning work order (CASCADE: 작업 지시 삭제 시 일자도 삭제)
    work_order_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    day_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # 일차 — 1-based day number inside the work order
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    required_people: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("work_order_id", "day_number", name="uq_work_order_day_number"),
    )


class WorkOrderDayAssignment(Base):
    """일자별 작업자 배정 모델.

    Work order day assignment model — A worker assigned to a day.
    Assigning a worker materializes that worker's task instances.

    Constraints:
        uq_work_order_day_assignment: 일자당 작업자 1회 배정 (One row per day + user)
    """

    __tablename__ = "work_order_day_assignments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    work_order_day_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_days.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 배정자 FK — Administrator who made the assignment (nullable)
    assigned_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("work_order_day_id", "user_id", name="uq_work_order_day_assignment"),
    )


class WorkOrderDayService(Base):
    """일자-서비스 연결 모델 — 루틴 작업의 출처.

    Work order day service model ("routine" link) — Binds a day to a service.
    Removal is a soft deactivation that keeps historical task instances
    pointing at the row; re-adding the same service reactivates it.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        work_order_day_id: 일자 FK (Day)
        service_id: 서비스 FK (Service)
        order: 정렬 순서 (Display order)
        is_active: 활성 여부 (Active / inactive state)
        created_at: 생성 일시 UTC (Creation timestamp)

    Constraints:
        uq_work_order_day_service: 일자당 서비스 1행 (One row per day + service)
    """

    __tablename__ = "work_order_day_services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    work_order_day_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_days.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("services.id"), nullable=False, index=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # 활성 여부 — False means removed from the day (soft delete)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("work_order_day_id", "service_id", name="uq_work_order_day_service"),
    )


class WorkOrderDayTaskTemplate(Base):
    """일자-작업 템플릿 연결 모델 — 독립 작업의 출처.

    Work order day task template model ("standalone" link) — Binds a day
    directly to a task template, bypassing services. Also produced by work
    order expansion for every service task template on its target days.

    Constraints:
        uq_work_order_day_task_template: 일자당 템플릿 1행 (One row per day + template)
    """

    __tablename__ = "work_order_day_task_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    work_order_day_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_days.id", ondelete="CASCADE"), nullable=False, index=True)
    task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("task_templates.id"), nullable=False, index=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("work_order_day_id", "task_template_id", name="uq_work_order_day_task_template"),
    )


class WorkOrderDayTaskDependency(Base):
    """일자별 작업 의존성 모델.

    Work order day task dependency model — Per-day counterpart of a
    ServiceTaskDependency, linking two day task template rows of the same day.
    """

    __tablename__ = "work_order_day_task_dependencies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    work_order_day_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_days.id", ondelete="CASCADE"), nullable=False, index=True)
    # 후행 작업 FK — Dependent day task template
    work_order_day_task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_day_task_templates.id", ondelete="CASCADE"), nullable=False)
    # 선행 작업 FK — Prerequisite day task template
    depends_on_work_order_day_task_template_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("work_order_day_task_templates.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
