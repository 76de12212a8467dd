"""작업 지시 서비스 — 작업 지시 생성(일자 확장), 조회, 수정, 삭제.

Work Order Service — Business logic for work orders and their days.
Creating a work order expands its inclusive date range into one day per
calendar day and, when a service is selected, seeds a day task template per
applicable service task plus the same-day dependency edges between them.
No task instances are created here; they appear once workers are assigned.
"""

from datetime import date
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.customer import Customer, Faena
from app.models.service import Service
from app.models.user import User
from app.models.work_order import (
    DELETABLE_WORK_ORDER_STATUSES,
    WORK_ORDER_DAY_STATUSES,
    WORK_ORDER_STATUSES,
    WorkOrder,
    WorkOrderDay,
)
from app.repositories.assignment_repository import assignment_repository
from app.repositories.customer_repository import customer_repository, faena_repository
from app.repositories.day_link_repository import day_service_repository, day_task_dependency_repository, day_task_template_repository
from app.repositories.service_repository import service_repository, service_task_dependency_repository, service_task_template_repository
from app.repositories.task_instance_repository import field_response_repository, task_instance_repository
from app.repositories.user_repository import user_repository
from app.repositories.work_order_repository import work_order_day_repository, work_order_repository
from app.services.applicability_service import applies_on_day
from app.utils.dates import days_between, iter_calendar_days, to_utc_date
from app.utils.exceptions import BadRequestError, NotFoundError


class WorkOrderService:
    """작업 지시 서비스.

    Work order service handling expansion, listing, status changes and
    cascading deletion, plus per-day updates.
    """

    async def _get_work_order(self, db: AsyncSession, work_order_id: UUID) -> WorkOrder:
        work_order: WorkOrder | None = await work_order_repository.get_by_id(db, work_order_id)
        if work_order is None:
            raise NotFoundError("작업 지시를 찾을 수 없습니다 (Work order not found)")
        return work_order

    async def get_day(self, db: AsyncSession, work_order_day_id: UUID) -> WorkOrderDay:
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            raise NotFoundError("작업 일자를 찾을 수 없습니다 (Work order day not found)")
        return day

    async def _get_customer(self, db: AsyncSession, customer_id: UUID) -> Customer:
        customer: Customer | None = await customer_repository.get_by_id(db, customer_id)
        if customer is None:
            raise NotFoundError("고객을 찾을 수 없습니다 (Customer not found)")
        return customer

    async def _get_service(self, db: AsyncSession, service_id: UUID) -> Service:
        service: Service | None = await service_repository.get_by_id(db, service_id)
        if service is None:
            raise NotFoundError("서비스를 찾을 수 없습니다 (Service not found)")
        return service

    # ------------------------------------------------------------------
    # 생성 및 확장 — Creation and expansion
    # ------------------------------------------------------------------

    async def create_work_order(
        self,
        db: AsyncSession,
        customer_id: UUID,
        faena_id: UUID,
        start_date: date,
        end_date: date,
        required_people_per_day: int,
        name: str,
        service_id: UUID | None = None,
        notes: str | None = None,
    ) -> WorkOrder:
        """작업 지시를 생성하고 기간을 일자로 확장합니다.

        Create a work order in ``draft`` status and expand its date range.
        All validation happens before the first write, so a failure leaves
        nothing behind.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            customer_id: 고객 UUID (Customer UUID)
            faena_id: 현장 UUID, 고객 소속이어야 함 (Faena UUID, must belong to the customer)
            start_date: 시작일 (First calendar day)
            end_date: 종료일, 포함 (Last calendar day, inclusive)
            required_people_per_day: 일자별 필요 인원, 1 이상 (Workers per day, >= 1)
            name: 작업 지시 이름 (Name)
            service_id: 서비스 UUID, 선택 (Service to seed day task templates from)
            notes: 메모 (Notes)

        Returns:
            WorkOrder: 생성된 작업 지시 (Created work order)

        Raises:
            NotFoundError: 고객/현장/서비스 없음 (Customer, faena or service missing)
            BadRequestError: 불변식 위반 (Faena mismatch, inverted range, bad people count, range too long)
        """
        customer: Customer = await self._get_customer(db, customer_id)
        faena: Faena | None = await faena_repository.get_by_id(db, faena_id)
        if faena is None:
            raise NotFoundError("현장을 찾을 수 없습니다 (Faena not found)")
        service: Service | None = None
        if service_id is not None:
            service = await self._get_service(db, service_id)

        if faena.customer_id != customer.id:
            raise BadRequestError("현장이 고객에 속하지 않습니다 (Faena does not belong to the customer)")

        start: date = to_utc_date(start_date)
        end: date = to_utc_date(end_date)
        if start > end:
            raise BadRequestError("시작일은 종료일 이전이어야 합니다 (Start date must be on or before end date)")
        if required_people_per_day < 1:
            raise BadRequestError("필요 인원은 1명 이상이어야 합니다 (Required people must be at least 1)")
        if days_between(start, end) > settings.MAX_WORK_ORDER_DAYS:
            raise BadRequestError(
                f"작업 지시 기간이 너무 깁니다 (Work order cannot span more than {settings.MAX_WORK_ORDER_DAYS} days)"
            )

        work_order: WorkOrder = await work_order_repository.create(db, {
            "customer_id": customer.id,
            "faena_id": faena.id,
            "service_id": service.id if service else None,
            "name": name,
            "status": "draft",
            "start_date": start,
            "end_date": end,
            "notes": notes,
        })

        # 달력 일자별 1행 — One day per calendar day, day_number 1..N
        days: list[WorkOrderDay] = []
        for day_number, day_date in iter_calendar_days(start, end):
            days.append(await work_order_day_repository.create(db, {
                "work_order_id": work_order.id,
                "day_date": day_date,
                "day_number": day_number,
                "status": "pending",
                "required_people": required_people_per_day,
            }))

        if service is not None:
            await self._seed_service_tasks(db, service.id, days)

        return work_order

    async def _seed_service_tasks(
        self,
        db: AsyncSession,
        service_id: UUID,
        days: Sequence[WorkOrderDay],
    ) -> None:
        """서비스 작업을 일자별 작업 템플릿과 일자 의존성으로 복사합니다.

        Copy the service's active task templates onto their target days and
        the service's dependency edges onto every day where both ends were
        instantiated. Cross-day edges are never created.
        """
        service_tasks = await service_task_template_repository.get_by_service(db, service_id, active_only=True)

        # (일자, 서비스 작업) → 일자 작업 템플릿 — (day, service task) → day task template id
        seeded: dict[tuple[UUID, UUID], UUID] = {}
        for day in days:
            for service_task in service_tasks:
                if not applies_on_day(service_task.day_number, day.day_number):
                    continue
                link = await day_task_template_repository.create(db, {
                    "work_order_day_id": day.id,
                    "task_template_id": service_task.task_template_id,
                    "order": service_task.order,
                    "is_required": service_task.is_required,
                    "is_active": True,
                })
                seeded[(day.id, service_task.id)] = link.id

        edges = await service_task_dependency_repository.get_by_service(db, service_id)
        for edge in edges:
            for day in days:
                dependent_id: UUID | None = seeded.get((day.id, edge.service_task_template_id))
                prerequisite_id: UUID | None = seeded.get((day.id, edge.depends_on_service_task_template_id))
                if dependent_id is None or prerequisite_id is None:
                    continue
                await day_task_dependency_repository.create(db, {
                    "work_order_day_id": day.id,
                    "work_order_day_task_template_id": dependent_id,
                    "depends_on_work_order_day_task_template_id": prerequisite_id,
                })

    async def create_from_service(
        self,
        db: AsyncSession,
        service_id: UUID,
        customer_id: UUID,
        faena_id: UUID,
        start_date: date,
        end_date: date,
        required_people_per_day: int | None = None,
        name: str | None = None,
        notes: str | None = None,
    ) -> WorkOrder:
        """서비스 기본값으로 작업 지시를 생성합니다.

        Create a work order seeded from a service. The name defaults to
        ``"{service name} - {customer name}"`` and the people count to the
        service's default.
        """
        service: Service = await self._get_service(db, service_id)
        customer: Customer = await self._get_customer(db, customer_id)
        return await self.create_work_order(
            db,
            customer_id=customer.id,
            faena_id=faena_id,
            start_date=start_date,
            end_date=end_date,
            required_people_per_day=required_people_per_day if required_people_per_day is not None else service.required_people,
            name=name or f"{service.name} - {customer.name}",
            service_id=service.id,
            notes=notes,
        )

    # ------------------------------------------------------------------
    # 조회 — Queries
    # ------------------------------------------------------------------

    async def list_work_orders(
        self,
        db: AsyncSession,
        customer_id: UUID | None = None,
        faena_id: UUID | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[WorkOrder], int]:
        if status is not None and status not in WORK_ORDER_STATUSES:
            raise BadRequestError(f"잘못된 상태입니다 (Invalid status: {status})")
        query = work_order_repository.build_list_query(customer_id, faena_id, status, date_from, date_to)
        return await work_order_repository.get_paginated(db, query, page, per_page)

    async def get_work_order_detail(self, db: AsyncSession, work_order_id: UUID) -> dict:
        """작업 지시 상세 — 일자별 배정/작업 수 포함.

        Work order detail with its days sorted by day number, each carrying
        assignment and task counts.
        """
        work_order: WorkOrder = await self._get_work_order(db, work_order_id)
        response: dict = await self.build_response(db, work_order)
        days = await work_order_day_repository.get_by_work_order(db, work_order.id)
        response["days"] = [await self.build_day_summary(db, day) for day in days]
        return response

    async def build_response(self, db: AsyncSession, work_order: WorkOrder) -> dict:
        customer: Customer | None = await customer_repository.get_by_id(db, work_order.customer_id)
        faena: Faena | None = await faena_repository.get_by_id(db, work_order.faena_id)
        service: Service | None = None
        if work_order.service_id is not None:
            service = await service_repository.get_by_id(db, work_order.service_id)
        return {
            "id": str(work_order.id),
            "customer_id": str(work_order.customer_id),
            "customer_name": customer.name if customer else "",
            "faena_id": str(work_order.faena_id),
            "faena_name": faena.name if faena else "",
            "service_id": str(work_order.service_id) if work_order.service_id else None,
            "service_name": service.name if service else None,
            "name": work_order.name,
            "status": work_order.status,
            "start_date": work_order.start_date,
            "end_date": work_order.end_date,
            "notes": work_order.notes,
            "created_at": work_order.created_at,
            "updated_at": work_order.updated_at,
        }

    async def build_day_summary(self, db: AsyncSession, day: WorkOrderDay) -> dict:
        total, completed = await task_instance_repository.count_by_day(db, day.id)
        return {
            "id": str(day.id),
            "work_order_id": str(day.work_order_id),
            "day_date": day.day_date,
            "day_number": day.day_number,
            "status": day.status,
            "required_people": day.required_people,
            "notes": day.notes,
            "assignment_count": await assignment_repository.count(db, {"work_order_day_id": day.id}),
            "service_count": await day_service_repository.count_active(db, day.id),
            "task_template_count": await day_task_template_repository.count_active(db, day.id),
            "task_instance_count": total,
            "completed_instance_count": completed,
        }

    async def list_days(self, db: AsyncSession, work_order_id: UUID) -> list[dict]:
        work_order: WorkOrder = await self._get_work_order(db, work_order_id)
        days = await work_order_day_repository.get_by_work_order(db, work_order.id)
        return [await self.build_day_summary(db, day) for day in days]

    async def get_day_detail(self, db: AsyncSession, work_order_day_id: UUID) -> dict:
        """일자 상세 — 배정 작업자 목록 포함 (Day detail including assigned workers)."""
        day: WorkOrderDay = await self.get_day(db, work_order_day_id)
        response: dict = await self.build_day_summary(db, day)
        assignments = await assignment_repository.get_by_day(db, day.id)
        users: dict[UUID, User] = await user_repository.get_by_ids(db, [a.user_id for a in assignments])
        response["assignments"] = [
            {
                "id": str(a.id),
                "user_id": str(a.user_id),
                "user_external_id": users[a.user_id].external_id if a.user_id in users else None,
                "user_name": users[a.user_id].full_name if a.user_id in users else None,
                "assigned_at": a.assigned_at,
            }
            for a in assignments
        ]
        return response

    # ------------------------------------------------------------------
    # 수정 — Updates
    # ------------------------------------------------------------------

    async def update_work_order(
        self,
        db: AsyncSession,
        work_order_id: UUID,
        update_data: dict[str, Any],
    ) -> WorkOrder:
        """이름/메모를 수정합니다 (Patch name and notes)."""
        work_order: WorkOrder = await self._get_work_order(db, work_order_id)
        allowed: dict[str, Any] = {k: v for k, v in update_data.items() if k in ("name", "notes")}
        if "name" in allowed and not allowed["name"]:
            raise BadRequestError("이름은 비워둘 수 없습니다 (Name cannot be empty)")
        return await work_order_repository.update(db, work_order.id, allowed)

    async def update_status(self, db: AsyncSession, work_order_id: UUID, status: str) -> WorkOrder:
        work_order: WorkOrder = await self._get_work_order(db, work_order_id)
        if status not in WORK_ORDER_STATUSES:
            raise BadRequestError(f"잘못된 상태입니다 (Invalid status: {status})")
        return await work_order_repository.update(db, work_order.id, {"status": status})

    async def update_day_status(self, db: AsyncSession, work_order_day_id: UUID, status: str) -> WorkOrderDay:
        day: WorkOrderDay = await self.get_day(db, work_order_day_id)
        if status not in WORK_ORDER_DAY_STATUSES:
            raise BadRequestError(f"잘못된 상태입니다 (Invalid status: {status})")
        return await work_order_day_repository.update(db, day.id, {"status": status})

    async def update_day_notes(self, db: AsyncSession, work_order_day_id: UUID, notes: str | None) -> WorkOrderDay:
        day: WorkOrderDay = await self.get_day(db, work_order_day_id)
        return await work_order_day_repository.update(db, day.id, {"notes": notes})

    async def update_required_people(self, db: AsyncSession, work_order_day_id: UUID, required_people: int) -> WorkOrderDay:
        day: WorkOrderDay = await self.get_day(db, work_order_day_id)
        if required_people < 1:
            raise BadRequestError("필요 인원은 1명 이상이어야 합니다 (Required people must be at least 1)")
        return await work_order_day_repository.update(db, day.id, {"required_people": required_people})

    # ------------------------------------------------------------------
    # 삭제 — Deletion
    # ------------------------------------------------------------------

    async def delete_work_order(self, db: AsyncSession, work_order_id: UUID) -> None:
        """작업 지시와 하위 데이터를 모두 삭제합니다.

        Delete a ``draft`` or ``cancelled`` work order together with its
        days, assignments, day links, day dependencies, task instances and
        field responses.

        Raises:
            NotFoundError: 작업 지시가 없을 때 (Work order missing)
            BadRequestError: 삭제 불가 상태 (Status is not draft or cancelled)
        """
        work_order: WorkOrder = await self._get_work_order(db, work_order_id)
        if work_order.status not in DELETABLE_WORK_ORDER_STATUSES:
            raise BadRequestError(
                "초안 또는 취소 상태의 작업 지시만 삭제할 수 있습니다 "
                "(Only draft or cancelled work orders can be deleted)"
            )

        days = await work_order_day_repository.get_by_work_order(db, work_order.id)
        day_ids: list[UUID] = [day.id for day in days]
        instances = await task_instance_repository.get_by_days(db, day_ids)

        # 참조 순서대로 삭제 — Children before parents
        await field_response_repository.delete_by_instances(db, [i.id for i in instances])
        await task_instance_repository.delete_by_days(db, day_ids)
        await day_task_dependency_repository.delete_by_days(db, day_ids)
        await day_task_template_repository.delete_by_days(db, day_ids)
        await day_service_repository.delete_by_days(db, day_ids)
        await assignment_repository.delete_by_days(db, day_ids)
        await work_order_day_repository.delete_by_work_order(db, work_order.id)
        await work_order_repository.delete(db, work_order.id)


# 싱글턴 인스턴스
work_order_service: WorkOrderService = WorkOrderService()
