"""작업 인스턴스 서비스 — 인스턴스 조회, 필드 응답, 완료 처리.

Task Instance Service — Business logic for reading task instances,
recording field responses and marking instances complete.
A completed instance is read-only.
"""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.task_instance import FieldResponse, TaskInstance
from app.models.template import FieldTemplate
from app.models.work_order import WorkOrderDay
from app.repositories.task_instance_repository import field_response_repository, task_instance_repository
from app.repositories.task_template_repository import field_template_repository
from app.repositories.work_order_repository import work_order_day_repository
from app.utils.exceptions import BadRequestError, NotFoundError

# 응답 대상이 아닌 필드 유형 — Field types that never take an answer
_NON_ANSWERABLE_TYPES: frozenset[str] = frozenset({"displayText"})


class TaskInstanceService:
    """작업 인스턴스 서비스 (Task instance service)."""

    async def get_instance(
        self,
        db: AsyncSession,
        instance_id: UUID,
        user_identity: str | None = None,
    ) -> TaskInstance:
        """인스턴스를 조회합니다. 작업자 지정 시 본인 것만 허용.

        Fetch an instance. When ``user_identity`` is given, an instance of
        another worker is reported as not found.
        """
        instance: TaskInstance | None = await task_instance_repository.get_by_id(db, instance_id)
        if instance is None or (user_identity is not None and instance.user_id != user_identity):
            raise NotFoundError("작업 인스턴스를 찾을 수 없습니다 (Task instance not found)")
        return instance

    async def list_by_day(self, db: AsyncSession, work_order_day_id: UUID) -> Sequence[TaskInstance]:
        day: WorkOrderDay | None = await work_order_day_repository.get_by_id(db, work_order_day_id)
        if day is None:
            raise NotFoundError("작업 일자를 찾을 수 없습니다 (Work order day not found)")
        return await task_instance_repository.get_by_day(db, day.id)

    async def list_for_user_on_day(
        self, db: AsyncSession, work_order_day_id: UUID, user_identity: str
    ) -> Sequence[TaskInstance]:
        return await task_instance_repository.get_by_day(db, work_order_day_id, user_identity)

    async def get_with_responses(
        self,
        db: AsyncSession,
        instance_id: UUID,
        user_identity: str | None = None,
    ) -> dict:
        """인스턴스와 템플릿 필드, 응답을 함께 반환합니다.

        Instance detail with the template's fields in order, each paired
        with its recorded response value (None when unanswered).
        """
        instance: TaskInstance = await self.get_instance(db, instance_id, user_identity)
        fields = await field_template_repository.get_by_task_template(db, instance.task_template_id)
        responses: dict[UUID, FieldResponse] = {
            r.field_template_id: r for r in await field_response_repository.get_by_instance(db, instance.id)
        }
        detail: dict = self.build_response(instance)
        detail["fields"] = [
            {
                "field_template_id": str(f.id),
                "label": f.label,
                "field_type": f.field_type,
                "order": f.order,
                "is_required": f.is_required,
                "value": responses[f.id].value if f.id in responses else None,
                "answered_by": responses[f.id].answered_by if f.id in responses else None,
            }
            for f in fields
        ]
        return detail

    async def upsert_field_response(
        self,
        db: AsyncSession,
        instance_id: UUID,
        field_template_id: UUID,
        value: str | None,
        answered_by: str,
    ) -> FieldResponse:
        """필드 응답을 생성하거나 갱신합니다.

        Create or update the answer to one field. The field must belong to
        the instance's task template. The first answer stamps ``started_at``.

        Raises:
            NotFoundError: 인스턴스 또는 필드 없음 (Instance or field missing)
            BadRequestError: 완료된 인스턴스 또는 다른 템플릿 필드 (Completed instance or foreign field)
        """
        instance: TaskInstance = await self.get_instance(db, instance_id)
        if instance.status == "completed":
            raise BadRequestError("완료된 작업은 수정할 수 없습니다 (Completed task instances are read-only)")

        field: FieldTemplate | None = await field_template_repository.get_by_id(db, field_template_id)
        if field is None:
            raise NotFoundError("필드 템플릿을 찾을 수 없습니다 (Field template not found)")
        if field.task_template_id != instance.task_template_id:
            raise BadRequestError("작업 템플릿의 필드가 아닙니다 (Field does not belong to this task)")

        response: FieldResponse | None = await field_response_repository.get_by_instance_and_field(db, instance.id, field.id)
        if response is None:
            response = await field_response_repository.create(db, {
                "task_instance_id": instance.id,
                "field_template_id": field.id,
                "value": value,
                "answered_by": answered_by,
            })
        else:
            response = await field_response_repository.update(db, response.id, {"value": value, "answered_by": answered_by})

        if instance.started_at is None:
            await task_instance_repository.update(db, instance.id, {"started_at": datetime.now(timezone.utc)})
        return response

    async def mark_complete(
        self,
        db: AsyncSession,
        instance_id: UUID,
        user_identity: str | None = None,
        client_timezone: str | None = None,
    ) -> TaskInstance:
        """필수 필드가 모두 채워졌는지 확인한 뒤 완료 처리합니다.

        Mark an instance completed. Every required answerable field must
        have a non-empty response.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            instance_id: 인스턴스 UUID (Instance UUID)
            user_identity: 작업자 식별자, 선택 (Worker identity, restricts ownership)
            client_timezone: 작업자 IANA 타임존 (Worker IANA timezone, optional)

        Returns:
            TaskInstance: 완료된 인스턴스 (Completed instance)

        Raises:
            BadRequestError: 이미 완료, 필수 필드 누락, 잘못된 타임존
                             (Already completed, missing required answer, bad timezone)
        """
        instance: TaskInstance = await self.get_instance(db, instance_id, user_identity)
        if instance.status == "completed":
            raise BadRequestError("이미 완료된 작업입니다 (Task instance is already completed)")

        tz_name: str = client_timezone or settings.DEFAULT_CLIENT_TIMEZONE
        try:
            ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise BadRequestError(f"잘못된 타임존입니다 (Invalid timezone: {tz_name})")

        fields = await field_template_repository.get_by_task_template(db, instance.task_template_id)
        responses: dict[UUID, FieldResponse] = {
            r.field_template_id: r for r in await field_response_repository.get_by_instance(db, instance.id)
        }
        for field in fields:
            if not field.is_required or field.field_type in _NON_ANSWERABLE_TYPES:
                continue
            response: FieldResponse | None = responses.get(field.id)
            if response is None or response.value is None or not response.value.strip():
                raise BadRequestError(f'필수 필드가 비어 있습니다 (Required field "{field.label}" is not filled)')

        now: datetime = datetime.now(timezone.utc)
        return await task_instance_repository.update(db, instance.id, {
            "status": "completed",
            "completed_at": now,
            "completed_tz": tz_name,
            "started_at": instance.started_at or now,
        })

    def build_response(self, instance: TaskInstance) -> dict:
        origin_type: str = instance.origin_type
        return {
            "id": str(instance.id),
            "work_order_day_id": str(instance.work_order_day_id),
            "user_id": instance.user_id,
            "task_template_id": str(instance.task_template_id),
            "origin_type": origin_type,
            "work_order_day_service_id": str(instance.work_order_day_service_id) if instance.work_order_day_service_id else None,
            "service_task_template_id": str(instance.service_task_template_id) if instance.service_task_template_id else None,
            "work_order_day_task_template_id": str(instance.work_order_day_task_template_id) if instance.work_order_day_task_template_id else None,
            "status": instance.status,
            "instance_label": instance.instance_label,
            "started_at": instance.started_at,
            "completed_at": instance.completed_at,
            "completed_tz": instance.completed_tz,
            "created_at": instance.created_at,
        }


    def build_field_response(self, response: FieldResponse) -> dict:
        return {
            "id": str(response.id),
            "task_instance_id": str(response.task_instance_id),
            "field_template_id": str(response.field_template_id),
            "value": response.value,
            "answered_by": response.answered_by,
            "updated_at": response.updated_at,
        }

# 싱글턴 인스턴스
task_instance_service: TaskInstanceService = TaskInstanceService()
