"""서비스 카탈로그 서비스 — 서비스 CRUD 및 서비스-작업 템플릿 연결.

Service Catalog Service — CRUD for services and their task template links
(routine task definitions). Adding a task template to a service backfills
instances on every day the service is already linked to.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import Service, ServiceTaskTemplate
from app.models.template import TaskTemplate
from app.repositories.day_link_repository import day_service_repository
from app.repositories.service_repository import service_repository, service_task_dependency_repository, service_task_template_repository
from app.repositories.task_template_repository import task_template_repository
from app.repositories.work_order_repository import work_order_repository
from app.services.task_instance_materializer import task_instance_materializer
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class ServiceCatalogService:
    """서비스 카탈로그 서비스 (Service catalog service)."""

    async def get_service(self, db: AsyncSession, service_id: UUID) -> Service:
        service: Service | None = await service_repository.get_by_id(db, service_id)
        if service is None:
            raise NotFoundError("서비스를 찾을 수 없습니다 (Service not found)")
        return service

    async def list_services(self, db: AsyncSession, is_active: bool | None = None) -> Sequence[Service]:
        return await service_repository.get_filtered(db, is_active)

    async def create_service(self, db: AsyncSession, data: dict[str, Any]) -> Service:
        self._validate_defaults(data)
        return await service_repository.create(db, data)

    async def update_service(self, db: AsyncSession, service_id: UUID, update_data: dict[str, Any]) -> Service:
        service: Service = await self.get_service(db, service_id)
        self._validate_defaults(update_data)
        return await service_repository.update(db, service.id, update_data)

    def _validate_defaults(self, data: dict[str, Any]) -> None:
        if data.get("default_days") is not None and data["default_days"] < 1:
            raise BadRequestError("기본 일수는 1 이상이어야 합니다 (Default days must be at least 1)")
        if data.get("required_people") is not None and data["required_people"] < 1:
            raise BadRequestError("필요 인원은 1명 이상이어야 합니다 (Required people must be at least 1)")

    async def delete_service(self, db: AsyncSession, service_id: UUID) -> None:
        """서비스를 삭제합니다. 작업 지시가 참조 중이면 거부합니다.

        Delete a service with its task links and dependency edges. Refused
        while any work order or work order day (even a removed link)
        references the service.
        """
        service: Service = await self.get_service(db, service_id)
        if await work_order_repository.count_by_service(db, service.id) > 0:
            raise BadRequestError(
                "작업 지시에서 사용 중인 서비스는 삭제할 수 없습니다 "
                "(Cannot delete a service used by work orders)"
            )
        if await day_service_repository.count_by_service(db, service.id) > 0:
            raise BadRequestError(
                "작업 일자에 연결된 서비스는 삭제할 수 없습니다 "
                "(Cannot delete a service linked to work order days)"
            )
        await service_task_dependency_repository.delete_by_service(db, service.id)
        await service_task_template_repository.delete_by_service(db, service.id)
        await service_repository.delete(db, service.id)

    # ------------------------------------------------------------------
    # 서비스-작업 템플릿 연결 — Service task templates
    # ------------------------------------------------------------------

    async def list_service_task_templates(
        self,
        db: AsyncSession,
        service_id: UUID,
        include_inactive: bool = False,
    ) -> Sequence[ServiceTaskTemplate]:
        service: Service = await self.get_service(db, service_id)
        return await service_task_template_repository.get_by_service(db, service.id, active_only=not include_inactive)

    async def add_task_template_to_service(
        self,
        db: AsyncSession,
        service_id: UUID,
        task_template_id: UUID,
        order: int | None = None,
        is_required: bool = False,
        day_number: int | None = None,
    ) -> ServiceTaskTemplate:
        """서비스에 작업 템플릿을 연결합니다.

        Add a routine task to a service, or reactivate a removed one, then
        backfill instances on the days the service is already linked to.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_id: 서비스 UUID (Service UUID)
            task_template_id: 작업 템플릿 UUID (Task template UUID)
            order: 정렬 순서, 선택 (Display order, defaults to append)
            is_required: 필수 여부 (Required flag)
            day_number: 적용 일차, 선택 (1-based day number, optional)

        Returns:
            ServiceTaskTemplate: 활성 연결 (The active link)

        Raises:
            NotFoundError: 서비스 또는 템플릿 없음 (Service or template missing)
            BadRequestError: 일차가 1 미만 (Day number below 1)
            DuplicateError: 활성 연결 존재 (Active link already exists)
        """
        service: Service = await self.get_service(db, service_id)
        template: TaskTemplate | None = await task_template_repository.get_by_id(db, task_template_id)
        if template is None:
            raise NotFoundError("작업 템플릿을 찾을 수 없습니다 (Task template not found)")
        if day_number is not None and day_number < 1:
            raise BadRequestError("일차는 1 이상이어야 합니다 (Day number must be at least 1)")

        existing: ServiceTaskTemplate | None = await service_task_template_repository.get_by_service_and_template(db, service.id, task_template_id)
        if existing is not None and existing.is_active:
            raise DuplicateError("이미 서비스에 연결된 작업 템플릿입니다 (Task template is already linked to this service)")

        if existing is not None:
            patch: dict = {"is_active": True, "is_required": is_required, "day_number": day_number}
            if order is not None:
                patch["order"] = order
            service_task = await service_task_template_repository.update(db, existing.id, patch)
        else:
            if order is None:
                order = await service_task_template_repository.count_active(db, service.id)
            service_task = await service_task_template_repository.create(db, {
                "service_id": service.id,
                "task_template_id": task_template_id,
                "order": order,
                "is_required": is_required,
                "day_number": day_number,
                "is_active": True,
            })

        await task_instance_materializer.materialize_for_new_routine_task(db, service_task.id)
        return service_task

    async def update_service_task_template(
        self,
        db: AsyncSession,
        service_task_template_id: UUID,
        update_data: dict[str, Any],
    ) -> ServiceTaskTemplate:
        """순서/필수 여부/일차를 수정합니다 (Patch order, required flag and day number)."""
        service_task: ServiceTaskTemplate | None = await service_task_template_repository.get_by_id(db, service_task_template_id)
        if service_task is None:
            raise NotFoundError("서비스 작업을 찾을 수 없습니다 (Service task not found)")
        if update_data.get("day_number") is not None and update_data["day_number"] < 1:
            raise BadRequestError("일차는 1 이상이어야 합니다 (Day number must be at least 1)")
        allowed: dict[str, Any] = {k: v for k, v in update_data.items() if k in ("order", "is_required", "day_number")}
        return await service_task_template_repository.update(db, service_task.id, allowed)

    async def remove_task_template_from_service(
        self,
        db: AsyncSession,
        service_task_template_id: UUID,
    ) -> ServiceTaskTemplate:
        """서비스 작업을 비활성화합니다 (Soft-deactivate a routine task)."""
        service_task: ServiceTaskTemplate | None = await service_task_template_repository.get_by_id(db, service_task_template_id)
        if service_task is None:
            raise NotFoundError("서비스 작업을 찾을 수 없습니다 (Service task not found)")
        return await service_task_template_repository.update(db, service_task.id, {"is_active": False})

    def build_service_response(self, service: Service) -> dict:
        return {
            "id": str(service.id),
            "name": service.name,
            "description": service.description,
            "default_days": service.default_days,
            "required_people": service.required_people,
            "is_active": service.is_active,
            "created_at": service.created_at,
        }

    async def build_service_task_response(self, db: AsyncSession, service_task: ServiceTaskTemplate) -> dict:
        template: TaskTemplate | None = await task_template_repository.get_by_id(db, service_task.task_template_id)
        return {
            "id": str(service_task.id),
            "service_id": str(service_task.service_id),
            "task_template_id": str(service_task.task_template_id),
            "task_template_name": template.name if template else "",
            "order": service_task.order,
            "is_required": service_task.is_required,
            "day_number": service_task.day_number,
            "is_active": service_task.is_active,
            "created_at": service_task.created_at,
        }


# 싱글턴 인스턴스
service_catalog_service: ServiceCatalogService = ServiceCatalogService()
