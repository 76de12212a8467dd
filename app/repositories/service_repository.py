"""서비스 레포지토리 — 서비스, 서비스 작업, 의존성 쿼리.

Service Repository — DB queries for services, their task template links
and the prerequisite edges between those links.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import Service, ServiceTaskDependency, ServiceTaskTemplate
from app.repositories.base import BaseRepository


class ServiceRepository(BaseRepository[Service]):

    def __init__(self) -> None:
        super().__init__(Service)

    async def get_filtered(
        self, db: AsyncSession, is_active: bool | None = None
    ) -> Sequence[Service]:
        query: Select = select(Service)
        if is_active is not None:
            query = query.where(Service.is_active == is_active)
        result = await db.execute(query.order_by(Service.name))
        return result.scalars().all()


class ServiceTaskTemplateRepository(BaseRepository[ServiceTaskTemplate]):
    """서비스-작업 템플릿 연결 레포지토리 (Service task template repository)."""

    def __init__(self) -> None:
        super().__init__(ServiceTaskTemplate)

    async def get_by_service(
        self,
        db: AsyncSession,
        service_id: UUID,
        active_only: bool = True,
    ) -> Sequence[ServiceTaskTemplate]:
        """서비스의 작업 연결을 순서대로 조회합니다.

        Retrieve a service's task template links ordered by ``order``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_id: 서비스 UUID (Service UUID)
            active_only: 활성 연결만 조회 (Only active links when True)

        Returns:
            Sequence[ServiceTaskTemplate]: 연결 목록 (Links)
        """
        query: Select = select(ServiceTaskTemplate).where(ServiceTaskTemplate.service_id == service_id)
        if active_only:
            query = query.where(ServiceTaskTemplate.is_active.is_(True))
        result = await db.execute(query.order_by(ServiceTaskTemplate.order, ServiceTaskTemplate.created_at))
        return result.scalars().all()

    async def get_by_service_and_template(
        self, db: AsyncSession, service_id: UUID, task_template_id: UUID
    ) -> ServiceTaskTemplate | None:
        query: Select = select(ServiceTaskTemplate).where(
            ServiceTaskTemplate.service_id == service_id,
            ServiceTaskTemplate.task_template_id == task_template_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_active(self, db: AsyncSession, service_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(ServiceTaskTemplate)
            .where(
                ServiceTaskTemplate.service_id == service_id,
                ServiceTaskTemplate.is_active.is_(True),
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def count_by_task_template(self, db: AsyncSession, task_template_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(ServiceTaskTemplate)
            .where(ServiceTaskTemplate.task_template_id == task_template_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_by_service(self, db: AsyncSession, service_id: UUID) -> None:
        await db.execute(delete(ServiceTaskTemplate).where(ServiceTaskTemplate.service_id == service_id))
        await db.flush()


class ServiceTaskDependencyRepository(BaseRepository[ServiceTaskDependency]):
    """서비스 작업 의존성 레포지토리 (Service task dependency repository)."""

    def __init__(self) -> None:
        super().__init__(ServiceTaskDependency)

    async def get_by_service(
        self, db: AsyncSession, service_id: UUID
    ) -> Sequence[ServiceTaskDependency]:
        query: Select = (
            select(ServiceTaskDependency)
            .where(ServiceTaskDependency.service_id == service_id)
            .order_by(ServiceTaskDependency.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_dependent(
        self, db: AsyncSession, service_task_template_id: UUID
    ) -> Sequence[ServiceTaskDependency]:
        query: Select = (
            select(ServiceTaskDependency)
            .where(ServiceTaskDependency.service_task_template_id == service_task_template_id)
            .order_by(ServiceTaskDependency.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_pair(
        self,
        db: AsyncSession,
        service_task_template_id: UUID,
        depends_on_service_task_template_id: UUID,
    ) -> ServiceTaskDependency | None:
        query: Select = select(ServiceTaskDependency).where(
            ServiceTaskDependency.service_task_template_id == service_task_template_id,
            ServiceTaskDependency.depends_on_service_task_template_id == depends_on_service_task_template_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_touching(
        self, db: AsyncSession, service_task_template_id: UUID
    ) -> Sequence[ServiceTaskDependency]:
        """작업이 후행 또는 선행으로 참여하는 간선 (Edges where the task is either end)."""
        query: Select = select(ServiceTaskDependency).where(
            or_(
                ServiceTaskDependency.service_task_template_id == service_task_template_id,
                ServiceTaskDependency.depends_on_service_task_template_id == service_task_template_id,
            )
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def delete_by_service(self, db: AsyncSession, service_id: UUID) -> None:
        await db.execute(delete(ServiceTaskDependency).where(ServiceTaskDependency.service_id == service_id))
        await db.flush()


# 싱글턴 인스턴스
service_repository: ServiceRepository = ServiceRepository()
service_task_template_repository: ServiceTaskTemplateRepository = ServiceTaskTemplateRepository()
service_task_dependency_repository: ServiceTaskDependencyRepository = ServiceTaskDependencyRepository()
