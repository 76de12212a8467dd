"""서비스 작업 의존성 서비스.

Dependency Service — Prerequisite edges between the task templates of one
service. The edge set of every service stays a DAG.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.service import ServiceTaskDependency, ServiceTaskTemplate
from app.repositories.service_repository import service_task_dependency_repository, service_task_template_repository
from app.utils.dependency_graph import would_create_cycle
from app.utils.exceptions import BadRequestError, CycleDetectedError, DuplicateError, NotFoundError


class DependencyService:
    """서비스 작업 의존성 서비스 (Service task dependency service)."""

    async def create_service_task_dependency(
        self,
        db: AsyncSession,
        service_task_template_id: UUID,
        depends_on_service_task_template_id: UUID,
    ) -> ServiceTaskDependency:
        """서비스 작업 간 선행 관계를 생성합니다.

        Create a prerequisite edge. Validation runs in this order, before
        any write: self edge, dependent exists, prerequisite exists, same
        service, duplicate pair, cycle.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_task_template_id: 후행 작업 UUID (Dependent task)
            depends_on_service_task_template_id: 선행 작업 UUID (Prerequisite task)

        Returns:
            ServiceTaskDependency: 생성된 간선 (Created edge)

        Raises:
            BadRequestError: 자기 자신 또는 다른 서비스 (Self edge or cross-service edge)
            NotFoundError: 작업이 없을 때 (Dependent or prerequisite missing)
            DuplicateError: 동일 간선 존재 (Edge already exists)
            CycleDetectedError: 순환 발생 (Edge would close a cycle)
        """
        if service_task_template_id == depends_on_service_task_template_id:
            raise BadRequestError("작업은 자기 자신에 의존할 수 없습니다 (A task cannot depend on itself)")

        dependent: ServiceTaskTemplate | None = await service_task_template_repository.get_by_id(db, service_task_template_id)
        if dependent is None:
            raise NotFoundError("후행 서비스 작업을 찾을 수 없습니다 (Dependent service task not found)")
        prerequisite: ServiceTaskTemplate | None = await service_task_template_repository.get_by_id(db, depends_on_service_task_template_id)
        if prerequisite is None:
            raise NotFoundError("선행 서비스 작업을 찾을 수 없습니다 (Prerequisite service task not found)")

        if dependent.service_id != prerequisite.service_id:
            raise BadRequestError("두 작업은 같은 서비스에 속해야 합니다 (Both tasks must belong to the same service)")

        if await service_task_dependency_repository.get_by_pair(db, dependent.id, prerequisite.id) is not None:
            raise DuplicateError("이미 존재하는 의존성입니다 (This dependency already exists)")

        existing: Sequence[ServiceTaskDependency] = await service_task_dependency_repository.get_by_service(db, dependent.service_id)
        edges: list[tuple[UUID, UUID]] = [
            (edge.service_task_template_id, edge.depends_on_service_task_template_id) for edge in existing
        ]
        if would_create_cycle(edges, (dependent.id, prerequisite.id)):
            raise CycleDetectedError()

        return await service_task_dependency_repository.create(db, {
            "service_id": dependent.service_id,
            "service_task_template_id": dependent.id,
            "depends_on_service_task_template_id": prerequisite.id,
        })

    async def list_by_service(self, db: AsyncSession, service_id: UUID) -> Sequence[ServiceTaskDependency]:
        return await service_task_dependency_repository.get_by_service(db, service_id)

    async def list_by_dependent(self, db: AsyncSession, service_task_template_id: UUID) -> Sequence[ServiceTaskDependency]:
        return await service_task_dependency_repository.get_by_dependent(db, service_task_template_id)

    async def remove_dependency(self, db: AsyncSession, dependency_id: UUID) -> bool:
        """간선을 삭제합니다. 없으면 아무 것도 하지 않습니다 (No-op when missing)."""
        return await service_task_dependency_repository.delete(db, dependency_id)

    async def remove_all_for_task(self, db: AsyncSession, service_task_template_id: UUID) -> int:
        """작업이 어느 쪽으로든 참여하는 간선을 모두 삭제합니다.

        Delete every edge where the task is the dependent or the prerequisite.

        Returns:
            int: 삭제된 간선 수 (Number of edges removed)
        """
        edges = await service_task_dependency_repository.get_touching(db, service_task_template_id)
        for edge in edges:
            await db.delete(edge)
        await db.flush()
        return len(edges)


    def build_response(self, edge: ServiceTaskDependency) -> dict:
        return {
            "id": str(edge.id),
            "service_id": str(edge.service_id),
            "service_task_template_id": str(edge.service_task_template_id),
            "depends_on_service_task_template_id": str(edge.depends_on_service_task_template_id),
            "created_at": edge.created_at,
        }

# 싱글턴 인스턴스
dependency_service: DependencyService = DependencyService()
