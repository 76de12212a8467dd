"""작업 템플릿 레포지토리 — 템플릿, 필드, 조건 쿼리.

Task Template Repository — DB queries for task templates, their ordered
field templates and the visibility conditions between those fields.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.template import FieldCondition, FieldTemplate, TaskTemplate
from app.repositories.base import BaseRepository


class TaskTemplateRepository(BaseRepository[TaskTemplate]):
    """작업 템플릿 레포지토리 (Task template repository)."""

    def __init__(self) -> None:
        super().__init__(TaskTemplate)

    async def get_filtered(
        self,
        db: AsyncSession,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> Sequence[TaskTemplate]:
        """분류/활성 여부로 필터링한 템플릿 목록을 이름순으로 조회합니다.

        Retrieve task templates filtered by category and active flag,
        ordered by name.
        """
        query: Select = select(TaskTemplate)
        if category is not None:
            query = query.where(TaskTemplate.category == category)
        if is_active is not None:
            query = query.where(TaskTemplate.is_active == is_active)
        result = await db.execute(query.order_by(TaskTemplate.name))
        return result.scalars().all()


class FieldTemplateRepository(BaseRepository[FieldTemplate]):
    """필드 템플릿 레포지토리 (Field template repository)."""

    def __init__(self) -> None:
        super().__init__(FieldTemplate)

    async def get_by_task_template(
        self, db: AsyncSession, task_template_id: UUID
    ) -> Sequence[FieldTemplate]:
        """작업 템플릿의 필드를 순서대로 조회합니다 (Fields of a template, by order)."""
        query: Select = (
            select(FieldTemplate)
            .where(FieldTemplate.task_template_id == task_template_id)
            .order_by(FieldTemplate.order, FieldTemplate.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_next_order(self, db: AsyncSession, task_template_id: UUID) -> int:
        """다음 정렬 순서 = 현재 필드 수 (Next order is the current field count)."""
        query: Select = (
            select(func.count())
            .select_from(FieldTemplate)
            .where(FieldTemplate.task_template_id == task_template_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_by_task_template(self, db: AsyncSession, task_template_id: UUID) -> None:
        await db.execute(
            delete(FieldTemplate).where(FieldTemplate.task_template_id == task_template_id)
        )
        await db.flush()


class FieldConditionRepository(BaseRepository[FieldCondition]):
    """필드 조건 레포지토리 (Field condition repository)."""

    def __init__(self) -> None:
        super().__init__(FieldCondition)

    async def get_by_fields(
        self, db: AsyncSession, field_ids: Sequence[UUID]
    ) -> Sequence[FieldCondition]:
        """주어진 필드들이 자식인 조건 목록 (Conditions whose child is one of the fields)."""
        if not field_ids:
            return []
        query: Select = (
            select(FieldCondition)
            .where(FieldCondition.child_field_id.in_(list(field_ids)))
            .order_by(FieldCondition.condition_group, FieldCondition.created_at)
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def delete_touching_fields(self, db: AsyncSession, field_ids: Sequence[UUID]) -> None:
        """자식 또는 부모로 필드를 참조하는 조건을 모두 삭제합니다.

        Delete every condition that references one of the fields, either as
        the child being shown or as the parent being tested.
        """
        if not field_ids:
            return
        ids: list[UUID] = list(field_ids)
        await db.execute(
            delete(FieldCondition).where(
                or_(
                    FieldCondition.child_field_id.in_(ids),
                    FieldCondition.parent_field_id.in_(ids),
                )
            )
        )
        await db.flush()


# 싱글턴 인스턴스
task_template_repository: TaskTemplateRepository = TaskTemplateRepository()
field_template_repository: FieldTemplateRepository = FieldTemplateRepository()
field_condition_repository: FieldConditionRepository = FieldConditionRepository()
