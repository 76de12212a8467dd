"""작업 템플릿 서비스 — 템플릿, 필드 템플릿, 필드 조건 관리.

Task Template Service — Business logic for task templates, their ordered
field templates and the visibility conditions between fields.
Field ``order`` is kept as a contiguous 0-based sequence: deleting a field
removes the conditions that reference it and renumbers its siblings.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.template import CONDITION_OPERATORS, FIELD_TYPES, FieldCondition, FieldTemplate, TaskTemplate
from app.repositories.day_link_repository import day_task_template_repository
from app.repositories.service_repository import service_task_template_repository
from app.repositories.task_template_repository import field_condition_repository, field_template_repository, task_template_repository
from app.utils.exceptions import BadRequestError, NotFoundError


class TaskTemplateService:
    """작업 템플릿 서비스 (Task template service)."""

    async def get_task_template(self, db: AsyncSession, task_template_id: UUID) -> TaskTemplate:
        template: TaskTemplate | None = await task_template_repository.get_by_id(db, task_template_id)
        if template is None:
            raise NotFoundError("작업 템플릿을 찾을 수 없습니다 (Task template not found)")
        return template

    async def list_task_templates(
        self,
        db: AsyncSession,
        category: str | None = None,
        is_active: bool | None = None,
    ) -> Sequence[TaskTemplate]:
        return await task_template_repository.get_filtered(db, category, is_active)

    async def create_task_template(self, db: AsyncSession, data: dict[str, Any]) -> TaskTemplate:
        return await task_template_repository.create(db, data)

    async def update_task_template(
        self, db: AsyncSession, task_template_id: UUID, update_data: dict[str, Any]
    ) -> TaskTemplate:
        """템플릿을 수정합니다. 기존 인스턴스의 라벨은 바뀌지 않습니다.

        Patch a template. Existing task instances keep their label snapshot.
        """
        template: TaskTemplate = await self.get_task_template(db, task_template_id)
        return await task_template_repository.update(db, template.id, update_data)

    async def delete_task_template(self, db: AsyncSession, task_template_id: UUID) -> None:
        """템플릿과 필드, 조건을 삭제합니다.

        Delete a template with its fields and their conditions. Refused
        while any service or work order day links to it.
        """
        template: TaskTemplate = await self.get_task_template(db, task_template_id)
        if await service_task_template_repository.count_by_task_template(db, template.id) > 0:
            raise BadRequestError(
                "서비스에 연결된 작업 템플릿은 삭제할 수 없습니다 "
                "(Cannot delete a task template linked to services)"
            )
        if await day_task_template_repository.count_by_task_template(db, template.id) > 0:
            raise BadRequestError(
                "작업 일자에 연결된 작업 템플릿은 삭제할 수 없습니다 "
                "(Cannot delete a task template linked to work order days)"
            )

        fields = await field_template_repository.get_by_task_template(db, template.id)
        await field_condition_repository.delete_touching_fields(db, [f.id for f in fields])
        await field_template_repository.delete_by_task_template(db, template.id)
        await task_template_repository.delete(db, template.id)

    # ------------------------------------------------------------------
    # 필드 템플릿 — Field templates
    # ------------------------------------------------------------------

    async def _get_field(self, db: AsyncSession, field_id: UUID) -> FieldTemplate:
        field: FieldTemplate | None = await field_template_repository.get_by_id(db, field_id)
        if field is None:
            raise NotFoundError("필드 템플릿을 찾을 수 없습니다 (Field template not found)")
        return field

    def _validate_field_type(self, field_type: str | None) -> None:
        if field_type is not None and field_type not in FIELD_TYPES:
            raise BadRequestError(f"잘못된 필드 유형입니다 (Invalid field type: {field_type})")

    async def list_fields(self, db: AsyncSession, task_template_id: UUID) -> Sequence[FieldTemplate]:
        template: TaskTemplate = await self.get_task_template(db, task_template_id)
        return await field_template_repository.get_by_task_template(db, template.id)

    async def create_field(
        self, db: AsyncSession, task_template_id: UUID, data: dict[str, Any]
    ) -> FieldTemplate:
        """템플릿 끝에 필드를 추가합니다 (Append a field to the template)."""
        template: TaskTemplate = await self.get_task_template(db, task_template_id)
        self._validate_field_type(data.get("field_type"))
        order: int = await field_template_repository.get_next_order(db, template.id)
        return await field_template_repository.create(db, {
            **data,
            "task_template_id": template.id,
            "order": order,
        })

    async def update_field(
        self, db: AsyncSession, field_id: UUID, update_data: dict[str, Any]
    ) -> FieldTemplate:
        field: FieldTemplate = await self._get_field(db, field_id)
        self._validate_field_type(update_data.get("field_type"))
        # 순서는 reorder로만 변경 — Order changes only through reorder
        update_data.pop("order", None)
        return await field_template_repository.update(db, field.id, update_data)

    async def delete_field(self, db: AsyncSession, field_id: UUID) -> None:
        """필드와 관련 조건을 삭제하고 남은 필드 순서를 0..n-1로 압축합니다.

        Delete a field and every condition where it is child or parent, then
        renumber the remaining fields of the template to 0..n-1.
        """
        field: FieldTemplate = await self._get_field(db, field_id)
        task_template_id: UUID = field.task_template_id

        await field_condition_repository.delete_touching_fields(db, [field.id])
        await field_template_repository.delete(db, field.id)

        remaining = await field_template_repository.get_by_task_template(db, task_template_id)
        for index, sibling in enumerate(remaining):
            if sibling.order != index:
                sibling.order = index
        await db.flush()

    async def reorder_fields(
        self, db: AsyncSession, task_template_id: UUID, field_ids: list[UUID]
    ) -> Sequence[FieldTemplate]:
        """필드 순서를 목록 위치대로 다시 매깁니다.

        Set each listed field's ``order`` to its position. Unlisted fields
        keep their current order.

        Raises:
            NotFoundError: 템플릿 또는 필드 없음 (Template or a field missing)
            BadRequestError: 다른 템플릿의 필드 (A field belongs to another template)
        """
        template: TaskTemplate = await self.get_task_template(db, task_template_id)
        fields: list[FieldTemplate] = []
        for field_id in field_ids:
            field: FieldTemplate = await self._get_field(db, field_id)
            if field.task_template_id != template.id:
                raise BadRequestError(f"다른 템플릿의 필드입니다 (Field {field_id} does not belong to this task template)")
            fields.append(field)
        for index, field in enumerate(fields):
            field.order = index
        await db.flush()
        return await field_template_repository.get_by_task_template(db, template.id)

    # ------------------------------------------------------------------
    # 필드 조건 — Field conditions
    # ------------------------------------------------------------------

    async def list_conditions(self, db: AsyncSession, task_template_id: UUID) -> Sequence[FieldCondition]:
        fields = await self.list_fields(db, task_template_id)
        return await field_condition_repository.get_by_fields(db, [f.id for f in fields])

    async def create_condition(
        self,
        db: AsyncSession,
        child_field_id: UUID,
        parent_field_id: UUID,
        operator: str,
        value: str | list[str],
        condition_group: int = 0,
    ) -> FieldCondition:
        """필드 표시 조건을 생성합니다.

        Create a visibility condition. The parent must be an earlier field of
        the same task template; ``includes`` takes a list of values.
        """
        child: FieldTemplate = await self._get_field(db, child_field_id)
        parent: FieldTemplate = await self._get_field(db, parent_field_id)
        if child.id == parent.id:
            raise BadRequestError("필드는 자기 자신을 조건으로 가질 수 없습니다 (A field cannot depend on itself)")
        if child.task_template_id != parent.task_template_id:
            raise BadRequestError("같은 템플릿의 필드여야 합니다 (Fields must belong to the same task template)")
        if parent.order >= child.order:
            raise BadRequestError("부모 필드는 자식 필드보다 앞에 있어야 합니다 (Parent field must come before the child field)")
        if operator not in CONDITION_OPERATORS:
            raise BadRequestError(f"잘못된 연산자입니다 (Invalid operator: {operator})")
        if operator == "includes" and not isinstance(value, list):
            raise BadRequestError("includes 연산자는 목록 값이 필요합니다 (The includes operator requires a list value)")

        return await field_condition_repository.create(db, {
            "child_field_id": child.id,
            "parent_field_id": parent.id,
            "operator": operator,
            "value": value,
            "condition_group": condition_group,
        })

    async def delete_condition(self, db: AsyncSession, condition_id: UUID) -> None:
        if not await field_condition_repository.delete(db, condition_id):
            raise NotFoundError("필드 조건을 찾을 수 없습니다 (Field condition not found)")


    def build_template_response(self, template: TaskTemplate) -> dict:
        return {
            "id": str(template.id),
            "name": template.name,
            "description": template.description,
            "category": template.category,
            "is_repeatable": template.is_repeatable,
            "is_active": template.is_active,
            "created_at": template.created_at,
        }

    def build_field_response(self, field: FieldTemplate) -> dict:
        return {
            "id": str(field.id),
            "task_template_id": str(field.task_template_id),
            "label": field.label,
            "field_type": field.field_type,
            "order": field.order,
            "is_required": field.is_required,
            "default_value": field.default_value,
            "placeholder": field.placeholder,
            "subheader": field.subheader,
            "display_style": field.display_style,
            "condition_logic": field.condition_logic,
        }

    def build_condition_response(self, condition: FieldCondition) -> dict:
        return {
            "id": str(condition.id),
            "child_field_id": str(condition.child_field_id),
            "parent_field_id": str(condition.parent_field_id),
            "operator": condition.operator,
            "value": condition.value,
            "condition_group": condition.condition_group,
        }

# 싱글턴 인스턴스
task_template_service: TaskTemplateService = TaskTemplateService()
