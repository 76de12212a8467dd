"""조회 엔티티 서비스.

Lookup Service — Business logic for lookup entity types and entities.
``display_order`` stays contiguous and 0-based within an entity type.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.lookup import LookupEntity, LookupEntityType
from app.repositories.lookup_repository import lookup_entity_repository, lookup_entity_type_repository
from app.utils.exceptions import BadRequestError, NotFoundError


class LookupService:

    async def get_entity_type(self, db: AsyncSession, entity_type_id: UUID) -> LookupEntityType:
        entity_type: LookupEntityType | None = await lookup_entity_type_repository.get_by_id(db, entity_type_id)
        if entity_type is None:
            raise NotFoundError("조회 엔티티 유형을 찾을 수 없습니다 (Lookup entity type not found)")
        return entity_type

    async def _get_entity(self, db: AsyncSession, entity_id: UUID) -> LookupEntity:
        entity: LookupEntity | None = await lookup_entity_repository.get_by_id(db, entity_id)
        if entity is None:
            raise NotFoundError("조회 엔티티를 찾을 수 없습니다 (Lookup entity not found)")
        return entity

    async def list_entity_types(self, db: AsyncSession) -> Sequence[LookupEntityType]:
        return await lookup_entity_type_repository.get_all(db, order_by=LookupEntityType.name)

    async def create_entity_type(self, db: AsyncSession, data: dict[str, Any]) -> LookupEntityType:
        return await lookup_entity_type_repository.create(db, data)

    async def update_entity_type(self, db: AsyncSession, entity_type_id: UUID, update_data: dict[str, Any]) -> LookupEntityType:
        entity_type: LookupEntityType = await self.get_entity_type(db, entity_type_id)
        return await lookup_entity_type_repository.update(db, entity_type.id, update_data)

    async def list_entities(
        self,
        db: AsyncSession,
        entity_type_id: UUID,
        parent_entity_id: UUID | None = None,
        active_only: bool = False,
    ) -> Sequence[LookupEntity]:
        entity_type: LookupEntityType = await self.get_entity_type(db, entity_type_id)
        return await lookup_entity_repository.get_by_type(db, entity_type.id, parent_entity_id, active_only)

    async def create_entity(
        self,
        db: AsyncSession,
        entity_type_id: UUID,
        value: str,
        parent_entity_id: UUID | None = None,
    ) -> LookupEntity:
        """유형 끝에 엔티티를 추가합니다 (Append an entity to its type)."""
        entity_type: LookupEntityType = await self.get_entity_type(db, entity_type_id)
        if parent_entity_id is not None:
            await self._get_entity(db, parent_entity_id)
        order: int = await lookup_entity_repository.get_next_order(db, entity_type.id)
        return await lookup_entity_repository.create(db, {
            "entity_type_id": entity_type.id,
            "parent_entity_id": parent_entity_id,
            "value": value,
            "display_order": order,
        })

    async def update_entity(self, db: AsyncSession, entity_id: UUID, update_data: dict[str, Any]) -> LookupEntity:
        entity: LookupEntity = await self._get_entity(db, entity_id)
        allowed: dict[str, Any] = {k: v for k, v in update_data.items() if k in ("value", "is_active")}
        return await lookup_entity_repository.update(db, entity.id, allowed)

    async def delete_entity(self, db: AsyncSession, entity_id: UUID) -> None:
        """엔티티와 하위 엔티티를 삭제하고 표시 순서를 압축합니다.

        Delete an entity and its child entities, then renumber the remaining
        entities of the type to 0..n-1.
        """
        entity: LookupEntity = await self._get_entity(db, entity_id)
        entity_type_id: UUID = entity.entity_type_id

        # 하위 엔티티 먼저 — Children (recursively) before the entity itself
        pending: list[LookupEntity] = [entity]
        doomed: list[LookupEntity] = []
        while pending:
            current: LookupEntity = pending.pop()
            doomed.append(current)
            pending.extend(await lookup_entity_repository.get_children(db, current.id))
        for doomed_entity in reversed(doomed):
            await db.delete(doomed_entity)
            await db.flush()

        remaining = await lookup_entity_repository.get_by_type(db, entity_type_id)
        for index, sibling in enumerate(remaining):
            if sibling.display_order != index:
                sibling.display_order = index
        await db.flush()

    async def reorder_entities(
        self, db: AsyncSession, entity_type_id: UUID, entity_ids: list[UUID]
    ) -> Sequence[LookupEntity]:
        """표시 순서를 목록 위치대로 다시 매깁니다 (partial lists allowed)."""
        entity_type: LookupEntityType = await self.get_entity_type(db, entity_type_id)
        entities: list[LookupEntity] = []
        for entity_id in entity_ids:
            entity: LookupEntity = await self._get_entity(db, entity_id)
            if entity.entity_type_id != entity_type.id:
                raise BadRequestError(f"다른 유형의 엔티티입니다 (Entity {entity_id} does not belong to this type)")
            entities.append(entity)
        for index, entity in enumerate(entities):
            entity.display_order = index
        await db.flush()
        return await lookup_entity_repository.get_by_type(db, entity_type.id)


    def build_entity_type_response(self, entity_type: LookupEntityType) -> dict:
        return {
            "id": str(entity_type.id),
            "name": entity_type.name,
            "description": entity_type.description,
            "is_active": entity_type.is_active,
            "created_at": entity_type.created_at,
        }

    def build_entity_response(self, entity: LookupEntity) -> dict:
        return {
            "id": str(entity.id),
            "entity_type_id": str(entity.entity_type_id),
            "parent_entity_id": str(entity.parent_entity_id) if entity.parent_entity_id else None,
            "value": entity.value,
            "display_order": entity.display_order,
            "is_active": entity.is_active,
        }

# 싱글턴 인스턴스
lookup_service: LookupService = LookupService()
