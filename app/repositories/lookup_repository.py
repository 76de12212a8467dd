"""조회 엔티티 레포지토리.

Lookup Repository — DB queries for lookup entity types and entities.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.lookup import LookupEntity, LookupEntityType
from app.repositories.base import BaseRepository


class LookupEntityTypeRepository(BaseRepository[LookupEntityType]):

    def __init__(self) -> None:
        super().__init__(LookupEntityType)


class LookupEntityRepository(BaseRepository[LookupEntity]):

    def __init__(self) -> None:
        super().__init__(LookupEntity)

    async def get_by_type(
        self,
        db: AsyncSession,
        entity_type_id: UUID,
        parent_entity_id: UUID | None = None,
        active_only: bool = False,
    ) -> Sequence[LookupEntity]:
        query: Select = (
            select(LookupEntity)
            .where(LookupEntity.entity_type_id == entity_type_id)
        )
        if parent_entity_id is not None:
            query = query.where(LookupEntity.parent_entity_id == parent_entity_id)
        if active_only:
            query = query.where(LookupEntity.is_active.is_(True))
        result = await db.execute(query.order_by(LookupEntity.display_order, LookupEntity.created_at))
        return result.scalars().all()

    async def get_children(
        self, db: AsyncSession, parent_entity_id: UUID
    ) -> Sequence[LookupEntity]:
        result = await db.execute(
            select(LookupEntity).where(LookupEntity.parent_entity_id == parent_entity_id)
        )
        return result.scalars().all()

    async def get_next_order(self, db: AsyncSession, entity_type_id: UUID) -> int:
        query: Select = (
            select(func.count())
            .select_from(LookupEntity)
            .where(LookupEntity.entity_type_id == entity_type_id)
        )
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스
lookup_entity_type_repository: LookupEntityTypeRepository = LookupEntityTypeRepository()
lookup_entity_repository: LookupEntityRepository = LookupEntityRepository()
