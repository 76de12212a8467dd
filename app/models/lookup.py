"""조회 엔티티 관련 SQLAlchemy ORM 모델 정의.

Lookup entity SQLAlchemy ORM model definitions.
Lookup entities are admin-maintained option lists (equipment, areas,
materials…) used by select-type fields. Entities can be nested under a
parent entity and are ordered by ``display_order`` within their type.

Tables:
    - lookup_entity_types: 조회 엔티티 유형 (Option list definitions)
    - lookup_entities: 조회 엔티티 (Options within a list)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class LookupEntityType(Base):
    """조회 엔티티 유형 모델.

    Lookup entity type model — A named option list.
    """

    __tablename__ = "lookup_entity_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class LookupEntity(Base):
    """조회 엔티티 모델 — 유형 내의 개별 선택지.

    Lookup entity model — One option of a lookup entity type.
    ``display_order`` is contiguous and 0-based within the type; deleting an
    entity removes its child entities and compacts the remaining ones.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        entity_type_id: 소속 유형 FK (Parent entity type)
        parent_entity_id: 상위 엔티티 FK (Parent entity, optional)
        value: 표시 값 (Display value)
        display_order: 정렬 순서 (0-based display order)
        is_active: 활성 여부 (Active flag)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "lookup_entities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 유형 FK — Parent entity type (CASCADE: 유형 삭제 시 엔티티도 삭제)
    entity_type_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("lookup_entity_types.id", ondelete="CASCADE"), nullable=False, index=True)
    # 상위 엔티티 FK — Optional parent entity for hierarchical lists
    parent_entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("lookup_entities.id", ondelete="CASCADE"), nullable=True, index=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    # 정렬 순서 — Display order (0-based, contiguous after deletions)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
