"""조회 엔티티 관련 Pydantic 요청/응답 스키마 정의.

Lookup entity type and entity Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class LookupEntityTypeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None


class LookupEntityTypeUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None


class LookupEntityTypeResponse(BaseModel):
    id: str
    name: str
    description: str | None
    is_active: bool
    created_at: datetime


class LookupEntityCreate(BaseModel):
    """조회 엔티티 생성 요청 스키마. 유형의 마지막 순서로 추가 (Appended at the end)."""

    value: str = Field(..., min_length=1)
    parent_entity_id: UUID | None = None


class LookupEntityUpdate(BaseModel):
    value: str | None = None
    is_active: bool | None = None


class LookupEntityResponse(BaseModel):
    id: str
    entity_type_id: str
    parent_entity_id: str | None
    value: str
    display_order: int
    is_active: bool
