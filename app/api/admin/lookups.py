"""관리자 조회 엔티티 라우터.

Admin Lookup Router — Endpoints for lookup entity types and their ordered
entities (select options shown by ``select`` fields).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse, ReorderRequest
from app.schemas.lookup import (
    LookupEntityCreate,
    LookupEntityResponse,
    LookupEntityTypeCreate,
    LookupEntityTypeResponse,
    LookupEntityTypeUpdate,
    LookupEntityUpdate,
)
from app.services.lookup_service import lookup_service

router: APIRouter = APIRouter()


@router.get("/entity-types", response_model=list[LookupEntityTypeResponse])
async def list_entity_types(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    entity_types = await lookup_service.list_entity_types(db)
    return [lookup_service.build_entity_type_response(t) for t in entity_types]


@router.post("/entity-types", response_model=LookupEntityTypeResponse, status_code=201)
async def create_entity_type(
    data: LookupEntityTypeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    entity_type = await lookup_service.create_entity_type(db, data.model_dump())
    await db.commit()
    return lookup_service.build_entity_type_response(entity_type)


@router.put("/entity-types/{entity_type_id}", response_model=LookupEntityTypeResponse)
async def update_entity_type(
    entity_type_id: UUID,
    data: LookupEntityTypeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    entity_type = await lookup_service.update_entity_type(db, entity_type_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return lookup_service.build_entity_type_response(entity_type)


@router.get("/entity-types/{entity_type_id}/entities", response_model=list[LookupEntityResponse])
async def list_entities(
    entity_type_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    parent_entity_id: Annotated[UUID | None, Query(description="상위 엔티티 필터")] = None,
    active_only: bool = False,
) -> list[dict]:
    entities = await lookup_service.list_entities(db, entity_type_id, parent_entity_id, active_only)
    return [lookup_service.build_entity_response(e) for e in entities]


@router.post("/entity-types/{entity_type_id}/entities", response_model=LookupEntityResponse, status_code=201)
async def create_entity(
    entity_type_id: UUID,
    data: LookupEntityCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    entity = await lookup_service.create_entity(db, entity_type_id, data.value, data.parent_entity_id)
    await db.commit()
    return lookup_service.build_entity_response(entity)


@router.put("/entity-types/{entity_type_id}/entities/reorder", response_model=list[LookupEntityResponse])
async def reorder_entities(
    entity_type_id: UUID,
    data: ReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[dict]:
    entities = await lookup_service.reorder_entities(db, entity_type_id, data.ids)
    await db.commit()
    return [lookup_service.build_entity_response(e) for e in entities]


@router.put("/entities/{entity_id}", response_model=LookupEntityResponse)
async def update_entity(
    entity_id: UUID,
    data: LookupEntityUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    entity = await lookup_service.update_entity(db, entity_id, data.model_dump(exclude_unset=True))
    await db.commit()
    return lookup_service.build_entity_response(entity)


@router.delete("/entities/{entity_id}", response_model=MessageResponse)
async def delete_entity(
    entity_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """엔티티와 하위 엔티티를 삭제하고 표시 순서를 압축합니다.

    Delete an entity with its children and compact the display order.
    """
    await lookup_service.delete_entity(db, entity_id)
    await db.commit()
    return {"message": "조회 엔티티가 삭제되었습니다 (Lookup entity deleted)"}
