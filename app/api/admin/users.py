"""관리자 사용자 라우터 — 현장 작업자 레코드 CRUD 엔드포인트.

Admin User Router — CRUD endpoints for field worker records. Each record
mirrors an identity issued upstream through its ``external_id``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    is_active: Annotated[bool | None, Query(description="활성 상태 필터")] = None,
    keyword: Annotated[str | None, Query(description="이름/이메일 검색어")] = None,
) -> list[UserResponse]:
    """사용자 목록을 필터 조건으로 조회합니다.

    List users with optional active flag and keyword filters.
    """
    return await user_service.list_users(db, is_active, keyword)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """새 사용자를 등록합니다 (Register a user by external identity)."""
    result: UserResponse = await user_service.create_user(db, data)
    await db.commit()
    return result


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    result: UserResponse = await user_service.update_user(db, user_id, data)
    await db.commit()
    return result
