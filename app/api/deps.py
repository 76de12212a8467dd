"""FastAPI 의존성 주입 모듈 — 작업자 식별.

FastAPI dependency injection module — Field worker identification.
Worker endpoints identify the caller by the ``X-User-Id`` header, an
opaque identity issued upstream. Only the existence of an active user
record carrying that identity is checked here; token verification happens
before requests reach this service.

Identification Flow:
    1. 클라이언트가 X-User-Id 헤더를 전송 (Client sends the X-User-Id header)
    2. 외부 식별자로 사용자를 조회 (User is fetched by external identity)
    3. 사용자 활성 상태를 확인 (User active status is verified)
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import UnauthorizedError


async def get_current_worker(
    db: Annotated[AsyncSession, Depends(get_db)],
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """X-User-Id 헤더에서 현재 작업자를 조회합니다.

    Resolve the calling field worker from the ``X-User-Id`` header.

    Args:
        db: 비동기 DB 세션 (Async database session)
        x_user_id: 작업자 외부 식별자 헤더 (Worker external identity header)

    Returns:
        User: 활성 사용자 (Active user record)

    Raises:
        UnauthorizedError: 헤더 누락, 미등록 또는 비활성 사용자
                           (Missing header, unknown or inactive user)
    """
    if not x_user_id:
        raise UnauthorizedError("작업자 식별자가 없습니다 (Missing X-User-Id header)")
    user: User | None = await user_repository.get_by_external_id(db, x_user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("사용자를 찾을 수 없거나 비활성 상태입니다 (User not found or inactive)")
    return user
