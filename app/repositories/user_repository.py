"""사용자 레포지토리 — 작업자 조회 쿼리.

User Repository — Lookup queries for field workers.
Workers are identified by the opaque ``external_id`` string supplied by the
identity provider; assignments reference ``users.id``.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_external_id(
        self,
        db: AsyncSession,
        external_id: str,
    ) -> User | None:
        """외부 식별자로 사용자를 조회합니다.

        Retrieve a user by the identity provider's opaque identifier.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            external_id: 외부 식별자 (Opaque identity string)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        result = await db.execute(select(User).where(User.external_id == external_id))
        return result.scalar_one_or_none()

    async def get_filtered(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
        keyword: str | None = None,
    ) -> Sequence[User]:
        query: Select = select(User)
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        if keyword:
            pattern: str = f"%{keyword}%"
            query = query.where(User.full_name.ilike(pattern) | User.email.ilike(pattern))
        result = await db.execute(query.order_by(User.full_name))
        return result.scalars().all()


# 싱글턴 인스턴스
user_repository: UserRepository = UserRepository()
