"""사용자 서비스 — 작업자 CRUD 비즈니스 로직.

User Service — Business logic for field worker records.
Only the mirror of the identity provider's subject is stored here; the
identity itself is never validated beyond the record's existence.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.utils.exceptions import DuplicateError, NotFoundError


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def _to_response(self, user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            external_id=user.external_id,
            full_name=user.full_name,
            email=user.email,
            is_active=user.is_active,
            created_at=user.created_at,
        )

    async def list_users(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
        keyword: str | None = None,
    ) -> list[UserResponse]:
        users = await user_repository.get_filtered(db, is_active, keyword)
        return [self._to_response(u) for u in users]

    async def get_user(self, db: AsyncSession, user_id: UUID) -> UserResponse:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("사용자를 찾을 수 없습니다 (User not found)")
        return self._to_response(user)

    async def create_user(self, db: AsyncSession, data: UserCreate) -> UserResponse:
        """사용자를 생성합니다. 외부 식별자는 고유해야 합니다.

        Create a user. The external identity must be unique.

        Raises:
            DuplicateError: 외부 식별자 중복 (External id already registered)
        """
        if await user_repository.get_by_external_id(db, data.external_id) is not None:
            raise DuplicateError("이미 등록된 사용자입니다 (User with this external id already exists)")
        user: User = await user_repository.create(db, data.model_dump())
        return self._to_response(user)

    async def update_user(self, db: AsyncSession, user_id: UUID, data: UserUpdate) -> UserResponse:
        user: User | None = await user_repository.update(db, user_id, data.model_dump(exclude_unset=True))
        if user is None:
            raise NotFoundError("사용자를 찾을 수 없습니다 (User not found)")
        return self._to_response(user)


# 싱글턴 인스턴스
user_service: UserService = UserService()
