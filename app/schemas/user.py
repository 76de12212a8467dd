"""작업자(사용자) 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """사용자 생성 요청 스키마.

    User creation request schema. ``external_id`` is the opaque identity
    issued by the identity provider.

    Attributes:
        external_id: 외부 식별자 (Opaque identity string, unique)
        full_name: 실명 (Full display name, optional)
        email: 이메일 (Email address)
    """

    external_id: str = Field(..., min_length=1)  # 외부 식별자 (Identity provider subject)
    full_name: str | None = None  # 실명 (Full display name)
    email: str  # 이메일 (Email address)


class UserUpdate(BaseModel):
    """사용자 수정 요청 스키마 (부분 업데이트)."""

    full_name: str | None = None
    email: str | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    """사용자 응답 스키마."""

    id: str
    external_id: str
    full_name: str | None
    email: str
    is_active: bool
    created_at: datetime
