"""작업자(사용자) SQLAlchemy ORM 모델 정의.

User (field worker) SQLAlchemy ORM model definition.
Identity itself lives in an external identity provider; this table only
mirrors the opaque identity string so that assignments can reference a
row and task instances can carry the identity.

Tables:
    - users: 작업자 (Field workers and administrators)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """사용자 모델 — 외부 ID 제공자의 식별자를 미러링.

    User model — Mirrors an identity from the external identity provider.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        external_id: 외부 식별자 (Opaque identity string, unique)
        full_name: 전체 이름 (Full name, optional)
        email: 이메일 (Email address)
        is_active: 활성 여부 (Active flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 외부 식별자 — Opaque identity from the identity provider (task instances reference this)
    external_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # 전체 이름 — Full name
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 이메일 — Email address
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    # 활성 여부 — Inactive users cannot be assigned
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
