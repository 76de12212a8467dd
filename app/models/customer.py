"""고객 및 현장(faena) 관련 SQLAlchemy ORM 모델 정의.

Customer and faena SQLAlchemy ORM model definitions.
A faena is a customer's work site; every work order is scheduled for
exactly one faena of one customer.

Tables:
    - customers: 고객사 (Customers)
    - faenas: 고객 현장 (Customer work sites)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Customer(Base):
    """고객 모델 — 작업 지시를 발주하는 고객사.

    Customer model — The company that owns faenas and orders work.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 고객사 이름 (Customer display name)
        tax_id: 사업자 번호, 선택 (Tax identifier such as a RUT, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "customers"

    # 고객 고유 식별자 — Customer unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 고객사 이름 — Customer display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 사업자 번호 — Tax identifier (optional)
    tax_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class Faena(Base):
    """현장 모델 — 고객의 작업 현장.

    Faena model — A customer's work site/location.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        customer_id: 소속 고객 FK (Owning customer)
        name: 현장 이름 (Site name)
        location: 위치 설명, 선택 (Free-text location, optional)
        is_active: 활성 여부 (Active flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "faenas"

    # 현장 고유 식별자 — Faena unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 고객 FK — Owning customer (CASCADE: 고객 삭제 시 현장도 삭제)
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    # 현장 이름 — Site display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 위치 설명 — Free-text location
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # 활성 여부 — Active flag
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
