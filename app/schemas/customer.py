"""고객/현장 관련 Pydantic 요청/응답 스키마 정의.

Customer and faena Pydantic request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field


# === 고객 (Customer) 스키마 ===

class CustomerCreate(BaseModel):
    """고객 생성 요청 스키마.

    Attributes:
        name: 고객사 이름 (Customer name)
        tax_id: 사업자 번호 (Tax id such as a RUT, optional)
    """

    name: str = Field(..., min_length=1)
    tax_id: str | None = None


class CustomerUpdate(BaseModel):
    """고객 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = None
    tax_id: str | None = None


class CustomerResponse(BaseModel):
    id: str
    name: str
    tax_id: str | None
    created_at: datetime


# === 현장 (Faena) 스키마 ===

class FaenaCreate(BaseModel):
    """현장 생성 요청 스키마. customer_id는 URL 경로로 전달 (customer_id comes from the path)."""

    name: str = Field(..., min_length=1)
    location: str | None = None


class FaenaUpdate(BaseModel):
    name: str | None = None
    location: str | None = None
    is_active: bool | None = None


class FaenaResponse(BaseModel):
    id: str
    customer_id: str
    name: str
    location: str | None
    is_active: bool
    created_at: datetime
