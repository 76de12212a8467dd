"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared across API
domains: pagination, generic messages, reorder requests and soft-removal
results.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.
    Wraps a list of items with pagination metadata.

    Attributes:
        items: 항목 목록 (List of result items)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
    """

    items: list[Any]  # 결과 항목 목록 (List of items for the current page)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema for simple confirmations.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)


class ReorderRequest(BaseModel):
    """순서 변경 요청 스키마.

    Reorder request schema. Each listed id gets its position as its order;
    ids left out keep their current order.

    Attributes:
        ids: 새 순서대로 나열한 UUID 목록 (UUIDs in the new order)
    """

    ids: list[UUID]


class RemovalResponse(BaseModel):
    """연결 비활성화 응답 스키마.

    Soft-removal response. ``orphaned_count`` is the number of task
    instances under the deactivated link that already carry work.
    """

    message: str
    orphaned_count: int
