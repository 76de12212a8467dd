"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the scheduling error
taxonomy. Services raise these directly; FastAPI turns them into responses
whose ``detail`` is the message verbatim.

Usage:
    from app.utils.exceptions import NotFoundError, BadRequestError
    raise NotFoundError("Work order day not found")
    raise BadRequestError("Start date must be before end date")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a referenced work order, day, service, task template or user
    does not exist. The whole operation is aborted.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 불변식 위반 시 사용.

    400 Bad Request exception (invalid argument).
    Raised when a request violates a scheduling invariant: inverted date
    range, self-dependency, cross-service dependency, required people below 1,
    invalid status value, and so on.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateError(BadRequestError):
    """중복 연결 예외 — 활성 연결 또는 의존성 간선이 이미 존재할 때 사용.

    Duplicate link exception, a kind of invalid argument.
    Raised for a duplicate active day-service link, day task template link,
    service task template link or dependency edge.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(detail=detail)


class CycleDetectedError(HTTPException):
    """409 Conflict 예외 — 의존성 순환이 생길 때 사용.

    409 Conflict exception.
    Raised when a proposed service task dependency would close a cycle.
    Nothing is written.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Adding this dependency would create a circular dependency") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 작업자 식별 정보가 없을 때 사용.

    401 Unauthorized exception.
    Raised by the worker API when the calling identity is missing or unknown.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
