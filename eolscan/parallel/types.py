"""
eolscan/parallel/types.py - 병렬 실행 결과 타입

개별 작업 결과(TaskResult)와 전체 실행 결과(ParallelExecutionResult)를
정의합니다. 실패는 예외로 전파하지 않고 결과 객체에 담아 반환합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """에러 카테고리"""

    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    THROTTLING = "throttling"
    TIMEOUT = "timeout"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


@dataclass
class TaskError:
    """작업 실패 정보

    Attributes:
        identifier: 작업 식별자 (예: "subscriptions#page-3")
        category: 에러 카테고리
        error_code: 에러 코드 (예외 클래스명 또는 HTTP 상태 코드)
        message: 에러 메시지
        original_exception: 원본 예외
    """

    identifier: str
    category: ErrorCategory
    error_code: str
    message: str
    original_exception: BaseException | None = None

    def __str__(self) -> str:
        return f"[{self.identifier}] {self.error_code}: {self.message}"


@dataclass
class TaskResult(Generic[T]):
    """개별 작업 결과"""

    identifier: str
    success: bool
    data: T | None = None
    error: TaskError | None = None
    duration_ms: float = 0.0


@dataclass
class ParallelExecutionResult(Generic[T]):
    """전체 병렬 실행 결과

    Attributes:
        results: 완료된 작업 결과 (완료 순서)
        source_error: 작업 시퀀스(페이저) 자체에서 발생한 에러.
            이 에러 이후의 항목은 스케줄되지 않았습니다.
        cancelled: 취소 토큰으로 중단되었는지 여부
    """

    results: tuple[TaskResult[T], ...] = ()
    source_error: TaskError | None = None
    cancelled: bool = False

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        failed = sum(1 for r in self.results if not r.success)
        return failed + (1 if self.source_error else 0)

    def get_data(self) -> list[T]:
        """성공한 작업의 데이터 목록"""
        return [r.data for r in self.results if r.success and r.data is not None]

    def get_errors(self) -> list[TaskError]:
        """모든 에러 (페이저 에러 포함)"""
        errors = [r.error for r in self.results if r.error is not None]
        if self.source_error:
            errors.append(self.source_error)
        return errors

    def get_error_summary(self) -> str:
        """에러 코드별 건수 요약"""
        errors = self.get_errors()
        if not errors:
            return "에러 없음"

        by_code: dict[str, int] = {}
        for e in errors:
            by_code[e.error_code] = by_code.get(e.error_code, 0) + 1

        parts = [f"{code}: {count}건" for code, count in sorted(by_code.items())]
        return f"에러 {len(errors)}건 ({', '.join(parts)})"
