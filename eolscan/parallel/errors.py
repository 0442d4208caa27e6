"""
eolscan/parallel/errors.py - 에러 수집 및 관리

병렬 수집 중 발생하는 부분 실패(페이지 조회 실패, 데이터 누락 등)를
일관되게 수집하고 실행 종료 시 요약을 제공합니다.

주요 구성 요소:
- ErrorSeverity: 에러 심각도 분류
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기
- categorize_error: 예외 → ErrorCategory 분류

Example:
    collector = ErrorCollector("eolscan")

    try:
        pages = source.iter_vm_pages(subscription_id)
    except Exception as e:
        collector.collect(e, scope=subscription_id, operation="list_vms")

    if collector.has_errors:
        print(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .types import ErrorCategory

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """에러 심각도 분류

    수집된 에러의 심각도를 나타내며, 로깅 레벨을 결정합니다.
    """

    CRITICAL = "critical"  # 실행 중단 사유
    WARNING = "warning"  # 부분 실패 - 보고하되 계속 진행
    INFO = "info"  # 정보성 (권한 없음 등)
    DEBUG = "debug"


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        scope: 실패 범위 (구독 ID 또는 "subscriptions")
        component: 수집 주체 (inventory, classify 등)
        operation: 작업 이름 (예: "list_vms")
        error_code: 에러 코드
        error_message: 에러 메시지
        severity: 에러 심각도
        category: 에러 카테고리
        resource_id: 관련 리소스 ID (선택사항)
    """

    timestamp: datetime
    scope: str
    component: str
    operation: str
    error_code: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory
    resource_id: str | None = None

    def __str__(self) -> str:
        return f"[{self.severity.value.upper()}] {self.scope} - {self.component}.{self.operation}: {self.error_code}"


def get_error_code(error: BaseException) -> str:
    """예외에서 에러 코드 추출

    azure-core HttpResponseError는 error.code 또는 status_code를,
    그 외에는 예외 클래스 이름을 사용합니다.
    """
    inner = getattr(error, "error", None)
    code = getattr(inner, "code", None)
    if code:
        return str(code)

    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        return f"HTTP{status_code}"

    return error.__class__.__name__


def categorize_error_code(error_code: str) -> ErrorCategory:
    """에러 코드 문자열의 키워드로 ErrorCategory 분류"""
    code = error_code.lower()

    if any(x in code for x in ["authorizationfailed", "accessdenied", "unauthorized", "forbidden", "http401", "http403"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "http404"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "toomanyrequests", "http429"]):
        return ErrorCategory.THROTTLING
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if any(x in code for x in ["invalid", "validation", "malformed", "http400"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "http500", "http502", "http503"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


def categorize_error(error: BaseException) -> ErrorCategory:
    """예외를 ErrorCategory로 분류"""
    return categorize_error_code(get_error_code(error))


_LOG_LEVELS = {
    ErrorSeverity.CRITICAL: logging.ERROR,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.DEBUG: logging.DEBUG,
}


class ErrorCollector:
    """스레드 세이프 에러 수집기

    여러 워커 스레드에서 발생하는 부분 실패를 모아 두었다가
    실행 종료 시 심각도별 요약과 실패한 구독 목록을 제공합니다.
    """

    def __init__(self, component: str):
        self.component = component
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: BaseException,
        scope: str,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        resource_id: str | None = None,
    ) -> CollectedError:
        """예외를 수집하고 로깅

        EOLScanError로 래핑된 예외는 원인 예외에서 에러 코드를 읽습니다.
        ACCESS_DENIED는 INFO로 낮춥니다 (Reader 권한 없는 구독은 흔함).
        """
        error_code = get_error_code(getattr(error, "cause", None) or error)
        category = categorize_error_code(error_code)
        if category == ErrorCategory.ACCESS_DENIED:
            severity = ErrorSeverity.INFO

        return self._record(error_code, str(error), scope, operation, severity, category, resource_id)

    def collect_generic(
        self,
        error_code: str,
        error_message: str,
        scope: str,
        operation: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        resource_id: str | None = None,
    ) -> CollectedError:
        """예외 객체 없이 진단 수집 (데이터 누락, SKU 파싱 실패 등)"""
        category = categorize_error_code(error_code)
        return self._record(error_code, error_message, scope, operation, severity, category, resource_id)

    def _record(
        self,
        error_code: str,
        error_message: str,
        scope: str,
        operation: str,
        severity: ErrorSeverity,
        category: ErrorCategory,
        resource_id: str | None,
    ) -> CollectedError:
        collected = CollectedError(
            timestamp=datetime.now(),
            scope=scope,
            component=self.component,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            severity=severity,
            category=category,
            resource_id=resource_id,
        )
        with self._lock:
            self._errors.append(collected)

        logger.log(_LOG_LEVELS[severity], "%s - %s", collected, error_message)
        return collected

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 에러의 복사본"""
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return bool(self._errors)

    def failed_scopes(self, min_severity: ErrorSeverity = ErrorSeverity.WARNING) -> list[str]:
        """지정 심각도 이상의 에러가 있는 범위(구독) 목록 (정렬)"""
        ranked = list(_LOG_LEVELS)
        allowed = set(ranked[: ranked.index(min_severity) + 1])
        with self._lock:
            return sorted({e.scope for e in self._errors if e.severity in allowed and e.scope})

    def get_summary(self) -> str:
        """심각도별 건수 요약 (예: "에러 3건 (info: 1건, warning: 2건)")"""
        with self._lock:
            if not self._errors:
                return "에러 없음"
            counts = Counter(e.severity.value for e in self._errors)
            total = len(self._errors)

        parts = ", ".join(f"{severity}: {count}건" for severity, count in sorted(counts.items()))
        return f"에러 {total}건 ({parts})"
