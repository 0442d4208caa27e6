"""
eolscan/parallel - 병렬 처리 모듈

구독/VM 페이지를 동시 실행 상한 안에서 병렬로 처리합니다.

주요 구성 요소:
- BoundedExecutor: 지연 페이지 시퀀스에 대한 동시 실행 상한 실행기
- for_each_concurrent: 간편 래퍼 함수
- ErrorCollector: 부분 실패 수집기

Example:
    from eolscan.parallel import ErrorCollector, for_each_concurrent

    collector = ErrorCollector("eolscan")
    result = for_each_concurrent(pages, process_page, max_workers=10)

    for error in result.get_errors():
        collector.collect(error.original_exception, scope="subscriptions", operation="list")
"""

from .errors import (
    CollectedError,
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    get_error_code,
)
from .executor import BoundedExecutor, ParallelConfig, for_each_concurrent
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

__all__: list[str] = [
    # Executor
    "BoundedExecutor",
    "ParallelConfig",
    "for_each_concurrent",
    # Error handling
    "ErrorCollector",
    "ErrorSeverity",
    "CollectedError",
    "categorize_error",
    "get_error_code",
    # Types
    "ErrorCategory",
    "TaskError",
    "TaskResult",
    "ParallelExecutionResult",
]
