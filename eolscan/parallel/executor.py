"""
eolscan/parallel/executor.py - 동시 실행 상한이 있는 페이지 실행기

페이지 시퀀스(지연 이터레이터, 길이 미상)를 최대 K개까지만 동시에 처리합니다.
워커 슬롯이 비어야 다음 페이지를 가져오므로 전체 시퀀스를 미리
리스트로 만들지 않습니다. ThreadPoolExecutor 기반입니다.

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수)
- BoundedExecutor: 페이지 단위 병렬 실행기
- for_each_concurrent: 간편 래퍼 함수

Example:
    from eolscan.parallel import for_each_concurrent

    def process_page(page):
        for vm in page:
            channel.send(build_record(vm))

    result = for_each_concurrent(
        source.iter_vm_pages(subscription_id),
        process_page,
        max_workers=10,
        name=subscription_id,
    )
    if result.error_count:
        print(result.get_error_summary())
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

from .errors import categorize_error, get_error_code
from .types import ErrorCategory, ParallelExecutionResult, TaskError, TaskResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# 취소 토큰 확인 주기 (초)
_POLL_INTERVAL = 0.1


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 동시에 처리 중인 작업 수 상한 (1~100)
    """

    max_workers: int = 10

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > 100:
            self.max_workers = 100


class BoundedExecutor:
    """동시 실행 상한이 있는 페이지 실행기

    특징:
    - 진행 중인 작업이 max_workers개이면 다음 항목을 꺼내지 않음
    - 작업 실패는 TaskResult로 격리 (다른 작업에 영향 없음)
    - 시퀀스 자체(페이저)의 실패는 source_error로 기록하고 스케줄 중단
    - cancel_event가 설정되면 새 작업을 스케줄하지 않음
    """

    def __init__(
        self,
        config: ParallelConfig | None = None,
        cancel_event: threading.Event | None = None,
        name: str = "task",
    ):
        self.config = config or ParallelConfig()
        self.cancel_event = cancel_event
        self.name = name

    def _is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _acquire_slot(self, slots: threading.BoundedSemaphore) -> bool:
        """워커 슬롯 획득 (취소되면 False)"""
        while not slots.acquire(timeout=_POLL_INTERVAL):
            if self._is_cancelled():
                return False
        if self._is_cancelled():
            slots.release()
            return False
        return True

    def execute(
        self,
        items: Iterable[T],
        func: Callable[[T], R],
        on_complete: Callable[[TaskResult[R]], None] | None = None,
    ) -> ParallelExecutionResult[R]:
        """모든 항목에 func를 병렬 실행

        Args:
            items: 처리할 항목 시퀀스 (지연 평가, 길이 무관)
            func: 항목 처리 함수
            on_complete: 각 작업 완료 시 호출되는 콜백 (워커 스레드에서 호출)

        Returns:
            ParallelExecutionResult[R]: 전체 실행 결과
        """
        results: list[TaskResult[R]] = []
        results_lock = threading.Lock()
        slots = threading.BoundedSemaphore(self.config.max_workers)
        source_error: TaskError | None = None
        cancelled = False
        iterator = iter(items)
        index = 0

        def _done(future: Future) -> None:
            result = future.result()
            with results_lock:
                results.append(result)
            slots.release()
            if on_complete:
                on_complete(result)

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=f"eolscan-{self.name}",
        ) as executor:
            while True:
                if not self._acquire_slot(slots):
                    cancelled = True
                    break

                try:
                    item = next(iterator)
                except StopIteration:
                    slots.release()
                    break
                except Exception as e:
                    slots.release()
                    logger.debug(f"[{self.name}] 페이지 시퀀스 조회 실패 (#{index}): {e}")
                    _clear_exception_chain(e)
                    source_error = TaskError(
                        identifier=f"{self.name}#{index}",
                        category=categorize_error(e),
                        error_code=get_error_code(e),
                        message=str(e),
                        original_exception=e,
                    )
                    break

                future = executor.submit(self._execute_single, func, item, f"{self.name}#{index}")
                future.add_done_callback(_done)
                index += 1

        if cancelled:
            logger.debug(f"[{self.name}] 취소됨: {index}개 작업 스케줄 후 중단")

        with results_lock:
            return ParallelExecutionResult(
                results=tuple(results),
                source_error=source_error,
                cancelled=cancelled,
            )

    def _execute_single(self, func: Callable[[T], R], item: T, identifier: str) -> TaskResult[R]:
        """단일 작업 실행 (워커 스레드 내에서 호출)"""
        start_time = time.monotonic()
        try:
            data = func(item)
            return TaskResult(
                identifier=identifier,
                success=True,
                data=data,
                duration_ms=(time.monotonic() - start_time) * 1000,
            )
        except Exception as e:
            _clear_exception_chain(e)
            category = categorize_error(e)
            if self._is_cancelled():
                category = ErrorCategory.CANCELLED
            return TaskResult(
                identifier=identifier,
                success=False,
                error=TaskError(
                    identifier=identifier,
                    category=category,
                    error_code=get_error_code(e),
                    message=str(e),
                    original_exception=e,
                ),
                duration_ms=(time.monotonic() - start_time) * 1000,
            )


def for_each_concurrent(
    items: Iterable[T],
    func: Callable[[T], R],
    max_workers: int = 10,
    cancel_event: threading.Event | None = None,
    name: str = "task",
) -> ParallelExecutionResult[R]:
    """BoundedExecutor 간편 래퍼

    Args:
        items: 처리할 항목 시퀀스
        func: 항목 처리 함수
        max_workers: 동시 실행 상한
        cancel_event: 취소 토큰
        name: 로그/스레드 이름에 쓰일 작업 이름

    Returns:
        ParallelExecutionResult[R]
    """
    executor = BoundedExecutor(ParallelConfig(max_workers=max_workers), cancel_event=cancel_event, name=name)
    return executor.execute(items, func)
