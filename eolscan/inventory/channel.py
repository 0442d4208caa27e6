"""
eolscan/inventory/channel.py - 수집기 → 리포트 채널

용량이 제한된 다중 생산자/단일 소비자 채널입니다. 버퍼가 가득 차면
send()가 블록되어 수집 속도가 소비자 속도에 맞춰집니다.
close() 이후 소비자는 남은 항목을 모두 받은 뒤 반복을 종료합니다.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()
_POLL_INTERVAL = 0.1


class ChannelClosedError(RuntimeError):
    """닫힌 채널에 send() 호출"""


class RecordChannel(Generic[T]):
    """용량 제한 채널

    Example:
        channel = RecordChannel(capacity=32)

        # 생산자 스레드
        channel.send(record)
        channel.close()

        # 소비자
        for record in channel:
            writer.append(record)
    """

    def __init__(self, capacity: int = 32, cancel_event: threading.Event | None = None):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self.cancel_event = cancel_event or threading.Event()
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, item: T) -> bool:
        """항목 전송 (버퍼가 가득 차면 블록)

        Returns:
            전송 성공 여부. 취소 토큰이 설정되면 False를 반환합니다.

        Raises:
            ChannelClosedError: 이미 닫힌 채널
        """
        while True:
            if self._closed.is_set():
                raise ChannelClosedError("channel is closed")
            if self.cancel_event.is_set():
                return False
            try:
                self._queue.put(item, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue

    def close(self) -> None:
        """스트림 종료 신호 (여러 번 호출해도 안전)"""
        with self._close_lock:
            if self._closed.is_set():
                return
            self._closed.set()

        # 종료 표식은 버퍼 용량과 무관하게 전달되어야 함
        while True:
            try:
                self._queue.put(_CLOSED, timeout=_POLL_INTERVAL)
                return
            except queue.Full:
                if self.cancel_event.is_set():
                    return

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                item = self._queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if self.cancel_event.is_set():
                    return
                continue
            if item is _CLOSED:
                return
            yield item
