"""
eolscan/scan.py - 스캔 실행기

1. writer 생성 (헤더 기록)
2. VMEnumerator를 백그라운드로 시작
3. 동시에 모든 OS 계열의 EOL 캘린더를 병렬 조회
4. 채널이 닫힐 때까지 ReportSink로 소비

캘린더 조회가 실패하면 수집기를 취소하고 종료를 기다린 뒤 CalendarFetchError를
그대로 전파합니다. 이미 기록된 출력 파일은 삭제하지 않습니다.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from eolscan.config import settings
from eolscan.eol.calendar import EOLCalendarCache
from eolscan.eol.classifier import HANDLERS, FamilyHandler
from eolscan.eol.types import EOLStatus
from eolscan.exceptions import ConfigError
from eolscan.inventory.channel import RecordChannel
from eolscan.inventory.enumerator import EnumerationStats, VMEnumerator
from eolscan.inventory.source import VMSource
from eolscan.inventory.types import InventoryRecord, OSFamily
from eolscan.report.sink import ReportSink
from eolscan.report.writers import create_writer, normalize_format
from eolscan.reporter import Reporter

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """스캔 설정

    Attributes:
        output_format: 출력 형식 ("excel" 또는 "csv")
        output_path: 출력 파일 경로
        max_concurrency: 페이지 처리 동시 실행 상한
        channel_capacity: 수집기 → 리포트 채널 버퍼 크기
    """

    output_format: str
    output_path: Path
    max_concurrency: int = field(default_factory=lambda: settings.MAX_CONCURRENCY)
    channel_capacity: int = field(default_factory=lambda: settings.CHANNEL_CAPACITY)

    def __post_init__(self) -> None:
        self.output_format = normalize_format(self.output_format)
        self.output_path = Path(self.output_path)
        if self.max_concurrency < 1:
            raise ConfigError("max_concurrency", f"1 이상이어야 합니다: {self.max_concurrency}")
        if self.channel_capacity < 1:
            raise ConfigError("channel_capacity", f"1 이상이어야 합니다: {self.channel_capacity}")


@dataclass
class ScanResult:
    """스캔 결과 요약"""

    output_path: Path
    counts: Counter[EOLStatus]
    enumeration: EnumerationStats

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class ScanRunner:
    """VM 인벤토리 수집 + EOL 분류 + 리포트 출력"""

    def __init__(
        self,
        config: ScanConfig,
        source: VMSource,
        reporter: Reporter,
        calendar_cache: EOLCalendarCache | None = None,
        handlers: Mapping[OSFamily, FamilyHandler] = HANDLERS,
        today: date | None = None,
    ):
        self.config = config
        self.source = source
        self.reporter = reporter
        self.calendar_cache = calendar_cache or EOLCalendarCache()
        self.handlers = handlers
        self.today = today

    def run(self) -> ScanResult:
        """스캔 실행

        Raises:
            CalendarFetchError: EOL 캘린더 조회 실패
            ReportWriteError: 출력 파일 쓰기 실패
        """
        channel: RecordChannel[InventoryRecord] = RecordChannel(self.config.channel_capacity)
        enumerator = VMEnumerator(
            self.source,
            channel,
            self.reporter,
            max_concurrency=self.config.max_concurrency,
        )

        writer = create_writer(self.config.output_format, self.config.output_path)
        self.reporter.info("구독/VM 목록 조회 시작")
        enumerator.start()

        try:
            products = sorted({handler.product for handler in self.handlers.values()})
            self.reporter.info(f"EOL 캘린더 조회 중: {', '.join(products)}")
            calendars = self.calendar_cache.prefetch(products)

            sink = ReportSink(writer, calendars, self.reporter, handlers=self.handlers, today=self.today)
            counts = sink.drain(channel)
        except BaseException:
            # source.close()보다 먼저 페이지 워커까지 종료되어야 함
            enumerator.cancel()
            enumerator.join(settings.CANCEL_JOIN_TIMEOUT)
            if enumerator.is_alive():
                logger.warning(f"수집 스레드가 {settings.CANCEL_JOIN_TIMEOUT}초 내에 종료되지 않음")
            raise
        finally:
            writer.close()

        stats = enumerator.join()
        logger.debug(f"스캔 완료: {stats}")
        return ScanResult(output_path=self.config.output_path, counts=counts, enumeration=stats)
