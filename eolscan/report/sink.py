"""
eolscan/report/sink.py - 채널 소비 + 분류 + 행 추가

채널이 닫힐 때까지 InventoryRecord를 받아 OS 계열에 맞는 FamilyHandler로
분류하고 writer에 한 행씩 추가합니다. 기준일은 싱크 생성 시 한 번 정해
실행 중 모든 레코드에 같은 날짜를 적용합니다.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date

from eolscan.eol.classifier import HANDLERS, FamilyHandler
from eolscan.eol.types import UNKNOWN_RESULT, Calendar, ClassificationResult, EOLStatus
from eolscan.inventory.types import InventoryRecord, OSFamily
from eolscan.reporter import Reporter

from .types import ReportRow
from .writers import ReportWriter

logger = logging.getLogger(__name__)


class ReportSink:
    """리포트 싱크

    Example:
        sink = ReportSink(writer, calendars, reporter)
        sink.drain(channel)
        print(sink.counts[EOLStatus.END_OF_LIFE])
    """

    def __init__(
        self,
        writer: ReportWriter,
        calendars: Mapping[str, Calendar],
        reporter: Reporter,
        handlers: Mapping[OSFamily, FamilyHandler] = HANDLERS,
        today: date | None = None,
    ):
        self.writer = writer
        self.calendars = calendars
        self.reporter = reporter
        self.handlers = handlers
        self.today = today or date.today()
        self.counts: Counter[EOLStatus] = Counter()

    @property
    def row_count(self) -> int:
        return sum(self.counts.values())

    def classify(self, record: InventoryRecord) -> ClassificationResult:
        """OS 계열별 핸들러로 분류 (UNKNOWN 계열이면 Unknown)"""
        handler = self.handlers.get(record.os_family)
        if handler is None:
            return UNKNOWN_RESULT

        calendar = self.calendars.get(handler.product)
        if calendar is None:
            self.reporter.diagnostic(
                "CalendarMissing",
                f"{handler.product} 캘린더 없음 (sku={record.sku!r})",
                scope=record.subscription_id,
                operation="classify",
                resource_id=record.resource_id,
            )
            return UNKNOWN_RESULT

        result = handler.classify(record, calendar, self.today)
        if not result.detected_version:
            self.reporter.diagnostic(
                "SkuParseFailed",
                f"{record.os_family.value} SKU 파싱 실패 (sku={record.sku!r})",
                scope=record.subscription_id,
                operation="classify",
                resource_id=record.resource_id,
            )
        return result

    def consume(self, record: InventoryRecord) -> ReportRow:
        """레코드 하나를 분류하여 writer에 추가"""
        result = self.classify(record)
        row = ReportRow.from_result(record, result)
        self.writer.append(row)
        self.counts[result.status] += 1
        return row

    def drain(self, records: Iterable[InventoryRecord]) -> Counter[EOLStatus]:
        """채널이 닫힐 때까지 소비

        Returns:
            상태별 행 수
        """
        for record in records:
            self.consume(record)

        logger.debug(f"리포트 행 {self.row_count}개 기록: {dict(self.counts)}")
        return self.counts
