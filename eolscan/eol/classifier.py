"""
eolscan/eol/classifier.py - OS 계열별 EOL 분류

OS 계열마다 (캘린더 제품명, SKU 파서, 임박 판정 기간)을 FamilyHandler로 묶고
OSFamily → FamilyHandler 레지스트리로 디스패치합니다.

분류 규칙 (파싱된 사이클 ID와 정확히 같은 첫 캘린더 항목 기준):
    eol < today                              → END_OF_LIFE
    today < eol < today + N개월 (임박 기간)   → ENDING_SOON (detail = eol 날짜)
    eol > today                              → SUPPORTED
    eol == today                             → UNKNOWN (설정으로 END_OF_LIFE 가능)
    파싱 실패 / 매칭 항목 없음                 → UNKNOWN

Usage:
    from eolscan.eol.classifier import get_handler

    handler = get_handler(record.os_family)
    if handler:
        result = handler.classify(record, calendars[handler.product])
"""

from __future__ import annotations

import calendar as _calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from eolscan.config import Settings, settings
from eolscan.inventory.types import InventoryRecord, OSFamily

from .parsers import parse_major_version, parse_ubuntu_version, parse_windows_version
from .types import Calendar, ClassificationResult, EOLCycleRecord, EOLStatus


def add_months(value: date, months: int) -> date:
    """months개월 뒤 날짜 (말일 초과 시 해당 월 말일로 보정)"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)


def find_cycle(calendar: Calendar, release_cycle_id: str) -> EOLCycleRecord | None:
    """사이클 ID가 정확히 일치하는 첫 항목 (대소문자 구분)"""
    for cycle in calendar:
        if cycle.release_cycle_id == release_cycle_id:
            return cycle
    return None


def classify_version(
    version: str | None,
    calendar: Calendar,
    today: date,
    lookahead_months: int | None = None,
    today_is_end_of_life: bool = False,
) -> ClassificationResult:
    """정규화된 사이클 ID를 캘린더와 대조하여 분류

    Args:
        version: 파싱된 사이클 ID (None이면 UNKNOWN)
        calendar: 제품 캘린더
        today: 기준일
        lookahead_months: 임박 판정 기간 (None이면 임박 판정 없음)
        today_is_end_of_life: EOL 날짜 == 기준일을 END_OF_LIFE로 볼지 여부
    """
    if not version:
        return ClassificationResult(detected_version="", status=EOLStatus.UNKNOWN)

    cycle = find_cycle(calendar, version)
    if cycle is None:
        return ClassificationResult(detected_version=version, status=EOLStatus.UNKNOWN)

    eol = cycle.end_of_life_date
    if eol < today or (today_is_end_of_life and eol == today):
        return ClassificationResult(detected_version=version, status=EOLStatus.END_OF_LIFE)

    if eol > today:
        if lookahead_months is not None and eol < add_months(today, lookahead_months):
            return ClassificationResult(
                detected_version=version,
                status=EOLStatus.ENDING_SOON,
                status_detail=eol.isoformat(),
            )
        return ClassificationResult(detected_version=version, status=EOLStatus.SUPPORTED)

    return ClassificationResult(detected_version=version, status=EOLStatus.UNKNOWN)


@dataclass(frozen=True)
class FamilyHandler:
    """OS 계열별 파싱/분류 기능 묶음

    Attributes:
        family: OS 계열
        product: endoflife.date 제품명
        parse_version: SKU → 사이클 ID 파서
        lookahead_months: 임박 판정 기간 (None이면 단순 비교)
        today_is_end_of_life: EOL 당일 처리 방식
    """

    family: OSFamily
    product: str
    parse_version: Callable[[str], str | None]
    lookahead_months: int | None = None
    today_is_end_of_life: bool = False

    def parse(self, sku: str) -> str | None:
        return self.parse_version(sku)

    def classify(
        self,
        record: InventoryRecord,
        calendar: Calendar,
        today: date | None = None,
    ) -> ClassificationResult:
        """레코드 분류 (순수 함수, 캘린더 변경 없음)"""
        return classify_version(
            self.parse(record.sku),
            calendar,
            today or date.today(),
            lookahead_months=self.lookahead_months,
            today_is_end_of_life=self.today_is_end_of_life,
        )


def build_handlers(config: Settings = settings) -> dict[OSFamily, FamilyHandler]:
    """설정으로 OSFamily → FamilyHandler 레지스트리 생성"""
    products = config.EOL_PRODUCTS
    lookahead = config.LOOKAHEAD_MONTHS
    today_is_eol = config.EOL_TODAY_IS_END_OF_LIFE

    return {
        OSFamily.UBUNTU: FamilyHandler(
            OSFamily.UBUNTU, products["ubuntu"], parse_ubuntu_version, lookahead, today_is_eol
        ),
        OSFamily.CENTOS: FamilyHandler(
            OSFamily.CENTOS, products["centos"], parse_major_version, lookahead, today_is_eol
        ),
        OSFamily.RHEL: FamilyHandler(
            OSFamily.RHEL, products["rhel"], parse_major_version, lookahead, today_is_eol
        ),
        OSFamily.WINDOWS: FamilyHandler(
            OSFamily.WINDOWS, products["windows"], parse_windows_version, None, today_is_eol
        ),
    }


HANDLERS = build_handlers()


def get_handler(family: OSFamily) -> FamilyHandler | None:
    """기본 레지스트리에서 핸들러 조회 (UNKNOWN이면 None)"""
    return HANDLERS.get(family)
