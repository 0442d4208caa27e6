"""
eolscan/eol - EOL 캘린더 조회 및 분류

주요 구성 요소:
- EOLCalendarCache / fetch_calendar: endoflife.date 캘린더 조회
- FamilyHandler / get_handler: OS 계열별 파싱 + 분류
- parse_*_version: SKU 파서
"""

from .calendar import EOLCalendarCache, fetch_calendar, parse_cycle
from .classifier import (
    HANDLERS,
    FamilyHandler,
    add_months,
    build_handlers,
    classify_version,
    find_cycle,
    get_handler,
)
from .parsers import parse_major_version, parse_ubuntu_version, parse_windows_version
from .types import Calendar, ClassificationResult, EOLCycleRecord, EOLStatus

__all__: list[str] = [
    # Calendar
    "EOLCalendarCache",
    "fetch_calendar",
    "parse_cycle",
    # Classifier
    "FamilyHandler",
    "HANDLERS",
    "build_handlers",
    "get_handler",
    "classify_version",
    "find_cycle",
    "add_months",
    # Parsers
    "parse_ubuntu_version",
    "parse_major_version",
    "parse_windows_version",
    # Types
    "Calendar",
    "ClassificationResult",
    "EOLCycleRecord",
    "EOLStatus",
]
