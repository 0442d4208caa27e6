"""
eolscan/eol/types.py - EOL 캘린더/분류 결과 타입
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class EOLCycleRecord:
    """릴리스 사이클 하나 (endoflife.date 응답 항목)

    Attributes:
        release_cycle_id: 사이클 ID (예: "20.04", "7", "2019")
        is_long_term_support: LTS 여부
        release_date: 릴리스 날짜
        latest_patch_version: 최신 패치 버전
        active_support_end_date: 일반 지원 종료일 (제품에 따라 없음)
        end_of_life_date: EOL 날짜
        latest_patch_release_date: 최신 패치 릴리스 날짜
    """

    release_cycle_id: str
    is_long_term_support: bool
    release_date: date
    latest_patch_version: str
    active_support_end_date: date | None
    end_of_life_date: date
    latest_patch_release_date: date | None = None


# 한 제품의 캘린더 (불변)
Calendar = tuple[EOLCycleRecord, ...]


class EOLStatus(Enum):
    """EOL 분류 상태"""

    SUPPORTED = "Supported"
    ENDING_SOON = "EndingSoon"
    END_OF_LIFE = "EndOfLife"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ClassificationResult:
    """분류 결과

    Attributes:
        detected_version: SKU에서 추출한 릴리스 ID (실패 시 "")
        status: 분류 상태
        status_detail: 부가 정보 (ENDING_SOON이면 EOL 날짜)
    """

    detected_version: str
    status: EOLStatus
    status_detail: str | None = None

    @property
    def label(self) -> str:
        """리포트에 표시할 상태 문자열"""
        if self.status == EOLStatus.SUPPORTED:
            return "Supported"
        if self.status == EOLStatus.END_OF_LIFE:
            return "EOL"
        if self.status == EOLStatus.ENDING_SOON:
            return f"Ending {self.status_detail}" if self.status_detail else "Ending"
        return "--"


UNKNOWN_RESULT = ClassificationResult(detected_version="", status=EOLStatus.UNKNOWN)
