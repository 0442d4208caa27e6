"""
eolscan/config.py - 전역 설정

기본값은 불변 Settings 데이터클래스에 모아두고, 실행 환경에서
EOLSCAN_* 환경변수로 덮어쓸 수 있습니다.

Usage:
    from eolscan.config import settings

    timeout = settings.HTTP_TIMEOUT
    products = settings.EOL_PRODUCTS
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경변수를 bool로 변환 (해석 불가능한 값이면 default)"""
    value = os.environ.get(name)
    if value is None:
        return default

    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False

    logger.debug("환경변수 %s 값을 bool로 해석할 수 없음: %r", name, value)
    return default


def get_env_int(name: str, default: int) -> int:
    """환경변수를 int로 변환 (누락/오류 시 default)"""
    value = os.environ.get(name)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        logger.debug("환경변수 %s 값을 int로 해석할 수 없음: %r", name, value)
        return default


def get_env_str(name: str, default: str) -> str:
    """환경변수 문자열 (비어 있으면 default)"""
    value = os.environ.get(name, "").strip()
    return value or default


@dataclass(frozen=True)
class Settings:
    """애플리케이션 설정 (불변)

    Attributes:
        EOL_API_BASE_URL: endoflife.date API 베이스 URL
        HTTP_TIMEOUT: 캘린더 조회 HTTP 타임아웃 (초)
        MAX_CONCURRENCY: 페이지 처리 동시 실행 상한
        CHANNEL_CAPACITY: 수집기 → 리포트 채널 버퍼 크기
        LOOKAHEAD_MONTHS: "곧 종료" 판정 기간 (개월)
        UNKNOWN_FORMAT_EXIT_CODE: 알 수 없는 출력 형식일 때 종료 코드
        EOL_TODAY_IS_END_OF_LIFE: EOL 날짜가 오늘인 경우 EOL로 판정할지 여부
        CANCEL_JOIN_TIMEOUT: 실패 시 수집 스레드 종료 대기 시간 (초)
        EOL_PRODUCTS: OS 계열별 endoflife.date 제품명
    """

    EOL_API_BASE_URL: str = "https://endoflife.date/api"
    HTTP_TIMEOUT: int = 30
    MAX_CONCURRENCY: int = 10
    CHANNEL_CAPACITY: int = 32
    LOOKAHEAD_MONTHS: int = 12
    UNKNOWN_FORMAT_EXIT_CODE: int = 0
    EOL_TODAY_IS_END_OF_LIFE: bool = False
    CANCEL_JOIN_TIMEOUT: int = 30
    EOL_PRODUCTS: dict[str, str] = field(
        default_factory=lambda: {
            "ubuntu": "ubuntu",
            "centos": "centos",
            "rhel": "rhel",
            "windows": "windows-server",
        }
    )

    @classmethod
    def from_env(cls) -> Settings:
        """기본값 위에 EOLSCAN_* 환경변수를 적용한 Settings 생성"""
        defaults = cls()
        return cls(
            EOL_API_BASE_URL=get_env_str("EOLSCAN_EOL_API_BASE_URL", defaults.EOL_API_BASE_URL).rstrip("/"),
            HTTP_TIMEOUT=get_env_int("EOLSCAN_HTTP_TIMEOUT", defaults.HTTP_TIMEOUT),
            MAX_CONCURRENCY=get_env_int("EOLSCAN_MAX_CONCURRENCY", defaults.MAX_CONCURRENCY),
            CHANNEL_CAPACITY=get_env_int("EOLSCAN_CHANNEL_CAPACITY", defaults.CHANNEL_CAPACITY),
            LOOKAHEAD_MONTHS=get_env_int("EOLSCAN_LOOKAHEAD_MONTHS", defaults.LOOKAHEAD_MONTHS),
            UNKNOWN_FORMAT_EXIT_CODE=get_env_int(
                "EOLSCAN_UNKNOWN_FORMAT_EXIT_CODE", defaults.UNKNOWN_FORMAT_EXIT_CODE
            ),
            EOL_TODAY_IS_END_OF_LIFE=get_env_bool(
                "EOLSCAN_EOL_TODAY_IS_END_OF_LIFE", defaults.EOL_TODAY_IS_END_OF_LIFE
            ),
            CANCEL_JOIN_TIMEOUT=get_env_int("EOLSCAN_CANCEL_JOIN_TIMEOUT", defaults.CANCEL_JOIN_TIMEOUT),
        )


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "INFO"
    format: str = "%(message)s"
    date_format: str = "[%X]"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        return cls(
            level=get_env_str("LOG_LEVEL", cls.level).upper(),
            format=get_env_str("LOG_FORMAT", cls.format),
        )


settings = Settings.from_env()
