"""
eolscan/eol/calendar.py - endoflife.date 캘린더 조회/캐시

GET {base_url}/{product}.json 응답(JSON 배열)을 EOLCycleRecord 튜플로
역직렬화합니다. 캐시는 실행 동안 제품당 한 번만 조회하며, 조회된 캘린더는
모든 분류 호출이 공유하는 읽기 전용 데이터입니다.

Example:
    cache = EOLCalendarCache()
    calendars = cache.prefetch(["ubuntu", "centos", "rhel", "windows-server"])
    ubuntu = cache.get("ubuntu")  # 네트워크 호출 없음
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Any

import requests

from eolscan.config import settings
from eolscan.exceptions import CalendarFetchError

from .types import Calendar, EOLCycleRecord

logger = logging.getLogger(__name__)


def _parse_date(value: Any, field: str, product: str) -> date:
    """ISO 8601 날짜 필드 파싱 (실패 시 CalendarFetchError)"""
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise CalendarFetchError(product, f"'{field}' 날짜 형식 오류: {value!r}", cause=e) from e
    raise CalendarFetchError(product, f"'{field}' 날짜가 아님: {value!r}")


def _parse_optional_date(value: Any, field: str, product: str) -> date | None:
    """선택 날짜 필드 (누락/bool이면 None)

    endoflife.date는 일부 제품에서 날짜 대신 true/false를 사용합니다.
    """
    if value is None or isinstance(value, bool):
        return None
    return _parse_date(value, field, product)


def parse_cycle(item: dict[str, Any], product: str) -> EOLCycleRecord:
    """캘린더 항목 하나를 EOLCycleRecord로 변환"""
    if not isinstance(item, dict):
        raise CalendarFetchError(product, f"항목이 객체가 아님: {item!r}")
    if item.get("cycle") in (None, ""):
        raise CalendarFetchError(product, f"'cycle' 필드 없음: {item!r}")

    return EOLCycleRecord(
        release_cycle_id=str(item["cycle"]),
        is_long_term_support=bool(item.get("lts", False)),
        release_date=_parse_date(item.get("releaseDate"), "releaseDate", product),
        latest_patch_version=str(item.get("latest") or ""),
        active_support_end_date=_parse_optional_date(item.get("support"), "support", product),
        end_of_life_date=_parse_date(item.get("eol"), "eol", product),
        latest_patch_release_date=_parse_optional_date(item.get("latestReleaseDate"), "latestReleaseDate", product),
    )


def fetch_calendar(
    product: str,
    base_url: str | None = None,
    timeout: int | None = None,
    session: requests.Session | None = None,
) -> Calendar:
    """제품 EOL 캘린더 조회 (HTTP 요청 1회)

    Args:
        product: endoflife.date 제품명 (예: "ubuntu")
        base_url: API 베이스 URL (기본: settings.EOL_API_BASE_URL)
        timeout: HTTP 타임아웃 (기본: settings.HTTP_TIMEOUT)
        session: 재사용할 requests.Session (선택)

    Raises:
        CalendarFetchError: 네트워크/HTTP 상태/역직렬화 실패
    """
    url = f"{(base_url or settings.EOL_API_BASE_URL).rstrip('/')}/{product}.json"
    http = session or requests

    try:
        response = http.get(url, timeout=timeout or settings.HTTP_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise CalendarFetchError(product, f"HTTP 요청 실패 ({url})", cause=e) from e

    try:
        payload = response.json()
    except ValueError as e:
        raise CalendarFetchError(product, "JSON 파싱 실패", cause=e) from e

    if not isinstance(payload, list):
        raise CalendarFetchError(product, f"JSON 배열이 아님: {type(payload).__name__}")

    cycles = tuple(parse_cycle(item, product) for item in payload)
    logger.debug(f"EOL 캘린더 조회 완료 [{product}]: {len(cycles)}개 사이클")
    return cycles


class EOLCalendarCache:
    """실행 단위 EOL 캘린더 캐시 (스레드 세이프)

    제품당 조회는 최대 1회입니다. 실패도 캐시되어 같은 제품을 다시
    요청하면 네트워크 호출 없이 같은 CalendarFetchError를 다시 던집니다.
    """

    def __init__(
        self,
        fetcher: Callable[[str], Calendar] = fetch_calendar,
        max_workers: int = 4,
    ):
        self._fetcher = fetcher
        self._max_workers = max_workers
        self._calendars: dict[str, Calendar] = {}
        self._failures: dict[str, CalendarFetchError] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _product_lock(self, product: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(product, threading.Lock())

    def get(self, product: str) -> Calendar:
        """캘린더 반환 (첫 호출에서만 조회)

        Raises:
            CalendarFetchError: 조회 실패 (캐시된 실패 포함)
        """
        with self._product_lock(product):
            if product in self._calendars:
                return self._calendars[product]
            if product in self._failures:
                raise self._failures[product]

            try:
                calendar = self._fetcher(product)
            except CalendarFetchError as e:
                self._failures[product] = e
                raise
            except Exception as e:
                error = CalendarFetchError(product, "예상치 못한 오류", cause=e)
                self._failures[product] = error
                raise error from e

            self._calendars[product] = calendar
            return calendar

    def prefetch(self, products: Iterable[str]) -> dict[str, Calendar]:
        """여러 제품 캘린더를 병렬 조회

        모든 조회가 끝난 뒤 하나라도 실패했으면 첫 실패를 던집니다.

        Raises:
            CalendarFetchError: 하나 이상의 제품 조회 실패
        """
        unique = list(dict.fromkeys(products))
        if not unique:
            return {}

        calendars: dict[str, Calendar] = {}
        failures: list[CalendarFetchError] = []

        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(unique)),
            thread_name_prefix="eolscan-calendar",
        ) as executor:
            futures = {executor.submit(self.get, product): product for product in unique}
            for future in as_completed(futures):
                product = futures[future]
                try:
                    calendars[product] = future.result()
                except CalendarFetchError as e:
                    logger.debug(f"캘린더 조회 실패 [{product}]: {e}")
                    failures.append(e)

        if failures:
            raise failures[0]
        return calendars
