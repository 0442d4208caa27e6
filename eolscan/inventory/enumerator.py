"""
eolscan/inventory/enumerator.py - VM 인벤토리 수집기

구독 페이지 → 구독별 VM 페이지를 동시 실행 상한 안에서 병렬로 순회하며
VM마다 InventoryRecord 하나를 채널로 보냅니다.

- 페이지 처리는 구독 목록/구독별 VM 목록 각각 max_concurrency개까지 동시 실행
- 채널이 가득 차면 send()가 블록되어 수집 속도가 소비자에 맞춰짐
- 페이지 하나 또는 구독 하나의 실패는 기록 후 스킵 (전체 수집은 계속)
- 모든 순회가 끝나면(실패/취소 포함) 채널을 닫음

Example:
    channel = RecordChannel(capacity=32)
    enumerator = VMEnumerator(AzureVMSource(credential), channel, reporter)
    enumerator.start()

    for record in channel:
        ...

    stats = enumerator.join()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from eolscan.exceptions import DataQualityError, EnumerationPageError
from eolscan.parallel import ParallelExecutionResult, for_each_concurrent
from eolscan.reporter import Reporter

from .channel import RecordChannel
from .source import Page, VMSource
from .types import InventoryRecord, detect_os_family

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_SCOPE = "subscriptions"


@dataclass
class EnumerationStats:
    """수집 통계 (스레드 세이프 카운터)"""

    subscriptions: int = 0
    records: int = 0
    skipped_vms: int = 0
    failed_pages: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add(self, **counts: int) -> None:
        with self._lock:
            for name, value in counts.items():
                setattr(self, name, getattr(self, name) + value)


def _require(mapping: dict[str, Any], key: str, resource_id: str) -> dict[str, Any]:
    value = mapping.get(key)
    if not isinstance(value, dict):
        raise DataQualityError(resource_id, key)
    return value


def build_record(subscription_id: str, vm: dict[str, Any]) -> InventoryRecord:
    """ARM VM 응답 하나를 InventoryRecord로 변환

    properties / storageProfile / osDisk가 없으면 DataQualityError.
    imageReference만 없으면 이미지 필드를 비운 레코드를 반환합니다.
    (Marketplace 이미지가 아닌 VM도 OS 유형은 알 수 있음)
    """
    resource_id = vm.get("id") or ""
    properties = _require(vm, "properties", resource_id)
    storage_profile = _require(properties, "storageProfile", resource_id)
    os_disk = _require(storage_profile, "osDisk", resource_id)

    image = storage_profile.get("imageReference") or {}
    publisher = image.get("publisher") or ""
    offer = image.get("offer") or ""

    return InventoryRecord(
        resource_id=resource_id,
        subscription_id=subscription_id,
        publisher=publisher,
        offer=offer,
        sku=image.get("sku") or "",
        image_version=image.get("version") or "",
        exact_image_version=image.get("exactVersion") or "",
        os_family=detect_os_family(publisher, offer),
        os_type=os_disk.get("osType") or "",
    )


class VMEnumerator:
    """구독/VM 병렬 수집기 (백그라운드 생산자)"""

    def __init__(
        self,
        source: VMSource,
        channel: RecordChannel[InventoryRecord],
        reporter: Reporter,
        max_concurrency: int = 10,
    ):
        self.source = source
        self.channel = channel
        self.reporter = reporter
        self.max_concurrency = max_concurrency
        self.stats = EnumerationStats()
        self._thread: threading.Thread | None = None

    @property
    def cancel_event(self) -> threading.Event:
        return self.channel.cancel_event

    def cancel(self) -> None:
        """수집 중단 요청 (진행 중인 페이지 조회는 끝까지 기다림)"""
        self.cancel_event.set()

    # =========================================================================
    # 실행
    # =========================================================================

    def start(self) -> threading.Thread:
        """백그라운드 스레드에서 수집 시작"""
        if self._thread is not None:
            raise RuntimeError("enumerator already started")
        self._thread = threading.Thread(target=self.run, name="eolscan-enumerator", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: float | None = None) -> EnumerationStats:
        if self._thread is not None:
            self._thread.join(timeout)
        return self.stats

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self) -> EnumerationStats:
        """전체 수집 (완료 시 채널을 닫음)"""
        try:
            result = for_each_concurrent(
                self.source.iter_subscription_pages(),
                self._process_subscription_page,
                max_workers=self.max_concurrency,
                cancel_event=self.cancel_event,
                name=SUBSCRIPTIONS_SCOPE,
            )
            self._report_failures(result, SUBSCRIPTIONS_SCOPE, "list_subscriptions")
        except Exception as e:
            # 페이저 생성 자체의 실패 (인증 만료 등)
            self.stats.add(failed_pages=1)
            self.reporter.page_error(
                EnumerationPageError(SUBSCRIPTIONS_SCOPE, "list_subscriptions", cause=e),
                scope=SUBSCRIPTIONS_SCOPE,
                operation="list_subscriptions",
            )
        finally:
            self.channel.close()

        logger.debug(f"수집 완료: {self.stats}")
        return self.stats

    def _report_failures(self, result: ParallelExecutionResult, scope: str, operation: str) -> None:
        logger.debug(f"{scope} {operation}: 페이지 {result.success_count}개 성공")
        if result.error_count:
            logger.debug(f"{scope} {operation}: {result.get_error_summary()}")
        for error in result.get_errors():
            self.stats.add(failed_pages=1)
            cause = error.original_exception if isinstance(error.original_exception, Exception) else None
            self.reporter.page_error(
                EnumerationPageError(scope, f"{operation} ({error.identifier})", cause=cause),
                scope=scope,
                operation=operation,
            )

    # =========================================================================
    # 구독
    # =========================================================================

    def _process_subscription_page(self, page: Page) -> int:
        """구독 한 페이지 처리: 구독마다 VM 목록 수집"""
        sent = 0
        for subscription in page:
            if self.cancel_event.is_set():
                break

            subscription_id = subscription.get("subscriptionId") or ""
            if not subscription_id:
                self.reporter.diagnostic(
                    "DataQuality",
                    f"구독 ID 없음: {subscription.get('displayName') or subscription.get('id') or '<unknown>'}",
                    scope=SUBSCRIPTIONS_SCOPE,
                    operation="list_subscriptions",
                )
                continue

            self.stats.add(subscriptions=1)
            logger.debug(f"> VM 목록 조회: {subscription_id}")
            sent += self._list_vms(subscription_id)
        return sent

    # =========================================================================
    # VM
    # =========================================================================

    def _list_vms(self, subscription_id: str) -> int:
        """구독 하나의 VM 페이지를 병렬 처리"""
        try:
            pages = self.source.iter_vm_pages(subscription_id)
        except Exception as e:
            self.stats.add(failed_pages=1)
            self.reporter.page_error(
                EnumerationPageError(subscription_id, "list_vms", cause=e),
                scope=subscription_id,
                operation="list_vms",
            )
            return 0

        result = for_each_concurrent(
            pages,
            lambda page: self._process_vm_page(subscription_id, page),
            max_workers=self.max_concurrency,
            cancel_event=self.cancel_event,
            name=subscription_id,
        )
        self._report_failures(result, subscription_id, "list_vms")
        return sum(result.get_data())

    def _process_vm_page(self, subscription_id: str, page: Page) -> int:
        sent = 0
        for vm in page:
            try:
                record = build_record(subscription_id, vm)
            except DataQualityError as e:
                self.stats.add(skipped_vms=1)
                self.reporter.diagnostic(
                    "DataQuality",
                    e.message,
                    scope=subscription_id,
                    operation="list_vms",
                    resource_id=e.resource_id,
                )
                continue

            if not record.resource_id:
                self.reporter.diagnostic(
                    "DataQuality",
                    "VM 리소스 ID 없음 (빈 값으로 기록)",
                    scope=subscription_id,
                    operation="list_vms",
                )

            if not self.channel.send(record):
                logger.debug(f"[{subscription_id}] 취소됨: 전송 중단")
                break
            sent += 1
            self.stats.add(records=1)
        return sent
