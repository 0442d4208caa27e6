"""
eolscan/inventory/source.py - 클라우드 조회 인터페이스

수집기는 클라우드 SDK를 직접 알지 못하고 두 가지 기능만 사용합니다.

- 구독 목록 페이지 조회
- 구독별 VM 목록 페이지 조회

각 페이지는 ARM REST 응답 형태(camelCase 키)의 dict 리스트입니다.

    구독: {"subscriptionId": "...", "displayName": "..."}
    VM:   {"id": "...", "properties": {"storageProfile": {
              "imageReference": {"publisher", "offer", "sku", "version", "exactVersion"},
              "osDisk": {"osType": "Linux"}}}}
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

Page = list[dict[str, Any]]


class VMSource(Protocol):
    """구독/VM 페이지 조회 기능"""

    def iter_subscription_pages(self) -> Iterable[Page]:
        """구독 목록을 페이지 단위로 반환 (지연 평가)"""
        ...

    def iter_vm_pages(self, subscription_id: str) -> Iterable[Page]:
        """구독의 VM 목록을 페이지 단위로 반환 (지연 평가)"""
        ...

    def close(self) -> None:
        """연결 정리"""
        ...
