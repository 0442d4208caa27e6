"""
eolscan/inventory/types.py - 인벤토리 데이터 타입

수집기가 생성하는 VM 레코드와 OS 계열 분류를 정의합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OSFamily(Enum):
    """OS 계열 (레코드당 한 번 결정)"""

    UBUNTU = "Linux-Ubuntu"
    CENTOS = "Linux-CentOS"
    RHEL = "Linux-RHEL"
    WINDOWS = "Windows"
    UNKNOWN = "Unknown"


# 매칭 우선순위 순서
_FAMILY_KEYWORDS: tuple[tuple[str, OSFamily], ...] = (
    ("ubuntu", OSFamily.UBUNTU),
    ("centos", OSFamily.CENTOS),
    ("rhel", OSFamily.RHEL),
    ("windows", OSFamily.WINDOWS),
)


def detect_os_family(publisher: str, offer: str) -> OSFamily:
    """이미지 publisher/offer로 OS 계열 판별

    대소문자 무시 부분 문자열 매칭이며 ubuntu → centos → rhel → windows
    순서로 먼저 매칭된 계열을 반환합니다.

    Examples:
        >>> detect_os_family("Canonical", "0001-com-ubuntu-server-jammy")
        <OSFamily.UBUNTU: 'Linux-Ubuntu'>
        >>> detect_os_family("RedHat", "RHEL")
        <OSFamily.RHEL: 'Linux-RHEL'>
    """
    haystack = f"{publisher}\n{offer}".lower()
    for keyword, family in _FAMILY_KEYWORDS:
        if keyword in haystack:
            return family
    return OSFamily.UNKNOWN


@dataclass(frozen=True)
class InventoryRecord:
    """VM 인벤토리 레코드 (불변)

    Attributes:
        resource_id: VM 리소스 ID
        subscription_id: 구독 ID
        publisher: 이미지 게시자 (예: Canonical)
        offer: 이미지 오퍼 (예: UbuntuServer)
        sku: 이미지 SKU (예: 18.04-LTS)
        image_version: 이미지 버전 (예: latest)
        exact_image_version: 실제 배포된 이미지 버전
        os_family: OS 계열
        os_type: OS 디스크의 OS 유형 ("Linux", "Windows", 없으면 "")
    """

    resource_id: str
    subscription_id: str
    publisher: str = ""
    offer: str = ""
    sku: str = ""
    image_version: str = ""
    exact_image_version: str = ""
    os_family: OSFamily = OSFamily.UNKNOWN
    os_type: str = ""
