"""
eolscan/eol/parsers.py - 이미지 SKU → 릴리스 사이클 ID

Marketplace 이미지 SKU에서 endoflife.date 사이클 ID를 추출합니다.
파서는 예외를 던지지 않으며, 빈 SKU일 때만 None을 반환합니다.
첫 세그먼트가 비어 있으면 빈 문자열을 그대로 돌려주고, 분류 단계에서
Unknown + SkuParseFailed 진단으로 처리됩니다.
"""

from __future__ import annotations

import re

_SERVICE_PACK = re.compile(r"sp\d+")


def parse_ubuntu_version(sku: str) -> str | None:
    """Ubuntu SKU 파싱

    Examples:
        >>> parse_ubuntu_version("18.04-LTS")
        '18.04'
        >>> parse_ubuntu_version("20_04-lts-gen2")
        '20.04'
    """
    if not sku:
        return None

    first = sku.split("-")[0]
    parts = first.split("_")
    if len(parts) == 2:
        return f"{parts[0]}.{parts[1]}"
    return first


def parse_major_version(sku: str) -> str | None:
    """CentOS/RHEL SKU 파싱 (메이저 버전만)

    캘린더가 메이저 릴리스 단위이므로 마이너/패치 버전은 버립니다.

    Examples:
        >>> parse_major_version("7.6")
        '7'
        >>> parse_major_version("7-LVM")
        '7'
    """
    if not sku:
        return None

    parts = sku.split(".")
    if len(parts) < 2:
        parts = sku.split("-")
    return parts[0]


def parse_windows_version(sku: str) -> str | None:
    """Windows Server SKU 파싱

    CentOS/RHEL과 같은 "메이저-접미사" 규칙이며, R2/서비스팩 세그먼트는
    windows-server 캘린더의 사이클 ID 형태("2012-r2", "2008-r2-sp1")로 유지합니다.

    Examples:
        >>> parse_windows_version("2019-Datacenter")
        '2019'
        >>> parse_windows_version("2012-R2-Datacenter")
        '2012-r2'
        >>> parse_windows_version("2008-R2-SP1")
        '2008-r2-sp1'
    """
    major = parse_major_version(sku)
    if not major:
        return major

    segments = sku.lower().split("-")
    if segments[0] != major.lower():
        return major

    cycle = [major]
    rest = segments[1:]
    if rest and rest[0] == "r2":
        cycle.append("r2")
        rest = rest[1:]
    if rest and _SERVICE_PACK.fullmatch(rest[0]):
        cycle.append(rest[0])
    return "-".join(cycle)
