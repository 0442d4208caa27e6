"""
tests/conftest.py - pytest 공통 픽스처

가짜 VMSource, 캘린더 빌더, 출력을 메모리로 받는 Reporter를 제공합니다.

Usage:
    def test_something(fake_source, quiet_reporter, make_cycle_record):
        source = fake_source(subscriptions=2, vms_per_subscription=3)
        calendar = (make_cycle_record("20.04", eol=date(2030, 4, 1)),)
"""

import io
import sys
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from rich.console import Console

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from eolscan.eol.types import EOLCycleRecord  # noqa: E402
from eolscan.reporter import Reporter  # noqa: E402

# =============================================================================
# VM 응답 빌더
# =============================================================================


def make_vm(
    vm_id: str,
    publisher: str = "Canonical",
    offer: str = "UbuntuServer",
    sku: str = "18.04-LTS",
    version: str = "latest",
    exact_version: str = "18.04.202201010",
    os_type: str = "Linux",
    with_image: bool = True,
) -> Dict[str, Any]:
    """ARM REST 형태의 VM dict 생성 헬퍼"""
    storage_profile: Dict[str, Any] = {"osDisk": {"osType": os_type}}
    if with_image:
        storage_profile["imageReference"] = {
            "publisher": publisher,
            "offer": offer,
            "sku": sku,
            "version": version,
            "exactVersion": exact_version,
        }
    return {"id": vm_id, "properties": {"storageProfile": storage_profile}}


@pytest.fixture
def vm_factory():
    """ARM VM dict 팩토리"""
    return make_vm


def chunk(items: List[Any], size: int) -> List[List[Any]]:
    """리스트를 size 단위 페이지로 분할"""
    return [items[i : i + size] for i in range(0, len(items), size)]


# =============================================================================
# 가짜 VMSource
# =============================================================================


class FakeVMSource:
    """메모리 기반 VMSource

    Attributes:
        subscription_pages: 구독 페이지 목록
        vm_pages: 구독 ID → VM 페이지 목록
        failing_subscriptions: iter_vm_pages 호출 시 예외를 던질 구독 ID
        failing_pages: (구독 ID, 페이지 번호) → 페이저가 해당 페이지에서 던질 예외
        subscription_error: (페이지 번호, 예외) 구독 페이저가 해당 페이지에서 던질 예외
    """

    def __init__(
        self,
        subscription_pages: Optional[List[List[Dict[str, Any]]]] = None,
        vm_pages: Optional[Dict[str, List[List[Dict[str, Any]]]]] = None,
    ):
        self.subscription_pages = subscription_pages or []
        self.vm_pages = vm_pages or {}
        self.failing_subscriptions: Dict[str, Exception] = {}
        self.failing_pages: Dict[tuple, Exception] = {}
        self.subscription_error: Optional[tuple] = None
        self.vm_calls: List[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def iter_subscription_pages(self):
        for index, page in enumerate(self.subscription_pages):
            if self.subscription_error and self.subscription_error[0] == index:
                raise self.subscription_error[1]
            yield list(page)

    def iter_vm_pages(self, subscription_id: str):
        with self._lock:
            self.vm_calls.append(subscription_id)
        if subscription_id in self.failing_subscriptions:
            raise self.failing_subscriptions[subscription_id]
        return self._vm_page_iter(subscription_id)

    def _vm_page_iter(self, subscription_id: str):
        for index, page in enumerate(self.vm_pages.get(subscription_id, [])):
            error = self.failing_pages.get((subscription_id, index))
            if error is not None:
                raise error
            yield list(page)

    def close(self) -> None:
        self.closed = True


def build_source(
    subscriptions: int = 2,
    vms_per_subscription: int = 3,
    subscription_page_size: int = 1,
    vm_page_size: int = 2,
    **vm_kwargs: Any,
) -> FakeVMSource:
    """N개 구독 × M개 VM 가짜 소스 생성"""
    subs = [{"subscriptionId": f"sub-{s}", "displayName": f"Sub {s}"} for s in range(subscriptions)]
    vm_pages = {}
    for sub in subs:
        sub_id = sub["subscriptionId"]
        vms = [make_vm(f"/subscriptions/{sub_id}/vm-{v}", **vm_kwargs) for v in range(vms_per_subscription)]
        vm_pages[sub_id] = chunk(vms, vm_page_size)
    return FakeVMSource(chunk(subs, subscription_page_size), vm_pages)


@pytest.fixture
def fake_source():
    """가짜 VMSource 팩토리"""
    return build_source


# =============================================================================
# 캘린더 픽스처
# =============================================================================


def make_cycle(
    cycle: str,
    eol: date,
    release: date = date(2018, 4, 26),
    lts: bool = False,
    support: Optional[date] = None,
) -> EOLCycleRecord:
    """EOLCycleRecord 생성 헬퍼"""
    return EOLCycleRecord(
        release_cycle_id=cycle,
        is_long_term_support=lts,
        release_date=release,
        latest_patch_version=f"{cycle}.0",
        active_support_end_date=support,
        end_of_life_date=eol,
    )


@pytest.fixture
def make_cycle_record():
    """EOLCycleRecord 팩토리"""
    return make_cycle


@pytest.fixture
def today() -> date:
    """테스트 기준일"""
    return date(2024, 6, 15)


# =============================================================================
# Reporter 픽스처
# =============================================================================


@pytest.fixture
def quiet_reporter() -> Reporter:
    """출력을 메모리로 받는 Reporter"""
    return Reporter(console=Console(file=io.StringIO(), force_terminal=False))

