"""
eolscan/inventory - VM 인벤토리 수집

주요 구성 요소:
- VMEnumerator: 구독/VM 병렬 수집기 (백그라운드 생산자)
- RecordChannel: 용량 제한 채널
- InventoryRecord / OSFamily: 수집 결과 타입
- VMSource: 클라우드 조회 인터페이스 (Azure 구현은 eolscan.inventory.azure)

Note:
    AzureVMSource는 azure SDK를 로드하므로 여기서 재노출하지 않습니다.
"""

from .channel import ChannelClosedError, RecordChannel
from .enumerator import EnumerationStats, VMEnumerator, build_record
from .source import Page, VMSource
from .types import InventoryRecord, OSFamily, detect_os_family

__all__: list[str] = [
    "VMEnumerator",
    "EnumerationStats",
    "build_record",
    "RecordChannel",
    "ChannelClosedError",
    "VMSource",
    "Page",
    "InventoryRecord",
    "OSFamily",
    "detect_os_family",
]
