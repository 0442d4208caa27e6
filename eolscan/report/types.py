"""
eolscan/report/types.py - 리포트 행/컬럼 정의
"""

from __future__ import annotations

from dataclasses import dataclass

from eolscan.eol.types import ClassificationResult, EOLStatus
from eolscan.inventory.types import InventoryRecord

EMPTY_MARK = "--"


@dataclass(frozen=True)
class ColumnDef:
    """출력 컬럼 정의

    Attributes:
        header: 헤더 문자열
        field: ReportRow 속성 이름
        width: Excel 컬럼 너비
    """

    header: str
    field: str
    width: int = 15


@dataclass(frozen=True)
class ReportRow:
    """리포트 한 행 (레코드 + 분류 결과)"""

    detected_version: str
    status: EOLStatus
    deprecated: str
    os: str
    subscription_id: str
    offer: str
    sku: str
    version: str
    exact_version: str
    publisher: str
    resource_id: str

    @classmethod
    def from_result(cls, record: InventoryRecord, result: ClassificationResult) -> ReportRow:
        return cls(
            detected_version=result.detected_version,
            status=result.status,
            deprecated=result.label,
            os=record.os_type or EMPTY_MARK,
            subscription_id=record.subscription_id,
            offer=record.offer,
            sku=record.sku,
            version=record.image_version,
            exact_version=record.exact_image_version,
            publisher=record.publisher,
            resource_id=record.resource_id,
        )

    def values(self, columns: tuple[ColumnDef, ...]) -> list[str]:
        return [getattr(self, column.field) for column in columns]


# CSV: 헤더 순서대로 기록
CSV_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("Deprecated", "deprecated"),
    ColumnDef("Version (detected)", "detected_version"),
    ColumnDef("ID", "resource_id"),
    ColumnDef("OS", "os"),
    ColumnDef("Subscription", "subscription_id"),
    ColumnDef("Publisher", "publisher"),
    ColumnDef("Offer", "offer"),
    ColumnDef("SKU", "sku"),
    ColumnDef("Version", "version"),
    ColumnDef("Exact version", "exact_version"),
)

EXCEL_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("Detected version", "detected_version", width=16),
    ColumnDef("Deprecated", "deprecated", width=18),
    ColumnDef("OS", "os", width=10),
    ColumnDef("Subscription", "subscription_id", width=38),
    ColumnDef("Offer", "offer", width=30),
    ColumnDef("SKU", "sku", width=24),
    ColumnDef("Version", "version", width=12),
    ColumnDef("Version exact", "exact_version", width=20),
    ColumnDef("Publisher", "publisher", width=22),
    ColumnDef("Resource ID", "resource_id", width=60),
)

# Excel 상태 스타일을 적용할 컬럼
EXCEL_STATUS_COLUMN = "deprecated"
