"""
eolscan/report - 리포트 출력

주요 구성 요소:
- ReportSink: 채널 소비 + 분류 + 행 추가
- CsvReportWriter / ExcelReportWriter: 출력 형식별 writer
- create_writer: 형식 문자열로 writer 생성
"""

from .sink import ReportSink
from .types import CSV_COLUMNS, EXCEL_COLUMNS, ColumnDef, ReportRow
from .writers import (
    SUPPORTED_FORMATS,
    CsvReportWriter,
    ExcelReportWriter,
    ReportWriter,
    create_writer,
    normalize_format,
)

__all__: list[str] = [
    "ReportSink",
    "ReportRow",
    "ColumnDef",
    "CSV_COLUMNS",
    "EXCEL_COLUMNS",
    "ReportWriter",
    "CsvReportWriter",
    "ExcelReportWriter",
    "SUPPORTED_FORMATS",
    "create_writer",
    "normalize_format",
]
