"""
eolscan/report/writers.py - CSV / Excel 리포트 출력

두 writer 모두 생성 시 헤더를 쓰고, append()로 한 행씩 추가하며,
close()에서 파일을 마무리합니다. 실패해도 이미 기록된 부분 파일은
삭제하지 않습니다.

Usage:
    with create_writer("excel", Path("vms.xlsx")) as writer:
        for row in rows:
            writer.append(row)
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook

from eolscan.exceptions import OutputFormatError, ReportWriteError

from .styles import ALIGN_LEFT, get_header_border, get_header_fill, get_header_font, get_status_style
from .types import CSV_COLUMNS, EXCEL_COLUMNS, EXCEL_STATUS_COLUMN, ReportRow

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: tuple[str, ...] = ("excel", "csv")


class ReportWriter(Protocol):
    """리포트 행 추가 기능"""

    path: Path

    def append(self, row: ReportRow) -> None: ...

    def close(self) -> None: ...


class _WriterBase:
    path: Path

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def append(self, row: ReportRow) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class CsvReportWriter(_WriterBase):
    """세미콜론 구분 CSV writer"""

    DELIMITER = ";"

    def __init__(self, path: Path):
        self.path = Path(path)
        try:
            self._file = self.path.open("w", encoding="utf-8", newline="")
        except OSError as e:
            raise ReportWriteError(str(self.path), cause=e) from e
        self._writer = csv.writer(self._file, delimiter=self.DELIMITER, lineterminator="\n")
        self._writer.writerow([column.header for column in CSV_COLUMNS])
        self.row_count = 0

    def append(self, row: ReportRow) -> None:
        try:
            self._writer.writerow(row.values(CSV_COLUMNS))
        except OSError as e:
            raise ReportWriteError(str(self.path), cause=e) from e
        self.row_count += 1

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug(f"CSV 저장: {self.path} ({self.row_count}행)")


class ExcelReportWriter(_WriterBase):
    """openpyxl 기반 Excel writer (워크시트 1개)"""

    SHEET_TITLE = "VMs"

    def __init__(self, path: Path):
        self.path = Path(path)
        self._workbook = Workbook()
        self._sheet = self._workbook.active
        self._sheet.title = self.SHEET_TITLE
        self._status_index = next(
            i for i, column in enumerate(EXCEL_COLUMNS, start=1) if column.field == EXCEL_STATUS_COLUMN
        )
        self._closed = False
        self.row_count = 0
        self._write_header()

    def _write_header(self) -> None:
        header_font = get_header_font()
        header_fill = get_header_fill()
        header_border = get_header_border()

        for col_idx, column in enumerate(EXCEL_COLUMNS, start=1):
            cell = self._sheet.cell(row=1, column=col_idx, value=column.header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = header_border
            cell.alignment = ALIGN_LEFT
            self._sheet.column_dimensions[cell.column_letter].width = column.width

        self._sheet.freeze_panes = "A2"

    def append(self, row: ReportRow) -> None:
        self._sheet.append(row.values(EXCEL_COLUMNS))
        self.row_count += 1

        fill, font = get_status_style(row.status)
        status_cell = self._sheet.cell(row=self._sheet.max_row, column=self._status_index)
        status_cell.fill = fill
        status_cell.font = font

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if self.row_count:
            self._sheet.auto_filter.ref = self._sheet.dimensions
        try:
            self._workbook.save(self.path)
        except OSError as e:
            raise ReportWriteError(str(self.path), cause=e) from e
        logger.debug(f"Excel 저장: {self.path} ({self.row_count}행)")


def normalize_format(value: str) -> str:
    """출력 형식 문자열 정규화

    Raises:
        OutputFormatError: 지원하지 않는 형식
    """
    fmt = value.strip().lower()
    if fmt not in SUPPORTED_FORMATS:
        raise OutputFormatError(value, SUPPORTED_FORMATS)
    return fmt


def create_writer(fmt: str, path: Path) -> CsvReportWriter | ExcelReportWriter:
    """형식에 맞는 writer 생성

    Raises:
        OutputFormatError: 지원하지 않는 형식
        ReportWriteError: 파일 생성 실패
    """
    fmt = normalize_format(fmt)
    if fmt == "csv":
        return CsvReportWriter(path)
    return ExcelReportWriter(path)
