"""
tests/report/test_report_writers.py - CSV / Excel writer 테스트
"""

import pytest
from openpyxl import load_workbook

from eolscan.eol.types import ClassificationResult, EOLStatus
from eolscan.exceptions import OutputFormatError, ReportWriteError
from eolscan.inventory.types import InventoryRecord, OSFamily
from eolscan.report.types import CSV_COLUMNS, EXCEL_COLUMNS, ReportRow
from eolscan.report.writers import CsvReportWriter, ExcelReportWriter, create_writer, normalize_format


def _row(status=EOLStatus.END_OF_LIFE, detected="18.04", detail=None, os_type="Linux") -> ReportRow:
    record = InventoryRecord(
        resource_id="/subscriptions/sub-1/vm-1",
        subscription_id="sub-1",
        publisher="Canonical",
        offer="UbuntuServer",
        sku="18.04-LTS",
        image_version="latest",
        exact_image_version="18.04.202201010",
        os_family=OSFamily.UBUNTU,
        os_type=os_type,
    )
    return ReportRow.from_result(record, ClassificationResult(detected, status, detail))


class TestReportRow:
    """ReportRow 테스트"""

    def test_from_result(self):
        """레코드 + 분류 결과 → 행"""
        row = _row(EOLStatus.ENDING_SOON, "20.04", "2025-04-02")

        assert row.deprecated == "Ending 2025-04-02"
        assert row.detected_version == "20.04"
        assert row.os == "Linux"

    def test_missing_os_type(self):
        """OS 유형 없음 → --"""
        assert _row(os_type="").os == "--"


class TestCsvReportWriter:
    """CsvReportWriter 테스트"""

    def test_header_and_rows(self, tmp_path):
        """세미콜론 구분 헤더 + 헤더 순서대로 행 기록"""
        path = tmp_path / "vms.csv"

        with CsvReportWriter(path) as writer:
            writer.append(_row())
            writer.append(_row(EOLStatus.UNKNOWN, ""))

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Deprecated;Version (detected);ID;OS;Subscription;Publisher;Offer;SKU;Version;Exact version"
        assert lines[1] == (
            "EOL;18.04;/subscriptions/sub-1/vm-1;Linux;sub-1;Canonical;UbuntuServer;18.04-LTS;latest;18.04.202201010"
        )
        assert lines[2].startswith("--;;/subscriptions/sub-1/vm-1;")
        assert len(lines) == 3

    def test_header_written_on_open(self, tmp_path):
        """행이 없어도 헤더는 기록"""
        path = tmp_path / "empty.csv"
        CsvReportWriter(path).close()

        assert path.read_text(encoding="utf-8") == ";".join(c.header for c in CSV_COLUMNS) + "\n"

    def test_open_failure(self, tmp_path):
        """파일 생성 실패 → ReportWriteError"""
        with pytest.raises(ReportWriteError):
            CsvReportWriter(tmp_path / "missing-dir" / "vms.csv")


class TestExcelReportWriter:
    """ExcelReportWriter 테스트"""

    def test_header_and_status_styles(self, tmp_path):
        """헤더 스타일 + 상태 셀 색상"""
        path = tmp_path / "vms.xlsx"

        with ExcelReportWriter(path) as writer:
            writer.append(_row(EOLStatus.END_OF_LIFE))
            writer.append(_row(EOLStatus.SUPPORTED, "22.04"))
            writer.append(_row(EOLStatus.ENDING_SOON, "20.04", "2025-04-02"))
            writer.append(_row(EOLStatus.UNKNOWN, ""))

        ws = load_workbook(path).active
        assert ws.title == "VMs"
        assert [c.value for c in ws[1]] == [c.header for c in EXCEL_COLUMNS]
        assert ws["A1"].font.bold is True
        assert ws["A1"].fill.fgColor.rgb.endswith("808080")
        assert ws["A1"].border.bottom.style == "medium"
        assert ws.freeze_panes == "A2"

        # Deprecated 컬럼 (B)
        assert ws["B2"].value == "EOL"
        assert ws["B2"].fill.fgColor.rgb.endswith("F5CAC9")
        assert ws["B2"].font.color.rgb.endswith("8D2012")
        assert ws["B3"].value == "Supported"
        assert ws["B3"].fill.fgColor.rgb.endswith("CFEDCF")
        assert ws["B4"].value == "Ending 2025-04-02"
        assert ws["B4"].fill.fgColor.rgb.endswith("FAECA2")
        assert ws["B5"].value == "--"
        assert ws["B5"].fill.fgColor.rgb.endswith("FAECA2")

    def test_row_values(self, tmp_path):
        """컬럼 순서대로 값 기록"""
        path = tmp_path / "vms.xlsx"

        with ExcelReportWriter(path) as writer:
            writer.append(_row())

        ws = load_workbook(path).active
        assert [c.value for c in ws[2]] == [
            "18.04",
            "EOL",
            "Linux",
            "sub-1",
            "UbuntuServer",
            "18.04-LTS",
            "latest",
            "18.04.202201010",
            "Canonical",
            "/subscriptions/sub-1/vm-1",
        ]
        assert ws.auto_filter.ref == "A1:J2"

    def test_header_only(self, tmp_path):
        """행이 없어도 헤더만 있는 파일 저장"""
        path = tmp_path / "empty.xlsx"
        ExcelReportWriter(path).close()

        ws = load_workbook(path).active
        assert ws.max_row == 1

    def test_save_failure(self, tmp_path):
        """저장 실패 → ReportWriteError"""
        writer = ExcelReportWriter(tmp_path / "missing-dir" / "vms.xlsx")

        with pytest.raises(ReportWriteError):
            writer.close()


class TestCreateWriter:
    """create_writer / normalize_format 테스트"""

    def test_formats(self, tmp_path):
        """형식별 writer 생성 (대소문자 무시)"""
        csv_writer = create_writer("CSV", tmp_path / "a.csv")
        excel_writer = create_writer(" excel ", tmp_path / "a.xlsx")

        assert isinstance(csv_writer, CsvReportWriter)
        assert isinstance(excel_writer, ExcelReportWriter)
        csv_writer.close()
        excel_writer.close()

    def test_unknown_format(self):
        """알 수 없는 형식 → OutputFormatError"""
        with pytest.raises(OutputFormatError) as exc_info:
            normalize_format("json")

        assert exc_info.value.value == "json"
        assert "excel" in str(exc_info.value)
