"""
tests/report/test_report_sink.py - ReportSink 테스트
"""

from datetime import timedelta

from eolscan.eol.types import EOLStatus
from eolscan.inventory.channel import RecordChannel
from eolscan.inventory.types import InventoryRecord, OSFamily
from eolscan.report.sink import ReportSink


class MemoryWriter:
    """행을 리스트에 모으는 writer"""

    def __init__(self):
        self.rows = []
        self.closed = False

    def append(self, row):
        self.rows.append(row)

    def close(self):
        self.closed = True


def _record(sku, family, resource_id="/vm/1"):
    return InventoryRecord(resource_id=resource_id, subscription_id="sub-1", sku=sku, os_family=family)


def _sink(quiet_reporter, calendars, today):
    return ReportSink(MemoryWriter(), calendars, quiet_reporter, today=today)


class TestReportSink:
    """ReportSink 테스트"""

    def test_classify_per_family(self, quiet_reporter, make_cycle_record, today):
        """OS 계열별 캘린더로 분류"""
        calendars = {
            "ubuntu": (make_cycle_record("18.04", eol=today - timedelta(days=10)),),
            "centos": (make_cycle_record("7", eol=today + timedelta(days=200)),),
            "rhel": (make_cycle_record("9", eol=today + timedelta(days=4000)),),
            "windows-server": (make_cycle_record("2019", eol=today + timedelta(days=30)),),
        }
        sink = _sink(quiet_reporter, calendars, today)

        rows = [
            sink.consume(_record("18.04-LTS", OSFamily.UBUNTU)),
            sink.consume(_record("7-LVM", OSFamily.CENTOS)),
            sink.consume(_record("9.2", OSFamily.RHEL)),
            sink.consume(_record("2019-Datacenter", OSFamily.WINDOWS)),
        ]

        assert [r.deprecated for r in rows] == [
            "EOL",
            f"Ending {(today + timedelta(days=200)).isoformat()}",
            "Supported",
            "Supported",
        ]
        assert sink.row_count == 4
        assert sink.writer.rows == rows

    def test_unknown_family(self, quiet_reporter, today):
        """UNKNOWN 계열 → Unknown (진단 없음)"""
        sink = _sink(quiet_reporter, {}, today)

        row = sink.consume(_record("sles-15", OSFamily.UNKNOWN))

        assert row.status == EOLStatus.UNKNOWN
        assert row.deprecated == "--"
        assert not quiet_reporter.collector.has_errors

    def test_sku_parse_failure_diagnostic(self, quiet_reporter, make_cycle_record, today):
        """SKU 파싱 실패 → Unknown + 진단"""
        calendars = {"ubuntu": (make_cycle_record("18.04", eol=today),)}
        sink = _sink(quiet_reporter, calendars, today)

        row = sink.consume(_record("", OSFamily.UBUNTU, resource_id="/vm/empty-sku"))

        assert row.status == EOLStatus.UNKNOWN
        error = quiet_reporter.collector.errors[0]
        assert error.error_code == "SkuParseFailed"
        assert error.resource_id == "/vm/empty-sku"

    def test_empty_first_segment_diagnostic(self, quiet_reporter, make_cycle_record, today):
        """첫 세그먼트가 빈 SKU도 Unknown + 진단"""
        calendars = {"centos": (make_cycle_record("7", eol=today + timedelta(days=400)),)}
        sink = _sink(quiet_reporter, calendars, today)

        row = sink.consume(_record(".6", OSFamily.CENTOS, resource_id="/vm/dot-sku"))

        assert row.status == EOLStatus.UNKNOWN
        assert [e.error_code for e in quiet_reporter.collector.errors] == ["SkuParseFailed"]

    def test_missing_calendar(self, quiet_reporter, today):
        """캘린더 없음 → Unknown + 진단"""
        sink = _sink(quiet_reporter, {}, today)

        row = sink.consume(_record("7", OSFamily.RHEL))

        assert row.status == EOLStatus.UNKNOWN
        assert quiet_reporter.collector.errors[0].error_code == "CalendarMissing"

    def test_drain_channel(self, quiet_reporter, make_cycle_record, today):
        """채널이 닫힐 때까지 소비하고 상태별 건수 반환"""
        calendars = {"ubuntu": (make_cycle_record("18.04", eol=today - timedelta(days=1)),)}
        sink = _sink(quiet_reporter, calendars, today)
        channel = RecordChannel(capacity=8)
        for i in range(3):
            channel.send(_record("18.04-LTS", OSFamily.UBUNTU, resource_id=f"/vm/{i}"))
        channel.send(_record("", OSFamily.UNKNOWN, resource_id="/vm/custom"))
        channel.close()

        counts = sink.drain(channel)

        assert counts[EOLStatus.END_OF_LIFE] == 3
        assert counts[EOLStatus.UNKNOWN] == 1
        assert [r.resource_id for r in sink.writer.rows] == ["/vm/0", "/vm/1", "/vm/2", "/vm/custom"]
