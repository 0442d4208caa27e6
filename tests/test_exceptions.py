"""
tests/test_exceptions.py - 예외 계층 테스트
"""

from eolscan.exceptions import (
    CalendarFetchError,
    ConfigError,
    DataQualityError,
    EnumerationPageError,
    EOLScanError,
    OutputFormatError,
    ReportWriteError,
    format_error_for_user,
)


class FakeHttpResponseError(Exception):
    def __init__(self, status_code):
        super().__init__(f"Operation returned an invalid status {status_code}")
        self.status_code = status_code


class TestEOLScanError:
    """EOLScanError 테스트"""

    def test_str_with_cause(self):
        """원인 예외 포함 메시지"""
        error = EOLScanError("실패", cause=ValueError("bad"))

        assert str(error) == "실패: bad"

    def test_to_dict(self):
        """딕셔너리 변환"""
        error = CalendarFetchError("ubuntu", "HTTP 요청 실패", cause=TimeoutError("slow"))

        assert error.to_dict() == {
            "error_type": "CalendarFetchError",
            "message": "EOL 캘린더 조회 실패 [ubuntu]: HTTP 요청 실패",
            "cause": "slow",
            "details": {"product": "ubuntu"},
        }

    def test_hierarchy(self):
        """모든 예외는 EOLScanError"""
        errors = [
            DataQualityError("/vm/1", "osDisk"),
            EnumerationPageError("sub-1", "list_vms"),
            CalendarFetchError("rhel", "x"),
            ReportWriteError("/tmp/x.csv"),
            ConfigError("format", "x"),
            OutputFormatError("pdf", ("excel", "csv")),
        ]
        assert all(isinstance(e, EOLScanError) for e in errors)
        assert isinstance(errors[-1], ConfigError)

    def test_data_quality_details(self):
        """누락 필드 상세"""
        error = DataQualityError("", "storageProfile")

        assert "<no id>" in error.message
        assert error.details == {"resource_id": "", "missing_field": "storageProfile"}


class TestFormatErrorForUser:
    """format_error_for_user 테스트"""

    def test_eolscan_error(self):
        """EOLScanError는 메시지 그대로"""
        assert format_error_for_user(ConfigError("format", "x")) == "설정 오류 [format]: x"

    def test_http_status(self):
        """HTTP 상태 코드별 안내 메시지"""
        assert "az login" in format_error_for_user(FakeHttpResponseError(401))
        assert "Reader" in format_error_for_user(FakeHttpResponseError(403))

    def test_other(self):
        """그 외 예외는 클래스 이름 포함"""
        assert format_error_for_user(RuntimeError("boom")) == "RuntimeError: boom"
