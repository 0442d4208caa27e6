"""
tests/test_reporter.py - Reporter 테스트
"""

from eolscan.exceptions import EnumerationPageError
from eolscan.parallel.errors import ErrorSeverity


class TestReporter:
    """Reporter 테스트"""

    def test_progress_messages(self, quiet_reporter):
        """진행 메시지는 콘솔로 출력 (마크업 이스케이프)"""
        quiet_reporter.info("구독 [sub-1] 조회")
        quiet_reporter.success("완료")
        quiet_reporter.warning("일부 실패")

        output = quiet_reporter.console.file.getvalue()
        assert "• 구독 [sub-1] 조회" in output
        assert "✓ 완료" in output
        assert "! 일부 실패" in output

    def test_diagnostic(self, quiet_reporter):
        """진단은 수집기에 WARNING으로 기록"""
        collected = quiet_reporter.diagnostic(
            "SkuParseFailed", "sku=''", scope="sub-1", operation="classify", resource_id="/vm/1"
        )

        assert collected.severity == ErrorSeverity.WARNING
        assert quiet_reporter.collector.errors == [collected]
        assert quiet_reporter.console.file.getvalue() == ""

    def test_page_error(self, quiet_reporter):
        """페이지 실패 기록"""
        error = EnumerationPageError("sub-1", "list_vms", cause=TimeoutError("slow"))

        collected = quiet_reporter.page_error(error, scope="sub-1", operation="list_vms")

        assert collected.error_code == "TimeoutError"
        assert collected.scope == "sub-1"
