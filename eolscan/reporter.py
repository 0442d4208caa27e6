"""
eolscan/reporter.py - 실행 리포터

진행 메시지(stdout)와 진단 메시지(stderr 로그)를 한 객체로 묶어
각 컴포넌트에 명시적으로 전달합니다. 전역 싱글톤을 두지 않으므로
테스트에서는 메모리 Console을 가진 Reporter를 넘기면 됩니다.

Usage:
    reporter = Reporter(console=get_console())

    reporter.info("구독 목록 조회 중...")
    reporter.diagnostic("DataQuality", "storageProfile 없음", scope=sub_id, resource_id=vm_id)

    if reporter.collector.has_errors:
        reporter.warning(reporter.collector.get_summary())
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from eolscan.parallel.errors import CollectedError, ErrorCollector, ErrorSeverity

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


class Reporter:
    """진행/진단 출력기

    Attributes:
        console: 진행 메시지용 Rich Console (stdout)
        logger: 치명적 에러 로깅용 logger (stderr 핸들러)
        collector: 부분 실패/데이터 품질 진단 수집기
    """

    def __init__(
        self,
        console: Console | None = None,
        logger: logging.Logger | None = None,
        collector: ErrorCollector | None = None,
    ):
        self.console = console or Console()
        self.logger = logger or logging.getLogger("eolscan")
        self.collector = collector or ErrorCollector("eolscan")

    # =========================================================================
    # 진행 메시지 (stdout)
    # =========================================================================

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")

    # =========================================================================
    # 진단 메시지 (stderr)
    # =========================================================================

    def diagnostic(
        self,
        error_code: str,
        message: str,
        scope: str = "",
        operation: str = "",
        resource_id: str | None = None,
    ) -> CollectedError:
        """비치명적 진단 기록 (데이터 누락, SKU 파싱 실패 등)"""
        return self.collector.collect_generic(
            error_code,
            message,
            scope=scope,
            operation=operation,
            severity=ErrorSeverity.WARNING,
            resource_id=resource_id,
        )

    def page_error(self, error: Exception, scope: str, operation: str) -> CollectedError:
        """페이지 조회/처리 실패 기록"""
        return self.collector.collect(error, scope=scope, operation=operation)

    def error(self, message: str) -> None:
        """치명적 에러 (stderr)"""
        self.logger.error(f"{SYMBOL_ERROR} {message}")
