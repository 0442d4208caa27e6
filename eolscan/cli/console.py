"""
eolscan/cli/console.py - Rich 콘솔 유틸리티

진행 메시지는 stdout 콘솔, 로그/진단은 stderr 콘솔로 분리합니다.
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from eolscan.config import LogConfig

# Azure SDK / urllib3 노이즈 로그 제한
_NOISY_LOGGERS = (
    "azure",
    "azure.core.pipeline.policies.http_logging_policy",
    "azure.identity",
    "urllib3",
)

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


console = get_console()
err_console = get_console(stderr=True)


def setup_logging(config: LogConfig | None = None, debug: bool = False) -> logging.Logger:
    """eolscan 패키지 logger에 Rich 핸들러(stderr)를 설정합니다.

    Args:
        config: 로깅 설정 (None이면 환경변수에서 로드)
        debug: True면 DEBUG 레벨

    Returns:
        logging.Logger: "eolscan" logger
    """
    config = config or LogConfig.from_env()
    logger = logging.getLogger("eolscan")

    # 이미 핸들러가 설정되어 있으면 레벨만 갱신
    if not logger.handlers:
        handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
        logger.addHandler(handler)

    level = logging.DEBUG if debug else getattr(logging, config.level, logging.INFO)
    logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (stderr, 빨간색 X)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색)"""
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")
