"""
eolscan/cli/app.py - 메인 CLI 엔트리포인트

Azure 테넌트의 모든 구독에서 VM을 조회하고, 이미지 SKU로 OS 버전을
판별하여 endoflife.date 기준 지원 종료 상태를 리포트로 출력합니다.

명령어 구조:
    eolscan --format excel vms.xlsx
    eolscan -f csv vms.csv --max-concurrency 5
    eolscan --version

종료 코드:
    0: 정상 완료 (알 수 없는 형식도 기본값은 0, EOLSCAN_UNKNOWN_FORMAT_EXIT_CODE로 변경)
    1: EOL 캘린더 조회 실패 등 치명적 에러
    130: 사용자 중단 (Ctrl+C)
"""

import sys
from pathlib import Path

import click

from eolscan import __version__
from eolscan.config import LogConfig, settings
from eolscan.eol.types import EOLStatus
from eolscan.exceptions import EOLScanError, OutputFormatError, format_error_for_user
from eolscan.reporter import Reporter
from eolscan.scan import ScanConfig, ScanResult, ScanRunner

from .console import console, print_error, print_info, print_success, print_warning, setup_logging


def _create_source():
    """Azure CLI 로그인 세션 기반 VMSource 생성"""
    from eolscan.inventory.azure import AzureVMSource

    return AzureVMSource()


def _print_summary(result: ScanResult, reporter: Reporter) -> None:
    stats = result.enumeration
    print_success(f"{result.output_path} 저장 완료 (VM {result.total}개, 구독 {stats.subscriptions}개)")
    console.print(
        f"  Supported {result.counts[EOLStatus.SUPPORTED]} / "
        f"Ending {result.counts[EOLStatus.ENDING_SOON]} / "
        f"EOL {result.counts[EOLStatus.END_OF_LIFE]} / "
        f"Unknown {result.counts[EOLStatus.UNKNOWN]}"
    )
    if stats.skipped_vms or stats.failed_pages:
        print_warning(f"스킵된 VM {stats.skipped_vms}개, 실패한 페이지 {stats.failed_pages}개")
    if reporter.collector.has_errors:
        print_warning(reporter.collector.get_summary())
        scopes = reporter.collector.failed_scopes()
        if scopes:
            print_warning(f"경고가 기록된 범위: {', '.join(scopes)}")


@click.command(name="eolscan")
@click.version_option(__version__, prog_name="eolscan")
@click.option(
    "-f",
    "--format",
    "output_format",
    required=True,
    help="출력 형식 (excel, csv)",
)
@click.option(
    "--max-concurrency",
    type=int,
    default=settings.MAX_CONCURRENCY,
    show_default=True,
    help="동시에 처리할 페이지 수",
)
@click.option(
    "--channel-capacity",
    type=int,
    default=settings.CHANNEL_CAPACITY,
    show_default=True,
    help="수집기 → 리포트 버퍼 크기",
)
@click.option("--debug", is_flag=True, help="DEBUG 로그 출력")
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
def cli(output_format: str, max_concurrency: int, channel_capacity: int, debug: bool, out: Path) -> None:
    """Azure VM OS 지원 종료(EOL) 리포트 생성"""
    logger = setup_logging(LogConfig.from_env(), debug=debug)
    reporter = Reporter(console=console, logger=logger)

    try:
        config = ScanConfig(
            output_format=output_format,
            output_path=out,
            max_concurrency=max_concurrency,
            channel_capacity=channel_capacity,
        )
    except OutputFormatError as e:
        print_error(str(e))
        sys.exit(settings.UNKNOWN_FORMAT_EXIT_CODE)
    except EOLScanError as e:
        print_error(format_error_for_user(e))
        sys.exit(1)

    print_info(f"출력: {config.output_path} ({config.output_format})")

    source = None
    try:
        source = _create_source()
        result = ScanRunner(config, source, reporter).run()
    except KeyboardInterrupt:
        print_warning("사용자에 의해 중단됨")
        sys.exit(130)
    except EOLScanError as e:
        logger.debug("치명적 에러", exc_info=True)
        print_error(format_error_for_user(e))
        sys.exit(1)
    except Exception as e:
        logger.debug("예기치 않은 에러", exc_info=True)
        print_error(format_error_for_user(e))
        sys.exit(1)
    finally:
        if source is not None:
            source.close()

    _print_summary(result, reporter)


def main() -> None:
    """eolscan 엔트리포인트"""
    cli()


if __name__ == "__main__":
    main()
