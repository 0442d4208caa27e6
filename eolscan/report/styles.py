"""
eolscan/report/styles.py - Excel 스타일 상수 및 유틸리티

EOL 리포트 워크시트의 헤더/상태 셀 스타일
"""

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from eolscan.eol.types import EOLStatus

# =============================================================================
# 색상 상수 (RGB Hex)
# =============================================================================

# 헤더
COLOR_HEADER_BG = "808080"  # 회색
COLOR_HEADER_FG = "FFFFFF"  # 흰색

# 상태 색상
COLOR_EOL = "F5CAC9"  # EOL (연한 빨강)
COLOR_EOL_FG = "8D2012"  # EOL 글자 (진한 빨강)
COLOR_SUPPORTED = "CFEDCF"  # 지원 중 (연한 초록)
COLOR_SUPPORTED_FG = "295F10"  # 지원 중 글자 (진한 초록)
COLOR_UNKNOWN = "FAECA2"  # 임박/알 수 없음 (연한 노랑)
COLOR_UNKNOWN_FG = "915C17"  # 임박/알 수 없음 글자 (진한 노랑)

# =============================================================================
# 기본 스타일 객체
# =============================================================================

ALIGN_LEFT = Alignment(horizontal="left", vertical="center", wrap_text=False)


def get_header_font() -> Font:
    """헤더 폰트 스타일 반환"""
    return Font(bold=True, color=COLOR_HEADER_FG)


def get_header_fill() -> PatternFill:
    """헤더 채우기 스타일"""
    return PatternFill(start_color=COLOR_HEADER_BG, end_color=COLOR_HEADER_BG, fill_type="solid")


def get_header_border() -> Border:
    """헤더 하단 테두리 (medium)"""
    return Border(bottom=Side(style="medium", color="000000"))


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


# 상태별 (fill, font). EndingSoon/Unknown은 같은 노랑 계열
_STATUS_STYLES: dict[EOLStatus, tuple[str, str]] = {
    EOLStatus.END_OF_LIFE: (COLOR_EOL, COLOR_EOL_FG),
    EOLStatus.SUPPORTED: (COLOR_SUPPORTED, COLOR_SUPPORTED_FG),
    EOLStatus.ENDING_SOON: (COLOR_UNKNOWN, COLOR_UNKNOWN_FG),
    EOLStatus.UNKNOWN: (COLOR_UNKNOWN, COLOR_UNKNOWN_FG),
}


def get_status_style(status: EOLStatus) -> tuple[PatternFill, Font]:
    """상태 셀 스타일 (fill, font) 반환

    Args:
        status: EOL 분류 상태

    Returns:
        (PatternFill, Font) 튜플
    """
    bg, fg = _STATUS_STYLES[status]
    return _solid(bg), Font(bold=True, color=fg)
