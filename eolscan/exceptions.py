"""
eolscan/exceptions.py - 통합 예외 계층 구조

예외 계층 구조:
    EOLScanError (베이스)
    ├── DataQualityError (VM 레코드 필드 누락) - 로그만 남기고 계속
    ├── EnumerationPageError (구독/VM 페이지 조회 실패) - 해당 단위만 스킵
    ├── CalendarFetchError (EOL 캘린더 조회 실패) - 실행 중단
    ├── ReportWriteError (리포트 파일 쓰기 실패) - 실행 중단
    └── ConfigError (설정 관련)
        └── OutputFormatError (알 수 없는 출력 형식)

SKU 파싱 실패는 예외가 아닙니다. 파서는 None을 반환하고 분류 결과는
Unknown이 됩니다.

Usage:
    from eolscan.exceptions import CalendarFetchError

    try:
        response = requests.get(url, timeout=30)
        response.raise_for_status()
    except requests.RequestException as e:
        raise CalendarFetchError(product="ubuntu", reason="HTTP 요청 실패", cause=e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class EOLScanError(Exception):
    """eolscan 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 인벤토리 수집 관련 예외
# =============================================================================


class DataQualityError(EOLScanError):
    """VM 레코드에 필요한 중첩 필드가 없음

    수집기는 이 예외를 던지지 않고 진단 메시지로만 사용합니다.
    """

    def __init__(self, resource_id: str, missing_field: str):
        message = f"데이터 누락 [{resource_id or '<no id>'}]: {missing_field} 없음"
        super().__init__(message)
        self.resource_id = resource_id
        self.missing_field = missing_field
        self.details.update({"resource_id": resource_id, "missing_field": missing_field})


class EnumerationPageError(EOLScanError):
    """구독 목록 또는 구독별 VM 목록의 한 페이지 조회/처리 실패"""

    def __init__(
        self,
        scope: str,
        operation: str,
        cause: Optional[Exception] = None,
    ):
        message = f"페이지 처리 실패 [{scope}] {operation}"
        super().__init__(message, cause)
        self.scope = scope
        self.operation = operation
        self.details.update({"scope": scope, "operation": operation})


# =============================================================================
# EOL 캘린더 관련 예외
# =============================================================================


class CalendarFetchError(EOLScanError):
    """EOL 캘린더 조회 실패 (네트워크/HTTP/역직렬화)

    분류 자체가 무의미해지므로 실행을 중단합니다.
    """

    def __init__(
        self,
        product: str,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        message = f"EOL 캘린더 조회 실패 [{product}]: {reason}"
        super().__init__(message, cause)
        self.product = product
        self.reason = reason
        self.details["product"] = product


# =============================================================================
# 출력 관련 예외
# =============================================================================


class ReportWriteError(EOLScanError):
    """리포트 파일 쓰기 실패"""

    def __init__(self, path: str, cause: Optional[Exception] = None):
        super().__init__(f"리포트 저장 실패 [{path}]", cause)
        self.path = path
        self.details["path"] = path


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(EOLScanError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


class OutputFormatError(ConfigError):
    """지원하지 않는 출력 형식"""

    def __init__(self, value: str, supported: tuple[str, ...]):
        super().__init__("format", f"알 수 없는 출력 형식 '{value}' (지원: {', '.join(supported)})")
        self.value = value
        self.supported = supported


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, EOLScanError):
        return str(error)

    # azure-core HttpResponseError 계열
    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        friendly_messages = {
            401: "인증에 실패했습니다. 'az login'으로 다시 로그인하세요.",
            403: "권한이 없습니다. 구독의 Reader 역할을 확인하세요.",
            429: "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }
        if status_code in friendly_messages:
            return friendly_messages[status_code]

    return f"{error.__class__.__name__}: {error}"
