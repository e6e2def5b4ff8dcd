"""
core/exceptions.py - 통합 예외 계층 구조

모듈 전체에서 사용되는 예외 클래스들을 정의합니다.
컨테이너 실행 실패, 레지스트리 인증 실패, 설정/입력 오류를
일관된 형식으로 엔진(또는 CLI)까지 전파합니다.

예외 계층 구조:
    ModuleError (베이스)
    ├── ToolExecutionError (skopeo/trivy 실행)
    │   ├── CommandError (컨테이너 내 명령 종료 코드 != 0)
    │   └── APICallError (AWS API 호출 실패)
    ├── RegistryAuthError (레지스트리 자격 증명)
    ├── ConfigError (설정 관련)
    └── ValidationError (입력 검증)

Usage:
    from core.exceptions import APICallError

    try:
        token = ecr.get_authorization_token()
    except ClientError as e:
        raise APICallError.from_client_error("ecr", "get_authorization_token", e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class ModuleError(Exception):
    """모듈 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

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


# =============================================================================
# 도구 실행 관련 예외
# =============================================================================


class ToolExecutionError(ModuleError):
    """도구 실행 관련 예외"""

    def __init__(
        self,
        tool_name: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"도구 실행 오류 [{tool_name}]: {message}"
        super().__init__(full_message, cause)
        self.tool_name = tool_name
        self.details["tool_name"] = tool_name


class CommandError(ToolExecutionError):
    """컨테이너 안에서 실행한 명령이 0이 아닌 코드로 종료된 경우

    엔진의 ExecError를 래핑합니다. stderr의 마지막 줄을 메시지에 포함하고,
    전체 stdout/stderr는 속성으로 보존합니다.
    """

    def __init__(
        self,
        tool_name: str,
        operation: str,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
        command: Optional[list] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{operation} 실패 (exit code {exit_code})"
        last_line = _last_line(stderr)
        if last_line:
            message = f"{message}: {last_line}"

        super().__init__(tool_name=tool_name, message=message, cause=cause)
        self.operation = operation
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.command = list(command or [])
        self.details.update(
            {
                "operation": operation,
                "exit_code": exit_code,
            }
        )

    def __str__(self) -> str:
        # ExecError 원문은 stderr 전체를 포함하므로 cause를 덧붙이지 않음
        return self.message


class APICallError(ToolExecutionError):
    """AWS API 호출 관련 예외

    boto3/botocore의 ClientError를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(tool_name=service, message=message, cause=cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "APICallError":
        """botocore.exceptions.ClientError로부터 생성

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: ClientError 예외

        Returns:
            APICallError 인스턴스
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 레지스트리 인증 관련 예외
# =============================================================================


class RegistryAuthError(ModuleError):
    """레지스트리 자격 증명을 얻지 못한 경우"""

    def __init__(
        self,
        registry: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"레지스트리 인증 오류 [{registry}]: {message}"
        super().__init__(full_message, cause)
        self.registry = registry
        self.details["registry"] = registry


# =============================================================================
# 설정/입력 관련 예외
# =============================================================================


class ConfigError(ModuleError):
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


class ValidationError(ModuleError):
    """입력 검증 오류"""

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        cause: Optional[Exception] = None,
    ):
        message = f"검증 오류 [{field}]: 예상값 '{expected}', 실제값 '{value}'"
        super().__init__(message, cause)
        self.field = field
        self.value = value
        self.expected = expected
        self.details.update(
            {
                "field": field,
                "value": str(value),
                "expected": expected,
            }
        )


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnrecognizedClientException",
    "InvalidClientTokenId",
}

# AWS 에러 코드별 안내 메시지
_AWS_HINTS = {
    "AccessDenied": "ecr:GetAuthorizationToken 권한을 확인하세요.",
    "AccessDeniedException": "ecr:GetAuthorizationToken 권한을 확인하세요.",
    "ExpiredToken": "인증 토큰이 만료되었습니다. 자격 증명을 갱신하세요.",
    "ExpiredTokenException": "인증 토큰이 만료되었습니다. 자격 증명을 갱신하세요.",
    "InvalidClientTokenId": "잘못된 자격 증명입니다.",
    "UnrecognizedClientException": "잘못된 자격 증명입니다.",
}

# skopeo/trivy stderr 패턴별 안내 메시지
_REGISTRY_HINTS = (
    ("unauthorized", "레지스트리 사용자 이름/비밀번호를 확인하세요."),
    ("manifest unknown", "저장소 또는 태그가 존재하지 않습니다."),
    ("name unknown", "저장소가 존재하지 않습니다."),
    ("denied", "레지스트리 권한을 확인하세요."),
)


def _last_line(text: str) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return lines[-1] if lines else ""


def _error_code(error: BaseException) -> Optional[str]:
    if isinstance(error, APICallError):
        return error.error_code
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "")
    return None


def is_access_denied(error: BaseException) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외 (ClientError 또는 APICallError)

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in _ACCESS_DENIED_CODES


def _hint(error: BaseException) -> Optional[str]:
    code = _error_code(error)
    if code:
        return _AWS_HINTS.get(code)
    if isinstance(error, CommandError):
        stderr = error.stderr.lower()
        for pattern, hint in _REGISTRY_HINTS:
            if pattern in stderr:
                return hint
    return None


def format_error_for_user(error: BaseException) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        에러 메시지 (알려진 원인이면 안내 문구 포함)
    """
    if isinstance(error, ModuleError):
        message = str(error)
    elif hasattr(error, "response"):
        # 래핑되지 않은 boto3 ClientError
        error_info = error.response.get("Error", {})
        message = f"{error_info.get('Code', 'UnknownError')}: {error_info.get('Message', str(error))}"
    else:
        message = str(error)

    hint = _hint(error)
    return f"{message} ({hint})" if hint else message
