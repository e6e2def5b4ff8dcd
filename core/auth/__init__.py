# core/auth/__init__.py
"""
레지스트리 인증 모듈 (core/auth)

지원하는 인증 방식:
- ECR: AWS 자격 증명 파일 + 리전으로 로그인 비밀번호 발급

사용 예시:
    from core.auth import get_ecr_login_password

    password = get_ecr_login_password(creds_text, "ap-northeast-2")

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    boto3는 ECR 인증이 실제로 필요한 시점에만 로드됩니다.
"""

__all__ = [
    "ECR_USERNAME",
    "build_session",
    "decode_authorization_token",
    "get_ecr_login_password",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    "ECR_USERNAME": (".ecr", "ECR_USERNAME"),
    "build_session": (".ecr", "build_session"),
    "decode_authorization_token": (".ecr", "decode_authorization_token"),
    "get_ecr_login_password": (".ecr", "get_ecr_login_password"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
