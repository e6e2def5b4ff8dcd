# core/__init__.py
"""
core - skopeo/trivy 모듈 인프라

엔진 객체와 CLI가 공유하는 최상위 패키지입니다.
설정, 예외, 레지스트리 참조, 컨테이너 실행, 병렬 처리, 인증을 포함합니다.

아키텍처:
    core/
    ├── auth/           # ECR 로그인 비밀번호 발급 (boto3)
    ├── parallel/       # 병렬 실행 (anyio task group, 첫 에러에서 중단)
    ├── tools/          # 플러그인 발견 (discovery)
    ├── config.py       # 중앙 설정 관리 (SKOPEO_MODULE_* 환경 변수)
    ├── container.py    # 컨테이너 실행 결과 수집 (ExecError -> CommandError)
    ├── exceptions.py   # 통합 예외 계층
    └── registry.py     # docker:// 참조 생성

Usage:
    # 설정 사용
    from core.config import settings
    image = settings.skopeo_ref()  # "quay.io/skopeo/stable:latest"

    # 예외 처리
    from core.exceptions import CommandError
    try:
        out = await run_stdout(container, "skopeo", "inspect")
    except CommandError as e:
        print(e.exit_code, e.stderr)

    # 플러그인 발견
    from core.tools.discovery import discover_categories
    categories = discover_categories()
"""

from core import auth, config, exceptions, parallel, tools

__all__: list[str] = [
    # 서브패키지
    "auth",
    "parallel",
    "tools",
    # 모듈
    "config",
    "exceptions",
]
