"""
dagger_skopeo - skopeo/trivy 엔진 모듈

엔진은 pyproject.toml의 dagger.mod 엔트리포인트로 Skopeo 객체를 찾습니다.
"""

from .main import Skopeo

__all__ = ["Skopeo"]
