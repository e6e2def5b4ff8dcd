"""
plugins/trivy/operations.py - trivy 컨테이너 작업

aquasec/trivy 컨테이너에 취약점 DB 캐시 볼륨을 마운트하여
이미지 스캔을 실행합니다.
"""

from __future__ import annotations

import logging

import dagger
from dagger import dag

from core.config import settings
from core.container import run_stdout

from .commands import scan_args

logger = logging.getLogger(__name__)

TOOL = "trivy"

TRIVY_USERNAME_ENV = "TRIVY_USERNAME"
TRIVY_PASSWORD_ENV = "TRIVY_PASSWORD"


def base(tag: str | None = None) -> dagger.Container:
    """trivy 이미지 컨테이너 (DB 캐시 볼륨 마운트)"""
    return (
        dag.container()
        .from_(settings.trivy_ref(tag))
        .with_mounted_cache(settings.trivy_cache_path, dag.cache_volume(settings.trivy_cache_volume))
    )


async def scan_image(
    image_ref: str,
    severity: str | None = None,
    exit_code: int | None = None,
    fmt: str | None = None,
    tag: str | None = None,
    auth: dagger.Secret | None = None,
    username: str = "",
) -> str:
    """이미지 취약점 스캔

    Args:
        image_ref: 스캔할 이미지 참조
        severity: 쉼표 구분 심각도 (None이면 설정 기본값)
        exit_code: 취약점 발견 시 종료 코드 (None이면 설정 기본값)
        fmt: 결과 형식 (None이면 설정 기본값)
        tag: trivy 이미지 태그
        auth: 레지스트리 비밀번호/토큰 시크릿
        username: 레지스트리 사용자 이름

    Returns:
        스캔 결과 (stdout)

    Raises:
        CommandError: trivy가 0이 아닌 코드로 종료된 경우 (exit_code 지정 시 취약점 발견 포함)
    """
    args = scan_args(
        image_ref,
        severity or settings.trivy_severity,
        settings.trivy_exit_code if exit_code is None else exit_code,
        fmt or settings.trivy_format,
    )

    container = base(tag)
    if auth is not None:
        container = container.with_secret_variable(TRIVY_PASSWORD_ENV, auth)
        if username:
            container = container.with_env_variable(TRIVY_USERNAME_ENV, username)

    logger.info(f"취약점 스캔: {image_ref}")
    return await run_stdout(container.with_exec(args), TOOL, f"scan {image_ref}")
