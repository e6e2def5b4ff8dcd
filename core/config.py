"""
core/config.py - 중앙 설정 관리

이미지 이름/태그, trivy 기본 옵션, 병렬 처리 워커 수 등
모듈 전체의 기본값을 한 곳에서 관리합니다.
환경 변수(SKOPEO_MODULE_*)로 기본값을 덮어쓸 수 있습니다.

Usage:
    from core.config import settings

    image = f"{settings.skopeo_image}:{settings.skopeo_image_tag}"

환경 변수:
    SKOPEO_MODULE_SKOPEO_IMAGE        skopeo 이미지 (기본: quay.io/skopeo/stable)
    SKOPEO_MODULE_SKOPEO_IMAGE_TAG    skopeo 이미지 태그 (기본: latest)
    SKOPEO_MODULE_TRIVY_IMAGE         trivy 이미지 (기본: aquasec/trivy)
    SKOPEO_MODULE_TRIVY_IMAGE_TAG     trivy 이미지 태그 (기본: latest)
    SKOPEO_MODULE_TRIVY_CACHE_VOLUME  trivy DB 캐시 볼륨 이름
    SKOPEO_MODULE_TRIVY_SEVERITY      스캔 심각도 목록
    SKOPEO_MODULE_TRIVY_FORMAT        스캔 결과 형식
    SKOPEO_MODULE_TRIVY_EXIT_CODE     취약점 발견 시 종료 코드
    SKOPEO_MODULE_MAX_WORKERS         mirror-many 동시 실행 수
    SKOPEO_MODULE_AWS_REGION          ECR 기본 리전 (없으면 AWS_REGION/AWS_DEFAULT_REGION)
    SKOPEO_MODULE_LOG_LEVEL           CLI 로그 레벨
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "SKOPEO_MODULE_"

DEFAULT_INSPECT_FORMAT = "{{.Name}}:{{.Tag}} Digest: {{.Digest}} Arch: {{.Architecture}} | OS: {{.Os}}"
DEFAULT_SEVERITY = "UNKNOWN,LOW,MEDIUM,HIGH,CRITICAL"


@dataclass(frozen=True)
class Settings:
    """모듈 설정

    Attributes:
        skopeo_image: skopeo 컨테이너 이미지 (태그 제외)
        skopeo_image_tag: skopeo 이미지 태그
        trivy_image: trivy 컨테이너 이미지 (태그 제외)
        trivy_image_tag: trivy 이미지 태그
        trivy_cache_volume: trivy DB 캐시 볼륨 이름
        trivy_cache_path: 캐시 볼륨 마운트 경로
        trivy_severity: 기본 스캔 심각도
        trivy_format: 기본 스캔 결과 형식
        trivy_exit_code: 취약점 발견 시 기본 종료 코드
        inspect_format: skopeo inspect 기본 Go 템플릿
        max_workers: mirror-many 기본 동시 실행 수
        aws_region: ECR 기본 리전
        log_level: CLI 로그 레벨
    """

    skopeo_image: str = "quay.io/skopeo/stable"
    skopeo_image_tag: str = "latest"
    trivy_image: str = "aquasec/trivy"
    trivy_image_tag: str = "latest"
    trivy_cache_volume: str = "trivy-db-cache"
    trivy_cache_path: str = "/root/.cache/trivy"
    trivy_severity: str = DEFAULT_SEVERITY
    trivy_format: str = "table"
    trivy_exit_code: int = 0
    inspect_format: str = DEFAULT_INSPECT_FORMAT
    max_workers: int = 20
    aws_region: str = "us-east-1"
    log_level: str = "WARNING"

    def skopeo_ref(self, tag: str | None = None) -> str:
        """skopeo 이미지 주소 반환"""
        return f"{self.skopeo_image}:{tag or self.skopeo_image_tag}"

    def trivy_ref(self, tag: str | None = None) -> str:
        """trivy 이미지 주소 반환"""
        return f"{self.trivy_image}:{tag or self.trivy_image_tag}"


# 정수 항목의 허용 범위 (최솟값, 최댓값)
_INT_RANGES: dict[str, tuple[int, int | None]] = {
    "max_workers": (1, None),
    "trivy_exit_code": (0, 255),
}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """환경 변수에서 설정 로드

    Args:
        environ: 환경 변수 매핑 (None이면 os.environ)

    Returns:
        기본값 위에 환경 변수를 덮어쓴 Settings

    Raises:
        ConfigError: 정수 항목에 숫자가 아니거나 허용 범위를 벗어난 값이 지정된 경우
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    # AWS 표준 리전 변수는 모듈 전용 변수보다 우선순위가 낮음
    region = env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION")
    if region:
        overrides["aws_region"] = region

    for f in fields(Settings):
        key = f"{ENV_PREFIX}{f.name.upper()}"
        raw = env.get(key)
        if raw is None or raw == "":
            continue

        if f.type == "int":
            try:
                value = int(raw)
            except ValueError as e:
                raise ConfigError(key, f"정수가 아닙니다: {raw!r}", cause=e) from e

            low, high = _INT_RANGES.get(f.name, (None, None))
            if (low is not None and value < low) or (high is not None and value > high):
                expected = f"{low} 이상" if high is None else f"{low}~{high}"
                raise ConfigError(key, f"허용 범위({expected})를 벗어났습니다: {value}")
            overrides[f.name] = value
        else:
            overrides[f.name] = raw

    if overrides:
        logger.debug(f"환경 변수 설정 적용: {sorted(overrides)}")

    return replace(Settings(), **overrides)


def get_version() -> str:
    """설치된 패키지 버전 반환 (미설치 시 0.0.0)"""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("skopeo-module")
    except PackageNotFoundError:
        return "0.0.0"


settings = load_settings()
