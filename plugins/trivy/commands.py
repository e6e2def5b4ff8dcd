"""
plugins/trivy/commands.py - trivy 명령행 생성
"""

from __future__ import annotations

from core.exceptions import ValidationError

TRIVY = "trivy"

SEVERITIES = ("UNKNOWN", "LOW", "MEDIUM", "HIGH", "CRITICAL")


def normalize_severity(severity: str) -> str:
    """쉼표 구분 심각도 목록 정규화

    공백 제거, 대문자 변환, 중복 제거를 수행합니다.

    Raises:
        ValidationError: 비어 있거나 알 수 없는 심각도가 포함된 경우
    """
    levels = list(dict.fromkeys(s.strip().upper() for s in (severity or "").split(",") if s.strip()))
    if not levels:
        raise ValidationError("severity", severity, ",".join(SEVERITIES))

    unknown = [s for s in levels if s not in SEVERITIES]
    if unknown:
        raise ValidationError("severity", ",".join(unknown), ",".join(SEVERITIES))

    return ",".join(levels)


def scan_args(image_ref: str, severity: str, exit_code: int, fmt: str) -> list[str]:
    """trivy image 인자 목록 생성

    Args:
        image_ref: 스캔할 이미지 참조
        severity: 쉼표 구분 심각도 목록
        exit_code: 취약점 발견 시 종료 코드 (0~255)
        fmt: 결과 형식 (table, json, sarif, ...)
    """
    if not image_ref or not image_ref.strip():
        raise ValidationError("image_ref", image_ref, "비어 있지 않은 이미지 참조")
    if not 0 <= exit_code <= 255:
        raise ValidationError("exit_code", exit_code, "0~255")
    if not fmt:
        raise ValidationError("format", fmt, "table, json, sarif 등")

    return [
        TRIVY,
        "image",
        "--quiet",
        "--severity",
        normalize_severity(severity),
        "--exit-code",
        str(exit_code),
        "--format",
        fmt,
        image_ref.strip(),
    ]
