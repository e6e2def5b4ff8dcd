"""
core/registry.py - 레지스트리 이미지 참조 생성

skopeo가 사용하는 docker:// transport 참조 문자열을 만듭니다.

Example:
    docker_ref("123456789012.dkr.ecr.ap-northeast-2.amazonaws.com", "app:1.0")
    # "docker://123456789012.dkr.ecr.ap-northeast-2.amazonaws.com/app:1.0"

    src, dst = mirror_refs("src.io", "dst.io", "team/app:1.0")
    # ("docker://src.io/team/app:1.0", "docker://dst.io/team/app:1.0")
"""

from __future__ import annotations

from core.exceptions import ValidationError

DOCKER_TRANSPORT = "docker://"


def docker_ref(registry: str, image: str) -> str:
    """docker://{registry}/{image} 참조 생성

    레지스트리 끝의 "/"와 이미지 앞의 "/"는 하나로 합칩니다.

    Args:
        registry: 레지스트리 호스트 (경로 포함 가능)
        image: 저장소:태그 또는 저장소@다이제스트

    Raises:
        ValidationError: registry 또는 image가 비어 있는 경우
    """
    registry = (registry or "").strip().rstrip("/")
    image = (image or "").strip().lstrip("/")

    if registry.startswith(DOCKER_TRANSPORT):
        registry = registry[len(DOCKER_TRANSPORT) :]

    if not registry:
        raise ValidationError("registry", registry, "비어 있지 않은 레지스트리 주소")
    if not image:
        raise ValidationError("image", image, "비어 있지 않은 이미지 참조")

    return f"{DOCKER_TRANSPORT}{registry}/{image}"


def mirror_refs(
    src_registry: str,
    dst_registry: str,
    repo_tag: str,
    dst_ref: str = "",
) -> tuple[str, str]:
    """미러링 원본/대상 참조 쌍 생성

    Args:
        src_registry: 원본 레지스트리
        dst_registry: 대상 레지스트리
        repo_tag: 원본 저장소:태그
        dst_ref: 대상 저장소:태그 (비어 있으면 repo_tag 사용)

    Returns:
        (원본 참조, 대상 참조)
    """
    src = docker_ref(src_registry, repo_tag)
    dst = docker_ref(dst_registry, dst_ref or repo_tag)
    return src, dst
