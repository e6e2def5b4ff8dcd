"""
plugins/skopeo/operations.py - skopeo 컨테이너 작업

quay.io/skopeo/stable 컨테이너에서 skopeo를 실행합니다.
모든 함수는 엔진 연결(dagger.dag)이 있는 상태에서 호출해야 합니다.

작업:
    - version: skopeo --version
    - inspect: skopeo inspect --format
    - delete: skopeo delete
    - mirror_one: 태그 하나 복사 (필요 시 ECR 로그인)
    - mirror_many: 여러 태그 병렬 복사 (첫 에러에서 중단)
"""

from __future__ import annotations

import logging

import anyio
import dagger
from dagger import dag

from core.auth.ecr import ECR_USERNAME, get_ecr_login_password
from core.config import settings
from core.container import run_stdout
from core.exceptions import RegistryAuthError, ValidationError
from core.parallel import ParallelConfig, ParallelExecutionResult, run_parallel
from core.registry import docker_ref, mirror_refs

from .commands import (
    DST_PASS_ENV,
    REG_PASS_ENV,
    SRC_PASS_ENV,
    copy_command,
    delete_args,
    inspect_args,
    shell,
    version_args,
    with_creds,
)

logger = logging.getLogger(__name__)

TOOL = "skopeo"


def skopeo_container(tag: str | None = None) -> dagger.Container:
    """skopeo 이미지 컨테이너"""
    return dag.container().from_(settings.skopeo_ref(tag))


def _exec(
    container: dagger.Container,
    args: list[str],
    user: str = "",
    password: dagger.Secret | None = None,
) -> dagger.Container:
    """자격 증명이 있으면 sh -c 로, 없으면 인자 그대로 실행"""
    if password is None:
        return container.with_exec(args)
    if not user:
        raise ValidationError("user", user, "password 사용 시 레지스트리 사용자 이름")
    return container.with_secret_variable(REG_PASS_ENV, password).with_exec(shell(with_creds(args, user)))


async def version(tag: str | None = None) -> str:
    """skopeo 버전 확인"""
    return await run_stdout(skopeo_container(tag).with_exec(version_args()), TOOL, "version")


async def inspect(
    image_ref: str,
    registry: str,
    fmt: str | None = None,
    tag: str | None = None,
    user: str = "",
    password: dagger.Secret | None = None,
) -> str:
    """이미지 메타데이터 조회

    Args:
        image_ref: 저장소:태그
        registry: 레지스트리 주소
        fmt: Go 템플릿 (None이면 설정의 기본 형식)
        tag: skopeo 이미지 태그
        user: 레지스트리 사용자 이름
        password: 레지스트리 비밀번호 시크릿
    """
    ref = docker_ref(registry, image_ref)
    container = _exec(skopeo_container(tag), inspect_args(ref, fmt or settings.inspect_format), user, password)
    return await run_stdout(container, TOOL, f"inspect {ref}")


async def delete(
    image_ref: str,
    registry: str,
    tag: str | None = None,
    user: str = "",
    password: dagger.Secret | None = None,
) -> str:
    """레지스트리에서 이미지 삭제"""
    ref = docker_ref(registry, image_ref)
    logger.info(f"이미지 삭제: {ref}")
    container = _exec(skopeo_container(tag), delete_args(ref), user, password)
    return await run_stdout(container, TOOL, f"delete {ref}")


async def ecr_password(aws_creds: dagger.File | None, aws_region: str = "") -> dagger.Secret:
    """AWS 자격 증명 파일로 ECR 로그인 비밀번호 시크릿 생성

    Raises:
        RegistryAuthError: 자격 증명 파일이 없거나 토큰 발급에 실패한 경우
    """
    if aws_creds is None:
        raise RegistryAuthError("ecr", "aws_pull 사용 시 aws_creds 파일이 필요합니다")

    credentials = await aws_creds.contents()
    # boto3 호출은 동기 API이므로 워커 스레드에서 실행
    password = await anyio.to_thread.run_sync(get_ecr_login_password, credentials, aws_region)
    return dag.set_secret("ecr-pass", password)


async def mirror_one(
    src_registry: str,
    dst_registry: str,
    repo_tag: str,
    dst_user: str = "",
    dst_pass: dagger.Secret | None = None,
    dst_ref: str = "",
    aws_pull: bool = False,
    aws_creds: dagger.File | None = None,
    aws_region: str = "",
    tag: str | None = None,
    src_pass: dagger.Secret | None = None,
) -> str:
    """이미지 태그 하나를 대상 레지스트리로 복사

    Args:
        src_registry: 원본 레지스트리
        dst_registry: 대상 레지스트리
        repo_tag: 원본 저장소:태그
        dst_user: 대상 레지스트리 사용자 이름
        dst_pass: 대상 레지스트리 비밀번호 시크릿
        dst_ref: 대상 저장소:태그 (비어 있으면 repo_tag)
        aws_pull: 원본이 ECR이면 True (AWS 사용자로 로그인)
        aws_creds: AWS 공유 자격 증명 파일
        aws_region: ECR 리전
        tag: skopeo 이미지 태그
        src_pass: 이미 발급받은 원본 비밀번호 (mirror_many에서 재사용)

    Returns:
        skopeo copy 출력
    """
    src, dst = mirror_refs(src_registry, dst_registry, repo_tag, dst_ref)

    if aws_pull and src_pass is None:
        src_pass = await ecr_password(aws_creds, aws_region)

    container = skopeo_container(tag)
    src_user = None
    if src_pass is not None:
        container = container.with_secret_variable(SRC_PASS_ENV, src_pass)
        src_user = ECR_USERNAME

    dest_user = None
    if dst_pass is not None:
        if not dst_user:
            raise ValidationError("dst_user", dst_user, "dst_pass 사용 시 대상 사용자 이름")
        container = container.with_secret_variable(DST_PASS_ENV, dst_pass)
        dest_user = dst_user

    command = copy_command(src, dst, src_user=src_user, dst_user=dest_user)
    logger.info(f"미러링: {src} -> {dst}")
    return await run_stdout(container.with_exec(shell(command)), TOOL, f"copy {repo_tag}")


async def mirror_many(
    src_registry: str,
    dst_registry: str,
    repo_tags: list[str],
    dst_user: str = "",
    dst_pass: dagger.Secret | None = None,
    dst_ref: str = "",
    aws_pull: bool = False,
    aws_creds: dagger.File | None = None,
    aws_region: str = "",
    tag: str | None = None,
    max_workers: int | None = None,
) -> ParallelExecutionResult[str]:
    """여러 이미지 태그를 병렬로 복사

    첫 번째 실패에서 나머지 복사를 취소하고 해당 에러를 발생시킵니다.
    ECR 로그인이 필요하면 비밀번호를 한 번만 발급받아 모든 태그에 사용합니다.

    Raises:
        ValidationError: repo_tags가 비어 있거나, 여러 태그에 dst_ref를 지정한 경우
    """
    tags = list(dict.fromkeys(t.strip() for t in repo_tags if t and t.strip()))
    if not tags:
        raise ValidationError("repo_tags", repo_tags, "repo_tags cannot be empty")
    if dst_ref and len(tags) > 1:
        raise ValidationError("dst_ref", dst_ref, "여러 태그를 미러링할 때는 빈 값")

    src_pass = await ecr_password(aws_creds, aws_region) if aws_pull else None

    async def _mirror(repo_tag: str) -> str:
        return await mirror_one(
            src_registry,
            dst_registry,
            repo_tag,
            dst_user=dst_user,
            dst_pass=dst_pass,
            dst_ref=dst_ref,
            tag=tag,
            src_pass=src_pass,
        )

    config = ParallelConfig(max_workers=settings.max_workers if max_workers is None else max_workers)
    return await run_parallel(tags, _mirror, config)
