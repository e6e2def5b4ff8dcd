"""
plugins/skopeo/commands.py - skopeo 명령행 생성

컨테이너 안에서 실행할 skopeo 인자 목록과 셸 명령 문자열을 만듭니다.
비밀번호는 시크릿 환경 변수로 주입되므로 명령 문자열에는
변수 참조("$SRC_PASS")만 들어갑니다.
"""

from __future__ import annotations

import shlex

SKOPEO = "skopeo"

# 시크릿 환경 변수 이름
SRC_PASS_ENV = "SRC_PASS"
DST_PASS_ENV = "DST_PASS"
REG_PASS_ENV = "REG_PASS"


def version_args() -> list[str]:
    return [SKOPEO, "--version"]


def inspect_args(ref: str, fmt: str) -> list[str]:
    return [SKOPEO, "inspect", "--format", fmt, ref]


def delete_args(ref: str) -> list[str]:
    return [SKOPEO, "delete", ref]


def creds_value(user: str, env_var: str) -> str:
    """USER:"$ENV" 형식의 셸 토큰

    사용자 이름만 따옴표 처리하고, 비밀번호는 셸이 실행 시점에 확장합니다.
    """
    return f'{shlex.quote(f"{user}:")}"${env_var}"'


def copy_command(
    src_ref: str,
    dst_ref: str,
    src_user: str | None = None,
    dst_user: str | None = None,
    preserve_digests: bool = True,
) -> str:
    """skopeo copy 셸 명령 생성

    Args:
        src_ref: 원본 참조 (docker://...)
        dst_ref: 대상 참조 (docker://...)
        src_user: 원본 사용자 이름 (None이면 --src-creds 생략)
        dst_user: 대상 사용자 이름 (None이면 --dest-creds 생략)
        preserve_digests: --preserve-digests 사용 여부

    Returns:
        sh -c 로 실행할 명령 문자열
    """
    tokens = [SKOPEO, "copy"]
    if preserve_digests:
        tokens.append("--preserve-digests")
    if src_user:
        tokens += ["--src-creds", creds_value(src_user, SRC_PASS_ENV)]
    if dst_user:
        tokens += ["--dest-creds", creds_value(dst_user, DST_PASS_ENV)]
    tokens += [shlex.quote(src_ref), shlex.quote(dst_ref)]
    return " ".join(tokens)


def with_creds(args: list[str], user: str) -> str:
    """skopeo <subcommand> 인자에 --creds 를 추가한 셸 명령 생성

    Args:
        args: [skopeo, subcommand, ...] 형식의 인자 목록
        user: 레지스트리 사용자 이름

    Returns:
        sh -c 로 실행할 명령 문자열
    """
    head = [shlex.quote(a) for a in args[:2]]
    tail = [shlex.quote(a) for a in args[2:]]
    return " ".join([*head, "--creds", creds_value(user, REG_PASS_ENV), *tail])


def shell(command: str) -> list[str]:
    return ["sh", "-c", command]
