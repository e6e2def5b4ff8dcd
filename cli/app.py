"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
엔진에 연결한 뒤 plugins 계층의 skopeo/trivy 작업을 실행합니다.

명령어 구조:
    skopeo-module tools                 # 도구 목록
    skopeo-module version               # skopeo 버전
    skopeo-module inspect <image_ref>   # 이미지 메타데이터 조회
    skopeo-module delete <image_ref>    # 이미지 삭제
    skopeo-module mirror <tags...>      # 태그 미러링 (여러 태그는 병렬)
    skopeo-module scan <image_ref>      # 취약점 스캔

비밀 값 전달:
    비밀번호/토큰은 명령줄에 직접 쓰지 않고 환경 변수 이름으로 전달합니다.
    예) DST_PASS=... skopeo-module mirror app:1.0 --dst-pass-env DST_PASS

종료 코드:
    0: 성공
    1: 실행 실패 (skopeo 실패, 인증 실패, 입력 오류)
    N: scan에서 trivy가 반환한 종료 코드 (--exit-code 지정 시 취약점 발견)

Usage:
    $ skopeo-module --lang en mirror app:1.0 app:1.1 -s src.io -d dst.io
    $ python -m cli.app version
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn, TypeVar

import anyio
import click
import dagger
from click import Context
from dagger import dag
from rich.console import Console
from rich.markup import escape

from cli.i18n import get_lang, t
from core.config import DEFAULT_INSPECT_FORMAT, get_version, settings
from core.exceptions import CommandError, ModuleError, format_error_for_user
from plugins.skopeo import operations as skopeo_ops
from plugins.trivy import operations as trivy_ops

T = TypeVar("T")

# WARNING 레벨로 설정하여 INFO 로그가 도구 출력에 섞이지 않도록 함
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.WARNING),
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

VERSION = get_version()

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# 엔진 실행 헬퍼
# =============================================================================


def _engine_connection():
    """엔진 연결 컨텍스트 (엔진 로그는 stderr)"""
    return dagger.connection(dagger.Config(log_output=sys.stderr))


def _fail(error: BaseException, exit_code: int = 1) -> NoReturn:
    message = escape(format_error_for_user(error))
    err_console.print(f"[red]{t('runner.execution_failed', message=message)}[/red]")
    raise SystemExit(exit_code) from error


def run_engine(func: Callable[..., Awaitable[T]], *args: Any) -> T:
    """엔진에 연결하여 코루틴 실행

    ModuleError와 엔진 에러는 메시지를 출력하고 종료 코드 1로 종료합니다.
    CommandError는 호출자가 직접 처리할 수 있도록 그대로 전파합니다.
    """

    async def _main() -> T:
        async with _engine_connection():
            return await func(*args)

    try:
        return anyio.run(_main)
    except CommandError:
        raise
    except (ModuleError, dagger.DaggerError) as e:
        _fail(e)


def _read_env(name: str | None) -> str | None:
    """환경 변수 이름으로 비밀 값 읽기"""
    if not name:
        return None
    value = os.environ.get(name)
    if not value:
        raise click.UsageError(t("cli.env_not_set", name=name))
    return value


def _secret(name: str, value: str | None) -> dagger.Secret | None:
    return dag.set_secret(name, value) if value else None


def _build_help_text(lang: str = "ko") -> str:
    lines = [
        t("cli.help_intro", lang=lang),
        "",
        "\b",
        t("cli.help_examples", lang=lang),
        f"  skopeo-module mirror app:1.0 app:1.1 -s src.io -d dst.io   {t('cli.help_mirror', lang=lang)}",
        f"  skopeo-module inspect library/alpine:3.20 -r docker.io      {t('cli.help_inspect', lang=lang)}",
        f"  skopeo-module scan alpine:3.20 --severity HIGH,CRITICAL    {t('cli.help_scan', lang=lang)}",
    ]
    return "\n".join(lines)


# =============================================================================
# CLI 그룹
# =============================================================================


@click.group()
@click.version_option(VERSION, prog_name="skopeo-module")
@click.option(
    "--lang",
    type=click.Choice(["ko", "en"]),
    default="ko",
    help="UI 언어 설정 / UI language (ko: 한국어, en: English)",
)
@click.option("--skopeo-tag", default=None, help="skopeo 이미지 태그 (기본: 설정값)")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(ctx: Context, lang: str, skopeo_tag: str | None, debug: bool) -> None:
    """skopeo-module - 컨테이너 이미지 미러링/스캔 CLI"""
    from cli.i18n import set_lang

    set_lang(lang)

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["lang"] = lang
    ctx.obj["skopeo_tag"] = skopeo_tag


cli.help = _build_help_text()


@cli.command("tools")
@click.option("-c", "--category", default=None, help="특정 카테고리만 표시 (이름 또는 별칭)")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def tools_command(category: str | None, as_json: bool) -> None:
    """사용 가능한 도구 목록

    \b
    Examples:
        skopeo-module tools              # 전체 도구 목록
        skopeo-module tools -c scan      # trivy 카테고리만
        skopeo-module tools --json       # JSON 출력
    """
    import json as json_module

    from rich.table import Table

    from core.tools.discovery import discover_categories, get_category

    if category:
        found = get_category(category)
        if found is None:
            click.echo(t("cli.category_not_found", name=category), err=True)
            raise SystemExit(1)
        categories: list[dict[str, Any]] = [found]
    else:
        categories = discover_categories()

    if as_json:
        output_data: list[dict[str, str]] = []
        for cat in categories:
            for tool in cat.get("tools", []):
                output_data.append(
                    {
                        "category": str(cat.get("name", "")),
                        "module": str(tool.get("module", "")),
                        "name": str(tool.get("name", "")),
                        "description": str(tool.get("description", "")),
                        "permission": str(tool.get("permission", "read")),
                    }
                )
        click.echo(json_module.dumps(output_data, ensure_ascii=False, indent=2))
        return

    table = Table(title=t("cli.available_tools"), show_header=True)
    table.add_column(t("cli.col_path"), style="cyan")
    table.add_column(t("cli.col_name"), style="white")
    table.add_column(t("cli.col_permission"), style="yellow")

    name_key = "name_en" if get_lang() == "en" else "name"
    for cat in categories:
        for tool in cat.get("tools", []):
            perm = str(tool.get("permission", "read"))
            table.add_row(
                f"{cat.get('name', '')}/{tool.get('module', '')}",
                str(tool.get(name_key) or tool.get("name", "")),
                {"read": "R", "write": "W", "delete": "D"}.get(perm, perm),
            )

    console.print(table)
    console.print()
    console.print(f"[dim]{t('cli.usage_hint')}[/dim]")


# =============================================================================
# skopeo 명령어
# =============================================================================


@cli.command("version")
@click.pass_context
def version_command(ctx: Context) -> None:
    """skopeo 이미지 버전 확인"""
    try:
        out = run_engine(skopeo_ops.version, ctx.obj["skopeo_tag"])
    except CommandError as e:
        _fail(e)
    click.echo(out.rstrip("\n"))


@cli.command("inspect")
@click.argument("image_ref")
@click.option("-r", "--registry", required=True, help="이미지가 있는 레지스트리")
@click.option("--format", "fmt", default=DEFAULT_INSPECT_FORMAT, show_default=True, help="Go 템플릿 형식")
@click.option("-u", "--user", default="", help="레지스트리 사용자 이름")
@click.option("--password-env", default=None, help="레지스트리 비밀번호가 담긴 환경 변수 이름")
@click.pass_context
def inspect_command(
    ctx: Context,
    image_ref: str,
    registry: str,
    fmt: str,
    user: str,
    password_env: str | None,
) -> None:
    """이미지 메타데이터 조회"""
    password = _read_env(password_env)

    async def _inspect() -> str:
        return await skopeo_ops.inspect(
            image_ref,
            registry,
            fmt=fmt,
            tag=ctx.obj["skopeo_tag"],
            user=user,
            password=_secret("reg-pass", password),
        )

    try:
        out = run_engine(_inspect)
    except CommandError as e:
        _fail(e)
    click.echo(out.rstrip("\n"))


@cli.command("delete")
@click.argument("image_ref")
@click.option("-r", "--registry", required=True, help="이미지가 있는 레지스트리")
@click.option("-u", "--user", default="", help="레지스트리 사용자 이름")
@click.option("--password-env", default=None, help="레지스트리 비밀번호가 담긴 환경 변수 이름")
@click.option("-y", "--yes", is_flag=True, help="확인 없이 삭제")
@click.pass_context
def delete_command(
    ctx: Context,
    image_ref: str,
    registry: str,
    user: str,
    password_env: str | None,
    yes: bool,
) -> None:
    """레지스트리에서 이미지 삭제"""
    password = _read_env(password_env)
    if not yes:
        click.confirm(f"{registry}/{image_ref}", abort=True)

    async def _delete() -> str:
        return await skopeo_ops.delete(
            image_ref,
            registry,
            tag=ctx.obj["skopeo_tag"],
            user=user,
            password=_secret("reg-pass", password),
        )

    try:
        run_engine(_delete)
    except CommandError as e:
        _fail(e)
    console.print(f"[green]{escape(t('runner.deleted', ref=f'{registry}/{image_ref}'))}[/green]")


@cli.command("mirror")
@click.argument("repo_tags", nargs=-1, required=True)
@click.option("-s", "--src-registry", required=True, help="원본 레지스트리")
@click.option("-d", "--dst-registry", required=True, help="대상 레지스트리")
@click.option("--dst-user", default="", help="대상 레지스트리 사용자 이름")
@click.option("--dst-pass-env", default=None, help="대상 레지스트리 비밀번호가 담긴 환경 변수 이름")
@click.option("--dst-ref", default="", help="대상 저장소:태그 (태그 하나일 때만)")
@click.option("--aws-pull", is_flag=True, help="원본이 ECR이면 지정 (AWS 자격 증명으로 로그인)")
@click.option(
    "--aws-creds",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="AWS 공유 자격 증명 파일 경로",
)
@click.option("--aws-region", default="", help="ECR 리전 (기본: 설정값)")
@click.option("-w", "--max-workers", type=click.IntRange(min=1), default=None, help="최대 동시 복사 수 (1~100)")
@click.pass_context
def mirror_command(
    ctx: Context,
    repo_tags: tuple[str, ...],
    src_registry: str,
    dst_registry: str,
    dst_user: str,
    dst_pass_env: str | None,
    dst_ref: str,
    aws_pull: bool,
    aws_creds: str | None,
    aws_region: str,
    max_workers: int | None,
) -> None:
    """태그 미러링 (태그 여러 개는 병렬, 첫 실패에서 중단)

    \b
    Examples:
        skopeo-module mirror app:1.0 -s src.io -d dst.io
        skopeo-module mirror app:1.0 app:1.1 -s 123.dkr.ecr.us-east-1.amazonaws.com \\
            -d dst.io --aws-pull --aws-creds ~/.aws/credentials
    """
    password = _read_env(dst_pass_env)
    creds_path = os.path.abspath(aws_creds) if aws_creds else None
    tag = ctx.obj["skopeo_tag"]

    err_console.print(
        f"[dim]{escape(t('runner.mirror_start', count=len(repo_tags), src=src_registry, dst=dst_registry))}[/dim]"
    )

    async def _mirror() -> list[tuple[str, float]]:
        common: dict[str, Any] = {
            "dst_user": dst_user,
            "dst_pass": _secret("dst-pass", password),
            "dst_ref": dst_ref,
            "aws_pull": aws_pull,
            "aws_creds": dag.host().file(creds_path) if creds_path else None,
            "aws_region": aws_region,
            "tag": tag,
        }
        if len(repo_tags) == 1:
            await skopeo_ops.mirror_one(src_registry, dst_registry, repo_tags[0], **common)
            return [(repo_tags[0], 0.0)]

        result = await skopeo_ops.mirror_many(
            src_registry,
            dst_registry,
            list(repo_tags),
            max_workers=max_workers,
            **common,
        )
        return [(r.identifier, r.duration_ms / 1000) for r in result.results]

    try:
        done = run_engine(_mirror)
    except CommandError as e:
        _fail(e)

    for repo_tag, duration in done:
        if duration:
            console.print(escape(t("runner.mirror_tag_done", tag=repo_tag, duration=duration)))
    console.print(f"[green]{t('runner.mirror_done', count=len(done))}[/green]")


# =============================================================================
# trivy 명령어
# =============================================================================


@cli.command("scan")
@click.argument("image_ref")
@click.option("--severity", default=None, help="쉼표 구분 심각도 (기본: 전체)")
@click.option("--exit-code", type=int, default=None, help="취약점 발견 시 종료 코드 (기본: 0)")
@click.option("--format", "fmt", default=None, help="결과 형식 (table, json, sarif ...)")
@click.option("--trivy-tag", default=None, help="trivy 이미지 태그 (기본: 설정값)")
@click.option("-u", "--username", default="", help="레지스트리 사용자 이름")
@click.option("--auth-env", default=None, help="레지스트리 비밀번호/토큰이 담긴 환경 변수 이름")
def scan_command(
    image_ref: str,
    severity: str | None,
    exit_code: int | None,
    fmt: str | None,
    trivy_tag: str | None,
    username: str,
    auth_env: str | None,
) -> None:
    """이미지 취약점 스캔

    --exit-code를 지정하면 취약점 발견 시 결과를 출력한 뒤 해당 코드로 종료합니다.
    """
    auth = _read_env(auth_env)

    async def _scan() -> str:
        return await trivy_ops.scan_image(
            image_ref,
            severity=severity,
            exit_code=exit_code,
            fmt=fmt,
            tag=trivy_tag,
            auth=_secret("trivy-auth", auth),
            username=username,
        )

    try:
        out = run_engine(_scan)
    except CommandError as e:
        if e.stdout:
            click.echo(e.stdout.rstrip("\n"))
        if exit_code and e.exit_code == exit_code:
            err_console.print(f"[yellow]{t('runner.vulnerabilities_found', code=e.exit_code)}[/yellow]")
            raise SystemExit(e.exit_code) from e
        _fail(e, e.exit_code or 1)
    click.echo(out.rstrip("\n"))


if __name__ == "__main__":
    cli()
