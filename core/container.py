"""
core/container.py - 컨테이너 실행 결과 수집

엔진 컨테이너의 stdout을 기다리고, 실행 실패(ExecError)를
CommandError로 변환하여 전파합니다.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from dagger import ExecError

from core.exceptions import CommandError

if TYPE_CHECKING:
    import dagger

logger = logging.getLogger(__name__)


async def run_stdout(container: dagger.Container, tool: str, operation: str) -> str:
    """컨테이너를 실행하고 stdout 반환

    Args:
        container: with_exec까지 구성된 컨테이너
        tool: 도구 이름 (skopeo, trivy)
        operation: 작업 이름 (로깅/에러 메시지용)

    Returns:
        명령의 표준 출력

    Raises:
        CommandError: 명령이 0이 아닌 코드로 종료된 경우
    """
    start_time = time.monotonic()
    logger.debug(f"[{tool}] {operation} 실행")

    try:
        out = await container.stdout()
    except ExecError as e:
        logger.debug(f"[{tool}] {operation} 실패: exit code {e.exit_code}")
        raise CommandError(
            tool_name=tool,
            operation=operation,
            exit_code=e.exit_code,
            stdout=e.stdout,
            stderr=e.stderr,
            command=e.command,
            cause=e,
        ) from e

    logger.debug(f"[{tool}] {operation} 완료: {(time.monotonic() - start_time) * 1000:.0f}ms")
    return out
