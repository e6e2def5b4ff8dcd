"""
core/parallel/executor.py - 병렬 실행기

여러 작업을 하나의 anyio task group에서 동시에 실행합니다.
동시 실행 수는 CapacityLimiter로 제한하며, 첫 번째 에러가 발생하면
나머지 작업을 취소하고 그 에러를 그대로 다시 발생시킵니다.

주요 구성 요소:
- ParallelConfig: 병렬 실행 설정 (워커 수)
- run_parallel: 병렬 실행 함수

Example:
    from core.parallel import ParallelConfig, run_parallel

    async def mirror(tag: str) -> None:
        ...

    result = await run_parallel(["app:1.0", "app:1.1"], mirror, ParallelConfig(max_workers=5))
    print(f"완료: {result.success_count}")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

import anyio

from .types import ParallelExecutionResult, TaskResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
I = TypeVar("I")  # noqa: E741

MAX_WORKERS_LIMIT = 100


@dataclass
class ParallelConfig:
    """병렬 실행 설정

    Attributes:
        max_workers: 최대 동시 작업 수 (1~100)
    """

    max_workers: int = 20

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT


async def run_parallel(
    items: Iterable[I],
    func: Callable[[I], Awaitable[T]],
    config: ParallelConfig | None = None,
    identifier: Callable[[I], str] = str,
) -> ParallelExecutionResult[T]:
    """모든 항목에 대해 func를 병렬 실행

    Args:
        items: 작업 입력 목록
        func: 항목 하나를 처리하는 코루틴 함수
        config: 병렬 실행 설정 (None이면 기본값)
        identifier: 항목 -> 식별자 (결과/로그용)

    Returns:
        ParallelExecutionResult[T]: 모든 작업이 성공한 경우의 결과

    Raises:
        Exception: 가장 먼저 실패한 작업의 예외 (나머지 작업은 취소됨)
    """
    config = config or ParallelConfig()
    items = list(items)

    if not items:
        logger.warning("실행할 작업이 없습니다")
        return ParallelExecutionResult()

    logger.info(f"병렬 실행 시작: {len(items)}개 작업, max_workers={config.max_workers}")

    limiter = anyio.CapacityLimiter(config.max_workers)
    results: list[TaskResult[T]] = []
    first_error: list[tuple[str, Exception]] = []
    start_time = time.monotonic()

    async def _run_one(item: I, scope: anyio.CancelScope) -> None:
        ident = identifier(item)
        async with limiter:
            task_start = time.monotonic()
            try:
                data = await func(item)
            except Exception as e:
                if first_error:
                    # 이미 실패 처리됨: 첫 번째 에러만 호출자에게 전달
                    logger.warning(f"[{ident}] 추가 실패 (무시됨): {e}")
                    return
                logger.error(f"[{ident}] 작업 실패, 나머지 작업 취소: {e}")
                first_error.append((ident, e))
                scope.cancel()
                return

        results.append(
            TaskResult(
                identifier=ident,
                data=data,
                duration_ms=(time.monotonic() - task_start) * 1000,
            )
        )
        logger.debug(f"[{ident}] 완료")

    async with anyio.create_task_group() as tg:
        for item in items:
            tg.start_soon(_run_one, item, tg.cancel_scope)

    total_time = (time.monotonic() - start_time) * 1000

    if first_error:
        ident, error = first_error[0]
        logger.info(f"병렬 실행 중단: [{ident}] 실패, 성공 {len(results)}/{len(items)}, 총 {total_time:.0f}ms")
        raise error

    logger.info(f"병렬 실행 완료: 성공 {len(results)}, 총 {total_time:.0f}ms")
    return ParallelExecutionResult(results=tuple(results))
