"""
core/parallel - 병렬 처리 모듈

여러 이미지 태그 미러링처럼 독립적인 컨테이너 작업을 동시에 실행합니다.
첫 번째 에러가 발생하면 나머지 작업을 취소하고 그 에러를 전파합니다.

주요 구성 요소:
- run_parallel: 제한된 동시성의 병렬 실행 함수
- ParallelConfig: 병렬 실행 설정
- ParallelExecutionResult / TaskResult: 실행 결과

Example:
    from core.parallel import ParallelConfig, run_parallel

    result = await run_parallel(tags, mirror_tag, ParallelConfig(max_workers=10))
    print(result.identifiers)
"""

from .executor import ParallelConfig, run_parallel
from .types import ParallelExecutionResult, TaskResult

__all__: list[str] = [
    # Executor
    "ParallelConfig",
    "run_parallel",
    # Types
    "TaskResult",
    "ParallelExecutionResult",
]
