"""
core/parallel/types.py - 병렬 실행 결과 타입

Attributes:
    TaskResult: 개별 작업 결과
    ParallelExecutionResult: 전체 실행 결과
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class TaskResult(Generic[T]):
    """개별 작업 결과

    Attributes:
        identifier: 작업 식별자 (예: 저장소:태그)
        data: 작업 함수 반환값
        duration_ms: 실행 시간 (밀리초)
    """

    identifier: str
    data: T | None = None
    duration_ms: float = 0.0


@dataclass(frozen=True)
class ParallelExecutionResult(Generic[T]):
    """전체 실행 결과

    첫 에러에서 실행이 중단되므로 결과가 반환되었다면 모든 작업이 성공한 것입니다.
    results는 완료 순서이며 입력 순서와 다를 수 있습니다.
    """

    results: tuple[TaskResult[T], ...] = field(default_factory=tuple)

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def identifiers(self) -> list[str]:
        return [r.identifier for r in self.results]

    def get_data(self) -> list[T | None]:
        """완료 순서대로 작업 반환값 목록"""
        return [r.data for r in self.results]

    def get_result(self, identifier: str) -> TaskResult[T] | None:
        for r in self.results:
            if r.identifier == identifier:
                return r
        return None
