# core/tools - 도구 메타데이터
"""
플러그인 도구 메타데이터 (discovery)

Note:
    Lazy Import 패턴 사용 - CLI 시작 시간 최적화
"""

__all__ = [
    "discover_categories",
    "get_category",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    "discover_categories": (".discovery", "discover_categories"),
    "get_category": (".discovery", "get_category"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        import importlib

        module_name, attr_name = _IMPORT_MAPPING[name]
        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
