"""
core/tools/discovery.py - 플러그인 발견

plugins/ 하위 패키지의 CATEGORY, TOOLS 메타데이터를 수집합니다.

플러그인 규약:
    - CATEGORY: dict. name, display_name, description, description_en, aliases
    - TOOLS: list[dict]. name, name_en, description, description_en, permission, module
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Any

logger = logging.getLogger(__name__)

PLUGINS_PACKAGE = "plugins"


def discover_categories() -> list[dict[str, Any]]:
    """플러그인 카테고리 목록 반환

    Returns:
        CATEGORY 딕셔너리에 "tools" 키로 TOOLS 목록을 합친 리스트 (이름순)
    """
    package = importlib.import_module(PLUGINS_PACKAGE)
    categories: list[dict[str, Any]] = []

    for module_info in pkgutil.iter_modules(package.__path__):
        if not module_info.ispkg:
            continue

        module = importlib.import_module(f"{PLUGINS_PACKAGE}.{module_info.name}")
        category = getattr(module, "CATEGORY", None)
        if not isinstance(category, dict):
            logger.debug(f"CATEGORY 없음, 스킵: {module_info.name}")
            continue

        categories.append({**category, "tools": list(getattr(module, "TOOLS", []))})

    return sorted(categories, key=lambda c: c["name"])


def get_category(name: str) -> dict[str, Any] | None:
    """이름 또는 별칭으로 카테고리 조회"""
    for category in discover_categories():
        if name == category["name"] or name in category.get("aliases", []):
            return category
    return None
