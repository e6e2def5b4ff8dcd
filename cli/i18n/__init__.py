"""
cli/i18n/__init__.py - CLI 메시지 번역

skopeo-module CLI 출력은 한국어(ko)가 기본이며 --lang en 으로 영어를 선택합니다.
메시지는 cli/i18n/messages 에 "namespace.key" 형식으로 등록됩니다.

Usage:
    from cli.i18n import t, set_lang

    set_lang("en")
    print(t("runner.mirror_done", count=3))  # "Mirroring complete: 3 tag(s)"
"""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "ko"

# CLI 그룹 콜백에서 한 번 설정
_current_lang: ContextVar[str] = ContextVar("lang", default=DEFAULT_LANG)


def get_lang() -> str:
    return _current_lang.get()


def set_lang(lang: str) -> None:
    """출력 언어 설정 (지원하지 않는 코드는 한국어로 대체)"""
    _current_lang.set(lang if lang in SUPPORTED_LANGS else DEFAULT_LANG)


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """메시지 키를 현재 언어로 변환

    Args:
        key: "namespace.key" 형식의 메시지 키 (예: "runner.deleted")
        lang: 언어 지정 (None이면 set_lang으로 설정한 언어)
        **kwargs: 메시지 포맷 인자

    Returns:
        번역된 문자열. 등록되지 않은 키는 키를 그대로 반환하고,
        포맷 인자가 부족하면 템플릿을 그대로 반환합니다.
    """
    from cli.i18n.messages import MESSAGES

    lang = lang or get_lang()
    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG

    messages = MESSAGES.get(key)
    if messages is None:
        return key

    text = messages.get(lang) or messages.get(DEFAULT_LANG, key)
    if kwargs:
        with contextlib.suppress(KeyError, ValueError):
            text = text.format(**kwargs)

    return text


__all__ = [
    "t",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]
