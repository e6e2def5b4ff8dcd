"""
cli/i18n/messages/runner.py - Engine Runner Messages

Contains translations for engine execution, progress, and error messages.
"""

from __future__ import annotations

RUNNER_MESSAGES = {
    # =========================================================================
    # Execution Flow
    # =========================================================================
    "execution_failed": {
        "ko": "실행 실패: {message}",
        "en": "Execution failed: {message}",
    },
    # =========================================================================
    # Mirroring
    # =========================================================================
    "mirror_start": {
        "ko": "{count}개 태그 미러링: {src} -> {dst}",
        "en": "Mirroring {count} tag(s): {src} -> {dst}",
    },
    "mirror_done": {
        "ko": "미러링 완료: {count}개 태그",
        "en": "Mirroring complete: {count} tag(s)",
    },
    "mirror_tag_done": {
        "ko": "  {tag} ({duration:.1f}s)",
        "en": "  {tag} ({duration:.1f}s)",
    },
    # =========================================================================
    # Deletion / Scan
    # =========================================================================
    "deleted": {
        "ko": "삭제됨: {ref}",
        "en": "Deleted: {ref}",
    },
    "vulnerabilities_found": {
        "ko": "취약점 발견 (exit code {code})",
        "en": "Vulnerabilities found (exit code {code})",
    },
}
