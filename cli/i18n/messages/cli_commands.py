"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for Click CLI commands, help text, and tool listing.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # CLI Help Text
    # =========================================================================
    "help_intro": {
        "ko": "skopeo로 레지스트리 간 이미지를 복사/검사/삭제하고\ntrivy로 취약점을 스캔하는 CLI 도구입니다.",
        "en": "A CLI tool that copies, inspects and deletes registry images with skopeo\nand scans them for vulnerabilities with trivy.",
    },
    "help_examples": {
        "ko": "[사용 예시]",
        "en": "[Examples]",
    },
    "help_mirror": {
        "ko": "태그 미러링 (여러 태그는 병렬)",
        "en": "Mirror tags (parallel for many tags)",
    },
    "help_inspect": {
        "ko": "이미지 메타데이터 조회",
        "en": "Show image metadata",
    },
    "help_scan": {
        "ko": "취약점 스캔",
        "en": "Scan for vulnerabilities",
    },
    # =========================================================================
    # Tools Command
    # =========================================================================
    "available_tools": {
        "ko": "사용 가능한 도구",
        "en": "Available Tools",
    },
    "col_path": {
        "ko": "경로",
        "en": "Path",
    },
    "col_name": {
        "ko": "이름",
        "en": "Name",
    },
    "col_permission": {
        "ko": "권한",
        "en": "Permission",
    },
    "category_not_found": {
        "ko": "카테고리를 찾을 수 없습니다: {name}",
        "en": "Category not found: {name}",
    },
    "usage_hint": {
        "ko": "사용법: skopeo-module <명령> --help",
        "en": "Usage: skopeo-module <command> --help",
    },
    # =========================================================================
    # Option Errors
    # =========================================================================
    "env_not_set": {
        "ko": "환경 변수가 설정되지 않았습니다: {name}",
        "en": "Environment variable is not set: {name}",
    },
}
