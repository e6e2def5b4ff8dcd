"""
tests/plugins/trivy/test_trivy_commands.py - trivy 명령행 생성 테스트
"""

import pytest

from core.exceptions import ValidationError
from plugins.trivy.commands import normalize_severity, scan_args


class TestNormalizeSeverity:
    """심각도 정규화 테스트"""

    def test_default_list(self):
        assert normalize_severity("UNKNOWN,LOW,MEDIUM,HIGH,CRITICAL") == "UNKNOWN,LOW,MEDIUM,HIGH,CRITICAL"

    def test_case_and_spaces(self):
        assert normalize_severity(" high , critical,HIGH ") == "HIGH,CRITICAL"

    @pytest.mark.parametrize("value", ["", " , ", "SEVERE", "HIGH,URGENT"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            normalize_severity(value)


class TestScanArgs:
    """trivy image 인자 테스트"""

    def test_args(self):
        assert scan_args("alpine:3.20", "HIGH,CRITICAL", 1, "json") == [
            "trivy",
            "image",
            "--quiet",
            "--severity",
            "HIGH,CRITICAL",
            "--exit-code",
            "1",
            "--format",
            "json",
            "alpine:3.20",
        ]

    @pytest.mark.parametrize(
        "image_ref,exit_code,fmt",
        [("", 0, "table"), ("   ", 0, "table"), ("alpine", -1, "table"), ("alpine", 256, "table"), ("alpine", 0, "")],
    )
    def test_invalid(self, image_ref, exit_code, fmt):
        with pytest.raises(ValidationError):
            scan_args(image_ref, "HIGH", exit_code, fmt)
