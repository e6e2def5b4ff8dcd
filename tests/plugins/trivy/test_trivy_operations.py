"""
tests/plugins/trivy/test_trivy_operations.py - trivy 컨테이너 작업 테스트
"""

import pytest

from core.config import DEFAULT_SEVERITY
from core.exceptions import CommandError
from plugins.trivy import operations


class TestBase:
    """trivy 기본 컨테이너 테스트"""

    def test_image_and_cache(self, fake_dag):
        container = operations.base("0.55.0")

        assert container.image == "aquasec/trivy:0.55.0"
        assert container.called("with_mounted_cache") == [("/root/.cache/trivy", "cache:trivy-db-cache")]
        assert fake_dag.caches == ["trivy-db-cache"]

    def test_default_tag(self, fake_dag):
        assert operations.base().image == "aquasec/trivy:latest"


@pytest.mark.anyio
class TestScanImage:
    """scan_image 테스트"""

    async def test_defaults(self, fake_dag):
        fake_dag.output = "Total: 0\n"

        out = await operations.scan_image("alpine:3.20")

        assert out == "Total: 0\n"
        assert fake_dag.last.exec_args == [
            "trivy",
            "image",
            "--quiet",
            "--severity",
            DEFAULT_SEVERITY,
            "--exit-code",
            "0",
            "--format",
            "table",
            "alpine:3.20",
        ]

    async def test_options(self, fake_dag):
        await operations.scan_image("alpine:3.20", severity="critical", exit_code=1, fmt="sarif", tag="0.55.0")

        container = fake_dag.last
        assert container.image == "aquasec/trivy:0.55.0"
        assert container.exec_args[3:9] == ["--severity", "CRITICAL", "--exit-code", "1", "--format", "sarif"]

    async def test_auth(self, fake_dag):
        """레지스트리 인증은 TRIVY_USERNAME/TRIVY_PASSWORD로 전달"""
        secret = fake_dag.set_secret("auth", "token")

        await operations.scan_image("private.io/app:1", auth=secret, username="ci-bot")

        container = fake_dag.last
        assert container.secrets == {"TRIVY_PASSWORD": secret}
        assert container.called("with_env_variable") == [("TRIVY_USERNAME", "ci-bot")]

    async def test_auth_without_username(self, fake_dag):
        await operations.scan_image("private.io/app:1", auth=fake_dag.set_secret("auth", "token"))

        assert fake_dag.last.called("with_env_variable") == []

    async def test_no_auth(self, fake_dag):
        await operations.scan_image("alpine:3.20")

        assert fake_dag.last.secrets == {}

    async def test_vulnerabilities_found(self, fake_dag, fake_exec_error):
        """exit_code 지정 시 취약점 발견은 CommandError (보고서는 stdout 보존)"""
        fake_dag.error = fake_exec_error(exit_code=1, stdout="CVE-2024-0001 HIGH", stderr="")

        with pytest.raises(CommandError) as exc_info:
            await operations.scan_image("alpine:3.20", exit_code=1)

        assert exc_info.value.exit_code == 1
        assert exc_info.value.stdout == "CVE-2024-0001 HIGH"
        assert exc_info.value.tool_name == "trivy"
