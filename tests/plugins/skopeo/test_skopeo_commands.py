"""
tests/plugins/skopeo/test_skopeo_commands.py - skopeo 명령행 생성 테스트
"""

from plugins.skopeo.commands import (
    copy_command,
    creds_value,
    delete_args,
    inspect_args,
    shell,
    version_args,
    with_creds,
)


class TestArgs:
    """인자 목록 테스트"""

    def test_version(self):
        assert version_args() == ["skopeo", "--version"]

    def test_inspect(self):
        assert inspect_args("docker://r.io/app:1", "{{.Digest}}") == [
            "skopeo",
            "inspect",
            "--format",
            "{{.Digest}}",
            "docker://r.io/app:1",
        ]

    def test_delete(self):
        assert delete_args("docker://r.io/app:1") == ["skopeo", "delete", "docker://r.io/app:1"]

    def test_shell(self):
        assert shell("skopeo --version") == ["sh", "-c", "skopeo --version"]


class TestCopyCommand:
    """skopeo copy 명령 테스트"""

    def test_without_creds(self):
        cmd = copy_command("docker://src.io/app:1", "docker://dst.io/app:1")
        assert cmd == "skopeo copy --preserve-digests docker://src.io/app:1 docker://dst.io/app:1"

    def test_with_src_and_dst_creds(self):
        """비밀번호는 환경 변수 참조로만 포함"""
        cmd = copy_command("docker://src.io/app:1", "docker://dst.io/app:1", src_user="AWS", dst_user="robot")

        assert cmd == (
            'skopeo copy --preserve-digests --src-creds AWS:"$SRC_PASS" '
            '--dest-creds robot:"$DST_PASS" docker://src.io/app:1 docker://dst.io/app:1'
        )

    def test_dst_creds_only(self):
        cmd = copy_command("docker://src.io/app:1", "docker://dst.io/app:1", dst_user="robot")

        assert "--src-creds" not in cmd
        assert '--dest-creds robot:"$DST_PASS"' in cmd

    def test_without_preserve_digests(self):
        cmd = copy_command("docker://a/b:1", "docker://c/b:1", preserve_digests=False)
        assert "--preserve-digests" not in cmd

    def test_user_is_quoted(self):
        """특수 문자가 있는 사용자 이름은 따옴표 처리"""
        assert creds_value("robot$ci", "DST_PASS") == "'robot$ci:'\"$DST_PASS\""


class TestWithCreds:
    """--creds 추가 테스트"""

    def test_inserted_after_subcommand(self):
        cmd = with_creds(["skopeo", "delete", "docker://r.io/app:1"], "admin")
        assert cmd == 'skopeo delete --creds admin:"$REG_PASS" docker://r.io/app:1'

    def test_format_is_quoted(self):
        cmd = with_creds(["skopeo", "inspect", "--format", "{{.Name}} {{.Tag}}", "docker://r.io/app:1"], "admin")
        assert cmd == "skopeo inspect --creds admin:\"$REG_PASS\" --format '{{.Name}} {{.Tag}}' docker://r.io/app:1"
