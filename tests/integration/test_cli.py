import io
import tarfile
from pathlib import Path

import orjson
import pytest
from rich.console import Console

from tmpl.cli import ExitCode, create_app


class CLIRunner:
    def __init__(self) -> None:
        self.errors = io.StringIO()
        self._console = Console(file=io.StringIO(), width=200, color_system=None)
        self._error_console = Console(file=self.errors, width=200, color_system=None)

    def __call__(self, *args: str) -> int:
        app = create_app(console=self._console, error_console=self._error_console)
        try:
            app.meta(list(args))
        except SystemExit as e:
            return int(e.code or 0)
        return 0


@pytest.fixture
def run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CLIRunner:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NAME", "web")
    monkeypatch.setenv("PORT", "8080")
    return CLIRunner()


class TestSingleFile:
    def test_renders_environment_into_file(
        self, run: CLIRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "in.tmpl").write_text("{{ NAME }}:{{ PORT }}\n")

        code = run("-f", "in.tmpl", "-w", "out.txt")

        assert code == ExitCode.SUCCESS
        assert (tmp_path / "out.txt").read_text() == "web:8080\n"

    def test_renders_to_stdout(
        self,
        run: CLIRunner,
        tmp_path: Path,
        capsysbinary: pytest.CaptureFixture[bytes],
    ) -> None:
        (tmp_path / "in.tmpl").write_text('{{ NAME | upper }}-{{ env("PORT") }}')

        code = run("-f", "in.tmpl")

        assert code == ExitCode.SUCCESS
        assert capsysbinary.readouterr().out == b"WEB-8080"

    def test_html_mode_escapes_values(
        self, run: CLIRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MARKUP", "<b>")
        (tmp_path / "in.tmpl").write_text("{{ MARKUP }}")

        code = run("-f", "in.tmpl", "-w", "out.html", "--html")

        assert code == ExitCode.SUCCESS
        assert (tmp_path / "out.html").read_text() == "&lt;b&gt;"

    def test_template_error_exits_3(self, run: CLIRunner, tmp_path: Path) -> None:
        (tmp_path / "in.tmpl").write_text("line one\n{{ NAME | trimSuffix( }}\n")

        code = run("-f", "in.tmpl", "-w", "out.txt")

        assert code == ExitCode.TEMPLATE_ERROR
        assert "<template>:2" in run.errors.getvalue()

    def test_missing_key_error_policy(self, run: CLIRunner, tmp_path: Path) -> None:
        (tmp_path / "in.tmpl").write_text("{{ NOT_SET_ANYWHERE }}")

        assert run("-f", "in.tmpl", "-w", "a.txt") == ExitCode.SUCCESS
        assert (tmp_path / "a.txt").read_text() == ""
        assert run("-f", "in.tmpl", "-w", "b.txt", "--missing-key", "default") == 0
        assert (tmp_path / "b.txt").read_text() == "<no value>"
        assert (
            run("-f", "in.tmpl", "-w", "c.txt", "--missing-key", "error")
            == ExitCode.TEMPLATE_ERROR
        )

    def test_hermetic_mode_hides_environment_functions(
        self, run: CLIRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "in.tmpl").write_text('{{ env("NAME") }}')

        code = run("-f", "in.tmpl", "-w", "out.txt", "--hermetic")

        assert code == ExitCode.TEMPLATE_ERROR

    def test_log_records_name_the_command(
        self, run: CLIRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "cfg.toml").write_text(
            '[logging]\nformat = "json"\nfile = "tmpl.log"\n'
        )
        (tmp_path / "in.tmpl").write_text("{{ NAME }}")

        code = run("--config", "cfg.toml", "-f", "in.tmpl", "-w", "out.txt")

        assert code == ExitCode.SUCCESS
        records = [
            orjson.loads(line)
            for line in (tmp_path / "tmpl.log").read_text().splitlines()
        ]
        assert [r["event"] for r in records] == ["template_rendered"]
        assert records[0]["command"] == "render"

    def test_missing_input_exits_4(self, run: CLIRunner) -> None:
        code = run("-f", "does-not-exist.tmpl", "-w", "out.txt")

        assert code == ExitCode.IO_ERROR
        assert "Error:" in run.errors.getvalue()


class TestValidation:
    def test_strip_requires_recursive(self, run: CLIRunner) -> None:
        code = run("--strip", "1")

        assert code == ExitCode.VALIDATION_ERROR
        assert "--strip requires -r/--recursive" in run.errors.getvalue()

    def test_unknown_option_is_a_parse_error(self, run: CLIRunner) -> None:
        assert run("--no-such-flag") == 2

    def test_missing_explicit_config_exits_1(self, run: CLIRunner) -> None:
        assert run("--config", "nope.toml", "-f", "x") == ExitCode.LOAD_ERROR


class TestDirectoryMode:
    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        root = tmp_path / "src"
        (root / "conf").mkdir(parents=True)
        (root / "conf" / "{{ NAME }}.conf").write_text("port={{ PORT }}\n")
        (root / "README").write_text("static\n")
        return root

    def test_extracts_into_directory_with_strip(
        self, run: CLIRunner, tree: Path, tmp_path: Path
    ) -> None:
        code = run("-r", "src", "-w", "out", "--strip", "1")

        assert code == ExitCode.SUCCESS
        assert (tmp_path / "out" / "conf" / "web.conf").read_text() == "port=8080\n"
        assert (tmp_path / "out" / "README").read_text() == "static\n"

    def test_streams_tar_to_stdout(
        self,
        run: CLIRunner,
        tree: Path,
        capsysbinary: pytest.CaptureFixture[bytes],
    ) -> None:
        code = run("-r", "src")

        assert code == ExitCode.SUCCESS
        data = capsysbinary.readouterr().out
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:") as archive:
            assert archive.getnames() == ["src/README", "src/conf/web.conf"]
            member = archive.extractfile("src/conf/web.conf")
            assert member is not None
            assert member.read() == b"port=8080\n"

    def test_render_failure_writes_nothing(
        self, run: CLIRunner, tree: Path, tmp_path: Path
    ) -> None:
        (tree / "broken").write_text("{% if %}")

        code = run("-r", "src", "-w", "out")

        assert code == ExitCode.TEMPLATE_ERROR
        assert not (tmp_path / "out").exists()

    def test_missing_root_exits_4(self, run: CLIRunner) -> None:
        assert run("-r", "nowhere", "-w", "out") == ExitCode.IO_ERROR
