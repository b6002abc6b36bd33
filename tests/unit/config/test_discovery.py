from pathlib import Path

from pyfakefs.fake_filesystem import FakeFilesystem

from tmpl.config import (
    PROJECT_CONFIG_NAME,
    ConfigSourceName,
    discover_sources,
    find_project_config,
)


class TestFindProjectConfig:
    def test_finds_file_in_current_directory(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/project/{PROJECT_CONFIG_NAME}")

        result = find_project_config(Path("/project"))

        assert result == Path("/project") / PROJECT_CONFIG_NAME

    def test_finds_file_in_parent(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/project/{PROJECT_CONFIG_NAME}")
        fs.create_dir("/project/a/b")

        result = find_project_config(Path("/project/a/b"))

        assert result == Path("/project") / PROJECT_CONFIG_NAME

    def test_nearest_file_wins(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/project/{PROJECT_CONFIG_NAME}")
        fs.create_file(f"/project/inner/{PROJECT_CONFIG_NAME}")

        result = find_project_config(Path("/project/inner"))

        assert result == Path("/project/inner") / PROJECT_CONFIG_NAME

    def test_returns_none_when_no_file_found(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/some/path")

        assert find_project_config(Path("/some/path")) is None

    def test_directory_named_like_config_is_ignored(self, fs: FakeFilesystem) -> None:
        fs.create_dir(f"/project/{PROJECT_CONFIG_NAME}")

        assert find_project_config(Path("/project")) is None

    def test_uses_cwd_when_start_is_none(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/cwd/{PROJECT_CONFIG_NAME}")
        fs.cwd = "/cwd"

        assert find_project_config(None) == Path("/cwd") / PROJECT_CONFIG_NAME


class TestDiscoverSources:
    def test_order_is_highest_precedence_first(self, fs: FakeFilesystem) -> None:
        fs.create_file(f"/project/{PROJECT_CONFIG_NAME}")

        sources = discover_sources(
            Path("/project"), cli_overrides={"render": {"strip": 1}}
        )

        assert [s.name for s in sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_user_source_reports_missing_file(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/project")

        sources = discover_sources(Path("/project"), include_env=False)

        user = next(s for s in sources if s.name is ConfigSourceName.USER)
        assert user.exists is False
        assert ConfigSourceName.CLI not in [s.name for s in sources]
        assert ConfigSourceName.PROJECT not in [s.name for s in sources]
