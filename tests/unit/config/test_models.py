from pathlib import Path

import pytest

from tmpl.config import (
    Config,
    ConfigSourceName,
    LogFormat,
    LogLevel,
    RenderConfig,
)
from tmpl.exceptions import ConfigValidationError
from tmpl.templating import EnvironmentConfig, MissingKeyPolicy


class TestConfigDefaults:
    def test_from_empty_dict(self) -> None:
        config = Config.from_dict({})

        assert config.logging.level is LogLevel.INFO
        assert config.logging.format is LogFormat.TEXT
        assert config.logging.file == ""
        assert config.render.missing_key is MissingKeyPolicy.ZERO
        assert config.render.strip == 0
        assert config.render.keep_trailing_newline is True

    def test_is_frozen(self) -> None:
        config = Config.from_dict({})

        with pytest.raises(ValueError, match="frozen"):
            config.render.strip = 3  # type: ignore[misc]


class TestValidation:
    def test_invalid_enum_value(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_dict({"render": {"missing_key": "explode"}})

        assert "render.missing_key" in str(exc_info.value)

    def test_negative_strip(self) -> None:
        with pytest.raises(ConfigValidationError, match="render.strip"):
            Config.from_dict({"render": {"strip": -1}})

    def test_unknown_keys_are_ignored(self) -> None:
        config = Config.from_dict({"render": {"colour": "blue"}, "extra": {}})

        assert config.render == RenderConfig()


def test_environment_config_mirrors_render_section() -> None:
    render = RenderConfig(autoescape=True, missing_key=MissingKeyPolicy.ERROR)

    assert render.environment_config() == EnvironmentConfig(
        autoescape=True,
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
        missing_key=MissingKeyPolicy.ERROR,
    )


class TestFromFile:
    def test_loads_file_over_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[logging]\nformat = "json"\n')

        config = Config.from_file(path)

        assert config.logging.format is LogFormat.JSON
        assert config.logging.level is LogLevel.INFO
        assert [s.path for s in config.sources] == [path]

    def test_validation_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[logging]\nlevel = "loud"\n')

        with pytest.raises(ConfigValidationError) as exc_info:
            Config.from_file(path)

        assert exc_info.value.source == str(path)


class TestLoad:
    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        project = tmp_path / "project"
        nested = project / "deep" / "dir"
        nested.mkdir(parents=True)
        (project / "tmpl.toml").write_text(
            '[render]\nmissing_key = "default"\nstrip = 1\nhermetic = true\n'
        )
        user_config = tmp_path / "user-config" / "config.toml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text('[logging]\nlevel = "warning"\n[render]\nstrip = 9\n')

        config = Config.load(
            start=nested,
            environ={"TMPL_RENDER__STRIP": "2"},
            cli_overrides={"render": {"hermetic": False}},
        )

        assert config.logging.level is LogLevel.WARNING
        assert config.render.missing_key is MissingKeyPolicy.DEFAULT
        assert config.render.strip == 2
        assert config.render.hermetic is False
        assert [s.name for s in config.sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_without_environment(self, tmp_path: Path) -> None:
        config = Config.load(
            start=tmp_path,
            include_env=False,
            environ={"TMPL_RENDER__STRIP": "2"},
        )

        assert config.render.strip == 0
        assert ConfigSourceName.ENV not in [s.name for s in config.sources]
