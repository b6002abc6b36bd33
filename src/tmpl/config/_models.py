"""Configuration models.

Frozen pydantic models for each configuration section, plus the source
metadata recorded while loading.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from tmpl.exceptions import ConfigValidationError
from tmpl.templating import EnvironmentConfig, MissingKeyPolicy

from ._defaults import DEFAULT_CONFIG
from ._loader import deep_merge, parse_env_vars, read_toml_file


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Represents a configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        exists: Whether the source exists (file exists, or values are present).
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class RenderConfig(BaseModel):
    """Rendering configuration section.

    Attributes:
        autoescape: Escape markup in substituted values.
        missing_key: Rendering policy for unset context keys.
        hermetic: Use the reproducible function table.
        strip: Leading path components removed when extracting.
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    autoescape: bool = False
    missing_key: MissingKeyPolicy = MissingKeyPolicy.ZERO
    hermetic: bool = False
    strip: int = Field(default=0, ge=0)
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True

    def environment_config(self) -> EnvironmentConfig:
        return EnvironmentConfig(
            autoescape=self.autoescape,
            trim_blocks=self.trim_blocks,
            lstrip_blocks=self.lstrip_blocks,
            keep_trailing_newline=self.keep_trailing_newline,
            missing_key=self.missing_key,
        )


def _format_validation_error(error: ValidationError) -> str:
    issues = []
    for detail in error.errors():
        key = ".".join(str(part) for part in detail["loc"])
        issues.append(f"{key}: {detail['msg']}")
    return "Invalid configuration: " + "; ".join(issues)


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so defaults are
    merged in and source tracking is filled.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    render: RenderConfig = RenderConfig()

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _validated(
        cls,
        data: dict[str, Any],
        sources: tuple[ConfigSource, ...] = (),
        *,
        source: str | None = None,
    ) -> Self:
        try:
            config = cls.model_validate(deep_merge(DEFAULT_CONFIG, data))
        except ValidationError as e:
            raise ConfigValidationError(
                _format_validation_error(e), source=source
            ) from e
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls._validated(data)

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT, path=path, exists=True, values=data
        )
        return cls._validated(data, (source,), source=str(path))

    @classmethod
    def load(
        cls,
        *,
        start: Path | None = None,
        include_env: bool = True,
        environ: dict[str, str] | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged lowest precedence first: defaults, user file,
        project file, environment variables, CLI overrides.

        Args:
            start: Directory the project file search starts from.
            include_env: Include `TMPL_SECTION__KEY` environment variables.
            environ: Environment to read instead of `os.environ`.
            cli_overrides: Nested dict of CLI overrides.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        from ._discovery import discover_sources  # noqa: PLC0415

        merged: dict[str, Any] = {}
        loaded: list[ConfigSource] = []
        for source in reversed(
            discover_sources(
                start, include_env=include_env, cli_overrides=cli_overrides
            )
        ):
            values = source.values
            if source.name == ConfigSourceName.ENV:
                values = parse_env_vars(environ)
            elif source.path is not None and source.exists:
                values = read_toml_file(source.path)
            loaded.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        return cls._validated(merged, tuple(reversed(loaded)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed, highest precedence first."""
        return list(self._sources)
