"""Config file discovery.

The project file is `tmpl.toml`, found by searching upward from the working
directory. The user file lives in the platform config directory.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models import ConfigSource, ConfigSourceName

PROJECT_CONFIG_NAME = "tmpl.toml"


def find_project_config(start: Path | None = None) -> Path | None:
    """Find the nearest `tmpl.toml` in `start` or one of its parents.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        Path to the config file, or None if none is found before the
        filesystem root.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if _file_exists(candidate):
            return candidate
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return None
        current = parent


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/tmpl/config.toml``
    - macOS: ``~/Library/Application Support/tmpl/config.toml``
    - Windows: ``%APPDATA%\tmpl\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return platformdirs.user_config_path("tmpl") / "config.toml"


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    start: Path | None = None,
    *,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,
) -> list[ConfigSource]:
    """Discover all configuration sources, highest precedence first.

    File sources are checked for existence but not read. The environment
    source carries no values here; they are parsed while loading.
    """
    sources: list[ConfigSource] = []

    if cli_overrides:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=True,
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    project_path = find_project_config(start)
    if project_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=True,
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
