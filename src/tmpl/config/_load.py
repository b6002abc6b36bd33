import os
import sys
from pathlib import Path
from typing import Any

from tmpl.exceptions import ConfigError

from ._models import Config


def _fail_or_default(message: str, *, strict: bool) -> tuple[Config, str]:
    if strict:
        print(f"Error: {message}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {message}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), message


def safe_load_config(
    *,
    config_path: Path | None = None,
    start: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Handles errors based on the TMPL_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        start: Directory the project file search starts from.
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns the default Config with the
        error message.
    """
    strict_mode = os.environ.get("TMPL_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.exists():
        # Always fail for explicit path
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        if config_path is not None:
            return Config.from_file(config_path), None
        config = Config.load(start=start, cli_overrides=cli_overrides)
    except ConfigError as e:
        return _fail_or_default(str(e), strict=strict_mode)
    except OSError as e:
        return _fail_or_default(f"Failed to load config: {e}", strict=strict_mode)
    return config, None
