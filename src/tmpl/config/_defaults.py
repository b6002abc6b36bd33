"""Default configuration values.

Note: DEFAULT_CONFIG is a plain dict for type compatibility with deep_merge,
which copies its inputs.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "info",
        "format": "text",
        "file": "",
    },
    "render": {
        "autoescape": False,
        "missing_key": "zero",
        "hermetic": False,
        "strip": 0,
        "trim_blocks": False,
        "lstrip_blocks": False,
        "keep_trailing_newline": True,
    },
}
