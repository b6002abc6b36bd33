"""Rendering context built from the process environment."""

import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType


def parse_environ(lines: Iterable[str]) -> dict[str, str]:
    """Parse `KEY=VALUE` strings into a dict.

    Each line is split on its first `=`; a line without one maps to the empty
    string. Later duplicates overwrite earlier ones.

    Args:
        lines: Environment entries such as `["HOME=/root", "TERM=xterm"]`.

    Returns:
        A dict of the parsed entries.
    """
    result: dict[str, str] = {}
    for line in lines:
        key, _, value = line.partition("=")
        result[key] = value
    return result


def build_context(environ: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Snapshot the environment as a read-only context.

    Keys are sorted, so iterating the context (and `ctx` in templates) is
    deterministic.

    Args:
        environ: Source mapping. Defaults to `os.environ`.

    Returns:
        A read-only mapping of variable name to value.
    """
    source = os.environ if environ is None else environ
    return MappingProxyType({key: source[key] for key in sorted(source)})
