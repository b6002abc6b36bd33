"""Environment lookup and failure helpers.

`env` and `expandenv` are frozen dataclasses bound to an environment
snapshot, so a function table built from a fixed mapping never observes
later changes to `os.environ`.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import NoReturn

from tmpl.exceptions import FunctionError

from ._generic import to_string

# ${name}, an unterminated "${", a one-character special name, or a plain name.
_EXPAND_REF = re.compile(
    r"\$(?:\{(?P<braced>[^}]*)\}|(?P<bad>\{)|(?P<special>[*#$@!?\-0-9])"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*))"
)


@dataclass(frozen=True, slots=True)
class EnvFunction:
    """Look up a variable in the bound environment.

    Template usage: {{ env("HOME") }}

    Unset variables yield the empty string.
    """

    environ: Mapping[str, str] = field(default_factory=dict)

    def __call__(self, name: object) -> str:
        return self.environ.get(to_string(name), "")


@dataclass(frozen=True, slots=True)
class ExpandEnvFunction:
    """Replace `$VAR` and `${VAR}` references with values from the environment.

    Template usage: {{ expandenv("$HOME/bin") }}

    Unset variables expand to the empty string. A `$` that does not start a
    reference is kept as-is; an unterminated `${` is dropped.
    """

    environ: Mapping[str, str] = field(default_factory=dict)

    def __call__(self, s: object) -> str:
        def substitute(match: re.Match[str]) -> str:
            if match.group("bad") is not None:
                return ""
            name = match.group("braced")
            if name is None:
                name = match.group("special") or match.group("name")
            return self.environ.get(name, "")

        return _EXPAND_REF.sub(substitute, to_string(s))


def fail(message: object) -> NoReturn:
    """Abort rendering with `message`."""
    raise FunctionError(to_string(message))
