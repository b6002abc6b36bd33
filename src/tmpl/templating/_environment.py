"""Jinja2 Environment factory."""

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum

from jinja2 import Environment, StrictUndefined, Undefined

from tmpl.functions import FunctionRegistry, build_table


class MissingKeyPolicy(StrEnum):
    """How a reference to an unset context key renders."""

    ERROR = "error"
    ZERO = "zero"
    DEFAULT = "default"


class NoValueUndefined(Undefined):
    """Undefined that renders as the literal `<no value>`."""

    __slots__ = ()

    def __str__(self) -> str:
        return "<no value>"


_UNDEFINED_TYPES: dict[MissingKeyPolicy, type[Undefined]] = {
    MissingKeyPolicy.ERROR: StrictUndefined,
    MissingKeyPolicy.ZERO: Undefined,
    MissingKeyPolicy.DEFAULT: NoValueUndefined,
}


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for Jinja2 Environment.

    Attributes:
        autoescape: Escape markup in substituted values (HTML mode).
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
        missing_key: Rendering policy for unset context keys.
    """

    autoescape: bool = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True
    missing_key: MissingKeyPolicy = MissingKeyPolicy.ZERO


def _check_defined(args: Iterable[object]) -> None:
    # Passing an unset key into a function must fail under the error policy,
    # even though the function itself would accept an undefined value.
    for arg in args:
        if isinstance(arg, StrictUndefined):
            arg._fail_with_undefined_error()  # noqa: SLF001


def _as_global(fn: Callable[..., object]) -> Callable[..., object]:
    @functools.wraps(fn)
    def call(*args: object) -> object:
        _check_defined(args)
        return fn(*args)

    return call


def _as_filter(fn: Callable[..., object]) -> Callable[..., object]:
    """Adapt `fn` to pipeline order: the piped value becomes the last argument."""

    @functools.wraps(fn)
    def call(value: object, *args: object) -> object:
        _check_defined((value, *args))
        return fn(*args, value)

    return call


def create_environment(
    registry: FunctionRegistry | None = None,
    *,
    config: EnvironmentConfig | None = None,
) -> Environment:
    """Create a Jinja2 Environment with the template function table installed.

    Every function is registered as a global, called with its natural
    argument order (`{{ indent(4, text) }}`), and as a filter, where the piped
    value is passed last (`{{ text | indent(4) }}`). Table filters replace
    Jinja's built-in filters of the same name.

    Note: autoescape is disabled by default as rendered output is usually
    configuration or source text, not HTML.

    Args:
        registry: Function table to install. Defaults to `build_table()`.
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.

    Example:
        from tmpl.functions import build_hermetic_table
        from tmpl.templating import create_environment

        env = create_environment(build_hermetic_table())
        env.from_string("{{ upper(NAME) }}").render(NAME="towel")
    """
    if registry is None:
        registry = build_table()

    # Use default config if none provided
    if config is None:
        config = EnvironmentConfig()

    env = Environment(
        autoescape=config.autoescape,  # noqa: S701
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
        undefined=_UNDEFINED_TYPES[config.missing_key],
    )

    for name, fn in registry.items():
        env.globals[name] = _as_global(fn)
        env.filters[name] = _as_filter(fn)

    return env
