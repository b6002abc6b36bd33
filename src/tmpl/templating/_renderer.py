"""Template rendering engine."""

import traceback
from collections.abc import Mapping
from typing import BinaryIO

import jinja2
from jinja2 import Environment, Template

from tmpl.exceptions import TemplateExecutionError, TemplateSyntaxError
from tmpl.functions import FunctionRegistry

from ._environment import EnvironmentConfig, create_environment

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_TEMPLATE_FILENAME = "<template>"


def _decode(source: bytes | str) -> str:
    if isinstance(source, str):
        return source
    return source.decode(_ENCODING, _ERRORS)


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def _variables(context: Mapping[str, str]) -> dict[str, object]:
    # Top-level names for direct lookup, plus `ctx` for iteration.
    return {**context, "ctx": context}


def _template_lineno(exc: BaseException) -> int | None:
    """Return the last template line in the traceback of `exc`, if any."""
    lineno: int | None = None
    for frame in traceback.extract_tb(exc.__traceback__):
        if frame.filename == _TEMPLATE_FILENAME:
            lineno = frame.lineno
    return lineno


def _compile(env: Environment, source: str) -> Template:
    try:
        return env.from_string(source)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateSyntaxError(e.message or str(e), lineno=e.lineno, cause=e) from e


def _execution_error(exc: Exception) -> TemplateExecutionError:
    return TemplateExecutionError(str(exc), lineno=_template_lineno(exc), cause=exc)


def render(
    source: bytes | str,
    context: Mapping[str, str],
    registry: FunctionRegistry | None = None,
    *,
    env: Environment | None = None,
    config: EnvironmentConfig | None = None,
) -> bytes:
    """Render template source against a context.

    Args:
        source: Template body. Bytes are decoded as UTF-8, with undecodable
            bytes carried through unchanged.
        context: Variables exposed to the template, also available as `ctx`.
        registry: Function table, used when `env` is not given.
        env: Prepared environment. Takes precedence over `registry`/`config`.
        config: Environment configuration, used when `env` is not given.

    Returns:
        Rendered bytes.

    Raises:
        TemplateSyntaxError: If the source cannot be parsed.
        TemplateExecutionError: If rendering fails.
    """
    if env is None:
        env = create_environment(registry, config=config)
    template = _compile(env, _decode(source))
    try:
        return _encode(template.render(_variables(context)))
    except Exception as e:  # noqa: BLE001
        raise _execution_error(e) from e


def render_to_stream(
    source: bytes | str,
    context: Mapping[str, str],
    out: BinaryIO,
    *,
    env: Environment,
) -> None:
    """Render template source, writing output chunks as they are produced.

    Output written before a failure stays written.

    Raises:
        TemplateSyntaxError: If the source cannot be parsed.
        TemplateExecutionError: If rendering fails.
    """
    template = _compile(env, _decode(source))
    chunks = template.generate(_variables(context))
    while True:
        try:
            data = _encode(next(chunks))
        except StopIteration:
            return
        except Exception as e:  # noqa: BLE001
            raise _execution_error(e) from e
        out.write(data)


def render_string(source: str, context: Mapping[str, str], *, env: Environment) -> str:
    """Render a template string to a string."""
    return _decode(render(source, context, env=env))
