r"""Template rendering.

Jinja2 environment setup with the template function table installed, the
environment-derived rendering context, and render entry points.

Basic usage:
    from tmpl.templating import build_context, create_environment, render

    context = build_context({"ANSWER": "42"})
    env = create_environment()
    render(b"{{ ANSWER }}\n", context, env=env)  # b"42\n"

Iterating the context:
    render(b"{% for k, v in ctx.items() %}{{ k }}={{ v }}\n{% endfor %}", context)
"""

from ._context import build_context, parse_environ
from ._environment import (
    EnvironmentConfig,
    MissingKeyPolicy,
    NoValueUndefined,
    create_environment,
)
from ._renderer import render, render_string, render_to_stream

__all__ = [
    "EnvironmentConfig",
    "MissingKeyPolicy",
    "NoValueUndefined",
    "build_context",
    "create_environment",
    "parse_environ",
    "render",
    "render_string",
    "render_to_stream",
]
