"""The render command: single-file and directory modes."""

import sys
import tarfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from rich.console import Console

from tmpl.archive import run_directory
from tmpl.config import RenderConfig
from tmpl.exceptions import ArchiveError, TemplateError
from tmpl.functions import build_hermetic_table, build_table
from tmpl.templating import (
    MissingKeyPolicy,
    build_context,
    create_environment,
    render_to_stream,
)
from tmpl.utils import create_null_logger

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

STDIO = "-"


def apply_render_overrides(
    render: RenderConfig,
    *,
    html: bool = False,
    hermetic: bool = False,
    strip: int | None = None,
    missing_key: MissingKeyPolicy | None = None,
) -> RenderConfig:
    """Return `render` with the options given on the command line applied."""
    updates: dict[str, object] = {}
    if html:
        updates["autoescape"] = True
    if hermetic:
        updates["hermetic"] = True
    if strip is not None:
        updates["strip"] = strip
    if missing_key is not None:
        updates["missing_key"] = missing_key
    if not updates:
        return render
    return RenderConfig.model_validate({**render.model_dump(), **updates})


def _read_input(path: str) -> bytes:
    if path == STDIO:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


@contextmanager
def _open_output(path: str) -> Iterator[BinaryIO]:
    if path == STDIO:
        yield sys.stdout.buffer
        sys.stdout.buffer.flush()
        return
    with Path(path).open("wb") as out:
        yield out


def run_render(  # noqa: PLR0913
    *,
    input_: str,
    output: str,
    recursive: str | None,
    render: RenderConfig,
    ctx: CLIContext,
    error_console: Console,
) -> None:
    """Render one template, or a directory tree, against the environment.

    Errors are reported on `error_console` and mapped to exit codes.
    """
    logger = ctx.logger if ctx.logger is not None else create_null_logger()
    context = build_context()
    build = build_hermetic_table if render.hermetic else build_table
    registry = build(context)
    env = create_environment(registry, config=render.environment_config())

    try:
        if recursive is not None:
            target: BinaryIO | str = sys.stdout.buffer if output == STDIO else output
            count = run_directory(
                recursive, context, env, target, strip=render.strip, logger=logger
            )
            if output == STDIO:
                sys.stdout.buffer.flush()
            logger.info(
                "directory_rendered", root=recursive, output=output, files=count
            )
            return

        source = _read_input(input_)
        with _open_output(output) as out:
            render_to_stream(source, context, out, env=env)
        logger.info("template_rendered", input=input_, output=output, size=len(source))
    except TemplateError as e:
        logger.error("render_failed", error=str(e), path=e.path)
        exit_with_error(str(e), ExitCode.TEMPLATE_ERROR, console=error_console)
    except (ArchiveError, tarfile.TarError) as e:
        logger.error("archive_failed", error=str(e))
        exit_with_error(str(e), ExitCode.ARCHIVE_ERROR, console=error_console)
    except OSError as e:
        logger.error("io_failed", error=str(e))
        exit_with_error(str(e), ExitCode.IO_ERROR, console=error_console)
    except Exception as e:  # noqa: BLE001
        logger.exception("internal_error")
        exit_with_error(
            f"{type(e).__name__}: {e}", ExitCode.INTERNAL_ERROR, console=error_console
        )
