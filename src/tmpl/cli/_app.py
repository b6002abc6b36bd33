"""The command-line interface for tmpl."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from tmpl.config import safe_load_config
from tmpl.templating import MissingKeyPolicy
from tmpl.utils import create_cli_logger

from ._context import CLIContext
from ._render import STDIO, apply_render_overrides, run_render
from ._shared import ExitCode, exit_with_error

_HELP = "Render Jinja2 templates against the process environment."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="tmpl",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.default
    def _render(  # pyright: ignore[reportUnusedFunction]  # noqa: PLR0913
        *,
        input_: Annotated[
            str, Parameter(name=["-f", "--input"], help="Input template, - for stdin")
        ] = STDIO,
        output: Annotated[
            str,
            Parameter(
                name=["-w", "--output"],
                help="Output file, - for stdout; with -r, a directory to extract into",
            ),
        ] = STDIO,
        html: Annotated[
            bool,
            Parameter(name="--html", negative="", help="Escape markup in output"),
        ] = False,
        recursive: Annotated[
            str | None,
            Parameter(
                name=["-r", "--recursive"],
                help="Render every file under this directory into a tar archive",
            ),
        ] = None,
        strip: Annotated[
            int | None,
            Parameter(
                name="--strip",
                help="Leading path components to drop when extracting (needs -r)",
            ),
        ] = None,
        missing_key: Annotated[
            MissingKeyPolicy | None,
            Parameter(name="--missing-key", help="How unset variables render"),
        ] = None,
        hermetic: Annotated[
            bool,
            Parameter(
                name="--hermetic",
                negative="",
                help="Exclude clock, random, network and environment functions",
            ),
        ] = False,
    ) -> None:
        """Render a template, or a directory of templates.

        Args:
            input_: Input template path, or - for stdin.
            output: Output path, or - for stdout.
            html: Escape markup in substituted values.
            recursive: Directory to render as a whole.
            strip: Leading path components removed on extraction.
            missing_key: Policy for unset variables (error, zero, default).
            hermetic: Use the reproducible function table.
        """
        if strip is not None and recursive is None:
            exit_with_error(
                "--strip requires -r/--recursive",
                ExitCode.VALIDATION_ERROR,
                console=error_console,
            )
        if strip is not None and strip < 0:
            exit_with_error(
                f"--strip must be >= 0, got {strip}",
                ExitCode.VALIDATION_ERROR,
                console=error_console,
            )

        ctx = CLIContext.get_current()
        render = apply_render_overrides(
            ctx.config.render,
            html=html,
            hermetic=hermetic,
            strip=strip,
            missing_key=missing_key,
        )
        run_render(
            input_=input_,
            output=output,
            recursive=recursive,
            render=render,
            ctx=ctx,
            error_console=error_console,
        )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[
            bool, Parameter(negative="", help="Enable debug logging")
        ] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Launch tmpl with global options.

        Args:
            tokens: Render options.
            verbose: Enable debug logging.
            config: Explicit path to config file.
        """
        cli_overrides: dict[str, object] | None = None
        if verbose:
            cli_overrides = {"logging": {"level": "debug"}}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            cli_overrides=cli_overrides,
        )
        cli_logger = create_cli_logger(
            # An explicit --config file bypasses the CLI override source.
            level="debug" if verbose else loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command="render",
        )
        if config_error is not None:
            cli_logger.warning("config_load_failed", error=config_error)

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_path=config,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    return app


def main() -> None:
    """Default entrypoint for the `tmpl` CLI."""
    app = create_app()
    app.meta()
