import pytest
from rich.console import Console

from tmpl.cli import CLIContext, ExitCode
from tmpl.cli._render import apply_render_overrides
from tmpl.cli._shared import exit_with_error
from tmpl.config import Config, RenderConfig
from tmpl.templating import MissingKeyPolicy


class TestApplyRenderOverrides:
    def test_no_overrides_returns_same_object(self) -> None:
        render = RenderConfig()

        assert apply_render_overrides(render) is render

    def test_flags_are_applied(self) -> None:
        render = apply_render_overrides(
            RenderConfig(),
            html=True,
            hermetic=True,
            strip=2,
            missing_key=MissingKeyPolicy.ERROR,
        )

        assert render.autoescape is True
        assert render.hermetic is True
        assert render.strip == 2
        assert render.missing_key is MissingKeyPolicy.ERROR

    def test_false_flags_keep_configured_values(self) -> None:
        configured = RenderConfig(autoescape=True, strip=1)

        render = apply_render_overrides(
            configured, missing_key=MissingKeyPolicy.DEFAULT
        )

        assert render.autoescape is True
        assert render.strip == 1


def test_exit_with_error_prints_and_exits(console: Console) -> None:
    with console.capture() as capture, pytest.raises(SystemExit) as exc_info:
        exit_with_error("bad [thing]", ExitCode.IO_ERROR, console=console)

    assert exc_info.value.code == ExitCode.IO_ERROR
    assert capture.get().strip() == "Error: bad [thing]"


class TestCLIContext:
    def test_default_context_when_unset(self) -> None:
        ctx = CLIContext.get_current()

        assert ctx.verbose is False
        assert ctx.logger is None
        assert ctx.config.render == RenderConfig()

    def test_set_and_reset(self) -> None:
        ctx = CLIContext(config=Config.from_dict({}), verbose=True)

        CLIContext.set_current(ctx)
        assert CLIContext.get_current() is ctx

        CLIContext.reset()
        assert CLIContext.get_current() is not ctx
