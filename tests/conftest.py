"""Shared test fixtures for tmpl tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from tmpl.cli import CLIContext


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config files and debug flags on the host out of every test."""
    user_config = tmp_path / "user-config" / "config.toml"
    monkeypatch.setattr(
        "tmpl.config._discovery.get_user_config_path", lambda: user_config
    )
    for name in ("TMPL_DEBUG", "TMPL_STRICT_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    CLIContext.reset()


MakeTree = Callable[[dict[str, str | bytes]], Path]


@pytest.fixture
def make_tree(tmp_path: Path) -> MakeTree:
    """Return a function that writes `{relative path: content}` under tmp_path."""

    def _make(files: dict[str, str | bytes], root: str = "src") -> Path:
        base = tmp_path / root
        base.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return base

    return _make
