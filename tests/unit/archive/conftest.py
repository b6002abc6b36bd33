from pathlib import Path

import pytest
from jinja2 import Environment

from tmpl.functions import build_hermetic_table
from tmpl.templating import build_context, create_environment


@pytest.fixture(autouse=True)
def _in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from tmp_path so trees can be walked by relative root."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def context() -> dict[str, str]:
    return dict(build_context({"NAME": "web", "PORT": "8080"}))


@pytest.fixture
def env() -> Environment:
    return create_environment(build_hermetic_table({}))
