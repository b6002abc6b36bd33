import os
from collections.abc import Callable
from pathlib import Path

import pytest
from jinja2 import Environment

from tmpl.archive import DirectoryEntries
from tmpl.exceptions import TemplateExecutionError
from tmpl.functions import build_hermetic_table
from tmpl.templating import EnvironmentConfig, create_environment

MakeTree = Callable[..., Path]


@pytest.fixture
def tree(make_tree: MakeTree) -> Path:
    return make_tree(
        {
            "b.txt": "port={{ PORT }}\n",
            "a/z.txt": "z",
            "a/{{ NAME }}.conf": "name={{ NAME }}",
        }
    )


class TestDirectoryEntries:
    def test_walks_depth_first_in_name_order(
        self, tree: Path, context: dict[str, str], env: Environment
    ) -> None:
        entries = list(DirectoryEntries("src", context, env))

        assert [entry.path for entry in entries] == [
            "src/a/z.txt",
            "src/a/web.conf",
            "src/b.txt",
        ]

    def test_renders_content(
        self, tree: Path, context: dict[str, str], env: Environment
    ) -> None:
        contents = {e.path: e.content for e in DirectoryEntries("src", context, env)}

        assert contents["src/b.txt"] == b"port=8080\n"
        assert contents["src/a/web.conf"] == b"name=web"

    def test_records_permission_bits(
        self, tree: Path, context: dict[str, str], env: Environment
    ) -> None:
        (tree / "b.txt").chmod(0o750)

        entries = {e.path: e for e in DirectoryEntries("src", context, env)}

        assert entries["src/b.txt"].mode == 0o750

    def test_is_restartable(
        self, tree: Path, context: dict[str, str], env: Environment
    ) -> None:
        entries = DirectoryEntries("src", context, env)

        assert list(entries) == list(entries)

    def test_symlinks_are_skipped(
        self, tree: Path, context: dict[str, str], env: Environment
    ) -> None:
        os.symlink(tree / "b.txt", tree / "link.txt")
        os.symlink(tree / "a", tree / "linked-dir")

        paths = [e.path for e in DirectoryEntries("src", context, env)]

        assert "src/link.txt" not in paths
        assert not any(p.startswith("src/linked-dir") for p in paths)

    def test_paths_are_not_escaped_in_markup_mode(self, make_tree: MakeTree) -> None:
        make_tree({"{{ NAME }}.txt": "{{ NAME }}"})
        html = create_environment(
            build_hermetic_table({}), config=EnvironmentConfig(autoescape=True)
        )

        entries = list(DirectoryEntries("src", {"NAME": "a&b"}, html))

        assert [e.path for e in entries] == ["src/a&b.txt"]
        assert entries[0].content == b"a&amp;b"

    def test_missing_root_fails_eagerly(
        self, context: dict[str, str], env: Environment
    ) -> None:
        with pytest.raises(NotADirectoryError):
            iter(DirectoryEntries("missing", context, env))

    def test_render_error_names_the_file(
        self, make_tree: MakeTree, context: dict[str, str], env: Environment
    ) -> None:
        make_tree({"ok.txt": "fine", "bad.txt": "{{ fail('broken') }}"})

        with pytest.raises(TemplateExecutionError) as exc_info:
            list(DirectoryEntries("src", context, env))

        assert exc_info.value.path == "src/bad.txt"
        assert str(exc_info.value) == "src/bad.txt:1: broken"
