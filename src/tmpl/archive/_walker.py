"""Lazy, restartable walk that renders every regular file under a root."""

import os
import stat
from collections.abc import Iterator, Mapping
from pathlib import Path

from jinja2 import Environment

from tmpl.exceptions import TemplateError
from tmpl.templating import render, render_string

from ._models import ArchiveEntry


class DirectoryEntries:
    """Re-iterable sequence of rendered archive entries under `root`.

    Each call to `iter()` restarts the walk from the filesystem. The walk is
    depth-first with the entries of each directory visited in name order.
    Symlinks are not followed and anything that is not a regular file is
    skipped.

    Both the content and the path of each file are rendered against the
    context, so `{{ NAME }}.conf` can become `web.conf`. Paths are always
    rendered as plain text, even when `env` escapes markup.
    """

    def __init__(
        self, root: str | os.PathLike[str], context: Mapping[str, str], env: Environment
    ) -> None:
        self.root: str = os.fspath(root)
        self.context: Mapping[str, str] = context
        self.env: Environment = env
        self.path_env: Environment = env.overlay(autoescape=False)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        root = self.root.rstrip("/") or "/"
        if not Path(root).is_dir():
            msg = f"not a directory: {root}"
            raise NotADirectoryError(msg)
        return self._walk(root)

    def _walk(self, directory: str) -> Iterator[ArchiveEntry]:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda child: child.name)
        prefix = "" if directory == "/" else directory
        for child in children:
            path = f"{prefix}/{child.name}"
            if child.is_dir(follow_symlinks=False):
                yield from self._walk(path)
            elif child.is_file(follow_symlinks=False):
                yield self._render_file(path, child.stat(follow_symlinks=False))

    def _render_file(self, path: str, st: os.stat_result) -> ArchiveEntry:
        source = Path(path).read_bytes()
        try:
            content = render(source, self.context, env=self.env)
            name = render_string(path, self.context, env=self.path_env)
        except TemplateError as e:
            raise e.with_path(path) from e
        return ArchiveEntry.from_rendered(name, stat.S_IMODE(st.st_mode), content)
