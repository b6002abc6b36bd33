"""Directory rendering and tar archive handling.

Basic usage:
    import sys

    from tmpl.archive import run_directory
    from tmpl.templating import build_context, create_environment

    context = build_context()
    env = create_environment()

    # Stream a tar archive of the rendered tree
    run_directory("templates", context, env, sys.stdout.buffer)

    # Or render straight onto disk, dropping the leading "templates/"
    run_directory("templates", context, env, "out", strip=1)
"""

from ._extract import extract_archive
from ._models import ArchiveEntry, path_components, strip_components
from ._pipeline import run_directory
from ._walker import DirectoryEntries
from ._writer import write_archive

__all__ = [
    "ArchiveEntry",
    "DirectoryEntries",
    "extract_archive",
    "path_components",
    "run_directory",
    "strip_components",
    "write_archive",
]
