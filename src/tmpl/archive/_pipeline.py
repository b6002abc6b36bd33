"""Directory mode: render a tree into a tar stream, or onto disk."""

import io
import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from jinja2 import Environment

from tmpl.utils import create_null_logger

from ._extract import extract_archive
from ._models import ArchiveEntry
from ._walker import DirectoryEntries
from ._writer import write_archive

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def _logged(
    entries: Iterable[ArchiveEntry], logger: "FilteringBoundLogger"
) -> Iterator[ArchiveEntry]:
    for entry in entries:
        logger.debug(
            "archive_entry", path=entry.path, mode=oct(entry.mode), size=entry.size
        )
        yield entry


def run_directory(  # noqa: PLR0913
    root: str | os.PathLike[str],
    context: Mapping[str, str],
    env: Environment,
    output: BinaryIO | str | os.PathLike[str],
    *,
    strip: int = 0,
    logger: "FilteringBoundLogger | None" = None,
) -> int:
    """Render every regular file under `root` and package the results.

    When `output` is a binary stream the tar archive is written to it as
    entries are produced. When `output` is a path the whole archive is built
    in memory first and then extracted into that directory, with `strip`
    leading path components removed from every entry.

    Any render or I/O failure aborts the run.

    Args:
        root: Directory to walk.
        context: Rendering context.
        env: Environment with the function table installed.
        output: Binary stream, or destination directory.
        strip: Leading components to strip when extracting.
        logger: Optional structured logger.

    Returns:
        The number of files processed.
    """
    log = logger if logger is not None else create_null_logger()
    entries = _logged(DirectoryEntries(root, context, env), log)

    if isinstance(output, str | os.PathLike):
        buffer = io.BytesIO()
        count = write_archive(entries, buffer)
        log.debug("archive_written", entries=count, bytes=buffer.tell())
        written = extract_archive(buffer.getvalue(), output, strip=strip)
        log.info(
            "archive_extracted",
            destination=str(Path(output)),
            files=len(written),
            strip=strip,
        )
        return count

    if strip:
        log.warning("strip_ignored", reason="output is a stream", strip=strip)
    count = write_archive(entries, output)
    log.info("archive_written", entries=count)
    return count
