"""Sequential tar stream writer."""

import io
import tarfile
from collections.abc import Iterable
from typing import BinaryIO

from ._models import ArchiveEntry


def _tar_info(entry: ArchiveEntry) -> tarfile.TarInfo:
    info = tarfile.TarInfo(name=entry.path)
    info.type = tarfile.REGTYPE
    info.mode = entry.mode
    info.size = entry.size
    # Zero mtime and owner keep identical input producing identical bytes.
    info.mtime = 0
    return info


def write_archive(entries: Iterable[ArchiveEntry], out: BinaryIO) -> int:
    """Write `entries` to `out` as a POSIX (pax) tar stream.

    Entries are consumed and written one at a time. `out` is not closed.

    Args:
        entries: Archive entries, in the order they should appear.
        out: Binary stream to write to.

    Returns:
        The number of entries written.
    """
    count = 0
    with tarfile.open(fileobj=out, mode="w|", format=tarfile.PAX_FORMAT) as archive:
        for entry in entries:
            archive.addfile(_tar_info(entry), io.BytesIO(entry.content))
            count += 1
    return count
