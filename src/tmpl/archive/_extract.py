"""Extraction of tar streams onto disk with leading-component stripping."""

import io
import os
import stat
import tarfile
from pathlib import Path
from typing import BinaryIO

from tmpl.exceptions import UnsafeArchivePathError, UnsupportedArchiveEntryError

from ._models import path_components, strip_components


def _target_path(destination: Path, name: str, strip: int) -> Path | None:
    """Resolve where entry `name` lands under `destination`.

    A leading `/` is dropped, as tar does. Returns None when stripping
    leaves nothing, which only happens for entries that name the archive
    root itself (`./`).

    Raises:
        UnsafeArchivePathError: If the entry would land outside `destination`.
    """
    relative = strip_components(name, strip)
    if not relative:
        return None
    if ".." in path_components(relative):
        msg = f"path escapes destination: {name}"
        raise UnsafeArchivePathError(msg, name=name)
    return destination / relative


def extract_archive(
    source: bytes | BinaryIO,
    destination: str | os.PathLike[str],
    *,
    strip: int = 0,
) -> list[Path]:
    """Extract a tar stream into `destination`.

    Regular files are written with their recorded permission bits, creating
    parent directories as needed. Directory entries create directories. Any
    other entry type aborts the extraction.

    Args:
        source: Archive bytes or a readable binary stream.
        destination: Directory to extract into. Created if missing.
        strip: Leading path components to remove from every entry; see
            `strip_components`.

    Returns:
        Paths of the files written, in archive order.

    Raises:
        UnsupportedArchiveEntryError: If an entry is not a file or directory.
        UnsafeArchivePathError: If an entry would land outside `destination`.
        tarfile.TarError: If the stream is not a valid tar archive.
    """
    root = Path(destination)
    root.mkdir(parents=True, exist_ok=True)
    fileobj = io.BytesIO(source) if isinstance(source, bytes | bytearray) else source
    written: list[Path] = []
    with tarfile.open(fileobj=fileobj, mode="r|*") as archive:
        for member in archive:
            target = _target_path(root, member.name, strip)
            if member.isdir():
                if target is not None:
                    target.mkdir(parents=True, exist_ok=True)
                continue
            if not member.isreg():
                msg = f"unsupported archive entry type {member.type!r}: {member.name}"
                raise UnsupportedArchiveEntryError(
                    msg, name=member.name, entry_type=member.type
                )
            if target is None:
                msg = f"archive entry has no file name: {member.name!r}"
                raise UnsafeArchivePathError(msg, name=member.name)
            reader = archive.extractfile(member)
            content = reader.read() if reader is not None else b""
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            target.chmod(stat.S_IMODE(member.mode))
            written.append(target)
    return written
