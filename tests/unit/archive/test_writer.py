import io
import tarfile

from tmpl.archive import ArchiveEntry, write_archive


def _entries() -> list[ArchiveEntry]:
    return [
        ArchiveEntry.from_rendered("src/a.txt", 0o644, b"alpha"),
        ArchiveEntry.from_rendered("src/bin/run", 0o755, b"#!/bin/sh\n"),
    ]


def test_writes_regular_file_members() -> None:
    out = io.BytesIO()

    count = write_archive(_entries(), out)

    assert count == 2
    out.seek(0)
    with tarfile.open(fileobj=out, mode="r:") as archive:
        members = archive.getmembers()
        assert [m.name for m in members] == ["src/a.txt", "src/bin/run"]
        assert [m.mode for m in members] == [0o644, 0o755]
        assert all(m.isreg() and m.mtime == 0 for m in members)
        reader = archive.extractfile("src/bin/run")
        assert reader is not None
        assert reader.read() == b"#!/bin/sh\n"


def test_output_is_reproducible() -> None:
    first, second = io.BytesIO(), io.BytesIO()

    write_archive(_entries(), first)
    write_archive(_entries(), second)

    assert first.getvalue() == second.getvalue()


def test_empty_archive() -> None:
    out = io.BytesIO()

    assert write_archive([], out) == 0
    out.seek(0)
    with tarfile.open(fileobj=out, mode="r:") as archive:
        assert archive.getmembers() == []


def test_stream_is_left_open() -> None:
    out = io.BytesIO()

    write_archive(_entries(), out)

    assert not out.closed
