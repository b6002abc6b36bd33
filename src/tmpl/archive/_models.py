"""Archive entry model and the strip rule."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One rendered file destined for the archive.

    Attributes:
        path: Rendered, slash-separated entry path.
        mode: Permission bits of the source file.
        size: Length of `content` in bytes.
        content: Rendered file content.
    """

    path: str
    mode: int
    size: int
    content: bytes

    @classmethod
    def from_rendered(cls, path: str, mode: int, content: bytes) -> "ArchiveEntry":
        return cls(path=path, mode=mode, size=len(content), content=content)


def path_components(path: str) -> list[str]:
    """Split a slash-separated path, dropping empty and `.` components."""
    return [part for part in path.split("/") if part not in {"", "."}]


def strip_components(path: str, strip: int) -> str:
    """Remove leading path components from `path`.

    At most `len(components) - 1` components are removed, so a file is never
    stripped down to an empty name.

    Args:
        path: Slash-separated entry path.
        strip: Number of leading components to remove.

    Returns:
        The remaining components joined with `/`.

    Raises:
        ValueError: If `strip` is negative.
    """
    if strip < 0:
        msg = f"strip must be >= 0, got {strip}"
        raise ValueError(msg)
    components = path_components(path)
    count = max(min(strip, len(components) - 1), 0)
    return "/".join(components[count:])
