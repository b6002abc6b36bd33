import pytest

from tmpl.archive import ArchiveEntry, path_components, strip_components


class TestStripComponents:
    @pytest.mark.parametrize(
        ("path", "strip", "expected"),
        [
            ("src/a/b.txt", 0, "src/a/b.txt"),
            ("src/a/b.txt", 1, "a/b.txt"),
            ("src/a/b.txt", 2, "b.txt"),
            ("src/a/b.txt", 10, "b.txt"),
            ("file.txt", 3, "file.txt"),
            ("./src//a", 1, "a"),
            ("/abs/x.txt", 1, "x.txt"),
        ],
    )
    def test_never_strips_the_file_name(
        self, path: str, strip: int, expected: str
    ) -> None:
        assert strip_components(path, strip) == expected

    def test_negative_strip_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="strip must be >= 0"):
            strip_components("a/b", -1)

    def test_empty_path(self) -> None:
        assert strip_components("./", 1) == ""


def test_path_components_drops_empty_and_dot() -> None:
    assert path_components("/a/./b//c/") == ["a", "b", "c"]


def test_entry_size_follows_content() -> None:
    entry = ArchiveEntry.from_rendered("a.txt", 0o644, b"hello")

    assert entry.size == 5
    assert entry.mode == 0o644
