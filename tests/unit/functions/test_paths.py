import pytest

from tmpl.functions._paths import base, clean, dir_, ext, is_abs


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a//b/./../c", "a/c"),
        ("/../x", "/x"),
        ("../../a", "../../a"),
        ("a/..", "."),
        ("", "."),
    ],
)
def test_clean(path: str, expected: str) -> None:
    assert clean(path) == expected


@pytest.mark.parametrize(
    ("path", "expected"),
    [("/a/b/", "b"), ("/", "/"), ("", "."), ("file.txt", "file.txt")],
)
def test_base(path: str, expected: str) -> None:
    assert base(path) == expected


def test_dir() -> None:
    assert dir_("a/b/c") == "a/b"
    assert dir_("c") == "."
    assert dir_("/c") == "/"


def test_ext() -> None:
    assert ext("a/b.tar.gz") == ".gz"
    assert ext("a.b/c") == ""


def test_is_abs() -> None:
    assert is_abs("/etc")
    assert not is_abs("etc")
