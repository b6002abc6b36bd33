import pytest

from tmpl.functions._semver import (
    SemanticVersion,
    compare_versions,
    semver,
    semver_compare,
)


class TestParse:
    def test_full_version(self) -> None:
        version = SemanticVersion.parse("v1.2.3-beta.1+build.5")

        assert version == SemanticVersion(
            major=1, minor=2, patch=3, prerelease="beta.1", build="build.5"
        )

    def test_shorthand_versions(self) -> None:
        version = SemanticVersion.parse("1.2")

        assert version is not None
        assert (version.major, version.minor, version.patch) == (1, 2, 0)
        assert version.shorthand

    @pytest.mark.parametrize("text", ["", "1.2.3.4", "01.2.3", "1.2.3-01", "x"])
    def test_invalid_versions(self, text: str) -> None:
        assert SemanticVersion.parse(text) is None


class TestCompare:
    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("1.0.0", "1.0.0", 0),
            ("1.0.0", "1.0.1", -1),
            ("1.0.0-alpha", "1.0.0", -1),
            ("1.0.0-alpha.1", "1.0.0-alpha.beta", -1),
            ("1.0.0-beta.11", "1.0.0-beta.2", 1),
            ("1.0.0+a", "1.0.0+b", 0),
            ("bogus", "0.0.1", -1),
        ],
    )
    def test_precedence(self, a: str, b: str, expected: int) -> None:
        assert compare_versions(a, b) == expected


class TestSemver:
    def test_decomposes_version(self) -> None:
        assert semver("1.2.3-rc.1+sha") == {
            "Major": 1,
            "Minor": 2,
            "Patch": 3,
            "Prerelease": "rc.1",
            "Metadata": "sha",
        }

    def test_shorthand_and_invalid_yield_none(self) -> None:
        assert semver("1.2") is None
        assert semver("nope") is None


class TestSemverCompare:
    @pytest.mark.parametrize(
        ("constraint", "version", "expected"),
        [
            ("^1.2.0", "1.3.5", True),
            ("^1.2.0", "2.0.0", False),
            ("^1.2.0", "1.1.9", False),
            (">=1.0.0", "1.0.0", True),
            ("> 1.0.0", "1.0.1", True),
            ("<2", "1.9.9", True),
            ("!=1.0.0", "1.0.0", False),
            ("1.0.0", "v1.0.0", True),
            ("=1.0.0", "1.0.1", False),
            ("", "1.0.0", False),
        ],
    )
    def test_constraints(self, constraint: str, version: str, expected: bool) -> None:
        assert semver_compare(constraint, version) is expected
