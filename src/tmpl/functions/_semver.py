"""Semantic version parsing and constraint checks.

Versions follow Semantic Versioning 2.0.0 with an optional leading `v`. The
shorthands `v1` and `v1.2` are accepted and mean `v1.0.0` and `v1.2.0`.
Invalid versions sort below every valid version and compare equal to each
other.
"""

import re
from dataclasses import dataclass
from typing import Self

from ._generic import to_string

_NUMBER = r"0|[1-9][0-9]*"
_IDENT = r"[0-9A-Za-z-]+"
_VERSION_RE = re.compile(
    rf"v(?P<major>{_NUMBER})"
    rf"(?:\.(?P<minor>{_NUMBER})"
    rf"(?:\.(?P<patch>{_NUMBER})"
    rf"(?:-(?P<prerelease>{_IDENT}(?:\.{_IDENT})*))?"
    rf"(?:\+(?P<build>{_IDENT}(?:\.{_IDENT})*))?"
    r")?)?"
)
_NUMERIC_IDENT = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    """A parsed semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated pre-release identifiers, without the `-`.
        build: Dot-separated build metadata, without the `+`.
        shorthand: True if the minor or patch component was omitted.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""
    shorthand: bool = False

    @classmethod
    def parse(cls, version: str) -> Self | None:
        """Parse a version string, returning None if it is not valid.

        A missing `v` prefix is added before parsing.
        """
        candidate = version if version.startswith("v") else f"v{version}"
        match = _VERSION_RE.fullmatch(candidate)
        if match is None:
            return None
        prerelease = match["prerelease"] or ""
        if any(_has_leading_zero(ident) for ident in prerelease.split(".") if ident):
            return None
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"] or 0),
            patch=int(match["patch"] or 0),
            prerelease=prerelease,
            build=match["build"] or "",
            shorthand=match["patch"] is None,
        )

    def compare(self, other: Self) -> int:
        """Return -1, 0 or 1; build metadata is ignored."""
        left = (self.major, self.minor, self.patch)
        right = (other.major, other.minor, other.patch)
        if left != right:
            return -1 if left < right else 1
        return _compare_prerelease(self.prerelease, other.prerelease)


def _has_leading_zero(ident: str) -> bool:
    if len(ident) < 2 or not ident.startswith("0"):  # noqa: PLR2004
        return False
    return _NUMERIC_IDENT.fullmatch(ident) is not None


def _compare_identifiers(a: str, b: str) -> int:
    a_numeric = _NUMERIC_IDENT.fullmatch(a) is not None
    b_numeric = _NUMERIC_IDENT.fullmatch(b) is not None
    if a_numeric and b_numeric:
        x, y = int(a), int(b)
    elif a_numeric or b_numeric:
        return -1 if a_numeric else 1
    else:
        x, y = a, b  # type: ignore[assignment]
    if x == y:
        return 0
    return -1 if x < y else 1


def _compare_prerelease(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    left, right = a.split("."), b.split(".")
    for x, y in zip(left, right, strict=False):
        result = _compare_identifiers(x, y)
        if result:
            return result
    if len(left) == len(right):
        return 0
    return -1 if len(left) < len(right) else 1


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings; invalid versions sort lowest."""
    left, right = SemanticVersion.parse(a), SemanticVersion.parse(b)
    if left is None or right is None:
        if left is None and right is None:
            return 0
        return -1 if left is None else 1
    return left.compare(right)


def semver(version: object) -> dict[str, object] | None:
    """Decompose a full `MAJOR.MINOR.PATCH` version into its parts.

    Returns None for invalid versions and for the `v1`/`v1.2` shorthands.
    """
    parsed = SemanticVersion.parse(to_string(version))
    if parsed is None or parsed.shorthand:
        return None
    return {
        "Major": parsed.major,
        "Minor": parsed.minor,
        "Patch": parsed.patch,
        "Prerelease": parsed.prerelease,
        "Metadata": parsed.build,
    }


_TWO_CHAR_OPERATORS = frozenset({">=", "<=", "==", "!="})
_ONE_CHAR_OPERATORS = frozenset({"=", "<", ">", "^"})


def _split_constraint(constraint: str) -> tuple[str, str]:
    if constraint[:2] in _TWO_CHAR_OPERATORS:
        operator, rest = constraint[:2], constraint[2:]
    elif constraint[:1] in _ONE_CHAR_OPERATORS:
        operator, rest = constraint[:1], constraint[1:]
    else:
        return "=", constraint
    rest = rest.strip()
    if not rest:
        return "=", constraint
    return operator, rest


def semver_compare(constraint: object, version: object) -> bool:
    """Check `version` against a single operator constraint.

    Supported operators are `=`, `==`, `!=`, `<`, `<=`, `>`, `>=` and `^`. A
    constraint without an operator means equality. The caret operator
    requires the same major version and a version at least as high as the
    constraint.
    """
    text = to_string(constraint).strip()
    if not text:
        return False
    operator, target = _split_constraint(text)
    candidate = to_string(version).strip()
    result = compare_versions(candidate, target)
    match operator:
        case "=" | "==":
            return result == 0
        case "!=":
            return result != 0
        case "<":
            return result < 0
        case "<=":
            return result <= 0
        case ">":
            return result > 0
        case ">=":
            return result >= 0
        case "^":
            wanted = SemanticVersion.parse(target)
            actual = SemanticVersion.parse(candidate)
            if wanted is None or actual is None or wanted.major != actual.major:
                return False
            return result >= 0
        case _:
            return False
