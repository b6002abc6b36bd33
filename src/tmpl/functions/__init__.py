"""Template function library.

Generic value operations, collection helpers and domain helpers (strings,
hashing, encodings, semantic versions, regular expressions, URLs, dates,
mock credentials), bound under their template names by `build_table`.

Basic usage:
    from tmpl.functions import build_hermetic_table, build_table

    table = build_table()
    table["upper"]("towel")  # "TOWEL"

    reproducible = build_hermetic_table()
    "now" in reproducible  # False
"""

from ._collections import dig, merge, slice_, uniq
from ._generic import Kind, deep_copy, equal, is_empty, kind_of, to_float, to_int
from ._registry import (
    HERMETIC_EXCLUSIONS,
    FunctionRegistry,
    build_hermetic_table,
    build_table,
)
from ._semver import SemanticVersion, semver_compare

__all__ = [
    "HERMETIC_EXCLUSIONS",
    "FunctionRegistry",
    "Kind",
    "SemanticVersion",
    "build_hermetic_table",
    "build_table",
    "deep_copy",
    "dig",
    "equal",
    "is_empty",
    "kind_of",
    "merge",
    "semver_compare",
    "slice_",
    "to_float",
    "to_int",
    "uniq",
]
