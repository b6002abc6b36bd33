"""Kind-dispatched operations over arbitrary template values.

Template functions receive whatever the engine hands them: strings from the
environment, numbers from literals, lists and dicts built inside the
template, or Jinja undefined markers for names that were never set. Every
generic operation here classifies its input with `kind_of` and branches on
the resulting `Kind`, never on static type information.

None of the lenient operations raise. Unparseable or unsupported input
degrades to the zero value of the requested result.
"""

import copy
import dataclasses
import math
import re
from collections.abc import Callable, Mapping, Sequence, Set
from enum import StrEnum

from jinja2 import Undefined
from pydantic import BaseModel


class Kind(StrEnum):
    """Closed set of value kinds recognised by the function library.

    The string values match the names templates pass to `kindIs`.
    """

    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float64"
    COMPLEX = "complex128"
    STRING = "string"
    BYTES = "bytes"
    SLICE = "slice"
    SET = "set"
    MAP = "map"
    STRUCT = "struct"
    FUNC = "func"


_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")

_SCALAR_KINDS = frozenset(
    {Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.COMPLEX, Kind.STRING, Kind.BYTES}
)


def is_absent(value: object) -> bool:
    """Return True for None and for Jinja undefined markers."""
    return value is None or isinstance(value, Undefined)


def kind_of(value: object) -> Kind:  # noqa: PLR0911
    """Classify a runtime value into a `Kind`.

    `bool` is checked before `int` since it is an `int` subclass. Strings and
    bytes are scalars, not sequences. Dataclass instances, pydantic models and
    named tuples are records.
    """
    if is_absent(value):
        return Kind.INVALID
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, complex):
        return Kind.COMPLEX
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, bytes | bytearray):
        return Kind.BYTES
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return Kind.STRUCT
    if isinstance(value, Sequence):
        return Kind.SLICE
    if isinstance(value, Set):
        return Kind.SET
    if isinstance(value, BaseModel) or (
        dataclasses.is_dataclass(value) and not isinstance(value, type)
    ):
        return Kind.STRUCT
    if callable(value):
        return Kind.FUNC
    return Kind.STRUCT


def is_sequence(value: object) -> bool:
    """Return True if the value is a list-like sequence (not a string)."""
    return kind_of(value) is Kind.SLICE


def is_empty(value: object) -> bool:
    """Return True if the value is the zero value of its kind.

    Absent values, False, zero, empty strings and empty containers are empty.
    Records are never empty.
    """
    kind = kind_of(value)
    match kind:
        case Kind.INVALID:
            return True
        case Kind.BOOL | Kind.INT | Kind.FLOAT | Kind.COMPLEX:
            return value == 0
        case Kind.STRING | Kind.BYTES | Kind.SLICE | Kind.SET | Kind.MAP:
            return len(value) == 0  # type: ignore[arg-type]
        case _:
            return False


def _equal_mappings(a: Mapping[object, object], b: Mapping[object, object]) -> bool:
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b:
            return False
        if not equal(value, b[key]):
            return False
    return True


def _equal_sequences(a: Sequence[object], b: Sequence[object]) -> bool:
    if len(a) != len(b):
        return False
    return all(equal(x, y) for x, y in zip(a, b, strict=True))


def equal(a: object, b: object) -> bool:
    """Structural deep equality.

    Values of different kinds are never equal, so `1`, `1.0` and `True` are
    pairwise unequal. Sequences compare element-wise, mappings key-wise, and
    records require the same concrete type.
    """
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    match kind:
        case Kind.INVALID:
            return True
        case Kind.MAP:
            return _equal_mappings(a, b)  # type: ignore[arg-type]
        case Kind.SLICE:
            return _equal_sequences(a, b)  # type: ignore[arg-type]
        case Kind.STRUCT:
            return type(a) is type(b) and a == b
        case Kind.FLOAT:
            return a == b or (math.isnan(a) and math.isnan(b))  # type: ignore[arg-type]
        case _:
            return a == b


def to_int(value: object) -> int:
    """Best-effort integer coercion.

    Floats truncate toward zero, strings are parsed as base-10 integers, and
    everything else (including unparseable strings) becomes 0.
    """
    match kind_of(value):
        case Kind.BOOL | Kind.INT:
            return int(value)  # type: ignore[call-overload]
        case Kind.FLOAT:
            try:
                return int(value)  # type: ignore[call-overload]
            except (OverflowError, ValueError):
                return 0
        case Kind.STRING:
            if _DECIMAL_INT.fullmatch(value) is None:  # type: ignore[arg-type]
                return 0
            return int(value, 10)  # type: ignore[call-overload]
        case Kind.BYTES:
            return to_int(to_string(value))
        case _:
            return 0


def to_float(value: object) -> float:
    """Best-effort float coercion; unsupported input becomes 0.0."""
    match kind_of(value):
        case Kind.BOOL | Kind.INT | Kind.FLOAT:
            try:
                return float(value)  # type: ignore[arg-type]
            except OverflowError:
                return 0.0
        case Kind.STRING:
            try:
                return float(value)  # type: ignore[arg-type]
            except ValueError:
                return 0.0
        case Kind.BYTES:
            return to_float(to_string(value))
        case _:
            return 0.0


def to_string(value: object) -> str:
    """Convert a value to its display string.

    Absent values become the empty string and bytes are decoded as UTF-8.
    """
    if is_absent(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", errors="surrogateescape")
    return str(value)


def deep_copy(value: object) -> object:
    """Recursively copy a value so that the copy shares no mutable state.

    Scalars and absent values are returned unchanged. Lists, tuples, sets and
    mappings are rebuilt element by element; records are cloned.
    """
    match kind_of(value):
        case Kind.INVALID | Kind.FUNC:
            return value
        case kind if kind in _SCALAR_KINDS:
            return bytearray(value) if isinstance(value, bytearray) else value
        case Kind.MAP:
            return {
                deep_copy(key): deep_copy(item)
                for key, item in value.items()  # type: ignore[attr-defined]
            }
        case Kind.SLICE:
            items = [deep_copy(item) for item in value]  # type: ignore[attr-defined]
            return tuple(items) if isinstance(value, tuple) else items
        case Kind.SET:
            items = {deep_copy(item) for item in value}  # type: ignore[attr-defined]
            return frozenset(items) if isinstance(value, frozenset) else items
        case _:
            if isinstance(value, BaseModel):
                return value.model_copy(deep=True)
            return copy.deepcopy(value)


def must_deep_copy(value: object) -> object:
    """Strict sibling of `deep_copy`; copying never degrades."""
    return deep_copy(value)


# ---------------------------------------------------------------------------
# Reflection
# ---------------------------------------------------------------------------


def type_of(value: object) -> str:
    """Return the concrete type name of a value."""
    if isinstance(value, Undefined):
        return "NoneType"
    return type(value).__name__


def type_is(name: str, value: object) -> bool:
    return type_of(value) == name


def type_is_like(name: str, value: object) -> bool:
    return name in type_of(value)


def kind_name(value: object) -> str:
    return kind_of(value).value


def kind_is(name: str, value: object) -> bool:
    return kind_of(value).value == name


# ---------------------------------------------------------------------------
# Defaults and truthiness
# ---------------------------------------------------------------------------


def default(fallback: object, *given: object) -> object:
    """Return the first given value, or `fallback` when it is empty."""
    if not given or is_empty(given[0]):
        return fallback
    return given[0]


def coalesce(*values: object) -> object:
    """Return the first non-empty value, or None."""
    for value in values:
        if not is_empty(value):
            return value
    return None


def all_of(*values: object) -> bool:
    return all(not is_empty(value) for value in values)


def any_of(*values: object) -> bool:
    return any(not is_empty(value) for value in values)


def ternary(if_true: object, if_false: object, condition: object) -> object:
    return if_false if is_empty(condition) else if_true


def length(value: object) -> int:
    """Return the length of strings and containers, 0 for anything else."""
    if kind_of(value) in {
        Kind.STRING,
        Kind.BYTES,
        Kind.SLICE,
        Kind.SET,
        Kind.MAP,
    }:
        return len(value)  # type: ignore[arg-type]
    return 0


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def eq(a: object, b: object) -> bool:
    return equal(a, b)


def ne(a: object, b: object) -> bool:
    return not equal(a, b)


def _numeric_compare(op: Callable[[float, float], bool]) -> Callable[..., bool]:
    def compare(a: object, b: object) -> bool:
        return op(to_float(a), to_float(b))

    return compare


lt = _numeric_compare(lambda a, b: a < b)
le = _numeric_compare(lambda a, b: a <= b)
gt = _numeric_compare(lambda a, b: a > b)
ge = _numeric_compare(lambda a, b: a >= b)
