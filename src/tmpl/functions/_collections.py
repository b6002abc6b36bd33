"""List and mapping operations for templates.

Lenient functions degrade to None or an empty result when handed the wrong
kind of value. Their `must_` siblings raise `ConversionError` instead.
"""

from collections.abc import Mapping, MutableMapping, Sequence

from tmpl.exceptions import ConversionError, PathTraversalError

from ._generic import Kind, equal, is_empty, kind_of, to_int, to_string

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_sequence(name: str, value: object) -> Sequence[object]:
    if kind_of(value) is not Kind.SLICE:
        msg = f"{name}: cannot operate on {type(value).__name__}, expected a list"
        raise ConversionError(msg, value=value)
    return value  # type: ignore[return-value]


def _require_mapping(name: str, value: object) -> MutableMapping[object, object]:
    if not isinstance(value, MutableMapping):
        msg = f"{name}: cannot operate on {type(value).__name__}, expected a dict"
        raise ConversionError(msg, value=value)
    return value


def _contains(items: Sequence[object], needle: object) -> bool:
    return any(equal(item, needle) for item in items)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def list_(*values: object) -> list[object]:
    return list(values)


def dict_(*pairs: object) -> dict[str, object]:
    """Build a dict from alternating keys and values.

    Keys are converted to strings. A trailing key without a value maps to the
    empty string.
    """
    result: dict[str, object] = {}
    for index in range(0, len(pairs), 2):
        key = to_string(pairs[index])
        result[key] = pairs[index + 1] if index + 1 < len(pairs) else ""
    return result


# ---------------------------------------------------------------------------
# Mapping operations
# ---------------------------------------------------------------------------


def get(mapping: object, key: str) -> object:
    if isinstance(mapping, Mapping) and key in mapping:
        return mapping[key]
    return ""


def set_(mapping: MutableMapping[str, object], key: str, value: object) -> object:
    mapping[key] = value
    return mapping


def unset(mapping: MutableMapping[str, object], key: str) -> object:
    mapping.pop(key, None)
    return mapping


def has_key(mapping: object, key: str) -> bool:
    return isinstance(mapping, Mapping) and key in mapping


def pluck(key: str, *mappings: object) -> list[object]:
    return [m[key] for m in mappings if isinstance(m, Mapping) and key in m]


def keys(*mappings: object) -> list[object]:
    return [key for m in mappings if isinstance(m, Mapping) for key in m]


def values(mapping: object) -> list[object]:
    if not isinstance(mapping, Mapping):
        return []
    return list(mapping.values())


def pick(mapping: Mapping[str, object], *names: str) -> dict[str, object]:
    return {name: mapping[name] for name in names if name in mapping}


def omit(mapping: Mapping[str, object], *names: str) -> dict[str, object]:
    excluded = set(names)
    return {key: value for key, value in mapping.items() if key not in excluded}


def merge(dst: object, *srcs: object) -> object:
    """Copy keys from each source into `dst`, left to right.

    `dst` is mutated in place and returned, so later sources win and any other
    reference to `dst` observes the merged keys.
    """
    if not isinstance(dst, MutableMapping):
        return dst
    for src in srcs:
        if isinstance(src, Mapping):
            dst.update(src)
    return dst


def must_merge(dst: object, *srcs: object) -> object:
    target = _require_mapping("mustMerge", dst)
    for src in srcs:
        target.update(_require_mapping("mustMerge", src))
    return target


def dig(path: str, mapping: object) -> object:
    """Follow a dot-separated key path through nested mappings.

    Every segment before the last must resolve to a mapping.

    Raises:
        PathTraversalError: If a segment is missing or an intermediate value
            is not a mapping.
    """
    current = mapping
    segments = path.split(".")
    for position, segment in enumerate(segments):
        if not isinstance(current, Mapping):
            parent = ".".join(segments[:position])
            msg = f"key {parent} is not a dict"
            raise PathTraversalError(msg, key=parent)
        if segment not in current:
            msg = f"key {segment} not found"
            raise PathTraversalError(msg, key=segment)
        current = current[segment]
    return current


# ---------------------------------------------------------------------------
# Sequence operations
# ---------------------------------------------------------------------------


def push(seq: object, value: object) -> list[object]:
    if kind_of(seq) is not Kind.SLICE:
        return [value]
    return [*seq, value]  # type: ignore[misc]


def must_push(seq: object, value: object) -> list[object]:
    return [*_require_sequence("mustPush", seq), value]


def prepend(seq: object, value: object) -> list[object]:
    if kind_of(seq) is not Kind.SLICE:
        return [value]
    return [value, *seq]  # type: ignore[misc]


def must_prepend(seq: object, value: object) -> list[object]:
    return [value, *_require_sequence("mustPrepend", seq)]


def first(seq: object) -> object:
    if kind_of(seq) is not Kind.SLICE or not seq:
        return None
    return seq[0]  # type: ignore[index]


def must_first(seq: object) -> object:
    items = _require_sequence("mustFirst", seq)
    if not items:
        msg = "mustFirst: cannot get first element of empty list"
        raise ConversionError(msg, value=seq)
    return items[0]


def last(seq: object) -> object:
    if kind_of(seq) is not Kind.SLICE or not seq:
        return None
    return seq[-1]  # type: ignore[index]


def must_last(seq: object) -> object:
    items = _require_sequence("mustLast", seq)
    if not items:
        msg = "mustLast: cannot get last element of empty list"
        raise ConversionError(msg, value=seq)
    return items[-1]


def rest(seq: object) -> list[object] | None:
    if kind_of(seq) is not Kind.SLICE:
        return None
    return list(seq[1:])  # type: ignore[index]


def must_rest(seq: object) -> list[object]:
    return list(_require_sequence("mustRest", seq)[1:])


def initial(seq: object) -> list[object] | None:
    if kind_of(seq) is not Kind.SLICE:
        return None
    return list(seq[:-1])  # type: ignore[index]


def must_initial(seq: object) -> list[object]:
    return list(_require_sequence("mustInitial", seq)[:-1])


def reverse(seq: object) -> list[object] | None:
    if kind_of(seq) is not Kind.SLICE:
        return None
    return list(reversed(seq))  # type: ignore[call-overload]


def must_reverse(seq: object) -> list[object]:
    return list(reversed(_require_sequence("mustReverse", seq)))


def _uniq(items: Sequence[object]) -> list[object]:
    result: list[object] = []
    for item in items:
        if not _contains(result, item):
            result.append(item)
    return result


def uniq(seq: object) -> list[object] | None:
    """Deduplicate by structural equality, keeping first occurrences in order."""
    if kind_of(seq) is not Kind.SLICE:
        return None
    return _uniq(seq)  # type: ignore[arg-type]


def must_uniq(seq: object) -> list[object]:
    return _uniq(_require_sequence("mustUniq", seq))


def without(seq: object, *excluded: object) -> list[object] | None:
    if kind_of(seq) is not Kind.SLICE:
        return None
    return [item for item in seq if not _contains(excluded, item)]  # type: ignore[attr-defined]


def must_without(seq: object, *excluded: object) -> list[object]:
    items = _require_sequence("mustWithout", seq)
    return [item for item in items if not _contains(excluded, item)]


def has(needle: object, haystack: object) -> bool:
    if kind_of(haystack) is not Kind.SLICE:
        return False
    return _contains(haystack, needle)  # type: ignore[arg-type]


def must_has(needle: object, haystack: object) -> bool:
    return _contains(_require_sequence("mustHas", haystack), needle)


def _slice_bounds(length: int, indices: tuple[object, ...]) -> tuple[int, int]:
    start = to_int(indices[0]) if indices else 0
    end = to_int(indices[1]) if len(indices) > 1 else length
    if start < 0:
        start += length
    if end < 0:
        end += length
    start = min(max(start, 0), length)
    end = min(max(end, 0), length)
    return start, max(start, end)


def slice_(seq: object, *indices: object) -> object:
    """Return `seq[start:end]` with indices clamped into range.

    Negative indices count from the end. A start past the end, or an end
    before the start, yields an empty sequence rather than an error.
    Non-sequences yield None.
    """
    if kind_of(seq) is not Kind.SLICE:
        return None
    start, end = _slice_bounds(len(seq), indices)  # type: ignore[arg-type]
    return seq[start:end]  # type: ignore[index]


def must_slice(seq: object, *indices: object) -> object:
    items = _require_sequence("mustSlice", seq)
    start, end = _slice_bounds(len(items), indices)
    return items[start:end]


def concat(*seqs: object) -> list[object]:
    """Flatten sequences into one list; non-sequence arguments are kept as is."""
    result: list[object] = []
    for seq in seqs:
        if kind_of(seq) is Kind.SLICE:
            result.extend(seq)  # type: ignore[arg-type]
        else:
            result.append(seq)
    return result


def _chunk(size: int, items: Sequence[object]) -> list[list[object]]:
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def chunk(size: object, seq: object) -> list[list[object]] | None:
    """Split a sequence into lists of `size` items; the last may be shorter."""
    width = to_int(size)
    if kind_of(seq) is not Kind.SLICE or width <= 0:
        return None
    return _chunk(width, seq)  # type: ignore[arg-type]


def must_chunk(size: object, seq: object) -> list[list[object]]:
    items = _require_sequence("mustChunk", seq)
    width = to_int(size)
    if width <= 0:
        msg = f"mustChunk: chunk size must be positive, got {width}"
        raise ConversionError(msg, value=size)
    return _chunk(width, items)


def compact(seq: object) -> list[object] | None:
    """Drop empty values from a sequence."""
    if kind_of(seq) is not Kind.SLICE:
        return None
    return [item for item in seq if not is_empty(item)]  # type: ignore[attr-defined]


def must_compact(seq: object) -> list[object]:
    items = _require_sequence("mustCompact", seq)
    return [item for item in items if not is_empty(item)]
