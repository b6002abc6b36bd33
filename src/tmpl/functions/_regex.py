"""Regular-expression helpers.

Matching is delegated to `re`. Iteration follows the leftmost-first "all
matches" convention: an empty match immediately after the previous match is
skipped, so `regexReplaceAll("x*", "abxd", "-")` yields `-a-b-d-`.

Count arguments mean: negative for all matches, zero for none, positive for
at most that many.
"""

import re
from collections.abc import Iterator

from tmpl.exceptions import ConversionError

from ._generic import to_int, to_string

_TEMPLATE_REF = re.compile(r"\$(?:(\$)|\{(\w+)\}|(\w+))")
_META_CHARS = frozenset("\\.+*?()|[]{}^$")


def _compile(name: str, pattern: object) -> re.Pattern[str]:
    try:
        return re.compile(to_string(pattern))
    except re.error as e:
        msg = f"{name}: invalid regular expression {pattern!r}: {e}"
        raise ConversionError(msg, value=pattern) from e


def _iter_matches(regex: re.Pattern[str], s: str, n: int) -> Iterator[re.Match[str]]:
    count = 0
    previous_end = -1
    for match in regex.finditer(s):
        if n >= 0 and count >= n:
            return
        if match.start() == match.end() == previous_end:
            continue
        previous_end = match.end()
        count += 1
        yield match


def _expand(match: re.Match[str], template: str) -> str:
    def substitute(ref: re.Match[str]) -> str:
        if ref[1]:
            return "$"
        name = ref[2] or ref[3]
        try:
            group = match.group(int(name) if name.isdigit() else name)
        except IndexError:
            return ""
        return group or ""

    return _TEMPLATE_REF.sub(substitute, template)


def _replace(regex: re.Pattern[str], s: str, repl: str, *, literal: bool) -> str:
    parts: list[str] = []
    last = 0
    for match in _iter_matches(regex, s, -1):
        parts.append(s[last : match.start()])
        parts.append(repl if literal else _expand(match, repl))
        last = match.end()
    parts.append(s[last:])
    return "".join(parts)


def _split(regex: re.Pattern[str], s: str, n: int) -> list[str]:
    if n == 0:
        return []
    if regex.pattern and not s:
        return [""]
    pieces: list[str] = []
    begin = end = 0
    for match in _iter_matches(regex, s, n):
        if n > 0 and len(pieces) == n - 1:
            break
        end = match.start()
        if match.end() != 0:
            pieces.append(s[begin:end])
        begin = match.end()
    if end != len(s):
        pieces.append(s[begin:])
    return pieces


# ---------------------------------------------------------------------------
# Template functions
# ---------------------------------------------------------------------------


def must_regex_match(pattern: object, s: object) -> bool:
    return _compile("mustRegexMatch", pattern).search(to_string(s)) is not None


def regex_match(pattern: object, s: object) -> bool:
    try:
        return must_regex_match(pattern, s)
    except ConversionError:
        return False


def must_regex_find_all(pattern: object, s: object, n: object) -> list[str]:
    regex = _compile("mustRegexFindAll", pattern)
    return [m[0] for m in _iter_matches(regex, to_string(s), to_int(n))]


def regex_find_all(pattern: object, s: object, n: object) -> list[str]:
    try:
        return must_regex_find_all(pattern, s, n)
    except ConversionError:
        return []


def must_regex_find(pattern: object, s: object) -> str:
    match = _compile("mustRegexFind", pattern).search(to_string(s))
    return match[0] if match else ""


def regex_find(pattern: object, s: object) -> str:
    try:
        return must_regex_find(pattern, s)
    except ConversionError:
        return ""


def must_regex_replace_all(pattern: object, s: object, repl: object) -> str:
    """Replace every match, expanding `$1`, `${name}` and `$$` in `repl`."""
    regex = _compile("mustRegexReplaceAll", pattern)
    return _replace(regex, to_string(s), to_string(repl), literal=False)


def regex_replace_all(pattern: object, s: object, repl: object) -> str:
    try:
        return must_regex_replace_all(pattern, s, repl)
    except ConversionError:
        return to_string(s)


def must_regex_replace_all_literal(pattern: object, s: object, repl: object) -> str:
    regex = _compile("mustRegexReplaceAllLiteral", pattern)
    return _replace(regex, to_string(s), to_string(repl), literal=True)


def regex_replace_all_literal(pattern: object, s: object, repl: object) -> str:
    try:
        return must_regex_replace_all_literal(pattern, s, repl)
    except ConversionError:
        return to_string(s)


def must_regex_split(pattern: object, s: object, n: object) -> list[str]:
    """Split around matches; `n` caps the number of pieces returned."""
    regex = _compile("mustRegexSplit", pattern)
    return _split(regex, to_string(s), to_int(n))


def regex_split(pattern: object, s: object, n: object) -> list[str]:
    try:
        return must_regex_split(pattern, s, n)
    except ConversionError:
        return [to_string(s)]


def regex_quote_meta(s: object) -> str:
    """Escape the regular-expression metacharacters `\\.+*?()|[]{}^$`."""
    return "".join(f"\\{ch}" if ch in _META_CHARS else ch for ch in to_string(s))
