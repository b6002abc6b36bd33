"""String helpers.

Most helpers take the subject string as their last argument so that they read
naturally as filters: `{{ name | abbrev(5) }}` calls `abbrev(5, name)`.
"""

from ._generic import Kind, kind_of, to_int, to_string

# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


def abbrev(width: object, s: object) -> str:
    """Truncate to `width` characters, ending with an ellipsis when cut."""
    text, limit = to_string(s), to_int(width)
    if len(text) <= limit:
        return text
    if limit < 4:  # noqa: PLR2004
        return text[: max(limit, 0)]
    return text[: limit - 3] + "..."


def abbrevboth(left: object, right: object, s: object) -> str:
    text, head, tail = to_string(s), to_int(left), to_int(right)
    if len(text) <= head + tail:
        return text
    return text[: max(head, 0)] + "..." + text[len(text) - max(tail, 0) :]


def trunc(count: object, s: object) -> str:
    text, limit = to_string(s), to_int(count)
    if limit < 0:
        return ""
    return text[:limit]


def substr(start: object, end: object, s: object) -> str:
    """Return the `[start, end)` substring; a negative end means the end."""
    text = to_string(s)
    first, stop = to_int(start), to_int(end)
    first = max(first, 0)
    if stop < 0 or stop > len(text):
        stop = len(text)
    if first > stop:
        return ""
    return text[first:stop]


# ---------------------------------------------------------------------------
# Case
# ---------------------------------------------------------------------------


def upper(s: object) -> str:
    return to_string(s).upper()


def lower(s: object) -> str:
    return to_string(s).lower()


def title(s: object) -> str:
    """Capitalize every whitespace-separated word and lowercase the rest."""
    words = to_string(s).split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def untitle(s: object) -> str:
    text = to_string(s)
    return text[:1].lower() + text[1:]


def swapcase(s: object) -> str:
    return "".join(ch.lower() if ch.isupper() else ch.upper() for ch in to_string(s))


def _separate_words(s: object, separator: str) -> str:
    parts: list[str] = []
    for index, ch in enumerate(to_string(s)):
        if ch.isupper():
            if index > 0:
                parts.append(separator)
            parts.append(ch.lower())
        else:
            parts.append(ch)
    return "".join(parts)


def snakecase(s: object) -> str:
    """Insert `_` before each uppercase letter (except the first) and lowercase."""
    return _separate_words(s, "_")


def kebabcase(s: object) -> str:
    return _separate_words(s, "-")


def camelcase(s: object) -> str:
    """Join alphanumeric runs into PascalCase: `hello_world` -> `HelloWorld`."""
    words: list[str] = []
    current: list[str] = []
    for ch in to_string(s):
        if ch.isalnum():
            current.append(ch)
        elif current:
            words.append("".join(current))
            current = []
    if current:
        words.append("".join(current))
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def initials(s: object) -> str:
    return "".join(word[:1].upper() for word in to_string(s).split())


# ---------------------------------------------------------------------------
# Whitespace and layout
# ---------------------------------------------------------------------------


def trim(s: object) -> str:
    return to_string(s).strip()


def trimall(cutset: object, s: object) -> str:
    return to_string(s).strip(to_string(cutset))


def trim_suffix(s: object, suffix: object) -> str:
    return to_string(s).removesuffix(to_string(suffix))


def trim_prefix(s: object, prefix: object) -> str:
    return to_string(s).removeprefix(to_string(prefix))


def nospace(s: object) -> str:
    return "".join(ch for ch in to_string(s) if not ch.isspace())


def _wrap_lines(s: object, width: object, separator: str) -> str:
    text, limit = to_string(s), to_int(width)
    words = text.split()
    if limit <= 0 or not words:
        return text
    lines: list[str] = []
    line = ""
    for word in words:
        if len(line) + len(word) + 1 <= limit:
            line = f"{line} {word}" if line else word
        else:
            if line:
                lines.append(line)
            line = word
    if line:
        lines.append(line)
    return separator.join(lines)


def wrap(width: object, s: object) -> str:
    """Greedy word wrap at `width` columns; long words are never split."""
    return _wrap_lines(s, width, "\n")


def wrap_with(width: object, separator: object, s: object) -> str:
    return _wrap_lines(s, width, to_string(separator))


def indent(spaces: object, s: object) -> str:
    pad = " " * max(to_int(spaces), 0)
    return "\n".join(pad + line for line in to_string(s).split("\n"))


def nindent(spaces: object, s: object) -> str:
    return "\n" + indent(spaces, s)


def repeat(s: object, count: object) -> str:
    return to_string(s) * max(to_int(count), 0)


def replace(s: object, old: object, new: object, n: object = -1) -> str:
    """Replace occurrences of `old`; a non-negative `n` limits the count."""
    limit = to_int(n)
    return to_string(s).replace(
        to_string(old), to_string(new), limit if limit >= 0 else -1
    )


def plural(one: object, many: object, count: object) -> object:
    return one if to_int(count) == 1 else many


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def contains(haystack: object, needle: object) -> bool:
    return to_string(needle) in to_string(haystack)


def has_prefix(prefix: object, s: object) -> bool:
    return to_string(s).startswith(to_string(prefix))


def has_suffix(suffix: object, s: object) -> bool:
    return to_string(s).endswith(to_string(suffix))


# ---------------------------------------------------------------------------
# Quoting and joining
# ---------------------------------------------------------------------------

_QUOTE_ESCAPES = {
    "\a": r"\a",
    "\b": r"\b",
    "\f": r"\f",
    "\n": r"\n",
    "\r": r"\r",
    "\t": r"\t",
    "\v": r"\v",
    "\\": "\\\\",
    '"': '\\"',
}

_SURROGATE_ESCAPE_RANGE = range(0xDC80, 0xDD00)


def _quote_char(ch: str) -> str:
    if ch in _QUOTE_ESCAPES:
        return _QUOTE_ESCAPES[ch]
    code = ord(ch)
    if code in _SURROGATE_ESCAPE_RANGE:
        # Undecodable input byte carried through surrogateescape.
        return f"\\x{code - 0xDC00:02x}"
    if ch.isprintable():
        return ch
    if code < 0x80:  # noqa: PLR2004
        return f"\\x{code:02x}"
    if code <= 0xFFFF:  # noqa: PLR2004
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def quote(s: object) -> str:
    """Double-quote with backslash escapes for control and non-printable runes."""
    return '"' + "".join(_quote_char(ch) for ch in to_string(s)) + '"'


def squote(s: object) -> str:
    return "'" + to_string(s).replace("'", "\\'") + "'"


def strval(value: object) -> str:
    """Convert any value to a string; None becomes the empty string."""
    if isinstance(value, BaseException):
        return str(value)
    return to_string(value)


def cat(*values: object) -> str:
    """Concatenate the string form of every argument, no separator."""
    return "".join(strval(value) for value in values)


def to_strings(value: object) -> list[str]:
    if kind_of(value) is Kind.SLICE:
        return [strval(item) for item in value]  # type: ignore[attr-defined]
    return [strval(value)]


def join(separator: object, value: object) -> str:
    return to_string(separator).join(to_strings(value))


def sort_alpha(value: object) -> list[str]:
    return sorted(to_strings(value))


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------


def _split_all(separator: str, text: str) -> list[str]:
    if separator:
        return text.split(separator)
    return list(text)


def _split_n(separator: str, n: int, text: str) -> list[str]:
    if n == 0:
        return []
    if n < 0:
        return _split_all(separator, text)
    if separator:
        return text.split(separator, n - 1)
    head = list(text[: n - 1])
    remainder = text[n - 1 :]
    return [*head, remainder] if remainder else head


def split_list(separator: object, s: object) -> list[str]:
    return _split_all(to_string(separator), to_string(s))


def split(separator: object, s: object) -> dict[str, str]:
    """Split into a dict keyed by position: `{"0": ..., "1": ...}`."""
    parts = _split_all(to_string(separator), to_string(s))
    return {str(index): part for index, part in enumerate(parts)}


def splitn(separator: object, n: object, s: object) -> dict[str, str]:
    parts = _split_n(to_string(separator), to_int(n), to_string(s))
    return {str(index): part for index, part in enumerate(parts)}


def hello() -> str:
    return "Hello!"
