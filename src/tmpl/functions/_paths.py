"""Path manipulation helpers.

The unprefixed helpers treat paths as slash-separated strings regardless of
platform (URL paths, archive member names). The `os`-prefixed helpers use the
host separator.
"""

import os

from ._generic import to_string


def clean(p: object) -> str:
    """Return the shortest equivalent slash-separated path.

    Repeated slashes collapse, `.` elements are dropped, and `..` removes the
    preceding element. `..` at the root of an absolute path is dropped. An
    empty result becomes `.`.
    """
    path = to_string(p)
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in {"", "."}:
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    result = "/".join(parts)
    if rooted:
        return "/" + result
    return result or "."


def base(p: object) -> str:
    """Return the last element of a path; trailing slashes are ignored."""
    path = to_string(p)
    if not path:
        return "."
    path = path.rstrip("/")
    if not path:
        return "/"
    return path.rsplit("/", 1)[-1]


def dir_(p: object) -> str:
    """Return all but the last element of a path, cleaned."""
    path = to_string(p)
    head = path[: path.rfind("/") + 1]
    return clean(head)


def ext(p: object) -> str:
    """Return the extension of the final element, including the dot."""
    path = to_string(p)
    for index in range(len(path) - 1, -1, -1):
        if path[index] == "/":
            break
        if path[index] == ".":
            return path[index:]
    return ""


def is_abs(p: object) -> bool:
    return to_string(p).startswith("/")


def _to_slash(p: object) -> str:
    path = to_string(p)
    return path if os.sep == "/" else path.replace(os.sep, "/")


def _from_slash(path: str) -> str:
    return path if os.sep == "/" else path.replace("/", os.sep)


def os_base(p: object) -> str:
    result = base(_to_slash(p))
    return os.sep if result == "/" else _from_slash(result)


def os_clean(p: object) -> str:
    return _from_slash(clean(_to_slash(p)))


def os_dir(p: object) -> str:
    return _from_slash(dir_(_to_slash(p)))


def os_ext(p: object) -> str:
    return ext(_to_slash(p))


def os_is_abs(p: object) -> bool:
    return os.path.isabs(to_string(p))
