"""Random strings, bytes, integers and UUIDs.

All values come from the `secrets` CSPRNG, so output differs between runs.
These helpers are excluded from the hermetic function table.
"""

import base64
import secrets
import string
import uuid

from ._generic import to_int, to_string

_ASCII_PRINTABLE = "".join(chr(code) for code in range(32, 127))
_system_random = secrets.SystemRandom()


def _random_string(alphabet: str, count: object) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(max(to_int(count), 0)))


def rand_alpha_num(count: object) -> str:
    return _random_string(string.ascii_letters + string.digits, count)


def rand_alpha(count: object) -> str:
    return _random_string(string.ascii_letters, count)


def rand_numeric(count: object) -> str:
    return _random_string(string.digits, count)


def rand_ascii(count: object) -> str:
    """Random printable ASCII characters, space through tilde."""
    return _random_string(_ASCII_PRINTABLE, count)


def rand_bytes(count: object) -> str:
    """Base64 encoding of `count` random bytes."""
    return base64.b64encode(secrets.token_bytes(max(to_int(count), 0))).decode("ascii")


def rand_int(minimum: object, maximum: object) -> int:
    """Random integer in `[minimum, maximum)`; an empty range yields `minimum`."""
    low, high = to_int(minimum), to_int(maximum)
    if high <= low:
        return low
    return low + secrets.randbelow(high - low)


def shuffle(s: object) -> str:
    chars = list(to_string(s))
    _system_random.shuffle(chars)
    return "".join(chars)


def uuidv4() -> str:
    return str(uuid.uuid4())
