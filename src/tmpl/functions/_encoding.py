"""Digests, binary-to-text encodings and JSON/YAML serialization."""

import base64
import binascii
import dataclasses
import hashlib
import zlib
from collections.abc import Set

import orjson
import yaml
from pydantic import BaseModel

from tmpl.exceptions import ConversionError

from ._generic import Kind, kind_of, to_string


def to_bytes(value: object) -> bytes:
    """Encode a value for hashing or encoding.

    Strings use UTF-8 with `surrogateescape` so undecodable template input
    round-trips to its original bytes.
    """
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    return to_string(value).encode("utf-8", errors="surrogateescape")


def from_bytes(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


# ---------------------------------------------------------------------------
# Digests
# ---------------------------------------------------------------------------


def sha1sum(value: object) -> str:
    return hashlib.sha1(to_bytes(value)).hexdigest()  # noqa: S324


def sha256sum(value: object) -> str:
    return hashlib.sha256(to_bytes(value)).hexdigest()


def sha512sum(value: object) -> str:
    return hashlib.sha512(to_bytes(value)).hexdigest()


def md5sum(value: object) -> str:
    return hashlib.md5(to_bytes(value)).hexdigest()  # noqa: S324


def adler32sum(value: object) -> str:
    """Adler-32 checksum as a decimal string."""
    return str(zlib.adler32(to_bytes(value)))


# ---------------------------------------------------------------------------
# Base32 / Base64
# ---------------------------------------------------------------------------


def b64enc(value: object) -> str:
    return base64.b64encode(to_bytes(value)).decode("ascii")


def b64dec(value: object) -> str:
    """Decode standard base64; malformed input yields the error message."""
    try:
        return from_bytes(base64.b64decode(to_bytes(value), validate=True))
    except binascii.Error as e:
        return f"illegal base64 data: {e}"


def b32enc(value: object) -> str:
    return base64.b32encode(to_bytes(value)).decode("ascii")


def b32dec(value: object) -> str:
    """Decode standard base32; malformed input yields the error message."""
    try:
        return from_bytes(base64.b32decode(to_bytes(value)))
    except binascii.Error as e:
        return f"illegal base32 data: {e}"


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def to_plain(value: object) -> object:
    """Reduce a template value to JSON/YAML-compatible builtins.

    Tuples and sets become lists, mappings become dicts, records become dicts
    of their fields, and absent values become None.
    """
    match kind_of(value):
        case Kind.INVALID:
            return None
        case Kind.MAP:
            return {
                key: to_plain(item)
                for key, item in value.items()  # type: ignore[attr-defined]
            }
        case Kind.SLICE | Kind.SET:
            items = value
            if isinstance(value, Set):
                items = sorted(value, key=repr)
            return [to_plain(item) for item in items]  # type: ignore[attr-defined]
        case Kind.BYTES:
            return from_bytes(bytes(value))  # type: ignore[arg-type]
        case Kind.STRUCT:
            if isinstance(value, BaseModel):
                return to_plain(value.model_dump())
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                return to_plain(dataclasses.asdict(value))
            if isinstance(value, tuple) and hasattr(value, "_asdict"):
                return to_plain(value._asdict())
            return to_string(value)
        case _:
            return value


_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS


def _dump_json(value: object, *, pretty: bool = False) -> str:
    option = _JSON_OPTIONS | (orjson.OPT_INDENT_2 if pretty else 0)
    return orjson.dumps(to_plain(value), option=option).decode("utf-8")


def to_json(value: object) -> str:
    try:
        return _dump_json(value)
    except orjson.JSONEncodeError:
        return ""


def to_pretty_json(value: object) -> str:
    try:
        return _dump_json(value, pretty=True)
    except orjson.JSONEncodeError:
        return ""


def must_to_json(value: object) -> str:
    try:
        return _dump_json(value)
    except orjson.JSONEncodeError as e:
        msg = f"mustToJson: {e}"
        raise ConversionError(msg, value=value) from e


def must_to_pretty_json(value: object) -> str:
    try:
        return _dump_json(value, pretty=True)
    except orjson.JSONEncodeError as e:
        msg = f"mustToPrettyJson: {e}"
        raise ConversionError(msg, value=value) from e


def from_json(value: object) -> object:
    """Parse JSON; malformed input yields the empty string."""
    try:
        return orjson.loads(to_bytes(value))
    except orjson.JSONDecodeError:
        return ""


def must_from_json(value: object) -> object:
    try:
        return orjson.loads(to_bytes(value))
    except orjson.JSONDecodeError as e:
        msg = f"mustFromJson: {e}"
        raise ConversionError(msg, value=value) from e


def _dump_yaml(value: object) -> str:
    return yaml.safe_dump(
        to_plain(value),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=True,
    )


def to_yaml(value: object) -> str:
    try:
        return _dump_yaml(value)
    except (yaml.YAMLError, TypeError):
        return ""


def must_to_yaml(value: object) -> str:
    try:
        return _dump_yaml(value)
    except (yaml.YAMLError, TypeError) as e:
        msg = f"mustToYaml: {e}"
        raise ConversionError(msg, value=value) from e


def from_yaml(value: object) -> object:
    """Parse YAML; malformed input yields the empty string."""
    try:
        return yaml.safe_load(to_string(value))
    except yaml.YAMLError:
        return ""


def must_from_yaml(value: object) -> object:
    try:
        return yaml.safe_load(to_string(value))
    except yaml.YAMLError as e:
        msg = f"mustFromYaml: {e}"
        raise ConversionError(msg, value=value) from e
