from dataclasses import dataclass

import pytest

from tmpl.exceptions import ConversionError
from tmpl.functions._encoding import (
    adler32sum,
    b32dec,
    b32enc,
    b64dec,
    b64enc,
    from_json,
    from_yaml,
    must_from_json,
    sha256sum,
    to_json,
    to_pretty_json,
    to_yaml,
)


@dataclass
class Service:
    name: str
    ports: tuple[int, ...]


class TestDigests:
    def test_sha256sum(self) -> None:
        assert (
            sha256sum("abc")
            == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_adler32sum_is_decimal(self) -> None:
        assert adler32sum("Wikipedia") == "300286872"


class TestBaseEncodings:
    def test_b64_round_trip(self) -> None:
        assert b64enc("hello") == "aGVsbG8="
        assert b64dec("aGVsbG8=") == "hello"

    def test_b64dec_reports_malformed_input(self) -> None:
        assert b64dec("not base64!").startswith("illegal base64 data")

    def test_b32(self) -> None:
        assert b32enc("hi") == "NBUQ===="
        assert b32dec("NBUQ====") == "hi"


class TestJson:
    def test_keys_are_sorted_and_compact(self) -> None:
        assert to_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_records_become_objects(self) -> None:
        assert to_json(Service("web", (80, 443))) == '{"name":"web","ports":[80,443]}'

    def test_pretty_json_indents(self) -> None:
        assert to_pretty_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_from_json_degrades_to_empty_string(self) -> None:
        assert from_json('{"a": [1]}') == {"a": [1]}
        assert from_json("{") == ""

    def test_must_from_json_raises(self) -> None:
        with pytest.raises(ConversionError):
            must_from_json("{")


class TestYaml:
    def test_to_yaml_block_style(self) -> None:
        assert to_yaml({"b": [1, 2], "a": "x"}) == "a: x\nb:\n- 1\n- 2\n"

    def test_from_yaml(self) -> None:
        assert from_yaml("a: 1\nb: [x]\n") == {"a": 1, "b": ["x"]}
        assert from_yaml("a: [") == ""
