import pytest

from tmpl.exceptions import FunctionError
from tmpl.functions._os import EnvFunction, ExpandEnvFunction, fail


def test_env_reads_bound_environment() -> None:
    env = EnvFunction({"HOME": "/home/arthur"})

    assert env("HOME") == "/home/arthur"
    assert env("MISSING") == ""


class TestExpandEnv:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("$NAME/bin", "dent/bin"),
            ("${NAME}s", "dents"),
            ("$MISSING|", "|"),
            ("cost $ 5", "cost $ 5"),
            ("open ${", "open "),
        ],
    )
    def test_expands_references(self, text: str, expected: str) -> None:
        expand = ExpandEnvFunction({"NAME": "dent"})

        assert expand(text) == expected


def test_fail_raises_function_error() -> None:
    with pytest.raises(FunctionError, match="towel missing"):
        fail("towel missing")
