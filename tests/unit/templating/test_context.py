import pytest

from tmpl.templating import build_context, parse_environ


def test_parse_environ_splits_on_first_equals() -> None:
    assert parse_environ(["A=1", "B=x=y", "C", "A=2"]) == {
        "A": "2",
        "B": "x=y",
        "C": "",
    }


def test_build_context_is_sorted_snapshot() -> None:
    source = {"ZED": "1", "ALPHA": "2"}

    context = build_context(source)
    source["NEW"] = "3"

    assert list(context) == ["ALPHA", "ZED"]


def test_build_context_reads_process_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TMPL_CONTEXT_PROBE", "present")

    assert build_context()["TMPL_CONTEXT_PROBE"] == "present"
