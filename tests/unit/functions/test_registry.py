import pytest

from tmpl.functions import (
    HERMETIC_EXCLUSIONS,
    FunctionRegistry,
    _registry,
    build_hermetic_table,
    build_table,
)


class TestBuildTable:
    def test_contains_core_functions(self) -> None:
        table = build_table({})

        for name in ("upper", "deepCopy", "slice", "merge", "semverCompare", "dig"):
            assert name in table

    def test_aliases_share_implementations(self) -> None:
        table = build_table({})

        assert table["mergeOverwrite"] is table["merge"]
        assert table["toDecimal"] is table["float64"]
        assert table["append"] is table["push"]

    def test_env_is_bound_to_snapshot(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMPL_TEST_VALUE", "before")
        table = build_table()
        monkeypatch.setenv("TMPL_TEST_VALUE", "after")

        assert table["env"]("TMPL_TEST_VALUE") == "before"

    def test_explicit_environment(self) -> None:
        table = build_table({"NAME": "zaphod"})

        assert table["expandenv"]("hi $NAME") == "hi zaphod"

    def test_function_groups_do_not_overlap(self) -> None:
        groups = [
            _registry._string_functions(),
            _registry._date_functions(),
            _registry._numeric_functions(),
            _registry._generic_functions(),
            _registry._encoding_functions(),
            _registry._collection_functions(),
            _registry._crypto_functions(),
            _registry._misc_functions({}),
        ]

        assert len(build_table({})) == sum(len(group) for group in groups)

    def test_duplicate_names_are_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(_registry, "_crypto_functions", lambda: {"upper": str})

        with pytest.raises(ValueError, match="upper"):
            build_table({})


class TestHermeticTable:
    def test_every_exclusion_exists_in_full_table(self) -> None:
        assert HERMETIC_EXCLUSIONS <= set(build_table({}))

    def test_excludes_nondeterministic_functions(self) -> None:
        table = build_hermetic_table({})

        assert not HERMETIC_EXCLUSIONS & set(table)
        assert "upper" in table
        assert "now" not in table
        assert "env" not in table


class TestFunctionRegistry:
    def test_is_read_only(self) -> None:
        registry = FunctionRegistry({"upper": str.upper})

        with pytest.raises(TypeError):
            registry["lower"] = str.lower  # type: ignore[index]

    def test_lookup_helpers(self) -> None:
        registry = FunctionRegistry({"b": str.upper, "a": str.lower})

        assert registry.names() == ["a", "b"]
        assert registry.get("missing") is None
        assert registry.all_functions() == {"b": str.upper, "a": str.lower}
        assert len(registry) == 2

    def test_without_returns_new_registry(self) -> None:
        registry = FunctionRegistry({"a": str.lower, "b": str.upper})

        smaller = registry.without(["a"])

        assert list(smaller) == ["b"]
        assert "a" in registry
