import pytest
from jinja2 import StrictUndefined, Undefined, UndefinedError

from tmpl.functions import build_hermetic_table
from tmpl.templating import (
    EnvironmentConfig,
    MissingKeyPolicy,
    NoValueUndefined,
    create_environment,
)


def _render(
    source: str, config: EnvironmentConfig | None = None, **context: str
) -> str:
    env = create_environment(build_hermetic_table({}), config=config)
    return env.from_string(source).render(**context)


class TestFunctionInstallation:
    def test_functions_are_globals(self) -> None:
        assert _render('{{ indent(2, "a\nb") }}') == "  a\n  b"

    def test_piped_value_is_last_argument(self) -> None:
        assert _render("{{ NAME | abbrev(8) }}", NAME="hello world") == "hello..."

    def test_natural_argument_order_for_globals(self) -> None:
        assert _render('{{ trimSuffix(NAME, "-dev") }}', NAME="x-dev") == "x"

    def test_table_filters_replace_builtins(self) -> None:
        assert _render('{{ MISSING | default("anon") }}') == "anon"
        assert _render('{{ "" | default("anon") }}') == "anon"
        assert _render("{{ [3, 1, 3] | uniq | join(',') }}") == "3,1"

    def test_collections_built_in_template(self) -> None:
        source = '{{ merge(dict("a", 1), dict("a", 2, "b", 3)) | toJson }}'

        assert _render(source) == '{"a":2,"b":3}'


class TestMissingKeyPolicy:
    def test_zero_renders_empty(self) -> None:
        assert _render("[{{ MISSING }}]") == "[]"

    def test_default_renders_no_value(self) -> None:
        config = EnvironmentConfig(missing_key=MissingKeyPolicy.DEFAULT)

        assert _render("[{{ MISSING }}]", config) == "[<no value>]"

    def test_error_raises(self) -> None:
        config = EnvironmentConfig(missing_key=MissingKeyPolicy.ERROR)

        with pytest.raises(UndefinedError):
            _render("{{ MISSING }}", config)

    def test_error_applies_to_function_arguments(self) -> None:
        config = EnvironmentConfig(missing_key=MissingKeyPolicy.ERROR)

        with pytest.raises(UndefinedError):
            _render("{{ upper(MISSING) }}", config)
        with pytest.raises(UndefinedError):
            _render("{{ MISSING | upper }}", config)

    def test_zero_passes_undefined_to_functions(self) -> None:
        assert _render("[{{ upper(MISSING) }}]") == "[]"

    @pytest.mark.parametrize(
        ("policy", "undefined"),
        [
            (MissingKeyPolicy.ERROR, StrictUndefined),
            (MissingKeyPolicy.ZERO, Undefined),
            (MissingKeyPolicy.DEFAULT, NoValueUndefined),
        ],
    )
    def test_policy_selects_undefined_type(
        self, policy: MissingKeyPolicy, undefined: type[Undefined]
    ) -> None:
        env = create_environment(
            build_hermetic_table({}), config=EnvironmentConfig(missing_key=policy)
        )

        assert env.undefined is undefined


class TestEnvironmentOptions:
    def test_autoescape(self) -> None:
        config = EnvironmentConfig(autoescape=True)

        assert _render("{{ V }}", config, V="<b>") == "&lt;b&gt;"
        assert _render("{{ V }}", V="<b>") == "<b>"

    def test_trailing_newline_is_kept(self) -> None:
        assert _render("x\n") == "x\n"
