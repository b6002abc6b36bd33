"""Function tables exposed to templates.

`build_table` assembles every template function under its public camelCase
name. `build_hermetic_table` drops the functions whose output depends on the
clock, randomness, the network or the environment, so rendering the same
template against the same context gives the same bytes on any machine.
"""

import os
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from . import (
    _collections,
    _crypto,
    _dates,
    _encoding,
    _generic,
    _network,
    _numeric,
    _paths,
    _random,
    _regex,
    _semver,
    _strings,
)
from ._os import EnvFunction, ExpandEnvFunction, fail

HERMETIC_EXCLUSIONS: frozenset[str] = frozenset(
    {
        # Clock
        "now",
        "date",
        "dateInZone",
        "date_in_zone",
        "dateModify",
        "date_modify",
        "mustDateModify",
        "must_date_modify",
        "ago",
        "toDate",
        "mustToDate",
        "unixEpoch",
        "htmlDate",
        "htmlDateInZone",
        "duration",
        "durationRound",
        # Randomness
        "randAlpha",
        "randAlphaNum",
        "randNumeric",
        "randAscii",
        "randBytes",
        "randInt",
        "shuffle",
        "uuidv4",
        "encryptAES",
        # Environment and network
        "env",
        "expandenv",
        "getHostByName",
    }
)


@dataclass(frozen=True, slots=True)
class FunctionRegistry(Mapping[str, Callable[..., object]]):
    """Read-only mapping from template function name to callable."""

    _functions: Mapping[str, Callable[..., object]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_functions", MappingProxyType(dict(self._functions))
        )

    def __getitem__(self, name: str) -> Callable[..., object]:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def get(  # type: ignore[override]
        self, name: str, default: Callable[..., object] | None = None
    ) -> Callable[..., object] | None:
        """Get function by name.

        Args:
            name: Template function name.
            default: Value returned when the name is not registered.

        Returns:
            The function callable, or `default` if not found.
        """
        return self._functions.get(name, default)

    def all_functions(self) -> dict[str, Callable[..., object]]:
        """Get all registered functions.

        Returns:
            A copy of the function table.
        """
        return dict(self._functions)

    def names(self) -> list[str]:
        return sorted(self._functions)

    def without(self, names: Iterable[str]) -> "FunctionRegistry":
        """Return a new registry with `names` removed."""
        excluded = frozenset(names)
        return FunctionRegistry(
            {name: fn for name, fn in self._functions.items() if name not in excluded}
        )


def _string_functions() -> dict[str, Callable[..., object]]:
    return {
        "hello": _strings.hello,
        "abbrev": _strings.abbrev,
        "abbrevboth": _strings.abbrevboth,
        "trunc": _strings.trunc,
        "trim": _strings.trim,
        "upper": _strings.upper,
        "lower": _strings.lower,
        "title": _strings.title,
        "untitle": _strings.untitle,
        "substr": _strings.substr,
        "repeat": _strings.repeat,
        "trimall": _strings.trimall,
        "trimAll": _strings.trimall,
        "trimSuffix": _strings.trim_suffix,
        "trimPrefix": _strings.trim_prefix,
        "nospace": _strings.nospace,
        "initials": _strings.initials,
        "randAlphaNum": _random.rand_alpha_num,
        "randAlpha": _random.rand_alpha,
        "randAscii": _random.rand_ascii,
        "randNumeric": _random.rand_numeric,
        "swapcase": _strings.swapcase,
        "shuffle": _random.shuffle,
        "snakecase": _strings.snakecase,
        "camelcase": _strings.camelcase,
        "kebabcase": _strings.kebabcase,
        "wrap": _strings.wrap,
        "wrapWith": _strings.wrap_with,
        "contains": _strings.contains,
        "hasPrefix": _strings.has_prefix,
        "hasSuffix": _strings.has_suffix,
        "quote": _strings.quote,
        "squote": _strings.squote,
        "cat": _strings.cat,
        "indent": _strings.indent,
        "nindent": _strings.nindent,
        "replace": _strings.replace,
        "plural": _strings.plural,
        "toString": _strings.strval,
        # String lists
        "split": _strings.split,
        "splitList": _strings.split_list,
        "splitn": _strings.splitn,
        "toStrings": _strings.to_strings,
        "join": _strings.join,
        "sortAlpha": _strings.sort_alpha,
    }


def _date_functions() -> dict[str, Callable[..., object]]:
    return {
        "ago": _dates.ago,
        "date": _dates.date_,
        "date_in_zone": _dates.date_in_zone,
        "dateInZone": _dates.date_in_zone,
        "date_modify": _dates.date_modify,
        "dateModify": _dates.date_modify,
        "duration": _dates.duration,
        "durationRound": _dates.duration_round,
        "htmlDate": _dates.html_date,
        "htmlDateInZone": _dates.html_date_in_zone,
        "must_date_modify": _dates.must_date_modify,
        "mustDateModify": _dates.must_date_modify,
        "mustToDate": _dates.must_to_date,
        "now": _dates.now,
        "toDate": _dates.to_date,
        "unixEpoch": _dates.unix_epoch,
    }


def _numeric_functions() -> dict[str, Callable[..., object]]:
    return {
        "atoi": _numeric.atoi,
        "int64": _numeric.int64,
        "int": _generic.to_int,
        "toInt": _generic.to_int,
        "float64": _numeric.float64,
        "toDecimal": _numeric.float64,
        "seq": _numeric.seq,
        "until": _numeric.until,
        "untilStep": _numeric.until_step,
        "add1": _numeric.add1,
        "add": _numeric.add,
        "sub": _numeric.sub,
        "div": _numeric.div,
        "mod": _numeric.mod,
        "mul": _numeric.mul,
        "randInt": _random.rand_int,
        "add1f": _numeric.add1f,
        "addf": _numeric.addf,
        "subf": _numeric.subf,
        "divf": _numeric.divf,
        "mulf": _numeric.mulf,
        "biggest": _numeric.biggest,
        "max": _numeric.biggest,
        "min": _numeric.smallest,
        "maxf": _numeric.maxf,
        "minf": _numeric.minf,
        "ceil": _numeric.ceil,
        "floor": _numeric.floor,
        "round": _numeric.round_,
    }


def _generic_functions() -> dict[str, Callable[..., object]]:
    return {
        # Defaults
        "default": _generic.default,
        "empty": _generic.is_empty,
        "coalesce": _generic.coalesce,
        "all": _generic.all_of,
        "any": _generic.any_of,
        "ternary": _generic.ternary,
        "deepCopy": _generic.deep_copy,
        "mustDeepCopy": _generic.must_deep_copy,
        # Reflection
        "typeOf": _generic.type_of,
        "typeIs": _generic.type_is,
        "typeIsLike": _generic.type_is_like,
        "kindOf": _generic.kind_name,
        "kindIs": _generic.kind_is,
        "deepEqual": _generic.equal,
        # Comparison
        "eq": _generic.eq,
        "ne": _generic.ne,
        "lt": _generic.lt,
        "le": _generic.le,
        "gt": _generic.gt,
        "ge": _generic.ge,
        "len": _generic.length,
        "fail": fail,
    }


def _encoding_functions() -> dict[str, Callable[..., object]]:
    return {
        "sha1sum": _encoding.sha1sum,
        "sha256sum": _encoding.sha256sum,
        "sha512sum": _encoding.sha512sum,
        "adler32sum": _encoding.adler32sum,
        "md5sum": _encoding.md5sum,
        "b64enc": _encoding.b64enc,
        "b64dec": _encoding.b64dec,
        "b32enc": _encoding.b32enc,
        "b32dec": _encoding.b32dec,
        "fromJson": _encoding.from_json,
        "toJson": _encoding.to_json,
        "toPrettyJson": _encoding.to_pretty_json,
        "toRawJson": _encoding.to_json,
        "mustFromJson": _encoding.must_from_json,
        "mustToJson": _encoding.must_to_json,
        "mustToPrettyJson": _encoding.must_to_pretty_json,
        "mustToRawJson": _encoding.must_to_json,
        "fromYaml": _encoding.from_yaml,
        "toYaml": _encoding.to_yaml,
        "mustFromYaml": _encoding.must_from_yaml,
        "mustToYaml": _encoding.must_to_yaml,
    }


def _collection_functions() -> dict[str, Callable[..., object]]:
    return {
        "tuple": _collections.list_,
        "list": _collections.list_,
        "dict": _collections.dict_,
        "get": _collections.get,
        "set": _collections.set_,
        "unset": _collections.unset,
        "hasKey": _collections.has_key,
        "pluck": _collections.pluck,
        "keys": _collections.keys,
        "pick": _collections.pick,
        "omit": _collections.omit,
        "merge": _collections.merge,
        "mergeOverwrite": _collections.merge,
        "mustMerge": _collections.must_merge,
        "mustMergeOverwrite": _collections.must_merge,
        "values": _collections.values,
        "append": _collections.push,
        "push": _collections.push,
        "mustAppend": _collections.must_push,
        "mustPush": _collections.must_push,
        "prepend": _collections.prepend,
        "mustPrepend": _collections.must_prepend,
        "first": _collections.first,
        "mustFirst": _collections.must_first,
        "rest": _collections.rest,
        "mustRest": _collections.must_rest,
        "last": _collections.last,
        "mustLast": _collections.must_last,
        "initial": _collections.initial,
        "mustInitial": _collections.must_initial,
        "reverse": _collections.reverse,
        "mustReverse": _collections.must_reverse,
        "uniq": _collections.uniq,
        "mustUniq": _collections.must_uniq,
        "without": _collections.without,
        "mustWithout": _collections.must_without,
        "has": _collections.has,
        "mustHas": _collections.must_has,
        "slice": _collections.slice_,
        "mustSlice": _collections.must_slice,
        "concat": _collections.concat,
        "dig": _collections.dig,
        "chunk": _collections.chunk,
        "mustChunk": _collections.must_chunk,
        "compact": _collections.compact,
        "mustCompact": _collections.must_compact,
    }


def _crypto_functions() -> dict[str, Callable[..., object]]:
    return {
        "bcrypt": _crypto.bcrypt,
        "htpasswd": _crypto.htpasswd,
        "genPrivateKey": _crypto.gen_private_key,
        "derivePassword": _crypto.derive_password,
        "buildCustomCert": _crypto.build_custom_cert,
        "genCA": _crypto.gen_ca,
        "genCAWithKey": _crypto.gen_ca_with_key,
        "genSelfSignedCert": _crypto.gen_self_signed_cert,
        "genSelfSignedCertWithKey": _crypto.gen_self_signed_cert_with_key,
        "genSignedCert": _crypto.gen_signed_cert,
        "genSignedCertWithKey": _crypto.gen_signed_cert_with_key,
        "encryptAES": _crypto.encrypt_aes,
        "decryptAES": _crypto.decrypt_aes,
        "randBytes": _random.rand_bytes,
        "addPEMHeader": _crypto.add_pem_header,
        "uuidv4": _random.uuidv4,
    }


def _misc_functions(environ: Mapping[str, str]) -> dict[str, Callable[..., object]]:
    return {
        # OS
        "env": EnvFunction(environ=environ),
        "expandenv": ExpandEnvFunction(environ=environ),
        # Network
        "getHostByName": _network.get_host_by_name,
        "urlParse": _network.url_parse,
        "urlJoin": _network.url_join,
        # Paths
        "base": _paths.base,
        "dir": _paths.dir_,
        "clean": _paths.clean,
        "ext": _paths.ext,
        "isAbs": _paths.is_abs,
        "osBase": _paths.os_base,
        "osClean": _paths.os_clean,
        "osDir": _paths.os_dir,
        "osExt": _paths.os_ext,
        "osIsAbs": _paths.os_is_abs,
        # SemVer
        "semver": _semver.semver,
        "semverCompare": _semver.semver_compare,
        # Regex
        "regexMatch": _regex.regex_match,
        "mustRegexMatch": _regex.must_regex_match,
        "regexFindAll": _regex.regex_find_all,
        "mustRegexFindAll": _regex.must_regex_find_all,
        "regexFind": _regex.regex_find,
        "mustRegexFind": _regex.must_regex_find,
        "regexReplaceAll": _regex.regex_replace_all,
        "mustRegexReplaceAll": _regex.must_regex_replace_all,
        "regexReplaceAllLiteral": _regex.regex_replace_all_literal,
        "mustRegexReplaceAllLiteral": _regex.must_regex_replace_all_literal,
        "regexSplit": _regex.regex_split,
        "mustRegexSplit": _regex.must_regex_split,
        "regexQuoteMeta": _regex.regex_quote_meta,
    }


def build_table(environ: Mapping[str, str] | None = None) -> FunctionRegistry:
    """Create a registry with every template function.

    Args:
        environ: Environment snapshot for `env` and `expandenv`. Defaults to
            a copy of `os.environ` taken now.

    Returns:
        A FunctionRegistry with the full function table.

    Raises:
        ValueError: If two function groups register the same name.
    """
    snapshot = dict(os.environ if environ is None else environ)
    functions: dict[str, Callable[..., object]] = {}
    for group in (
        _string_functions(),
        _date_functions(),
        _numeric_functions(),
        _generic_functions(),
        _encoding_functions(),
        _collection_functions(),
        _crypto_functions(),
        _misc_functions(snapshot),
    ):
        duplicates = functions.keys() & group.keys()
        if duplicates:
            msg = f"function names registered twice: {sorted(duplicates)}"
            raise ValueError(msg)
        functions.update(group)
    return FunctionRegistry(functions)


def build_hermetic_table(environ: Mapping[str, str] | None = None) -> FunctionRegistry:
    """Create a registry without clock, random, network or environment functions."""
    return build_table(environ).without(HERMETIC_EXCLUSIONS)
