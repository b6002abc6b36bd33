"""Date, time and duration helpers.

Format strings are reference layouts: the reference time
`Mon Jan 2 15:04:05 MST 2006` written the way the output should look. For
example `2006-01-02` renders an ISO date and `3:04PM` a 12-hour clock time.

Durations are written as a sequence of decimal numbers with unit suffixes,
such as `300ms`, `-1.5h` or `2h45m`. Valid units are `ns`, `us` (or `µs`),
`ms`, `s`, `m` and `h`.

Every helper here depends on the clock or the host time zone database and is
excluded from the hermetic function table.
"""

import re
from datetime import UTC, date, datetime, timedelta, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Self
from zoneinfo import ZoneInfo

import pendulum

from tmpl.exceptions import ConversionError

from ._generic import Kind, kind_of, to_string

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_SECOND = timedelta(seconds=1)
_ONE_MICROSECOND = timedelta(microseconds=1)

_LONG_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_LONG_DAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_UNIT_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}
_DURATION_PART = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")
_WHOLE_SECONDS = re.compile(r"[+-]?[0-9]+")


class Duration(timedelta):
    """A `timedelta` that prints in unit-suffixed form, e.g. `1h30m0s`."""

    __slots__ = ()

    @classmethod
    def of(cls, delta: timedelta) -> Self:
        return cls(microseconds=delta // _ONE_MICROSECOND)

    def __str__(self) -> str:
        return format_duration(self)


def _format_fraction(whole: int, remainder: int, width: int) -> str:
    if not remainder:
        return str(whole)
    return f"{whole}." + f"{remainder:0{width}d}".rstrip("0")


def format_duration(delta: timedelta) -> str:
    """Render a duration with the largest units first: `72h3m0.5s`, `1.5ms`."""
    total = delta // _ONE_MICROSECOND
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    micros = abs(total)
    if micros < 1_000:  # noqa: PLR2004
        return f"{sign}{micros}µs"
    if micros < 1_000_000:  # noqa: PLR2004
        return f"{sign}{_format_fraction(*divmod(micros, 1_000), 3)}ms"
    seconds, fraction = divmod(micros, 1_000_000)
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{_format_fraction(seconds, fraction, 6)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


def parse_duration(text: str) -> Duration:
    """Parse a unit-suffixed duration string.

    Raises:
        ValueError: If the string is empty, has an unknown unit, or a
            component without digits.
    """
    body = text
    negative = False
    if body[:1] in {"+", "-"}:
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return Duration()
    if not body:
        msg = f'invalid duration "{text}"'
        raise ValueError(msg)
    total = Decimal(0)
    position = 0
    while position < len(body):
        part = _DURATION_PART.match(body, position)
        if part is None or part[1] in {"", "."}:
            msg = f'invalid duration "{text}"'
            raise ValueError(msg)
        try:
            total += Decimal(part[1]) * _UNIT_MICROSECONDS[part[2]]
        except InvalidOperation as e:
            msg = f'invalid duration "{text}"'
            raise ValueError(msg) from e
        position = part.end()
    micros = int(total)
    return Duration(microseconds=-micros if negative else micros)


def duration(value: object) -> Duration:
    """Convert a duration string, or a number of seconds, into a `Duration`.

    Unparseable input yields a zero duration.
    """
    if isinstance(value, timedelta):
        return Duration.of(value)
    try:
        match kind_of(value):
            case Kind.INT | Kind.FLOAT:
                return Duration(seconds=value)  # type: ignore[arg-type]
            case Kind.STRING:
                if _WHOLE_SECONDS.fullmatch(value):  # type: ignore[arg-type]
                    return Duration(seconds=int(value))  # type: ignore[arg-type]
                return parse_duration(value)  # type: ignore[arg-type]
    except (ValueError, OverflowError):
        return Duration()
    return Duration()


def duration_round(value: object) -> Duration:
    """Round a duration to the nearest second, halves away from zero."""
    delta = duration(value)
    micros = delta // _ONE_MICROSECOND
    seconds, remainder = divmod(abs(micros), 1_000_000)
    if remainder * 2 >= 1_000_000:
        seconds += 1
    return Duration(seconds=-seconds if micros < 0 else seconds)


# ---------------------------------------------------------------------------
# Reference layouts
# ---------------------------------------------------------------------------

_OFFSET_LAYOUTS = (
    ("Z07:00:00", True, ":", True),
    ("-07:00:00", False, ":", True),
    ("Z070000", True, "", True),
    ("-070000", False, "", True),
    ("Z07:00", True, ":", False),
    ("-07:00", False, ":", False),
    ("Z0700", True, "", False),
    ("-0700", False, "", False),
)


def _format_offset(
    moment: datetime,
    *,
    zulu: bool,
    separator: str,
    seconds: bool,
    minutes: bool = True,
) -> str:
    offset = moment.utcoffset() or timedelta()
    total = int(offset.total_seconds())
    if zulu and total == 0:
        return "Z"
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    mins, secs = divmod(rest, 60)
    text = f"{sign}{hours:02d}"
    if minutes:
        text += f"{separator}{mins:02d}"
    if seconds:
        text += f"{separator}{secs:02d}"
    return text


def _format_frac(moment: datetime, separator: str, digits: str) -> str:
    nanos = f"{moment.microsecond * 1000:09d}"[: len(digits)]
    if digits[0] == "9":
        nanos = nanos.rstrip("0")
        if not nanos:
            return ""
    return separator + nanos


def _match_token(layout: str, i: int, moment: datetime) -> tuple[str, int] | None:  # noqa: C901, PLR0911, PLR0912
    """Return (rendered, length) for the layout token at `i`, if any."""
    rest = layout[i:]
    hour12 = moment.hour % 12 or 12
    match rest[:1]:
        case "J":
            if rest.startswith("January"):
                return _LONG_MONTHS[moment.month - 1], 7
            if rest.startswith("Jan"):
                return _LONG_MONTHS[moment.month - 1][:3], 3
        case "M":
            if rest.startswith("Monday"):
                return _LONG_DAYS[moment.weekday()], 6
            if rest.startswith("Mon"):
                return _LONG_DAYS[moment.weekday()][:3], 3
            if rest.startswith("MST"):
                name = moment.tzname()
                if not name:
                    name = _format_offset(
                        moment, zulu=False, separator="", seconds=False
                    )
                return name, 3
        case "0":
            if rest[1:3] == "02":
                return f"{moment.timetuple().tm_yday:03d}", 3
            code = rest[1:2]
            values = {
                "1": moment.month,
                "2": moment.day,
                "3": hour12,
                "4": moment.minute,
                "5": moment.second,
                "6": moment.year % 100,
            }
            if code in values:
                return f"{values[code]:02d}", 2
        case "1":
            if rest.startswith("15"):
                return f"{moment.hour:02d}", 2
            return str(moment.month), 1
        case "2":
            if rest.startswith("2006"):
                return f"{moment.year:04d}", 4
            return str(moment.day), 1
        case "_":
            if rest.startswith("__2"):
                return f"{moment.timetuple().tm_yday:>3}", 3
            if rest.startswith("_2") and not rest.startswith("_2006"):
                return f"{moment.day:>2}", 2
        case "3":
            return str(hour12), 1
        case "4":
            return str(moment.minute), 1
        case "5":
            return str(moment.second), 1
        case "P":
            if rest.startswith("PM"):
                return ("PM" if moment.hour >= 12 else "AM"), 2  # noqa: PLR2004
        case "p":
            if rest.startswith("pm"):
                return ("pm" if moment.hour >= 12 else "am"), 2  # noqa: PLR2004
        case "-" | "Z":
            for token, zulu, separator, seconds in _OFFSET_LAYOUTS:
                if token[0] == rest[0] and rest.startswith(token[1:], 1):
                    rendered = _format_offset(
                        moment, zulu=zulu, separator=separator, seconds=seconds
                    )
                    return rendered, len(token)
            if rest.startswith(("-07", "Z07")):
                rendered = _format_offset(
                    moment,
                    zulu=rest[0] == "Z",
                    separator="",
                    seconds=False,
                    minutes=False,
                )
                return rendered, 3
        case "." | ",":
            digits = re.match(r"0+|9+", rest[1:])
            if digits:
                end = 1 + digits.end()
                if not rest[end : end + 1].isdigit():
                    return _format_frac(moment, rest[0], digits[0]), end
    return None


def format_layout(moment: datetime, layout: str) -> str:
    """Render `moment` using a reference layout string."""
    parts: list[str] = []
    i = 0
    while i < len(layout):
        token = _match_token(layout, i, moment)
        if token is None:
            parts.append(layout[i])
            i += 1
            continue
        rendered, length = token
        parts.append(rendered)
        i += length
    return "".join(parts)


# ---------------------------------------------------------------------------
# Template functions
# ---------------------------------------------------------------------------


def _local_zone() -> tzinfo:
    zone = datetime.now().astimezone().tzinfo
    return zone if zone is not None else UTC


def _load_zone(name: str) -> tzinfo:
    if name in {"", "UTC"}:
        return UTC
    if name == "Local":
        return _local_zone()
    return ZoneInfo(name)


def now() -> datetime:
    return datetime.now().astimezone()


def _parse_datetime(text: str) -> datetime:
    """Parse a date string, ISO 8601 first and then pendulum's wider grammar.

    Raises:
        ValueError: If neither parser understands `text`.
    """
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        parsed = pendulum.parse(text)
        # pendulum.parse can also return a Time or a Duration
        if not isinstance(parsed, pendulum.Date):
            msg = f"not a date: {text!r}"
            raise ValueError(msg) from None
        return datetime.fromisoformat(parsed.isoformat())


def to_date(value: object) -> datetime:
    """Coerce a value to an aware datetime.

    Accepts datetimes (naive ones are taken as local time), dates, Unix
    timestamps and date strings such as `2024-03-05T09:07:03Z` or `2020-01`.
    Anything else yields the zero time,
    `0001-01-01 00:00:00 UTC`.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.astimezone()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).astimezone()
    try:
        match kind_of(value):
            case Kind.INT | Kind.FLOAT:
                return datetime.fromtimestamp(value, tz=_local_zone())  # type: ignore[arg-type]
            case Kind.STRING:
                return to_date(_parse_datetime(value))  # type: ignore[arg-type]
    except (ValueError, OverflowError, OSError):
        return ZERO_TIME
    return ZERO_TIME


def must_to_date(value: object) -> datetime:
    moment = to_date(value)
    if moment == ZERO_TIME:
        msg = f"unable to convert {value!r} to a date"
        raise ConversionError(msg, value=value)
    return moment


def date_(layout: object, value: object) -> str:
    return format_layout(to_date(value), to_string(layout))


def date_in_zone(layout: object, value: object, zone: object) -> str:
    """Format a date in a named IANA time zone; unknown zones yield ""."""
    try:
        moment = to_date(value).astimezone(_load_zone(to_string(zone)))
    except (KeyError, ValueError, OverflowError):
        return ""
    return format_layout(moment, to_string(layout))


def html_date(value: object) -> str:
    return date_("2006-01-02", value)


def html_date_in_zone(value: object, zone: object) -> str:
    return date_in_zone("2006-01-02", value, zone)


def must_date_modify(modifier: object, value: object) -> datetime:
    try:
        delta = parse_duration(to_string(modifier))
    except ValueError as e:
        raise ConversionError(str(e), value=modifier) from e
    return to_date(value) + delta


def date_modify(modifier: object, value: object) -> datetime:
    """Shift a date by a duration string; an invalid duration leaves it as is."""
    try:
        return must_date_modify(modifier, value)
    except (ConversionError, OverflowError):
        return to_date(value)


def unix_epoch(value: object) -> str:
    return str((to_date(value) - _EPOCH) // _ONE_SECOND)


def ago(value: object) -> str:
    """Elapsed time since `value`, rounded to seconds, e.g. `2h5m0s`."""
    if kind_of(value) is Kind.STRING:
        try:
            moment = _parse_datetime(value)  # type: ignore[arg-type]
        except ValueError as e:
            return f"parsing time {value!r}: {e}"
        moment = to_date(moment)
    elif isinstance(value, date) or kind_of(value) is Kind.INT:
        moment = to_date(value)
    else:
        return ""
    return str(duration_round(now() - moment))
