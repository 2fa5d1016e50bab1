"""Date helpers for calendar-style overlays, built on pandas Timestamps.

Templates use dayjs-style tokens (``YYYY``, ``M``, ``DD``, ``HH``, ...).
Text inside square brackets is copied literally.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Iterator, Literal

import pandas as pd

from popover.constants import BASE_DATE_FORMAT

Unit = Literal[
    "year", "month", "week", "day", "date", "hour", "minute", "second", "millisecond"
]

DEFAULT_FORMAT = "YYYY-MM-DDTHH:mm:ssZ"
UTC_STRING_FORMAT = "ddd, DD MMM YYYY HH:mm:ss [GMT]"

_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
_DAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_TOKEN_RE = re.compile(
    r"\[([^\]]*)]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|dd|d"
    r"|HH|H|hh|h|mm|m|ss|s|SSS|A|a|ZZ|Z"
)

# dayjs token -> strptime directive, for parsing
_STRPTIME = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "DD": "%d",
    "D": "%d",
    "dddd": "%A",
    "ddd": "%a",
    "HH": "%H",
    "H": "%H",
    "hh": "%I",
    "h": "%I",
    "mm": "%M",
    "m": "%M",
    "ss": "%S",
    "s": "%S",
    "SSS": "%f",
    "A": "%p",
    "a": "%p",
    "Z": "%z",
    "ZZ": "%z",
}


def _tokenize(template: str) -> Iterator[tuple[bool, str]]:
    """Split a template into (is_token, text) pieces."""
    pos = 0
    for match in _TOKEN_RE.finditer(template):
        if match.start() > pos:
            yield False, template[pos:match.start()]
        if match.group(1) is not None:
            yield False, match.group(1)
        else:
            yield True, match.group(0)
        pos = match.end()
    if pos < len(template):
        yield False, template[pos:]


def _utc_offset(ts: pd.Timestamp, sep: str) -> str:
    offset = ts.utcoffset()
    if offset is None:
        return ""
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _render_token(ts: pd.Timestamp, token: str) -> str:
    weekday = (ts.dayofweek + 1) % 7  # Sunday = 0
    hour12 = ts.hour % 12 or 12
    match token:
        case "YYYY":
            return f"{ts.year:04d}"
        case "YY":
            return f"{ts.year % 100:02d}"
        case "MMMM":
            return _MONTHS[ts.month - 1]
        case "MMM":
            return _MONTHS[ts.month - 1][:3]
        case "MM":
            return f"{ts.month:02d}"
        case "M":
            return str(ts.month)
        case "DD":
            return f"{ts.day:02d}"
        case "D":
            return str(ts.day)
        case "dddd":
            return _DAYS[weekday]
        case "ddd":
            return _DAYS[weekday][:3]
        case "dd":
            return _DAYS[weekday][:2]
        case "d":
            return str(weekday)
        case "HH":
            return f"{ts.hour:02d}"
        case "H":
            return str(ts.hour)
        case "hh":
            return f"{hour12:02d}"
        case "h":
            return str(hour12)
        case "mm":
            return f"{ts.minute:02d}"
        case "m":
            return str(ts.minute)
        case "ss":
            return f"{ts.second:02d}"
        case "s":
            return str(ts.second)
        case "SSS":
            return f"{ts.microsecond // 1000:03d}"
        case "A":
            return "PM" if ts.hour >= 12 else "AM"
        case "a":
            return "pm" if ts.hour >= 12 else "am"
        case "Z":
            return _utc_offset(ts, ":")
        case "ZZ":
            return _utc_offset(ts, "")
    raise ValueError(f"Unknown format token: {token}")


def _to_strptime(template: str) -> str:
    parts = []
    for is_token, text in _tokenize(template):
        if not is_token:
            parts.append(text.replace("%", "%%"))
        elif text in _STRPTIME:
            parts.append(_STRPTIME[text])
        else:
            raise ValueError(f"Format token {text!r} cannot be parsed")
    return "".join(parts)


def _coerce(value: Any) -> pd.Timestamp | None:
    """Convert a date-like value to a Timestamp, or None if it is not one."""
    if value is None:
        return None
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError):
        return None
    if pd.isna(ts):
        return None
    return ts


def _require(value: Any) -> pd.Timestamp:
    ts = _coerce(value)
    if ts is None:
        raise ValueError(f"Invalid date: {value!r}")
    return ts


def _start_of(ts: pd.Timestamp, unit: str) -> pd.Timestamp:
    match unit:
        case "year":
            return ts.normalize().replace(month=1, day=1)
        case "month":
            return ts.normalize().replace(day=1)
        case "week":
            # Weeks start on Sunday
            return ts.normalize() - pd.Timedelta(days=(ts.dayofweek + 1) % 7)
        case "day" | "date":
            return ts.normalize()
        case "hour":
            return ts.floor("h")
        case "minute":
            return ts.floor("min")
        case "second":
            return ts.floor("s")
        case "millisecond":
            return ts.floor("ms")
    raise ValueError(f"Unknown unit: {unit}")


def _compare(d1: Any, d2: Any, unit: str) -> int | None:
    """Compare two dates at ``unit`` granularity: -1, 0, 1, or None if invalid."""
    ts1, ts2 = _coerce(d1), _coerce(d2)
    if ts1 is None or ts2 is None:
        return None
    start1, start2 = _start_of(ts1, unit), _start_of(ts2, unit)
    return (start1 > start2) - (start1 < start2)


def is_date(value: Any) -> bool:
    """Check that ``value`` is a concrete date or datetime, not a string."""
    return isinstance(value, (datetime, date)) and not pd.isna(value)


def is_valid_range(value: Any) -> bool:
    """Check that ``value`` is a list or tuple of exactly two dates."""
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(is_date(v) for v in value)
    )


def is_same(d1: Any, d2: Any, unit: Unit = "day") -> bool:
    return _compare(d1, d2, unit) == 0


def is_before(d1: Any, d2: Any, unit: Unit = "day") -> bool:
    return _compare(d1, d2, unit) == -1


def is_after(d1: Any, d2: Any, unit: Unit = "day") -> bool:
    return _compare(d1, d2, unit) == 1


def is_between(value: Any, start: Any, end: Any, unit: Unit = "day") -> bool:
    """Check ``start <= value <= end`` at ``unit`` granularity.

    The bounds are widened by one day and tested exclusively, so both
    endpoints are included at day granularity.
    """
    ts_start, ts_end = _coerce(start), _coerce(end)
    if ts_start is None or ts_end is None:
        return False
    lower = ts_start - timedelta(days=1)
    upper = ts_end + timedelta(days=1)
    return is_after(value, lower, unit) and is_before(value, upper, unit)


def format(value: Any, template: str = DEFAULT_FORMAT) -> str:
    """Render ``value`` with a dayjs-style template."""
    ts = _require(value)
    return "".join(
        _render_token(ts, text) if is_token else text
        for is_token, text in _tokenize(template)
    )


def to_date(value: Any, template: str | None = None) -> datetime:
    """Parse ``value`` into a datetime.

    With a template the whole string must match it; without one any format
    pandas understands is accepted.

    Raises:
        ValueError: If the value cannot be parsed or is not a real date.
    """
    if template is None or not isinstance(value, str):
        return _require(value).to_pydatetime()
    ts = pd.to_datetime(value, format=_to_strptime(template), exact=True)
    if pd.isna(ts):
        raise ValueError(f"Invalid date: {value!r}")
    return ts.to_pydatetime()


def to_string(value: Any) -> str:
    """Render ``value`` as a UTC string like ``Mon, 01 Jan 2024 00:00:00 GMT``.

    Naive datetimes are taken to already be UTC.
    """
    ts = _require(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC")
    return format(ts, UTC_STRING_FORMAT)


def is_valid(
    value: Any, template: str = BASE_DATE_FORMAT, strict: bool = True
) -> bool:
    """Check that ``value`` parses with ``template``.

    In strict mode the parsed value must also format back to exactly the
    input, so ``"02-29-2024"`` is rejected for ``"M-D-YYYY"``.
    """
    if not isinstance(value, str):
        return is_date(value)
    try:
        parsed = to_date(value, template)
    except (ValueError, TypeError):
        return False
    if strict:
        return format(parsed, template) == value
    return True
