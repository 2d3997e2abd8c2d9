"""Duration parsing and formatting helpers.

Durations on the command line and in the config file use the compact
``1h30m`` / ``25m`` / ``90s`` / ``1.5h`` / ``500ms`` syntax. A bare number
is rejected because it is ambiguous about its unit.
"""

import re
from datetime import timedelta
from decimal import Decimal

# Nanoseconds per unit.
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Longest unit names first so "ms" wins over "m".
_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|ms|h|m|s)")


class InvalidDurationError(ValueError):
    """Raised when a duration string cannot be parsed."""


def parse_duration(text: str) -> timedelta:
    """Parse a duration string such as ``25m`` or ``1h30m`` into a timedelta.

    Raises:
        InvalidDurationError: if the string is empty, has no unit or
            contains anything other than number/unit pairs.
    """
    value = text.strip()
    if not value:
        raise InvalidDurationError("empty duration")

    sign = 1
    if value[0] in "+-":
        sign = -1 if value[0] == "-" else 1
        value = value[1:]
        if not value:
            raise InvalidDurationError(f"invalid duration {text!r}")

    if value == "0":
        return timedelta(0)

    total_ns = 0
    pos = 0
    while pos < len(value):
        match = _COMPONENT.match(value, pos)
        if match is None:
            if value[pos:].replace(".", "", 1).isdigit():
                raise InvalidDurationError(f"missing unit in duration {text!r}")
            raise InvalidDurationError(f"invalid duration {text!r}")
        number, unit = match.groups()
        total_ns += int(Decimal(number) * _UNITS[unit])
        pos = match.end()

    # timedelta resolution is one microsecond.
    return timedelta(microseconds=sign * (total_ns // 1_000))


def parse_positive_duration(text: str, what: str = "duration") -> timedelta:
    """Parse a duration and require it to be strictly positive."""
    try:
        value = parse_duration(text)
    except InvalidDurationError as e:
        raise InvalidDurationError(f"invalid {what}: {e}") from e
    if value <= timedelta(0):
        raise InvalidDurationError(f"invalid {what}: must be positive, got {text!r}")
    return value


def format_duration(value: timedelta | int | float) -> str:
    """Render a duration as ``1h 2m 3s``, ``2m 3s`` or ``3s``."""
    seconds = value.total_seconds() if isinstance(value, timedelta) else value
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_clock(value: timedelta) -> str:
    """Render a countdown as ``MM:SS``. Negative values display as 00:00."""
    seconds = max(0, int(value.total_seconds()))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
