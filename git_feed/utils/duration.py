"""
Human-readable duration parsing.

Accepts one or more ``<number><unit>`` terms, optionally separated by
whitespace, e.g. ``"2h"``, ``"1h 30m"``, ``"90min"`` or ``"2days 4hours"``.
"""

from __future__ import annotations

import re
from datetime import timedelta

_TERM_RE = re.compile(r"\s*(\d+)\s*([A-Za-z]+)")

# Seconds per unit. Month and year follow the usual 30.44 / 365.25 day averages.
_UNITS: dict[str, float] = {}
for _names, _seconds in (
    (("nsec", "ns"), 1e-9),
    (("usec", "us"), 1e-6),
    (("msec", "ms"), 1e-3),
    (("seconds", "second", "secs", "sec", "s"), 1),
    (("minutes", "minute", "mins", "min", "m"), 60),
    (("hours", "hour", "hrs", "hr", "h"), 3600),
    (("days", "day", "d"), 86400),
    (("weeks", "week", "w"), 604800),
    (("months", "month", "M"), 2630016),
    (("years", "year", "y"), 31557600),
):
    for _name in _names:
        _UNITS[_name] = _seconds


def parse_duration(text: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Args:
        text: Duration like "2h", "1h30m", "45 min" or "1week 2days"

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is empty, has an unknown unit, or contains
            anything other than number/unit terms
    """
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty duration string")

    total = 0.0
    pos = 0
    while pos < len(stripped):
        match = _TERM_RE.match(stripped, pos)
        if not match:
            raise ValueError(f"Invalid duration format: {text!r}")
        value, unit = match.groups()
        if unit not in _UNITS:
            raise ValueError(f"Unknown time unit {unit!r} in duration {text!r}")
        total += int(value) * _UNITS[unit]
        pos = match.end()

    return timedelta(seconds=total)
