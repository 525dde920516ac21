"""Duration literal parsing and formatting.

Durations are carried as integer nanosecond counts. Literals follow the
compact ``<number><unit>`` form used by service registries, e.g. ``"10s"``,
``"1h30m"``, ``"1.5s"`` or ``"300ms"``.
"""

import re
from typing import Dict

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

MAX_DURATION = (1 << 63) - 1
MIN_DURATION = -(1 << 63)

UNITS: Dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(literal: str) -> int:
    """Parse a duration literal into nanoseconds.

    Args:
        literal: The duration literal, e.g. "30s" or "-1.5h".

    Returns:
        int: The duration in nanoseconds.

    Raises:
        ValueError: If the literal is empty, has a missing or unknown unit,
            or does not fit in a signed 64-bit nanosecond count.
    """
    s = literal
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]

    if s == "0":
        return 0
    if not s:
        raise ValueError(f'invalid duration "{literal}"')

    total = 0
    pos = 0
    while pos < len(s):
        match = _COMPONENT.match(s, pos)
        whole, fraction, unit_name = match.groups()
        if not whole and not fraction:
            raise ValueError(f'invalid duration "{literal}"')
        if not unit_name:
            raise ValueError(f'missing unit in duration "{literal}"')
        unit = UNITS.get(unit_name)
        if unit is None:
            raise ValueError(f'unknown unit "{unit_name}" in duration "{literal}"')

        value = int(whole or "0") * unit
        if fraction:
            value += int(fraction) * unit // 10 ** len(fraction)
        total += value
        if total > 1 << 63:
            raise ValueError(f'invalid duration "{literal}"')
        pos = match.end()

    if negative:
        return -total
    if total > MAX_DURATION:
        raise ValueError(f'invalid duration "{literal}"')
    return total


def _format_fraction(value: int, unit: int) -> str:
    whole, remainder = divmod(value, unit)
    if not remainder:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{str(remainder).zfill(digits).rstrip('0')}"


def format_duration(nanoseconds: int) -> str:
    """Render a nanosecond count in compact literal form, e.g. "1m30s"."""
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < MICROSECOND:
        return f"{sign}{value}ns"
    if value < MILLISECOND:
        return f"{sign}{_format_fraction(value, MICROSECOND)}µs"
    if value < SECOND:
        return f"{sign}{_format_fraction(value, MILLISECOND)}ms"

    hours, value = divmod(value, HOUR)
    minutes, value = divmod(value, MINUTE)
    text = f"{_format_fraction(value, SECOND)}s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text
