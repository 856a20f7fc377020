"""Duration strings for schedules and run budgets.

Accepted forms are compact human strings ("30s", "15m", "1h30m", "1d") and
ISO-8601 durations ("PT15M", "P1D", "P1DT12H").
"""

import re

_ISO_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")
_HUMAN_PART_RE = re.compile(r"(\d+)\s*([smhd])")

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed or is out of range."""


def parse_duration(duration_str: str) -> int:
    """Parse a duration string to whole seconds.

    Raises:
        DurationParseError: If the string is empty, malformed or zero

    Examples:
        >>> parse_duration("1d")
        86400
        >>> parse_duration("PT5M")
        300
    """
    text = (duration_str or "").strip()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    seconds = _parse_iso8601(text) if text.upper().startswith("P") else _parse_human(text)
    if seconds == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return seconds


def _parse_iso8601(text: str) -> int:
    match = _ISO_RE.match(text.upper())
    if not match:
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{text}'. "
            "Expected format like 'P1D', 'PT1H30M' or 'PT15M'"
        )
    days, hours, minutes, seconds = match.groups()
    return (
        int(days or 0) * _UNIT_SECONDS["d"]
        + int(hours or 0) * _UNIT_SECONDS["h"]
        + int(minutes or 0) * _UNIT_SECONDS["m"]
        + int(float(seconds or 0))
    )


def _parse_human(text: str) -> int:
    lowered = text.lower()
    parts = _HUMAN_PART_RE.findall(lowered)
    if not parts:
        raise DurationParseError(
            f"Invalid duration format: '{text}'. "
            "Expected format like '15m', '1h', '1d' or combinations like '1h30m'"
        )

    # Every character must belong to a number+unit pair
    if "".join(num + unit for num, unit in parts) != re.sub(r"\s+", "", lowered):
        raise DurationParseError(
            f"Invalid characters in duration: '{text}'. "
            "Use only digits and the units s, m, h and d"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in parts)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int,
    max_seconds: int,
    label: str = "Duration",
) -> None:
    """Raise DurationParseError when a duration falls outside the bounds."""
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"{label} too short: {format_seconds(duration_seconds)}. "
            f"Minimum is {format_seconds(min_seconds)}."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"{label} too long: {format_seconds(duration_seconds)}. "
            f"Maximum is {format_seconds(max_seconds)}."
        )


def format_seconds(seconds: int) -> str:
    """Largest whole unit rendering, e.g. 5400 -> '1 hour'."""
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"
