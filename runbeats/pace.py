"""Pace parsing and cadence suggestion."""

import re

from pydantic import ValidationError

from runbeats.errors import InvalidPaceError
from runbeats.models import DistanceUnit, PaceInput

KM_PER_MILE = 1.60934

# (max pace in min/km, suggested steps per minute); faster paces get higher cadence
CADENCE_TABLE: list[tuple[float, int]] = [
    (3.5, 180),
    (4.0, 178),
    (4.5, 176),
    (5.0, 174),
    (5.5, 172),
    (6.0, 170),
    (7.0, 168),
]
SLOWEST_CADENCE = 165

_PACE_RE = re.compile(r"^(\d+):([0-5]\d)$")


def parse_pace_string(pace_str: str) -> tuple[int, int] | None:
    """Parse 'm:ss' into (minutes, seconds). Returns None if malformed."""
    match = _PACE_RE.match(pace_str.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def is_valid_pace(minutes: int, seconds: int) -> bool:
    return minutes >= 0 and 0 <= seconds < 60 and (minutes > 0 or seconds > 0)


def make_pace(pace_str: str, unit: DistanceUnit = "km") -> PaceInput:
    """Build a PaceInput from user input, raising InvalidPaceError on bad values."""
    parsed = parse_pace_string(pace_str)
    if parsed is None:
        raise InvalidPaceError(f"Pace must look like 5:30, got {pace_str!r}")

    minutes, seconds = parsed
    try:
        return PaceInput(minutes=minutes, seconds=seconds, unit=unit)
    except ValidationError as exc:
        raise InvalidPaceError(f"Invalid pace {pace_str!r}: {exc.errors()[0]['msg']}") from exc


def pace_per_km(pace: PaceInput) -> float:
    total_minutes = pace.minutes + pace.seconds / 60
    if pace.unit == "mi":
        return total_minutes / KM_PER_MILE
    return total_minutes


def pace_to_suggested_cadence(pace: PaceInput) -> int:
    minutes_per_km = pace_per_km(pace)
    for max_pace, cadence in CADENCE_TABLE:
        if minutes_per_km <= max_pace:
            return cadence
    return SLOWEST_CADENCE


def format_pace(pace: PaceInput) -> str:
    return f"{pace.minutes}:{pace.seconds:02d} min/{pace.unit}"
