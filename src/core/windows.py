"""Commitment window calculator — pure business logic.

An umpire is considered busy from a short lead time before a match starts
until the window's fixed duration has elapsed. Window starts snap down to a
quarter-hour grid so nearby matches produce comparable windows.

No I/O: this module only transforms data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.data.models import Window


@dataclass(frozen=True)
class WindowPolicy:
    """Shape of a commitment window, shared by slot grouping and conflicts."""

    lead_minutes: int = 30
    granularity_minutes: int = 15
    duration_minutes: int = 120
    merge_tolerance_minutes: int = 15

    def __post_init__(self) -> None:
        for name in ("lead_minutes", "granularity_minutes",
                     "duration_minutes", "merge_tolerance_minutes"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.duration_minutes == 0:
            raise ValueError("duration_minutes must be positive")
        if self.granularity_minutes == 0 or 60 % self.granularity_minutes:
            raise ValueError(
                f"granularity_minutes must divide an hour, got {self.granularity_minutes}"
            )

    @property
    def lead(self) -> timedelta:
        return timedelta(minutes=self.lead_minutes)

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)

    @property
    def merge_tolerance(self) -> timedelta:
        return timedelta(minutes=self.merge_tolerance_minutes)


DEFAULT_POLICY = WindowPolicy()


def parse_instant(value: datetime | str) -> datetime:
    """Return a datetime for an ISO-8601 string or pass a datetime through.

    A trailing "Z" is read as UTC. Raises ValueError on malformed strings
    and TypeError for anything that is neither a string nor a datetime.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Instant must be a datetime or ISO string, got {type(value).__name__}")
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid instant: {value!r}") from exc


def floor_to_granularity(moment: datetime, granularity_minutes: int) -> datetime:
    """Truncate to the nearest lower grid boundary, zeroing sub-minute parts."""
    return moment.replace(
        minute=moment.minute - moment.minute % granularity_minutes,
        second=0,
        microsecond=0,
    )


def calculate_window(
    instant: datetime | str,
    policy: WindowPolicy = DEFAULT_POLICY,
) -> Window:
    """Compute the commitment window around a match start.

    Instants are normalised to UTC first, so subtraction is absolute time
    arithmetic and crosses midnight, month ends and DST changes without
    special cases. Naive instants have no absolute position and raise
    ValueError.

    Example: a match at 11:15 gives the window 10:45–12:45; a match at 10:44
    gives 10:00–12:00.
    """
    moment = parse_instant(instant)
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError(f"Instant must be timezone-aware: {moment.isoformat()}")
    moment = moment.astimezone(timezone.utc)

    start = floor_to_granularity(moment - policy.lead, policy.granularity_minutes)
    return Window(start=start, end=start + policy.duration)


def windows_overlap(a: Window, b: Window) -> bool:
    """True if the half-open windows share any instant."""
    return a.start < b.end and b.start < a.end
