"""
Umpire Poll Scheduler — Data Models.

Value types shared by the scheduling core. Persistence lives outside this
package; a Slot only carries the identity its store gave it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True, order=True)
class Window:
    """A commitment window: half-open interval [start, end).

    Compared and hashed by value only.
    """

    start: datetime
    end: datetime


@dataclass
class Slot:
    """A persisted Window plus the identity availability responses point at."""

    id: str
    start: datetime
    end: datetime
    poll_id: str | None = None

    @property
    def window(self) -> Window:
        return Window(start=self.start, end=self.end)


@dataclass
class Match:
    """A scheduled match, reduced to what the scheduling core needs."""

    id: str
    date: date                             # calendar day the match is played on
    start_time: datetime | None = None     # None until the start is known


@dataclass
class Assignment:
    """An umpire assigned to a match."""

    umpire_id: str
    match_id: str
    id: str | None = None
    poll_id: str | None = None


class Severity(str, Enum):
    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class Conflict:
    """A double-booking for one umpire, reported from match_id's side."""

    umpire_id: str
    match_id: str
    conflicting_match_id: str
    severity: Severity


@dataclass
class SlotDiff:
    """Storage mutations needed to move a poll's slots to a desired set."""

    to_add: list[Window] = field(default_factory=list)
    to_remove: list[Slot] = field(default_factory=list)
    to_keep: list[Slot] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_add or self.to_remove)
