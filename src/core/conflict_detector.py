"""
Umpire Poll Scheduler — Assignment Conflict Detector.

Flags umpires who are booked twice on the same day, reusing the commitment
window that poll slots are built from:

- hard: the two commitment windows overlap (a physical double-booking)
- soft: same day, but the windows don't overlap or a start time is unknown

Matches on different calendar days are never compared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import combinations

from src.core.windows import WindowPolicy, calculate_window, windows_overlap
from src.data.models import Assignment, Conflict, Match, Severity

logger = logging.getLogger(__name__)


def _pair_severity(a: Match, b: Match, policy: WindowPolicy) -> Severity | None:
    """Severity of one umpire working both matches, or None if unrelated."""
    if a.date != b.date:
        return None
    if a.start_time is None or b.start_time is None:
        return Severity.SOFT
    if windows_overlap(calculate_window(a.start_time, policy),
                       calculate_window(b.start_time, policy)):
        return Severity.HARD
    return Severity.SOFT


def find_conflicts(
    assignments: Iterable[Assignment],
    matches: Iterable[Match],
    policy: WindowPolicy | None = None,
) -> list[Conflict]:
    """Find double-bookings per umpire.

    Every conflicting pair is reported twice, once from each match's side,
    with the same severity. Assignments pointing at unknown matches are
    ignored, and repeated assignments of one umpire to the same match count
    once.

    Args:
        assignments: Current umpire-to-match assignments.
        matches: Match snapshot the assignments refer to.
        policy: Window shape; defaults to the configured window settings,
            the same ones poll slots are built from.

    Returns:
        Conflicts grouped by umpire in first-seen order.
    """
    if policy is None:
        from src.config import settings
        policy = settings.window_policy()

    match_map = {m.id: m for m in matches}

    by_umpire: dict[str, list[Match]] = {}
    for assignment in assignments:
        match = match_map.get(assignment.match_id)
        if match is None:
            logger.debug(
                "Assignment of umpire %s refers to unknown match %s",
                assignment.umpire_id, assignment.match_id,
            )
            continue
        assigned = by_umpire.setdefault(assignment.umpire_id, [])
        if all(m.id != match.id for m in assigned):
            assigned.append(match)

    conflicts: list[Conflict] = []
    for umpire_id, assigned in by_umpire.items():
        for a, b in combinations(assigned, 2):
            severity = _pair_severity(a, b, policy)
            if severity is None:
                continue
            conflicts.append(Conflict(umpire_id, a.id, b.id, severity))
            conflicts.append(Conflict(umpire_id, b.id, a.id, severity))

    return conflicts


def conflict_lookup(conflicts: Iterable[Conflict]) -> dict[tuple[str, str], Conflict]:
    """Index conflicts by (match_id, umpire_id) for an assignment grid.

    One conflict per cell; a hard conflict wins over a soft one.
    """
    lookup: dict[tuple[str, str], Conflict] = {}
    for conflict in conflicts:
        key = (conflict.match_id, conflict.umpire_id)
        current = lookup.get(key)
        if current is None or (
            conflict.severity is Severity.HARD and current.severity is not Severity.HARD
        ):
            lookup[key] = conflict
    return lookup
