"""
Umpire Poll Scheduler — Slot Consolidator.

Turns the start times of the matches selected for a poll into the smallest
sorted set of windows umpires are asked about.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from src.core.windows import DEFAULT_POLICY, WindowPolicy, calculate_window
from src.data.models import Match, Window

logger = logging.getLogger(__name__)


def group_into_windows(
    instants: Iterable[datetime | str],
    policy: WindowPolicy = DEFAULT_POLICY,
) -> list[Window]:
    """Consolidate match starts into the fewest windows, sorted by start.

    Each instant becomes a commitment window. Windows whose start lies within
    the merge tolerance of the current group's *anchor* (its first window's
    start) join that group and may stretch its end; the anchor itself never
    moves. So with starts 10:30, 10:45 and 11:00 the first two merge and the
    third opens a new group, even though it is only 15 minutes after 10:45.

    Args:
        instants: Match start times, in any order, duplicates allowed.
        policy: Window shape; defaults to the shared 30/15/120 policy.

    Returns:
        Windows sorted ascending by start. Empty input gives an empty list.
    """
    windows = sorted(calculate_window(t, policy) for t in instants)
    if not windows:
        return []

    groups: list[Window] = []
    anchor_start, group_end = windows[0].start, windows[0].end

    for w in windows[1:]:
        if w.start - anchor_start <= policy.merge_tolerance:
            group_end = max(group_end, w.end)
            continue
        groups.append(Window(start=anchor_start, end=group_end))
        anchor_start, group_end = w.start, w.end

    groups.append(Window(start=anchor_start, end=group_end))

    logger.debug("Consolidated %d instants into %d windows", len(windows), len(groups))
    return groups


def windows_for_matches(
    matches: Iterable[Match],
    policy: WindowPolicy = DEFAULT_POLICY,
) -> list[Window]:
    """Consolidate the matches that have a start time; untimed ones are skipped."""
    starts: list[datetime] = []
    for match in matches:
        if match.start_time is None:
            logger.debug("Skipping match %s without start time", match.id)
            continue
        starts.append(match.start_time)
    return group_into_windows(starts, policy)
