"""
Umpire Poll Scheduler — Slot Reconciler.

Diffs a poll's persisted slots against a newly desired window set.

Matching policy: exact (start, end) equality. No tolerance, no overlap.
- Equal value → KEEP (identity and its availability responses survive)
- Desired only → ADD
- Persisted only → REMOVE
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Iterable
from datetime import datetime

from src.data.models import Slot, SlotDiff, Window

logger = logging.getLogger(__name__)


def diff_slots(existing: Iterable[Slot], desired: Iterable[Window]) -> SlotDiff:
    """Reconcile persisted slots with desired windows.

    Args:
        existing: Slots currently stored for the poll.
        desired: Windows the poll should have, usually from group_into_windows.

    Returns:
        SlotDiff where to_keep + to_remove is exactly `existing` and the
        values of to_keep + to_add are exactly `desired`. Equal values on
        either side pair up one-to-one, in order.
    """
    existing = list(existing)
    unmatched: dict[tuple[datetime, datetime], deque[int]] = defaultdict(deque)
    for index, slot in enumerate(existing):
        unmatched[(slot.start, slot.end)].append(index)

    diff = SlotDiff()
    kept: set[int] = set()
    for window in desired:
        candidates = unmatched.get((window.start, window.end))
        if candidates:
            index = candidates.popleft()
            kept.add(index)
            diff.to_keep.append(existing[index])
        else:
            diff.to_add.append(window)

    diff.to_remove = [slot for index, slot in enumerate(existing) if index not in kept]

    logger.debug(
        "Slot diff: %d keep, %d add, %d remove",
        len(diff.to_keep), len(diff.to_add), len(diff.to_remove),
    )
    return diff
