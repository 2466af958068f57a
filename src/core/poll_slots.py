"""
Umpire Poll Scheduler — Poll Slot Service.

Keeps a poll's persisted slots in line with its selected matches. Slots whose
window is unchanged are never touched, so availability responses that point
at them survive an edit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from src.core.slot_consolidator import windows_for_matches
from src.core.slot_reconciler import diff_slots
from src.core.windows import WindowPolicy
from src.data.models import Match, Slot, SlotDiff
from src.ports.slot_store_port import SlotStoreError

if TYPE_CHECKING:
    from src.ports.slot_store_port import SlotStore

logger = logging.getLogger(__name__)


async def create_poll_slots(
    store: SlotStore,
    poll_id: str,
    matches: Iterable[Match],
    policy: WindowPolicy | None = None,
) -> list[Slot]:
    """Persist the consolidated windows of a new poll's matches.

    Nothing exists yet, so every window is added. Matches without a start
    time don't contribute a slot. Without an explicit policy the configured
    window settings are used.

    Raises:
        SlotStoreError: if the store rejects the insert.
    """
    if policy is None:
        from src.config import settings
        policy = settings.window_policy()

    windows = windows_for_matches(matches, policy)
    if not windows:
        logger.info("Poll %s has no timed matches; no slots created", poll_id)
        return []

    try:
        slots = await store.add_slots(poll_id, windows)
    except SlotStoreError:
        logger.error("Failed to create %d slots for poll %s", len(windows), poll_id)
        raise
    except Exception as exc:
        logger.error("Failed to create slots for poll %s: %s", poll_id, exc)
        raise SlotStoreError(str(exc)) from exc

    logger.info("Created %d slots for poll %s", len(slots), poll_id)
    return slots


async def sync_poll_slots(
    store: SlotStore,
    poll_id: str,
    matches: Iterable[Match],
    policy: WindowPolicy | None = None,
) -> SlotDiff:
    """Bring a poll's stored slots in line with its new match selection.

    Adds the new windows first, then removes slots no longer wanted, so a
    failed insert leaves the previous slots (and the availability responses
    pointing at them) in place. Kept slots are never touched. The store is
    only called for non-empty changes.

    Args:
        store: Slot store port.
        poll_id: Poll being edited.
        matches: The poll's full new match selection.
        policy: Window shape; defaults to the configured window settings.

    Returns:
        The SlotDiff that was applied.

    Raises:
        SlotStoreError: if loading or writing slots fails.
    """
    if policy is None:
        from src.config import settings
        policy = settings.window_policy()

    desired = windows_for_matches(matches, policy)

    try:
        existing = await store.list_slots(poll_id)
        diff = diff_slots(existing, desired)

        if diff.to_add:
            await store.add_slots(poll_id, diff.to_add)
        if diff.to_remove:
            await store.remove_slots([slot.id for slot in diff.to_remove])
    except SlotStoreError:
        logger.error("Slot sync failed for poll %s", poll_id)
        raise
    except Exception as exc:
        logger.error("Slot sync failed for poll %s: %s", poll_id, exc)
        raise SlotStoreError(str(exc)) from exc

    logger.info(
        "Synced slots for poll %s: %d kept, %d added, %d removed",
        poll_id, len(diff.to_keep), len(diff.to_add), len(diff.to_remove),
    )
    return diff
