"""Maps each match to the poll slot that contains its start time."""

from __future__ import annotations

from collections.abc import Iterable

from src.data.models import Match, Slot


def map_matches_to_slots(
    matches: Iterable[Match],
    slots: Iterable[Slot],
) -> dict[str, str]:
    """Return {match_id: slot_id} for matches whose start falls in a slot.

    Slots are half-open, so a match starting exactly at a slot's end belongs
    to the next slot. The first containing slot wins. Matches without a start
    time, or outside every slot, are left out.
    """
    slots = list(slots)
    result: dict[str, str] = {}
    for match in matches:
        if match.start_time is None:
            continue
        for slot in slots:
            if slot.start <= match.start_time < slot.end:
                result[match.id] = slot.id
                break
    return result
