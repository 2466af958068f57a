"""Slot store port — abstract interface for persisting poll slots.

Core modules depend on this protocol, never on a specific database.
"""

from __future__ import annotations

from typing import Protocol

from src.data.models import Slot, Window


class SlotStoreError(Exception):
    """Raised when any slot store operation fails."""


class SlotStore(Protocol):
    """Abstract slot storage used by the poll slot helpers."""

    async def list_slots(self, poll_id: str) -> list[Slot]: ...

    async def add_slots(
        self, poll_id: str, windows: list[Window]
    ) -> list[Slot]: ...

    async def remove_slots(self, slot_ids: list[str]) -> None: ...
