"""Tests for src.core.slot_consolidator — grouping match starts into poll windows."""

from datetime import date, datetime, timezone
from itertools import permutations

import pytest

from src.core.slot_consolidator import group_into_windows, windows_for_matches
from src.core.windows import WindowPolicy
from src.data.models import Match, Window


def _utc(iso: str) -> datetime:
    return datetime.fromisoformat(iso).replace(tzinfo=timezone.utc)


def _day(*times: str) -> list[datetime]:
    return [_utc(f"2025-03-15T{t}:00") for t in times]


class TestGroupIntoWindows:
    def test_empty_input(self):
        assert group_into_windows([]) == []

    def test_single_match(self):
        windows = group_into_windows(_day("11:15"))
        assert windows == [Window(_utc("2025-03-15T10:45:00"), _utc("2025-03-15T12:45:00"))]

    def test_duplicates_collapse(self):
        assert len(group_into_windows(_day("11:15", "11:15"))) == 1

    def test_merges_starts_within_tolerance(self):
        windows = group_into_windows(_day("11:00", "11:15"))
        assert windows == [Window(_utc("2025-03-15T10:30:00"), _utc("2025-03-15T12:45:00"))]

    def test_keeps_starts_beyond_tolerance_apart(self):
        windows = group_into_windows(_day("11:15", "11:46"))
        assert windows == [
            Window(_utc("2025-03-15T10:45:00"), _utc("2025-03-15T12:45:00")),
            Window(_utc("2025-03-15T11:15:00"), _utc("2025-03-15T13:15:00")),
        ]

    def test_anchor_does_not_slide(self):
        """11:31 is 15 min after 11:15's window but 30 min after the anchor."""
        windows = group_into_windows(_day("11:00", "11:15", "11:31"))
        assert windows == [
            Window(_utc("2025-03-15T10:30:00"), _utc("2025-03-15T12:45:00")),
            Window(_utc("2025-03-15T11:00:00"), _utc("2025-03-15T13:00:00")),
        ]

    def test_long_quarter_hour_chain_splits_at_anchor(self):
        windows = group_into_windows(_day("10:00", "10:15", "10:30", "10:45", "11:00"))
        assert [w.start for w in windows] == [
            _utc("2025-03-15T09:30:00"),
            _utc("2025-03-15T10:00:00"),
            _utc("2025-03-15T10:30:00"),
        ]
        assert windows[0].end == _utc("2025-03-15T11:45:00")

    def test_different_days_never_merge(self):
        windows = group_into_windows([_utc("2025-03-15T11:15:00"), _utc("2025-03-16T11:15:00")])
        assert len(windows) == 2

    def test_sorted_output(self):
        windows = group_into_windows(_day("16:00", "10:00"))
        assert windows[0].start < windows[1].start

    def test_iso_strings_accepted(self):
        windows = group_into_windows(["2025-03-15T11:15:00Z"])
        assert windows[0].start == _utc("2025-03-15T10:45:00")

    def test_naive_and_aware_mix_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            group_into_windows(["2025-03-15T11:15:00Z", datetime(2025, 3, 15, 12, 0)])

    def test_starts_strictly_increasing(self):
        windows = group_into_windows(_day("09:00", "09:10", "09:40", "10:05", "13:00", "13:20"))
        for earlier, later in zip(windows, windows[1:]):
            assert earlier.start < later.start
        starts = [w.start for w in windows]
        assert len(starts) == len(set(starts))

    def test_order_independent(self):
        instants = _day("11:00", "11:15", "11:31", "15:00", "11:15")
        expected = group_into_windows(instants)
        for perm in permutations(instants):
            assert group_into_windows(list(perm)) == expected

    def test_custom_merge_tolerance(self):
        policy = WindowPolicy(merge_tolerance_minutes=30)
        windows = group_into_windows(_day("11:00", "11:15", "11:31"), policy)
        assert windows == [Window(_utc("2025-03-15T10:30:00"), _utc("2025-03-15T13:00:00"))]


class TestWindowsForMatches:
    def test_skips_matches_without_start(self):
        matches = [
            Match(id="m1", date=date(2025, 3, 15), start_time=_utc("2025-03-15T11:15:00")),
            Match(id="m2", date=date(2025, 3, 15), start_time=None),
        ]
        windows = windows_for_matches(matches)
        assert windows == [Window(_utc("2025-03-15T10:45:00"), _utc("2025-03-15T12:45:00"))]

    def test_no_timed_matches(self):
        matches = [Match(id="m1", date=date(2025, 3, 15))]
        assert windows_for_matches(matches) == []
