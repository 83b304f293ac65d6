"""
Tests for per-date bucketing.

- Multi-day clipping rules
- Bucketed vs flat overlap granularity
- Ordering within a bucket
- Invalid inputs
"""

import pytest
from datetime import date, datetime, timezone
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from calendar_layout import (
    Event,
    InvalidRangeError,
    LayoutMode,
    classify_for_date,
    enrich,
    events_for_date,
    resolve_flat,
)

END_OF_DAY = (23, 59, 59, 999999)


def summary(bucket):
    return [(e.title, e.start, e.end, e.overlap_position, e.overlap_count) for e in bucket]


@pytest.fixture
def overnight_events():
    return [
        Event(title="deploy", start=datetime(2024, 6, 3, 20, 0), end=datetime(2024, 6, 4, 9, 0)),
        Event(title="sync", start=datetime(2024, 6, 4, 8, 0), end=datetime(2024, 6, 4, 10, 0)),
        Event(title="breakfast", start=datetime(2024, 6, 3, 8, 0), end=datetime(2024, 6, 3, 9, 0)),
    ]


class TestClassification:
    """Test clipping a single event to a date."""

    def test_event_within_day_is_unchanged(self):
        """Test an event fully inside the day."""
        event = Event(start=datetime(2024, 6, 3, 10), end=datetime(2024, 6, 3, 11))

        assert classify_for_date(event, date(2024, 6, 3)) == (event.start, event.end)

    def test_event_starting_on_day_is_clipped_at_end_of_day(self):
        """Test an event that runs past midnight."""
        event = Event(start=datetime(2024, 6, 3, 22), end=datetime(2024, 6, 4, 2))

        assert classify_for_date(event, date(2024, 6, 3)) == (
            datetime(2024, 6, 3, 22),
            datetime(2024, 6, 3, *END_OF_DAY),
        )

    def test_event_ending_on_day_is_rebased(self):
        """Test an event that started the day before."""
        event = Event(start=datetime(2024, 6, 3, 22), end=datetime(2024, 6, 4, 2))

        assert classify_for_date(event, date(2024, 6, 4)) == (datetime(2024, 6, 4), datetime(2024, 6, 4, 2))

    def test_event_spanning_day_covers_it(self):
        """Test an event that started before and ends after the day."""
        event = Event(start=datetime(2024, 6, 2, 12), end=datetime(2024, 6, 5, 12))

        assert classify_for_date(event, date(2024, 6, 3)) == (
            datetime(2024, 6, 3),
            datetime(2024, 6, 3, *END_OF_DAY),
        )

    def test_event_on_other_day(self):
        """Test events that do not touch the day."""
        before = Event(start=datetime(2024, 6, 1, 10), end=datetime(2024, 6, 1, 11))
        after = Event(start=datetime(2024, 6, 5, 10), end=datetime(2024, 6, 5, 11))
        until_midnight = Event(start=datetime(2024, 6, 2, 10), end=datetime(2024, 6, 3))

        assert classify_for_date(before, date(2024, 6, 3)) is None
        assert classify_for_date(after, date(2024, 6, 3)) is None
        assert classify_for_date(until_midnight, date(2024, 6, 3)) is None


class TestBucketedMode:
    """Test per-date overlap resolution."""

    def test_multi_day_event_split_into_three_entries(self):
        """Test an event from D1 00:00 to D3 12:00."""
        event = Event(title="offsite", start=datetime(2024, 6, 3), end=datetime(2024, 6, 5, 12))

        buckets = enrich([event])

        assert list(buckets) == ["2024-06-03", "2024-06-04", "2024-06-05"]
        assert summary(buckets["2024-06-03"]) == [
            ("offsite", datetime(2024, 6, 3), datetime(2024, 6, 3, *END_OF_DAY), 0, 1)
        ]
        assert summary(buckets["2024-06-04"]) == [
            ("offsite", datetime(2024, 6, 4), datetime(2024, 6, 4, *END_OF_DAY), 0, 1)
        ]
        assert summary(buckets["2024-06-05"]) == [
            ("offsite", datetime(2024, 6, 5), datetime(2024, 6, 5, 12), 0, 1)
        ]

    def test_event_ending_at_midnight_has_one_bucket(self):
        """Test that ending exactly at midnight leaves the next day empty."""
        event = Event(title="late", start=datetime(2024, 6, 3, 22), end=datetime(2024, 6, 4))

        buckets = enrich([event])

        assert list(buckets) == ["2024-06-03"]

    def test_overlap_is_per_date(self, overnight_events):
        """Test that slots are computed independently for each date."""
        buckets = enrich(overnight_events, mode=LayoutMode.BUCKETED)

        assert summary(buckets["2024-06-03"]) == [
            ("breakfast", datetime(2024, 6, 3, 8), datetime(2024, 6, 3, 9), 0, 1),
            ("deploy", datetime(2024, 6, 3, 20), datetime(2024, 6, 3, *END_OF_DAY), 0, 1),
        ]
        assert summary(buckets["2024-06-04"]) == [
            ("deploy", datetime(2024, 6, 4), datetime(2024, 6, 4, 9), 0, 2),
            ("sync", datetime(2024, 6, 4, 8), datetime(2024, 6, 4, 10), 1, 2),
        ]

    def test_bucket_ordered_by_clipped_start(self):
        """Test that a carried-over event comes first in its bucket."""
        events = [
            Event(title="early", start=datetime(2024, 6, 4, 1), end=datetime(2024, 6, 4, 2)),
            Event(title="carried", start=datetime(2024, 6, 3, 23), end=datetime(2024, 6, 4, 3)),
        ]

        buckets = enrich(events)

        assert [e.title for e in buckets["2024-06-04"]] == ["carried", "early"]
        assert [(e.overlap_position, e.overlap_count) for e in buckets["2024-06-04"]] == [(0, 2), (1, 2)]

    def test_date_range_restricts_buckets(self, overnight_events):
        """Test that only requested dates with events are returned."""
        buckets = enrich(overnight_events, date_range=[date(2024, 6, 4), date(2024, 6, 9)])

        assert list(buckets) == ["2024-06-04"]

    def test_input_is_not_mutated(self, overnight_events):
        """Test that enrich leaves the caller's list and events alone."""
        before = [e.model_copy() for e in overnight_events]

        enrich(overnight_events)

        assert overnight_events == before

    def test_aware_instants(self):
        """Test bucketing of UTC instants."""
        event = Event(
            title="call",
            start=datetime(2024, 6, 3, 23, tzinfo=timezone.utc),
            end=datetime(2024, 6, 4, 1, tzinfo=timezone.utc),
        )

        buckets = enrich([event])

        assert buckets["2024-06-04"][0].start == datetime(2024, 6, 4, tzinfo=timezone.utc)

    def test_empty_input(self):
        """Test that no events give an empty map."""
        assert enrich([]) == {}


class TestFlatMode:
    """Test global overlap resolution."""

    def test_slots_shared_across_dates(self, overnight_events):
        """Test that a single global pass decides counts for every date."""
        buckets = enrich(overnight_events, mode=LayoutMode.FLAT)

        # deploy shares a cluster with sync globally, so it is narrow on day one too
        assert summary(buckets["2024-06-03"]) == [
            ("breakfast", datetime(2024, 6, 3, 8), datetime(2024, 6, 3, 9), 0, 1),
            ("deploy", datetime(2024, 6, 3, 20), datetime(2024, 6, 3, *END_OF_DAY), 0, 2),
        ]
        assert summary(buckets["2024-06-04"]) == [
            ("deploy", datetime(2024, 6, 4), datetime(2024, 6, 4, 9), 0, 2),
            ("sync", datetime(2024, 6, 4, 8), datetime(2024, 6, 4, 10), 1, 2),
        ]

    def test_ordering_disabled(self, overnight_events):
        """Test that disabling ordering leaves default slots."""
        buckets = enrich(overnight_events, mode=LayoutMode.FLAT, ordering_enabled=False)

        entries = [e for bucket in buckets.values() for e in bucket]
        assert all((e.overlap_position, e.overlap_count) == (0, 1) for e in entries)

    def test_lazy_per_date_filter(self, overnight_events):
        """Test filtering globally resolved events for one column."""
        enriched = resolve_flat(overnight_events)

        visible = events_for_date(enriched, date(2024, 6, 4))

        assert [(e.title, e.start) for e in visible] == [
            ("deploy", datetime(2024, 6, 4)),
            ("sync", datetime(2024, 6, 4, 8)),
        ]
        # The resolved list keeps native instants
        assert enriched[1].start == datetime(2024, 6, 3, 20)

    def test_mode_accepts_string(self, overnight_events):
        """Test passing the mode by value."""
        assert enrich(overnight_events, mode="flat") == enrich(overnight_events, mode=LayoutMode.FLAT)


class TestDeterminism:
    """Test that results are reproducible."""

    def test_enrich_is_idempotent(self, overnight_events):
        """Test that repeated calls give identical output."""
        assert enrich(overnight_events) == enrich(overnight_events)

    def test_assume_sorted_matches_sorting(self, overnight_events):
        """Test that pre-sorted input with assume_sorted gives the same map."""
        presorted = sorted(overnight_events, key=lambda e: e.start)

        assert enrich(presorted, assume_sorted=True) == enrich(overnight_events)


class TestInvalidInputs:
    """Test handling of malformed events."""

    def test_inverted_event_raises(self):
        """Test that no partial map is produced for an inverted event."""
        events = [
            {'title': 'ok', 'start': datetime(2024, 6, 3, 9), 'end': datetime(2024, 6, 3, 10)},
            {'title': 'bad', 'start': datetime(2024, 6, 3, 12), 'end': datetime(2024, 6, 3, 11)},
        ]

        with pytest.raises(InvalidRangeError):
            enrich(events)

    def test_inverted_event_raises_in_flat_mode(self):
        """Test the same rejection in flat mode."""
        bad = Event.model_construct(title="bad", start=datetime(2024, 6, 3, 12), end=datetime(2024, 6, 3, 11))

        with pytest.raises(InvalidRangeError):
            enrich([bad], mode=LayoutMode.FLAT)
