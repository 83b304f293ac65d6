"""Day-column layout for a time-grid calendar view."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

import pydantic

from .cache import EnrichmentCache
from .enrich_utils import DateBucketMap, events_for_date
from .models import EnrichedEvent, Event, HourRange, LayoutFlags, LayoutMode
from .now import NowProvider
from .position_utils import EventBox, event_box, vertical_fraction
from .time_utils import date_key, is_same_calendar_day

logger = logging.getLogger(__name__)


class DayColumn(pydantic.BaseModel):
    date_key: str
    boxes: list[EventBox]
    now_top: Optional[float] = None


class CalendarLayout:
    """
    Lays out events into day columns.

    Both modes read from the enrichment cache: bucketed mode takes per-date
    results, flat mode takes one global resolution and filters it per column.
    """

    def __init__(
        self,
        hour_range: Optional[HourRange] = None,
        flags: Optional[LayoutFlags] = None,
        cache: Optional[EnrichmentCache] = None,
        now_provider: Optional[NowProvider] = None,
        overlap_offset: Optional[float] = None,
    ):
        self.hour_range = hour_range if hour_range is not None else HourRange()
        self.flags = flags if flags is not None else LayoutFlags()
        self.cache = cache if cache is not None else EnrichmentCache()
        self.now_provider = now_provider
        self.overlap_offset = overlap_offset

    def _now(self) -> Optional[datetime]:
        if self.now_provider is None:
            return None
        return self.now_provider.now()

    def _flat_events(self, events: Sequence[Event]) -> list[EnrichedEvent]:
        return self.cache.get_or_resolve_flat(
            events,
            assume_sorted=self.flags.events_are_sorted,
            ordering_enabled=self.flags.is_event_ordering_enabled,
        )

    def _bucketed_events(self, events: Sequence[Event]) -> DateBucketMap:
        return self.cache.get_or_compute(
            events,
            assume_sorted=self.flags.events_are_sorted,
            mode=LayoutMode.BUCKETED,
        )

    def columns(
        self,
        events: Sequence[Event],
        date_range: Iterable[date | datetime],
        enriched_events_by_date: Optional[DateBucketMap] = None,
    ) -> list[DayColumn]:
        """
        Build one column per date in `date_range`.

        Args:
            events: Events to lay out
            date_range: Dates of the visible columns, left to right
            enriched_events_by_date: Precomputed bucket map used instead of
                enriching `events` in bucketed mode

        Returns:
            Day columns with event boxes and the now marker for today
        """
        now = self._now()

        if self.flags.mode is LayoutMode.BUCKETED:
            buckets = enriched_events_by_date
            if buckets is None:
                buckets = self._bucketed_events(events)
            flat = None
        else:
            buckets = None
            flat = self._flat_events(events)

        columns = []
        for day in date_range:
            key = date_key(day)
            if buckets is not None:
                day_events = buckets.get(key, [])
            else:
                day_events = events_for_date(flat, day)

            now_top = None
            if now is not None and is_same_calendar_day(day, now):
                now_top = vertical_fraction(now, self.hour_range.min_hour, self.hour_range.total_hours)

            columns.append(DayColumn(
                date_key=key,
                boxes=[event_box(event, self.hour_range, self.overlap_offset) for event in day_events],
                now_top=now_top,
            ))

        logger.debug("Laid out %d columns in %s mode", len(columns), self.flags.mode.value)
        return columns
