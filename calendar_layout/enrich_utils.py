"""Partition events into per-date buckets and attach overlap slots."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from .models import EnrichedEvent, Event, LayoutMode, as_event, enrich_event
from .overlap_utils import ensure_valid_range, resolve, sort_events
from .time_utils import (
    as_date,
    date_key,
    day_start,
    days_touched,
    end_of_day,
    is_after,
    is_before,
    is_between,
)

logger = logging.getLogger(__name__)

DateBucketMap = dict[str, list[EnrichedEvent]]


def classify_for_date(event: Event, day: date | datetime) -> Optional[tuple[datetime, datetime]]:
    """
    Clip an event to one calendar date.

    Three disjoint rules decide whether the event shows on `day`:
    1. It starts within the day: native start, end clipped to end-of-day
    2. It starts before the day and ends within it: start re-based to start-of-day
    3. It starts before the day and ends after it: full-day span

    Args:
        event: Event to classify
        day: Calendar date of the column

    Returns:
        The clipped (start, end) pair, or None if the event is not on `day`
    """
    sod = day_start(as_date(day), like=event.start)
    eod = end_of_day(sod)

    # eod is the last microsecond of the day, so [sod, eod] covers the whole day
    if is_between(event.start, sod, eod, inclusive_high=True):
        return event.start, min(event.end, eod)

    if not is_before(event.start, sod):
        return None

    if is_between(event.end, sod, eod, inclusive_low=False, inclusive_high=True):
        return sod, event.end

    if is_after(event.end, eod):
        return sod, eod

    return None


def events_for_date(enriched: Iterable[EnrichedEvent], day: date | datetime) -> list[EnrichedEvent]:
    """
    Filter and clip already-resolved events for one date column.

    Overlap fields are kept from `enriched`; nothing is recomputed.
    """
    visible = []
    for event in enriched:
        clipped = classify_for_date(event, day)
        if clipped is None:
            continue
        start, end = clipped
        if (start, end) == (event.start, event.end):
            visible.append(event)
        else:
            visible.append(event.model_copy(update={'start': start, 'end': end}))

    # Stable, so ties keep the resolved order
    visible.sort(key=lambda e: e.start)
    return visible


def _dates_for(events: list[Event], date_range: Optional[Iterable[date | datetime]]) -> list[date]:
    if date_range is not None:
        return [as_date(d) for d in date_range]

    seen = set()
    for event in events:
        seen.update(days_touched(event.start, event.end))
    return sorted(seen)


def resolve_flat(
    events: Iterable[Event],
    assume_sorted: bool = False,
    ordering_enabled: bool = True,
) -> list[EnrichedEvent]:
    """
    Resolve overlap once across the whole event list.

    With ordering disabled every event keeps the default position and count.
    """
    events = [ensure_valid_range(as_event(e)) for e in events]
    if not assume_sorted:
        events = sort_events(events)

    if not ordering_enabled:
        return [enrich_event(event) for event in events]

    return resolve(events, assume_sorted=True)


def enrich_bucketed(
    events: Iterable[Event],
    assume_sorted: bool = False,
    date_range: Optional[Iterable[date | datetime]] = None,
) -> DateBucketMap:
    """
    Bucket events per date and resolve overlap independently on each date.

    Args:
        events: Events in any order
        assume_sorted: Skip the initial sort by start
        date_range: Dates to build buckets for; defaults to every touched date

    Returns:
        Mapping of date key to enriched, clipped events in clipped-start order
    """
    events = [ensure_valid_range(as_event(e)) for e in events]
    if not assume_sorted:
        events = sort_events(events)

    buckets: DateBucketMap = {}
    for day in _dates_for(events, date_range):
        clipped_events = []
        for event in events:
            clipped = classify_for_date(event, day)
            if clipped is not None:
                start, end = clipped
                clipped_events.append(event.model_copy(update={'start': start, 'end': end}))

        if not clipped_events:
            continue

        buckets[date_key(day)] = resolve(sort_events(clipped_events), assume_sorted=True)

    logger.debug("Bucketed %d events into %d dates", len(events), len(buckets))
    return buckets


def enrich_flat(
    events: Iterable[Event],
    assume_sorted: bool = False,
    date_range: Optional[Iterable[date | datetime]] = None,
    ordering_enabled: bool = True,
) -> DateBucketMap:
    """
    Resolve overlap globally, then bucket the result per date.

    Slots are shared across dates rather than recomputed per date.
    """
    enriched = resolve_flat(events, assume_sorted=assume_sorted, ordering_enabled=ordering_enabled)

    buckets: DateBucketMap = {}
    for day in _dates_for(enriched, date_range):
        visible = events_for_date(enriched, day)
        if visible:
            buckets[date_key(day)] = visible

    logger.debug("Flat-resolved %d events across %d dates", len(enriched), len(buckets))
    return buckets


def enrich(
    events: Iterable[Event],
    assume_sorted: bool = False,
    mode: LayoutMode = LayoutMode.BUCKETED,
    date_range: Optional[Iterable[date | datetime]] = None,
    ordering_enabled: bool = True,
) -> DateBucketMap:
    """
    Build the date bucket map for a set of events.

    Args:
        events: Events or mappings with `start` and `end`
        assume_sorted: Trust that events are already ascending by start
        mode: BUCKETED resolves overlap per date, FLAT once globally
        date_range: Restrict buckets to these dates
        ordering_enabled: Only used in FLAT mode; skip slot assignment when off

    Returns:
        Mapping of `YYYY-MM-DD` to enriched events, keys in date order

    Raises:
        InvalidRangeError: If any event ends before it starts
    """
    mode = LayoutMode(mode)
    if mode is LayoutMode.BUCKETED:
        return enrich_bucketed(events, assume_sorted=assume_sorted, date_range=date_range)
    return enrich_flat(
        events,
        assume_sorted=assume_sorted,
        date_range=date_range,
        ordering_enabled=ordering_enabled,
    )
