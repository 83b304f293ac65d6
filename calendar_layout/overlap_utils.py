"""Horizontal slot assignment for events that share time."""

import logging
from typing import Iterable

from .errors import InvalidRangeError
from .models import EnrichedEvent, Event, as_event, enrich_event

logger = logging.getLogger(__name__)


def ensure_valid_range(event: Event) -> Event:
    if event.end < event.start:
        raise InvalidRangeError(event)
    return event


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Stable sort by start instant."""
    return sorted(events, key=lambda e: e.start)


def overlaps(a: Event, b: Event) -> bool:
    """Half-open intersection of [a.start, a.end) and [b.start, b.end)."""
    return a.start < b.end and b.start < a.end


def assign_slots(events: list[Event]) -> list[int]:
    """
    Greedy interval colouring over events sorted by start.

    Each event takes the lowest slot none of whose occupants overlap it,
    else a new slot. A slot is tracked by its latest-ending occupant: it is
    free once that occupant ended at or before the event's start, and a
    zero-duration event can also sit at the instant that occupant starts.

    Args:
        events: Events in ascending start order

    Returns:
        Slot index per event, aligned with `events`
    """
    slots = []
    positions = []

    for event in events:
        for slot, occupant in enumerate(slots):
            if not overlaps(occupant, event):
                if event.end >= occupant.end:
                    slots[slot] = event
                positions.append(slot)
                break
        else:
            slots.append(event)
            positions.append(len(slots) - 1)

    return positions


def find_clusters(events: list[Event]) -> list[list[int]]:
    """
    Group sorted events into maximal sets connected by overlap.

    Returns:
        Lists of indexes into `events`, one list per cluster, ordered by
        their first member
    """
    parent = list(range(len(events)))

    def root(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i, event in enumerate(events):
        for j in range(i + 1, len(events)):
            # Nothing starting at or after this end can overlap it
            if events[j].start >= event.end:
                break
            if overlaps(event, events[j]):
                parent[root(j)] = root(i)

    clusters = {}
    for i in range(len(events)):
        clusters.setdefault(root(i), []).append(i)
    return list(clusters.values())


def resolve(events: Iterable[Event], assume_sorted: bool = True) -> list[EnrichedEvent]:
    """
    Assign each event an overlap position and overlap count.

    Algorithm:
    1. Sort by start unless the caller vouches for the order
    2. Greedily assign slots, reusing the lowest vacated one
    3. Group events into clusters by transitive overlap
    4. Give every cluster member the cluster's peak slot count

    Args:
        events: Events, ascending by start when `assume_sorted` is set
        assume_sorted: Trust the input order instead of sorting

    Returns:
        Enriched events in (sorted) input order

    Raises:
        InvalidRangeError: If any event ends before it starts
    """
    events = [ensure_valid_range(as_event(event)) for event in events]

    if not assume_sorted:
        events = sort_events(events)

    positions = assign_slots(events)
    counts = [1] * len(events)

    clusters = find_clusters(events)
    for cluster in clusters:
        peak = 1 + max(positions[i] for i in cluster)
        for i in cluster:
            counts[i] = peak

    logger.debug("Resolved %d events into %d clusters", len(events), len(clusters))

    return [
        enrich_event(event, overlap_position=position, overlap_count=count)
        for event, position, count in zip(events, positions, counts)
    ]
