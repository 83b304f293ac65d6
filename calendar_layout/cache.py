"""Caller-owned memoization of enrichment results."""

import logging
from collections import OrderedDict
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from .enrich_utils import DateBucketMap, enrich, resolve_flat
from .models import EnrichedEvent, Event, LayoutMode

logger = logging.getLogger(__name__)


class EnrichmentCache:
    """
    LRU cache of bucket maps and flat resolutions, keyed on event-list
    identity and flags.

    A hit requires the very same list object the result was computed from;
    an equal but distinct list is a miss. Callers that mutate a list in
    place must call `clear()` or pass a new list.
    """

    def __init__(self, maxsize: int = 8):
        if maxsize < 1:
            raise ValueError('maxsize must be greater than 0')
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def _lookup(self, key, events):
        entry = self._entries.get(key)
        if entry is not None and entry[0] is events:
            self._entries.move_to_end(key)
            self.hits += 1
            logger.debug("Enrichment cache hit (%d entries)", len(self._entries))
            return entry[1]
        return None

    def _store(self, key, events, result):
        self.misses += 1
        # Holding the list keeps its id from being reused while cached
        self._entries[key] = (events, result)
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        logger.debug("Enrichment cache miss (%d entries)", len(self._entries))
        return result

    def get_or_compute(
        self,
        events: Sequence[Event],
        assume_sorted: bool = False,
        mode: LayoutMode = LayoutMode.BUCKETED,
        date_range: Optional[Iterable[date | datetime]] = None,
        ordering_enabled: bool = True,
    ) -> DateBucketMap:
        """Bucket map for `events`, computed by `enrich` on a miss."""
        dates = tuple(date_range) if date_range is not None else None
        key = ('buckets', id(events), assume_sorted, LayoutMode(mode), dates, ordering_enabled)

        cached = self._lookup(key, events)
        if cached is not None:
            return cached

        result = enrich(
            events,
            assume_sorted=assume_sorted,
            mode=mode,
            date_range=dates,
            ordering_enabled=ordering_enabled,
        )
        return self._store(key, events, result)

    def get_or_resolve_flat(
        self,
        events: Sequence[Event],
        assume_sorted: bool = False,
        ordering_enabled: bool = True,
    ) -> list[EnrichedEvent]:
        """Globally resolved events for flat mode, computed by `resolve_flat` on a miss."""
        key = ('flat', id(events), assume_sorted, ordering_enabled)

        cached = self._lookup(key, events)
        if cached is not None:
            return cached

        result = resolve_flat(events, assume_sorted=assume_sorted, ordering_enabled=ordering_enabled)
        return self._store(key, events, result)

    def clear(self) -> None:
        self._entries.clear()
