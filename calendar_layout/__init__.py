"""Event layout engine for time-grid calendar views."""

from .cache import EnrichmentCache
from .enrich_utils import (
    DateBucketMap,
    classify_for_date,
    enrich,
    enrich_bucketed,
    enrich_flat,
    events_for_date,
    resolve_flat,
)
from .errors import InvalidRangeError, LayoutError, OutOfRangeHourConfig
from .layout import CalendarLayout, DayColumn
from .models import (
    EnrichedEvent,
    Event,
    HourRange,
    LayoutFlags,
    LayoutMode,
    event_key,
)
from .now import NowProvider
from .overlap_utils import overlaps, resolve, sort_events
from .position_utils import EventBox, event_box, scroll_offset, vertical_fraction, visible_hours
from .time_utils import (
    SIMPLE_DATE_FORMAT,
    end_of_day,
    is_after,
    is_before,
    is_between,
    is_same_calendar_day,
    start_of_day,
)

__all__ = [
    'Event',
    'EnrichedEvent',
    'HourRange',
    'LayoutFlags',
    'LayoutMode',
    'DateBucketMap',
    'InvalidRangeError',
    'LayoutError',
    'OutOfRangeHourConfig',
    'resolve',
    'enrich',
    'vertical_fraction',
    'enrich_bucketed',
    'enrich_flat',
    'resolve_flat',
    'classify_for_date',
    'events_for_date',
    'overlaps',
    'sort_events',
    'event_key',
    'EventBox',
    'event_box',
    'visible_hours',
    'scroll_offset',
    'EnrichmentCache',
    'NowProvider',
    'CalendarLayout',
    'DayColumn',
    'SIMPLE_DATE_FORMAT',
    'start_of_day',
    'end_of_day',
    'is_between',
    'is_before',
    'is_after',
    'is_same_calendar_day',
]
