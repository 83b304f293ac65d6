"""Data models consumed and produced by the layout engine."""

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

import pydantic

from .errors import InvalidRangeError, OutOfRangeHourConfig


class Event(pydantic.BaseModel):
    """
    A concrete calendar event.

    Only `start` and `end` are interpreted. `title` is part of the stable
    identity key; any other field is carried through untouched.
    """

    model_config = pydantic.ConfigDict(extra='allow')

    start: datetime
    end: datetime
    title: str = ''

    @pydantic.model_validator(mode='after')
    def validate_time_order(self) -> 'Event':
        # Not a ValueError, so pydantic re-raises it unwrapped
        if self.end < self.start:
            raise InvalidRangeError(self)
        return self


class EnrichedEvent(Event):
    overlap_position: int = pydantic.Field(default=0, ge=0)
    overlap_count: int = pydantic.Field(default=1, ge=1)


class LayoutMode(str, Enum):
    """How overlap slots are computed across dates."""

    BUCKETED = 'bucketed'
    FLAT = 'flat'


class HourRange(pydantic.BaseModel):
    """Visible hour rows, both bounds inclusive."""

    model_config = pydantic.ConfigDict(frozen=True)

    min_hour: int = 0
    max_hour: int = 23

    @pydantic.model_validator(mode='after')
    def validate_bounds(self) -> 'HourRange':
        if not 0 <= self.min_hour <= self.max_hour <= 23:
            raise OutOfRangeHourConfig(self.min_hour, self.max_hour)
        return self

    @property
    def total_hours(self) -> int:
        return self.max_hour - self.min_hour + 1


class LayoutFlags(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    is_event_ordering_enabled: bool = True
    enable_enriched_events: bool = False
    events_are_sorted: bool = False

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.BUCKETED if self.enable_enriched_events else LayoutMode.FLAT


def as_event(value: Event | Mapping[str, Any]) -> Event:
    """Validate a mapping into an Event; Event instances are returned as-is."""
    if isinstance(value, Event):
        return value
    return Event.model_validate(value)


def enrich_event(event: Event, overlap_position: int = 0, overlap_count: int = 1) -> EnrichedEvent:
    """Copy `event` into an EnrichedEvent, keeping any extra fields."""
    data = dict(event)
    data['overlap_position'] = overlap_position
    data['overlap_count'] = overlap_count
    return EnrichedEvent(**data)


def event_key(event: Event, index: int) -> str:
    """Stable identity key for a rendered event."""
    return f"{index}{event.start}{event.title}{event.end}"
