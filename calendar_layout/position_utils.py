"""Map instants onto the vertical axis of a day column."""

from datetime import datetime
from typing import Optional

import pydantic

from .models import EnrichedEvent, HourRange


class EventBox(pydantic.BaseModel):
    """Placement of one event inside its day column, as fractions of the column."""

    event: EnrichedEvent
    top: float
    height: float
    left: float
    width: float
    z_index: int = 0


def vertical_fraction(instant: datetime, min_hour: int, total_hours: int) -> float:
    """
    Offset of `instant` below the top of the visible hour range.

    Only the time of day is used, so the result is monotonic within one
    calendar day; callers place each instant in its own day column.

    Args:
        instant: Time to place
        min_hour: First visible hour
        total_hours: Number of visible hour rows

    Returns:
        Fraction in [0, 1]; instants outside the range are clamped
    """
    minutes = (instant.hour - min_hour) * 60 + instant.minute
    minutes += (instant.second + instant.microsecond / 1_000_000) / 60
    fraction = minutes / (total_hours * 60)
    return min(max(fraction, 0.0), 1.0)


def visible_hours(hour_range: HourRange) -> list[int]:
    return list(range(hour_range.min_hour, hour_range.max_hour + 1))


def scroll_offset(cell_height: float, scroll_offset_minutes: int) -> float:
    """Pixel offset for an initial scroll position given in minutes."""
    return cell_height * scroll_offset_minutes / 60


def event_box(event: EnrichedEvent, hour_range: HourRange, overlap_offset: Optional[float] = None) -> EventBox:
    """
    Geometry of an event box.

    By default overlapping events split the column width evenly. With
    `overlap_offset` (a fraction of the column) each slot is instead shifted
    right by that amount and runs to the column's right edge, later slots
    drawn on top.
    """
    top = vertical_fraction(event.start, hour_range.min_hour, hour_range.total_hours)
    bottom = vertical_fraction(event.end, hour_range.min_hour, hour_range.total_hours)

    if overlap_offset is None:
        width = 1 / event.overlap_count
        left = event.overlap_position * width
    else:
        if not 0 <= overlap_offset < 1:
            raise ValueError('overlap_offset must be in [0, 1)')
        left = min(event.overlap_position * overlap_offset, 1.0)
        width = 1.0 - left

    return EventBox(
        event=event,
        top=top,
        height=bottom - top,
        left=left,
        width=width,
        z_index=event.overlap_position,
    )
