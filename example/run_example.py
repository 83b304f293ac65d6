#!/usr/bin/env python3
"""
Simple example demonstrating the event layout engine.
Lays out a busy Monday plus a conference that runs into Wednesday.
"""

from datetime import date, datetime, timedelta
import sys
import os

# Add parent directory to path so we can import calendar_layout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from calendar_layout import CalendarLayout, Event, HourRange, LayoutFlags, NowProvider, enrich
import json


def main():
    events = [
        Event(title="Standup", start=datetime(2024, 6, 3, 10, 0), end=datetime(2024, 6, 3, 11, 0)),
        Event(title="Design review", start=datetime(2024, 6, 3, 10, 30), end=datetime(2024, 6, 3, 11, 30)),
        Event(title="Lunch", start=datetime(2024, 6, 3, 12, 0), end=datetime(2024, 6, 3, 13, 0)),
        Event(
            title="Conference",
            start=datetime(2024, 6, 3, 0, 0),
            end=datetime(2024, 6, 5, 12, 0),
            location="Hall B"
        ),
    ]

    buckets = enrich(events)

    output = {}
    for key, day_events in buckets.items():
        output[key] = [{
            'title': event.title,
            'start': event.start.strftime('%H:%M'),
            'end': event.end.strftime('%H:%M'),
            'slot': event.overlap_position,
            'count': event.overlap_count
        } for event in day_events]

    print(json.dumps(output, indent=2))

    # Column geometry for the first three days of the week, 8am-6pm
    layout = CalendarLayout(
        hour_range=HourRange(min_hour=8, max_hour=18),
        flags=LayoutFlags(enable_enriched_events=True),
        now_provider=NowProvider(clock=lambda: datetime(2024, 6, 3, 14, 15))
    )
    monday = date(2024, 6, 3)
    dates = [monday + timedelta(days=i) for i in range(3)]

    for column in layout.columns(events, dates):
        print(f"\n{column.date_key}" + (f"  (now at {column.now_top:.0%})" if column.now_top is not None else ""))
        for box in column.boxes:
            print(f"  {box.event.title:14} | top {box.top:5.1%} height {box.height:5.1%} "
                  f"| left {box.left:4.0%} width {box.width:4.0%}")


if __name__ == '__main__':
    main()
