"""Day-boundary arithmetic and instant comparisons."""

from datetime import date, datetime, time, timedelta

SIMPLE_DATE_FORMAT = '%Y-%m-%d'

ONE_DAY = timedelta(days=1)


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(instant: datetime) -> datetime:
    """Last representable instant of the day (23:59:59.999999)."""
    return instant.replace(hour=23, minute=59, second=59, microsecond=999999)


def is_between(
    instant: datetime,
    lo: datetime,
    hi: datetime,
    inclusive_low: bool = True,
    inclusive_high: bool = False,
) -> bool:
    """
    Check whether `instant` lies between `lo` and `hi`.

    The defaults give the half-open interval [lo, hi).
    """
    above = lo <= instant if inclusive_low else lo < instant
    below = instant <= hi if inclusive_high else instant < hi
    return above and below


def is_before(a: datetime, b: datetime) -> bool:
    return a < b


def is_after(a: datetime, b: datetime) -> bool:
    return a > b


def as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_same_calendar_day(instant: date | datetime, reference_now: datetime) -> bool:
    return as_date(instant) == as_date(reference_now)


def date_key(day: date | datetime) -> str:
    return day.strftime(SIMPLE_DATE_FORMAT)


def day_start(day: date | datetime, like: datetime | None = None) -> datetime:
    """
    Midnight of `day` as a datetime.

    When `day` is a plain date the tzinfo is borrowed from `like`, so that
    comparisons with aware event instants stay valid.
    """
    if isinstance(day, datetime):
        return start_of_day(day)
    tzinfo = like.tzinfo if like is not None else None
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def days_touched(start: datetime, end: datetime) -> list[date]:
    """
    Calendar dates touched by the half-open range [start, end).

    A range ending exactly at midnight does not touch the following date.
    A zero-duration range touches the date it sits on.
    """
    first = start.date()
    last = end.date()
    if end > start and end == start_of_day(end):
        last -= ONE_DAY

    days = []
    current = first
    while current <= last:
        days.append(current)
        current += ONE_DAY
    return days
