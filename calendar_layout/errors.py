"""Errors raised by the layout engine."""


class LayoutError(Exception):
    """Base class for layout engine errors."""


class InvalidRangeError(LayoutError):
    """An event ends before it starts."""

    def __init__(self, event, message: str | None = None):
        self.event = event
        if message is None:
            message = f"event end {event.end} precedes start {event.start}"
        super().__init__(message)


class OutOfRangeHourConfig(LayoutError):
    """The visible hour range is outside 0-23 or inverted."""

    def __init__(self, min_hour: int, max_hour: int):
        self.min_hour = min_hour
        self.max_hour = max_hour
        super().__init__(
            f"invalid hour range {min_hour}-{max_hour}: "
            f"expected 0 <= min_hour <= max_hour <= 23"
        )
