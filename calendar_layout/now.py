"""Injected source of the current instant for the now indicator."""

from datetime import datetime, timedelta
from typing import Callable, Optional


class NowProvider:
    """
    Caches the current instant and re-reads it once per refresh period.

    The clock is injected so that callers and tests control time. A disabled
    provider (hidden now indicator) never reads the clock and returns None.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        refresh_period: timedelta = timedelta(minutes=1),
        enabled: bool = True,
    ):
        if refresh_period <= timedelta(0):
            raise ValueError('refresh_period must be greater than 0')
        self.clock = clock or datetime.now
        self.refresh_period = refresh_period
        self.enabled = enabled
        self._now = None

    def refresh(self) -> Optional[datetime]:
        if not self.enabled:
            return None
        self._now = self.clock()
        return self._now

    def now(self) -> Optional[datetime]:
        if not self.enabled:
            return None
        if self._now is None:
            return self.refresh()

        current = self.clock()
        if current - self._now >= self.refresh_period:
            self._now = current
        return self._now
