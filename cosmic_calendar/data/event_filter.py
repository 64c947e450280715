"""
Event Filter - Selects the events inside the visible time domain.
"""

from bisect import bisect_left, bisect_right
from typing import Iterable, List

from cosmic_calendar.data.models import CosmicEvent, TimeDomain


def visible(events: Iterable[CosmicEvent], domain: TimeDomain) -> List[CosmicEvent]:
    """
    Return the events whose date lies within ``domain``, inclusive on both ends.

    A linear scan; input order is preserved.
    """
    return [event for event in events if domain.start <= event.date <= domain.end]


class SortedEventIndex:
    """
    Events sorted by date, answering the same query as ``visible`` with
    two binary searches instead of a full scan.
    """

    def __init__(self, events: Iterable[CosmicEvent]):
        self._events = sorted(events, key=lambda e: e.date)
        self._dates = [event.date for event in self._events]

    def __len__(self):
        return len(self._events)

    @property
    def events(self) -> List[CosmicEvent]:
        return list(self._events)

    def visible(self, domain: TimeDomain) -> List[CosmicEvent]:
        """
        Args:
            domain: Visible time interval

        Returns:
            list: Events with ``start <= date <= end``, sorted by date
        """
        lo = bisect_left(self._dates, domain.start)
        hi = bisect_right(self._dates, domain.end)
        return self._events[lo:hi]
