"""
Data model for the cosmic calendar.

Events, the visible time domain, and the fixed bounds of the simulated year
onto which 13.8 billion years of history are compressed.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


# The simulated calendar year (2024 is a leap year, 366 days)
YEAR_START = datetime(2024, 1, 1)
YEAR_END = datetime(2024, 12, 31, 23, 59, 59)

SECONDS_PER_DAY = 24 * 60 * 60


class EventType(Enum):
    """Event categories, in lane order."""
    COSMIC = 'cosmic'
    GEOLOGICAL = 'geological'
    LIFE = 'life'
    HUMAN = 'human'

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class ZoomLevel(Enum):
    """Named granularities, from coarsest to finest."""
    YEAR = 'year'
    MONTH = 'month'
    DAY = 'day'
    HOUR = 'hour'


# Marker fill color for each event type
TYPE_COLORS = {
    EventType.COSMIC: '#ff6b6b',
    EventType.GEOLOGICAL: '#4ecdc4',
    EventType.LIFE: '#45b7d1',
    EventType.HUMAN: '#ffa726',
}


@dataclass(frozen=True)
class CosmicEvent:
    """
    One event on the cosmic calendar.

    ``name`` is the identity key: marker reconciliation matches events
    across recomputes by name alone, so names must be unique within a dataset.
    """
    name: str
    date: datetime
    type: EventType
    importance: float
    description: str = ''

    @property
    def color(self) -> str:
        return TYPE_COLORS[self.type]

    @property
    def base_radius(self) -> float:
        """Resting marker radius."""
        return max(3.0, self.importance / 2)

    @property
    def hover_radius(self) -> float:
        """Marker radius while the pointer is over it."""
        return max(6.0, self.importance / 1.5)


@dataclass(frozen=True)
class TimeDomain:
    """A visible time interval with ``start < end``."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise ValueError("start and end must be datetime objects")
        if self.start >= self.end:
            raise ValueError(
                f"Domain start must be before end, got {self.start} >= {self.end}"
            )

    @property
    def span(self) -> timedelta:
        return self.end - self.start

    @property
    def span_days(self) -> float:
        return self.span.total_seconds() / SECONDS_PER_DAY

    def contains(self, dt: datetime) -> bool:
        """Inclusive on both ends."""
        return self.start <= dt <= self.end

    def contains_domain(self, other: 'TimeDomain') -> bool:
        return self.start <= other.start and other.end <= self.end

    def clamped_to(self, bounds: 'TimeDomain') -> 'TimeDomain':
        """
        Intersect with ``bounds``.

        Raises:
            ValueError: If the intersection is empty or a single instant
        """
        return TimeDomain(max(self.start, bounds.start), min(self.end, bounds.end))


FULL_YEAR = TimeDomain(YEAR_START, YEAR_END)
