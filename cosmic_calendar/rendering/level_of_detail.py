"""
Level of Detail - Chooses axis labelling and descriptive text from the domain span.

This module provides the LevelOfDetailSelector which classifies a visible
domain into one of four granularities by its span in days:
- year view   (span > 300 days)
- month view  (25 < span <= 300)
- day view    (1 <= span <= 25)
- hour view   (span < 1)

Each granularity carries a tick label format and a statistics template.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from cosmic_calendar.data.models import TimeDomain, ZoomLevel


@dataclass(frozen=True)
class LevelOfDetail:
    """Formatting choices for one granularity."""
    level: ZoomLevel
    tick_format: str
    stats_kind: str
    label: str

    def format_tick(self, dt: datetime) -> str:
        return dt.strftime(self.tick_format)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class LevelOfDetailSelector:
    """
    Pure classification of a domain into a level of detail.

    The result depends only on the domain passed in; the selector keeps no
    state between calls.
    """

    # Span thresholds in days
    YEAR_THRESHOLD_DAYS = 300
    MONTH_THRESHOLD_DAYS = 25
    DAY_THRESHOLD_DAYS = 1

    LEVELS = {
        ZoomLevel.YEAR: LevelOfDetail(ZoomLevel.YEAR, '%B', 'total_events', 'Year'),
        ZoomLevel.MONTH: LevelOfDetail(ZoomLevel.MONTH, '%b %d', 'evolution_pace', 'Month'),
        ZoomLevel.DAY: LevelOfDetail(ZoomLevel.DAY, '%H:%M', 'human_history', 'Day'),
        ZoomLevel.HOUR: LevelOfDetail(ZoomLevel.HOUR, '%H:%M:%S', 'written_history', 'Hour'),
    }

    STATS_TEMPLATES = {
        'total_events': "Viewing full year - {count} major events across 13.8 billion years",
        'evolution_pace': "Viewing {days} days - Notice how life accelerates in recent time!",
        'human_history': "Viewing {days} day(s) - All of human history fits here",
        'written_history': "Viewing {hours} hour(s) - Written history is just minutes ago!",
    }

    @classmethod
    def classify_span(cls, span_days: float) -> LevelOfDetail:
        """
        Classify a span given in days.

        Boundaries resolve downward: exactly 300 days is a month view,
        exactly 25 and exactly 1 are day views.
        """
        if span_days > cls.YEAR_THRESHOLD_DAYS:
            return cls.LEVELS[ZoomLevel.YEAR]
        elif span_days > cls.MONTH_THRESHOLD_DAYS:
            return cls.LEVELS[ZoomLevel.MONTH]
        elif span_days >= cls.DAY_THRESHOLD_DAYS:
            return cls.LEVELS[ZoomLevel.DAY]
        return cls.LEVELS[ZoomLevel.HOUR]

    @classmethod
    def classify(cls, domain: TimeDomain) -> LevelOfDetail:
        return cls.classify_span(domain.span_days)

    @classmethod
    def describe(cls, domain: TimeDomain, visible_count: int) -> str:
        """
        Render the statistics text for a domain.

        Args:
            domain: Visible domain
            visible_count: Number of events inside it

        Returns:
            str: Human-readable statistics line
        """
        lod = cls.classify(domain)
        days = domain.span_days
        return cls.STATS_TEMPLATES[lod.stats_kind].format(
            count=visible_count,
            days=round_half_up(days),
            hours=round_half_up(days * 24),
        )
