"""
Scale Transform - Maps calendar time to pixel coordinates.

This module provides:
- ScaleTransform: the horizontal time <-> pixel mapping, driven either by
  continuous zoom/pan gestures or by explicit domain replacement
- BandScale: the vertical lane layout, one equal-height band per event type
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from cosmic_calendar.data.models import FULL_YEAR, TimeDomain


@dataclass(frozen=True)
class ZoomDelta:
    """
    One zoom gesture sample.

    Attributes:
        factor: Multiplier applied to the current scale factor (1.0 = no zoom)
        anchor_x: Pixel that stays fixed while zooming (None = plot center)
        pan_x: Horizontal translation in pixels, applied after zooming
    """
    factor: float = 1.0
    anchor_x: Optional[float] = None
    pan_x: float = 0.0


class ScaleTransform:
    """
    Bidirectional mapping between calendar time and a pixel range.

    The base mapping spans the full simulated year over ``[0, width]``.
    Gestures accumulate into a zoom transform ``(k, x)`` applied on top of it
    (``pixel' = k * pixel + x``); the visible domain is obtained by mapping
    ``[0, width]`` back through that transform. Whatever the input, the
    domain always satisfies ``start < end`` and lies within the year.
    """

    # Allowed scale factor relative to the full-year view
    SCALE_EXTENT = (0.1, 50.0)

    # Candidate tick intervals: (unit, step, approximate seconds)
    TICK_INTERVALS = [
        ('second', 1, 1),
        ('second', 5, 5),
        ('second', 15, 15),
        ('second', 30, 30),
        ('minute', 1, 60),
        ('minute', 5, 5 * 60),
        ('minute', 15, 15 * 60),
        ('minute', 30, 30 * 60),
        ('hour', 1, 3600),
        ('hour', 3, 3 * 3600),
        ('hour', 6, 6 * 3600),
        ('hour', 12, 12 * 3600),
        ('day', 1, 86400),
        ('day', 2, 2 * 86400),
        ('day', 7, 7 * 86400),
        ('month', 1, 30 * 86400),
        ('month', 3, 90 * 86400),
        ('year', 1, 365 * 86400),
    ]

    def __init__(self, width: float, bounds: TimeDomain = FULL_YEAR,
                 scale_extent: Optional[Tuple[float, float]] = None):
        """
        Args:
            width: Width of the plot area in pixels
            bounds: Full time range of the base mapping
            scale_extent: (min, max) scale factor, defaults to SCALE_EXTENT
        """
        if width <= 0:
            raise ValueError(f"Plot width must be positive, got {width}")

        self.width = float(width)
        self.bounds = bounds
        self.min_scale, self.max_scale = scale_extent or self.SCALE_EXTENT

        self._k = 1.0
        self._x = 0.0
        self._domain = bounds

    # Queries

    def domain(self) -> TimeDomain:
        return self._domain

    @property
    def scale_factor(self) -> float:
        """Current magnification relative to the full-year view."""
        return self._k

    def project(self, time: datetime) -> float:
        """Pixel position of ``time`` under the current domain."""
        span = self._domain.span.total_seconds()
        return (time - self._domain.start).total_seconds() / span * self.width

    def invert(self, pixel: float) -> datetime:
        """Time at pixel position ``pixel`` under the current domain."""
        span = self._domain.span.total_seconds()
        return self._domain.start + timedelta(seconds=pixel / self.width * span)

    # Mutations

    def rescale(self, delta: ZoomDelta) -> TimeDomain:
        """
        Apply a gesture delta to the zoom transform and derive the new domain.

        The scale factor is clamped to the scale extent before the domain is
        derived, so the domain only ever reflects the clamped factor.
        After a preset finer than the extent allows (last day, last hour) the
        first gesture therefore widens the view to the maximum magnification,
        whatever its direction.

        Args:
            delta: Zoom factor, anchor and pan of one gesture sample

        Returns:
            TimeDomain: The new visible domain
        """
        anchor = self.width / 2 if delta.anchor_x is None else delta.anchor_x
        k = self._clamp_scale(self._k * delta.factor)

        # Keep the base position under the anchor fixed while zooming
        base_at_anchor = (anchor - self._x) / self._k
        x = anchor - base_at_anchor * k + delta.pan_x

        self._k = k
        self._x = self._constrain_translate(k, x)
        self._domain = self._derive_domain()
        return self._domain

    def set_domain(self, start: datetime, end: datetime) -> TimeDomain:
        """
        Replace the domain explicitly, bypassing the gesture path.

        The zoom transform is re-synced to the new domain so the next gesture
        continues from it. The factor is not clamped here; the next gesture
        clamps it.

        Args:
            start: Start of the new domain
            end: End of the new domain

        Returns:
            TimeDomain: The new domain, clamped to the bounds

        Raises:
            ValueError: If ``start >= end`` after clamping
        """
        self._domain = TimeDomain(start, end).clamped_to(self.bounds)

        total = self.bounds.span.total_seconds()
        self._k = total / self._domain.span.total_seconds()
        self._x = -self._base_project(self._domain.start) * self._k
        return self._domain

    # Ticks

    def ticks(self, count: int = 10) -> List[datetime]:
        """
        Evenly spaced, calendar-aligned tick times inside the current domain.

        Args:
            count: Approximate number of ticks wanted

        Returns:
            list: Tick datetimes in ascending order
        """
        unit, step = self._tick_interval(count)
        start, end = self._domain.start, self._domain.end

        ticks = []
        current = self._floor_time(start, unit, step)
        while current <= end:
            if current >= start:
                ticks.append(current)
            current = self._offset_time(current, unit, step)
        return ticks

    def _tick_interval(self, count: int) -> Tuple[str, int]:
        target = self._domain.span.total_seconds() / max(1, count)
        seconds = [interval[2] for interval in self.TICK_INTERVALS]

        # Pick the neighbouring candidate with the closer ratio
        i = 0
        while i < len(seconds) and seconds[i] < target:
            i += 1
        if i == 0:
            unit, step, _ = self.TICK_INTERVALS[0]
        elif i == len(seconds):
            unit, step, _ = self.TICK_INTERVALS[-1]
        elif target / seconds[i - 1] < seconds[i] / target:
            unit, step, _ = self.TICK_INTERVALS[i - 1]
        else:
            unit, step, _ = self.TICK_INTERVALS[i]
        return unit, step

    @staticmethod
    def _floor_time(dt: datetime, unit: str, step: int) -> datetime:
        if unit == 'year':
            return datetime(dt.year, 1, 1)
        elif unit == 'month':
            month = ((dt.month - 1) // step) * step + 1
            return datetime(dt.year, month, 1)
        elif unit == 'day':
            day = ((dt.day - 1) // step) * step + 1
            return datetime(dt.year, dt.month, day)
        elif unit == 'hour':
            return datetime(dt.year, dt.month, dt.day, (dt.hour // step) * step)
        elif unit == 'minute':
            return datetime(dt.year, dt.month, dt.day, dt.hour, (dt.minute // step) * step)
        return datetime(dt.year, dt.month, dt.day, dt.hour, dt.minute, (dt.second // step) * step)

    @staticmethod
    def _offset_time(dt: datetime, unit: str, step: int) -> datetime:
        if unit == 'year':
            return dt.replace(year=dt.year + step)
        elif unit == 'month':
            month_index = dt.month - 1 + step
            return dt.replace(year=dt.year + month_index // 12, month=month_index % 12 + 1)
        elif unit == 'day':
            # Day steps restart at the first of each month
            following = dt + timedelta(days=step)
            if step > 1 and following.month != dt.month:
                return datetime(following.year, following.month, 1)
            return following
        elif unit == 'hour':
            return dt + timedelta(hours=step)
        elif unit == 'minute':
            return dt + timedelta(minutes=step)
        return dt + timedelta(seconds=step)

    # Internals

    def _clamp_scale(self, k: float) -> float:
        return max(self.min_scale, min(self.max_scale, k))

    def _constrain_translate(self, k: float, x: float) -> float:
        # Zoomed in: the viewport may not leave the bounds.
        # Zoomed out: the bounds are centered in the viewport.
        if k >= 1.0:
            return min(0.0, max(self.width * (1.0 - k), x))
        return self.width * (1.0 - k) / 2

    def _derive_domain(self) -> TimeDomain:
        start = self._base_invert((0.0 - self._x) / self._k)
        end = self._base_invert((self.width - self._x) / self._k)
        return TimeDomain(max(start, self.bounds.start), min(end, self.bounds.end))

    def _base_project(self, time: datetime) -> float:
        total = self.bounds.span.total_seconds()
        return (time - self.bounds.start).total_seconds() / total * self.width

    def _base_invert(self, pixel: float) -> datetime:
        total = self.bounds.span.total_seconds()
        return self.bounds.start + timedelta(seconds=pixel / self.width * total)

    def __repr__(self):
        return (
            f"ScaleTransform(k={self._k:.3f}, "
            f"domain={self._domain.start.isoformat()}..{self._domain.end.isoformat()})"
        )


class BandScale:
    """
    Ordinal band layout: equal-height lanes with inner and outer padding.

    A range given high-to-low (e.g. ``(140, 20)``) places the first key at
    the largest coordinate, i.e. the bottom of the plot.
    """

    def __init__(self, keys: Sequence, range_: Tuple[float, float], padding: float = 0.3):
        self.keys = list(keys)
        self.padding = padding
        r0, r1 = range_
        n = len(self.keys)
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)

        self.step = (stop - start) / max(1, n - padding + padding * 2)
        start += (stop - start - self.step * (n - padding)) * 0.5
        self.bandwidth = self.step * (1 - padding)

        values = [start + self.step * i for i in range(n)]
        if reverse:
            values.reverse()
        self._positions = dict(zip(self.keys, values))

    def __call__(self, key) -> float:
        """Top coordinate of the band for ``key``."""
        return self._positions[key]

    def center(self, key) -> float:
        return self._positions[key] + self.bandwidth / 2
