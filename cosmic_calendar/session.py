"""
Calendar Session - Interaction controller for the cosmic calendar.

The CalendarSession owns every piece of mutable view state (scale, preset
label, markers, tooltip) and turns user input into domain changes:

- continuous zoom/pan gesture samples (ZoomDelta)
- four preset commands: reset, December, last day, last hour

Each domain change triggers a full recompute: filter the events, pick the
level of detail, reconcile markers, and publish axis/statistics/period text
through Qt signals.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from cosmic_calendar.calendar_config import CalendarConfig
from cosmic_calendar.data.event_filter import SortedEventIndex
from cosmic_calendar.data.models import (
    CosmicEvent, EventType, FULL_YEAR, TimeDomain, YEAR_END, YEAR_START, ZoomLevel
)
from cosmic_calendar.rendering.level_of_detail import LevelOfDetail, LevelOfDetailSelector
from cosmic_calendar.rendering.marker_lifecycle import LifecyclePlan, MarkerLifecycleManager
from cosmic_calendar.rendering.scale_transform import BandScale, ScaleTransform, ZoomDelta
from cosmic_calendar.utils.animation_manager import AnimationQueue
from cosmic_calendar.utils.tooltip_manager import TooltipController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    """A named zoom command with a literal target domain."""
    name: str
    start: datetime
    end: datetime
    level: ZoomLevel
    title: str
    range_text: str

    @property
    def domain(self) -> TimeDomain:
        return TimeDomain(self.start, self.end)


PRESETS = {
    'reset': Preset(
        'reset', YEAR_START, YEAR_END, ZoomLevel.YEAR,
        'Full Year View', 'January 1 - December 31'
    ),
    'december': Preset(
        'december', datetime(2024, 12, 1), YEAR_END, ZoomLevel.MONTH,
        'December - Life Explodes', 'Complex life emerges'
    ),
    'last_day': Preset(
        'last_day', datetime(2024, 12, 31), YEAR_END, ZoomLevel.DAY,
        'December 31 - The Human Day', 'All of human evolution'
    ),
    'last_hour': Preset(
        'last_hour', datetime(2024, 12, 31, 23), YEAR_END, ZoomLevel.HOUR,
        'Final Hour - Human Civilization', 'All of recorded history'
    ),
}

# Coarsest first
PRESET_ORDER = ['reset', 'december', 'last_day', 'last_hour']

# Vertical room kept free below the lanes for the time axis
LANE_BOTTOM_INSET = 60
LANE_TOP = 20


@dataclass
class RecomputeResult:
    """Everything one recompute produced."""
    domain: TimeDomain
    visible: List[CosmicEvent]
    lod: LevelOfDetail
    ticks: List[datetime]
    plan: LifecyclePlan
    stats_text: str


class CalendarSession(QObject):
    """
    Single owner of the calendar's view state.

    Signals:
        domain_changed: TimeDomain after every recompute
        axis_changed: (LevelOfDetail, list of tick datetimes)
        stats_changed: Statistics text for the visible range
        period_changed: (title, range text) of the current period
    """

    domain_changed = pyqtSignal(object)
    axis_changed = pyqtSignal(object, object)
    stats_changed = pyqtSignal(str)
    period_changed = pyqtSignal(str, str)

    def __init__(self, events: Iterable[CosmicEvent], config: Optional[CalendarConfig] = None,
                 queue: Optional[AnimationQueue] = None, parent=None):
        """
        Args:
            events: The immutable event set for this session
            config: Display and animation settings
            queue: Animation queue shared with the rendering backend
            parent: Parent QObject
        """
        super().__init__(parent)
        self.config = config or CalendarConfig()

        self.events = tuple(events)
        self.index = SortedEventIndex(self.events)

        self.scale = ScaleTransform(self.config.plot_width, FULL_YEAR, self.config.scale_extent)
        self.lanes = BandScale(
            list(EventType),
            (self.config.plot_height - LANE_BOTTOM_INSET, LANE_TOP),
            padding=0.3
        )

        self.queue = queue or AnimationQueue()
        self.lifecycle = MarkerLifecycleManager(
            self.queue, durations=self.config.animation_durations
        )
        self.tooltip = TooltipController(self)

        self.preset_label: Optional[ZoomLevel] = ZoomLevel.YEAR
        self.period_title = PRESETS['reset'].title
        self.period_range = PRESETS['reset'].range_text
        self.last_result: Optional[RecomputeResult] = None

        logger.info(f"Calendar session started with {len(self.events)} events")

    # Queries

    def domain(self) -> TimeDomain:
        return self.scale.domain()

    @property
    def level_of_detail(self) -> LevelOfDetail:
        return LevelOfDetailSelector.classify(self.scale.domain())

    @property
    def zoom_level(self) -> ZoomLevel:
        """Descriptive zoom level, always derived from the current span."""
        return self.level_of_detail.level

    # Commands

    def on_zoom_gesture(self, delta: ZoomDelta) -> RecomputeResult:
        """
        Apply one gesture sample. Every sample triggers a full recompute.
        """
        self.scale.rescale(delta)

        # A gesture leaves the preset view; the period text follows the span
        self.preset_label = None
        lod = self.level_of_detail
        self._set_period(f"{lod.label} View", self._describe_range(self.scale.domain(), lod))
        return self.recompute()

    def apply_preset(self, name: str) -> RecomputeResult:
        """
        Jump to a preset domain.

        Raises:
            ValueError: If ``name`` is not a known preset
        """
        preset = PRESETS.get(name)
        if preset is None:
            raise ValueError(f"Unknown preset '{name}', expected one of {', '.join(PRESET_ORDER)}")

        self.scale.set_domain(preset.start, preset.end)
        self.preset_label = preset.level
        self._set_period(preset.title, preset.range_text)
        logger.debug(f"Preset '{name}' applied")
        return self.recompute()

    def reset_zoom(self) -> RecomputeResult:
        return self.apply_preset('reset')

    def zoom_to_december(self) -> RecomputeResult:
        return self.apply_preset('december')

    def zoom_to_last_day(self) -> RecomputeResult:
        return self.apply_preset('last_day')

    def zoom_to_last_hour(self) -> RecomputeResult:
        return self.apply_preset('last_hour')

    def recompute(self) -> RecomputeResult:
        """Filter, classify and reconcile against the current domain."""
        domain = self.scale.domain()
        visible = self.index.visible(domain)
        lod = LevelOfDetailSelector.classify(domain)
        ticks = self.scale.ticks()
        plan = self.lifecycle.update(visible, self.scale, self.lanes)
        stats_text = LevelOfDetailSelector.describe(domain, len(visible))

        hovered = self.tooltip.hovered_key
        if hovered is not None and hovered not in self.lifecycle.visible_keys:
            self.tooltip.hide()

        self.last_result = RecomputeResult(domain, visible, lod, ticks, plan, stats_text)

        self.domain_changed.emit(domain)
        self.axis_changed.emit(lod, ticks)
        self.stats_changed.emit(stats_text)
        return self.last_result

    # Hover

    def handle_hover_enter(self, pointer: Tuple[float, float], event: CosmicEvent):
        """Highlight the marker of ``event`` and show its tooltip at ``pointer``."""
        if self.lifecycle.hover_enter(event.name):
            self.tooltip.show(event, pointer)

    def handle_hover_exit(self, pointer: Tuple[float, float], event: CosmicEvent):
        self.lifecycle.hover_exit(event.name)
        if self.tooltip.hovered_key == event.name:
            self.tooltip.hide()

    # Internals

    def _set_period(self, title: str, range_text: str):
        self.period_title = title
        self.period_range = range_text
        self.period_changed.emit(title, range_text)

    @staticmethod
    def _describe_range(domain: TimeDomain, lod: LevelOfDetail) -> str:
        def fmt(dt):
            text = f"{dt:%B} {dt.day}"
            if lod.level in (ZoomLevel.DAY, ZoomLevel.HOUR):
                text += f" {dt:%H:%M}"
            return text
        return f"{fmt(domain.start)} - {fmt(domain.end)}"
