"""
Tooltip Manager - Hover tooltip state and hint texts for the cosmic calendar.

This module provides:
- TooltipController: the single hover tooltip shown over event markers
- TooltipManager: static hint texts for the calendar's buttons and canvas
"""

import html
from dataclasses import dataclass
from typing import Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from cosmic_calendar.data.models import CosmicEvent


@dataclass(frozen=True)
class TooltipState:
    """What the tooltip shows and where. ``visible`` False means hidden."""
    visible: bool = False
    key: Optional[str] = None
    content: str = ''
    x: float = 0.0
    y: float = 0.0


class TooltipController(QObject):
    """
    Single-slot tooltip.

    ``show`` always overwrites whatever is displayed (last write wins), so at
    most one tooltip exists at a time.

    Signals:
        tooltip_changed: Emitted with the new TooltipState on every change
    """

    tooltip_changed = pyqtSignal(object)

    # Offset from the pointer to the tooltip's top-left corner
    POINTER_OFFSET = (10, -10)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._state = TooltipState()

    @property
    def state(self) -> TooltipState:
        return self._state

    @property
    def hovered_key(self) -> Optional[str]:
        return self._state.key if self._state.visible else None

    def show(self, event: CosmicEvent, pointer: Tuple[float, float]):
        """
        Show the tooltip for ``event`` near ``pointer``.

        Args:
            event: Hovered event
            pointer: Pointer position (x, y) in host coordinates
        """
        dx, dy = self.POINTER_OFFSET
        self._state = TooltipState(
            visible=True,
            key=event.name,
            content=self.format_content(event),
            x=pointer[0] + dx,
            y=pointer[1] + dy,
        )
        self.tooltip_changed.emit(self._state)

    def hide(self):
        if not self._state.visible:
            return
        self._state = TooltipState()
        self.tooltip_changed.emit(self._state)

    @staticmethod
    def format_content(event: CosmicEvent) -> str:
        """Rich-text body: event name as heading, then its description."""
        return f"<h4>{html.escape(event.name)}</h4><p>{html.escape(event.description)}</p>"


class TooltipManager:
    """
    Centralized hint texts for the calendar controls.
    """

    PRESET_TOOLTIPS = {
        'reset': 'Show the whole cosmic year, from the Big Bang to today',
        'december': 'Zoom to December, when complex life appears',
        'last_day': 'Zoom to December 31, the day that holds all of human evolution',
        'last_hour': 'Zoom to the final hour, the whole of recorded history',
    }

    CANVAS_TOOLTIPS = {
        'zoom_hint': 'Use the mouse wheel to zoom, drag to pan',
    }

    @classmethod
    def get_preset_tooltip(cls, key):
        """
        Args:
            key (str): Preset name

        Returns:
            str: Tooltip text, empty if unknown
        """
        return cls.PRESET_TOOLTIPS.get(key, '')

    @classmethod
    def get_canvas_tooltip(cls, key):
        return cls.CANVAS_TOOLTIPS.get(key, '')
