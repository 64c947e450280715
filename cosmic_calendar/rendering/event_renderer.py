"""
Event Renderer - Handles visual representation of cosmic calendar events.

This module provides the EventRenderer class which creates QGraphicsItem
objects for event markers and applies animated attribute values to them.
"""

from typing import Callable, Optional

from PyQt5.QtWidgets import QGraphicsEllipseItem, QGraphicsItem
from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QBrush, QColor, QPen

from cosmic_calendar.data.models import CosmicEvent, TYPE_COLORS
from cosmic_calendar.utils.error_handler import RenderError


HoverHandler = Callable[[QPointF, CosmicEvent], None]


class MarkerItem(QGraphicsEllipseItem):
    """
    Circular event marker positioned by its center and radius.

    Hover events are forwarded to explicit handler functions taking
    ``(screen_position, event)``.
    """

    def __init__(self, event: CosmicEvent, on_hover_enter: Optional[HoverHandler] = None,
                 on_hover_leave: Optional[HoverHandler] = None, parent=None):
        super().__init__(parent)
        self.event = event
        self.on_hover_enter = on_hover_enter
        self.on_hover_leave = on_hover_leave
        self._cx = 0.0
        self._cy = 0.0
        self._radius = 0.0
        self.setAcceptHoverEvents(True)

    @property
    def center(self):
        return (self._cx, self._cy)

    @property
    def radius(self):
        return self._radius

    def set_center(self, x: float = None, y: float = None):
        if x is not None:
            self._cx = x
        if y is not None:
            self._cy = y
        self._update_geometry()

    def set_radius(self, radius: float):
        self._radius = max(0.0, radius)
        self._update_geometry()

    def _update_geometry(self):
        r = self._radius
        self.setRect(self._cx - r, self._cy - r, r * 2, r * 2)

    def hoverEnterEvent(self, event):
        if self.on_hover_enter is not None:
            self.on_hover_enter(QPointF(event.screenPos()), self.event)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        if self.on_hover_leave is not None:
            self.on_hover_leave(QPointF(event.screenPos()), self.event)
        super().hoverLeaveEvent(event)


class EventRenderer:
    """
    Creates and updates event markers.

    Markers start invisible (radius 0, opacity 0); their visible attributes
    are driven afterwards by animation values passed to ``apply_attribute``.
    """

    COLORS = {event_type.value: color for event_type, color in TYPE_COLORS.items()}
    UNKNOWN_COLOR = '#95a5a6'

    MARKER_BORDER_COLOR = '#FFFFFF'
    MARKER_BORDER_WIDTH = 1

    Z_EVENT_MARKERS = 5

    def create_event_marker(self, event: CosmicEvent, on_hover_enter: Optional[HoverHandler] = None,
                            on_hover_leave: Optional[HoverHandler] = None,
                            parent: Optional[QGraphicsItem] = None) -> MarkerItem:
        """
        Create a marker item for an event.

        Args:
            event: Event to represent
            on_hover_enter: Called with (screen position, event) on pointer enter
            on_hover_leave: Called with (screen position, event) on pointer leave
            parent: Parent item (the plot area)

        Returns:
            MarkerItem: Invisible marker ready to be animated
        """
        marker = MarkerItem(event, on_hover_enter, on_hover_leave, parent)
        marker.setBrush(QBrush(QColor(self.color_for(event))))
        marker.setPen(QPen(QColor(self.MARKER_BORDER_COLOR), self.MARKER_BORDER_WIDTH))
        marker.setOpacity(0.0)
        marker.set_radius(0.0)
        marker.setZValue(self.Z_EVENT_MARKERS)
        marker.setData(0, event.name)
        return marker

    def color_for(self, event: CosmicEvent) -> str:
        return self.COLORS.get(event.type.value, self.UNKNOWN_COLOR)

    @staticmethod
    def apply_attribute(marker: MarkerItem, attribute: str, value):
        """
        Apply one animated attribute value to a marker.

        Args:
            marker: Marker to update
            attribute: One of 'x', 'y', 'radius', 'opacity', 'color'
            value: New value

        Raises:
            RenderError: If the attribute is not one of the above
        """
        if attribute == 'x':
            marker.set_center(x=value)
        elif attribute == 'y':
            marker.set_center(y=value)
        elif attribute == 'radius':
            marker.set_radius(value)
        elif attribute == 'opacity':
            marker.setOpacity(max(0.0, min(1.0, value)))
        elif attribute == 'color':
            marker.setBrush(QBrush(QColor(value)))
        else:
            raise RenderError(f"Unknown marker attribute '{attribute}'")
