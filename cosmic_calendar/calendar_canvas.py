"""
Calendar Canvas - Drawing surface for the cosmic calendar.

This module provides the CalendarCanvas class which uses QGraphicsView and
QGraphicsScene to draw the time axis, the lane axis and the event markers of
a CalendarSession, and turns wheel and drag input into zoom gestures.
"""

import logging

from PyQt5.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsLineItem, QGraphicsRectItem, QGraphicsTextItem
)
from PyQt5.QtCore import Qt, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QBrush, QColor, QPen, QFont

from cosmic_calendar.rendering.event_renderer import EventRenderer
from cosmic_calendar.rendering.scale_transform import ZoomDelta
from cosmic_calendar.utils.animation_manager import AnimationClock
from styles import Colors

logger = logging.getLogger(__name__)


class CalendarCanvas(QGraphicsView):
    """
    Fixed-size view rendering one CalendarSession.

    The plot area sits inside the margins from the session's configuration;
    markers and axes are children of a plot root item translated by the
    top-left margin, so all session coordinates are plot-relative.

    Signals:
        marker_hovered: Emitted with (screen position, event) on pointer enter
        marker_left: Emitted with (screen position, event) on pointer leave
    """

    marker_hovered = pyqtSignal(QPointF, object)
    marker_left = pyqtSignal(QPointF, object)

    # Distance from the bottom of the plot to the time axis line
    AXIS_BOTTOM_OFFSET = 40
    TICK_SIZE = 6

    Z_AXIS = 0

    def __init__(self, session, parent=None):
        """
        Args:
            session: CalendarSession to render
            parent: Parent widget
        """
        super().__init__(parent)
        self.session = session
        self.config = session.config
        canvas = self.config.config['canvas']

        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)
        self.scene.setSceneRect(0, 0, canvas['width'], canvas['height'])
        self.scene.setBackgroundBrush(QBrush(QColor(Colors.BG_PANELS)))
        self.setFixedSize(canvas['width'] + 2, canvas['height'] + 2)

        self.setRenderHint(QPainter.Antialiasing, True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setMouseTracking(True)
        self.setCursor(Qt.OpenHandCursor)

        # Plot root: everything is drawn in plot coordinates below it
        self.plot_root = QGraphicsRectItem(0, 0, 0, 0)
        self.plot_root.setPen(QPen(Qt.NoPen))
        self.plot_root.setPos(canvas['margin_left'], canvas['margin_top'])
        self.scene.addItem(self.plot_root)

        self.event_renderer = EventRenderer()
        self.event_markers = {}  # Maps event name to MarkerItem
        self.axis_items = []
        self.lane_axis_items = []

        self._is_panning = False
        self._pan_last_x = None

        # Markers follow the session's lifecycle and animation values
        self.session.queue.apply_callback = self._apply_attribute
        self.session.lifecycle.on_marker_created = self._create_marker
        self.session.lifecycle.on_marker_removed = self._remove_marker
        self.animation_clock = AnimationClock(self.session.queue, self)

        self.session.axis_changed.connect(self._render_time_axis)
        self.session.domain_changed.connect(self._on_domain_changed)
        self.marker_hovered.connect(self._forward_hover_enter)
        self.marker_left.connect(self._forward_hover_exit)

        self._render_lane_axis()
        logger.debug(f"Calendar canvas created: {canvas['width']}x{canvas['height']}")

    # Markers

    def _create_marker(self, key, event):
        marker = self.event_renderer.create_event_marker(
            event,
            on_hover_enter=self.marker_hovered.emit,
            on_hover_leave=self.marker_left.emit,
            parent=self.plot_root
        )
        self.event_markers[key] = marker

    def _remove_marker(self, key):
        marker = self.event_markers.pop(key, None)
        if marker is not None and marker.scene() is self.scene:
            self.scene.removeItem(marker)

    def _apply_attribute(self, key, attribute, value):
        marker = self.event_markers.get(key)
        if marker is not None:
            self.event_renderer.apply_attribute(marker, attribute, value)

    def _on_domain_changed(self, domain):
        self.animation_clock.ensure_running()

    def _forward_hover_enter(self, screen_pos, event):
        self.session.handle_hover_enter((screen_pos.x(), screen_pos.y()), event)
        self.animation_clock.ensure_running()

    def _forward_hover_exit(self, screen_pos, event):
        self.session.handle_hover_exit((screen_pos.x(), screen_pos.y()), event)
        self.animation_clock.ensure_running()

    # Axes

    def _clear_items(self, items):
        for item in items:
            if item.scene() is self.scene:
                self.scene.removeItem(item)
        items.clear()

    def _axis_pen(self):
        return QPen(QColor(Colors.TEXT_SECONDARY), 1)

    def _render_time_axis(self, lod, ticks):
        """Draw the bottom time axis with labels in the current level of detail."""
        self._clear_items(self.axis_items)

        width = self.session.scale.width
        axis_y = self.config.plot_height - self.AXIS_BOTTOM_OFFSET
        font = QFont("Segoe UI", 9)

        axis_line = QGraphicsLineItem(0, axis_y, width, axis_y, self.plot_root)
        axis_line.setPen(self._axis_pen())
        axis_line.setZValue(self.Z_AXIS)
        self.axis_items.append(axis_line)

        for tick_time in ticks:
            x = self.session.scale.project(tick_time)

            tick = QGraphicsLineItem(x, axis_y, x, axis_y + self.TICK_SIZE, self.plot_root)
            tick.setPen(self._axis_pen())
            self.axis_items.append(tick)

            label = QGraphicsTextItem(lod.format_tick(tick_time), self.plot_root)
            label.setDefaultTextColor(QColor(Colors.TEXT_PRIMARY))
            label.setFont(font)
            label_width = label.boundingRect().width()
            label.setPos(x - label_width / 2, axis_y + self.TICK_SIZE)
            self.axis_items.append(label)

    def _render_lane_axis(self):
        """Draw the left axis naming each event-type lane."""
        self._clear_items(self.lane_axis_items)

        lanes = self.session.lanes
        font = QFont("Segoe UI", 9)

        top = min(lanes(key) for key in lanes.keys)
        bottom = max(lanes(key) for key in lanes.keys) + lanes.bandwidth
        axis_line = QGraphicsLineItem(0, top, 0, bottom, self.plot_root)
        axis_line.setPen(self._axis_pen())
        self.lane_axis_items.append(axis_line)

        for event_type in lanes.keys:
            y = lanes.center(event_type)

            tick = QGraphicsLineItem(-self.TICK_SIZE, y, 0, y, self.plot_root)
            tick.setPen(self._axis_pen())
            self.lane_axis_items.append(tick)

            label = QGraphicsTextItem(event_type.value, self.plot_root)
            label.setDefaultTextColor(QColor(Colors.TEXT_PRIMARY))
            label.setFont(font)
            rect = label.boundingRect()
            label.setPos(-self.TICK_SIZE - rect.width(), y - rect.height() / 2)
            self.lane_axis_items.append(label)

    # Gestures

    def wheelEvent(self, event):
        """
        Zoom around the pointer. Every wheel sample is one gesture delta.

        Args:
            event: QWheelEvent
        """
        angle = event.angleDelta().y()
        if angle == 0:
            event.ignore()
            return

        sensitivity = float(self.config.get('zoom', 'wheel_sensitivity', 0.002))
        factor = 2 ** (angle * sensitivity)
        anchor_x = self.mapToScene(event.pos()).x() - self.plot_root.pos().x()

        self.session.on_zoom_gesture(ZoomDelta(factor=factor, anchor_x=anchor_x))
        event.accept()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._is_panning = True
            self._pan_last_x = event.pos().x()
            self.setCursor(Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._is_panning and self._pan_last_x is not None:
            dx = event.pos().x() - self._pan_last_x
            self._pan_last_x = event.pos().x()
            if dx:
                self.session.on_zoom_gesture(ZoomDelta(pan_x=dx))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self._is_panning:
            self._is_panning = False
            self._pan_last_x = None
            self.setCursor(Qt.OpenHandCursor)
            event.accept()
            return
        super().mouseReleaseEvent(event)
