"""
Calendar Dialog - Main window for the cosmic calendar.

This module provides the main dialog window, integrating the canvas, the
period header, the statistics line, the hover tooltip and the preset buttons,
and coordinating the one-shot data load.
"""

import logging

from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QWidget, QLabel, QPushButton, QShortcut
)
from PyQt5.QtCore import Qt, QPoint
from PyQt5.QtGui import QFont, QKeySequence

from cosmic_calendar.calendar_canvas import CalendarCanvas
from cosmic_calendar.calendar_config import CalendarConfig
from cosmic_calendar.data.event_loader import EventLoader
from cosmic_calendar.session import CalendarSession, PRESETS, PRESET_ORDER
from cosmic_calendar.utils.error_handler import DataLoadError, ErrorHandler
from cosmic_calendar.utils.tooltip_manager import TooltipManager
from styles import CalendarStyles

logger = logging.getLogger(__name__)

LOAD_ERROR_TEXT = "Error loading timeline data. Please check that all files are present."

PRESET_BUTTON_TEXT = {
    'reset': 'Full Year',
    'december': 'December',
    'last_day': 'Last Day',
    'last_hour': 'Last Hour',
}


class CalendarDialog(QDialog):
    """
    Cosmic calendar window.

    If the event data cannot be loaded the chart is replaced by a static
    error text and no session is created.
    """

    def __init__(self, config=None, events=None, parent=None):
        """
        Initialize the calendar dialog.

        Args:
            config: CalendarConfig (defaults are used when None)
            events: Pre-loaded events; loaded from the configured data file when None
            parent: Parent widget
        """
        super().__init__(parent)

        self.config = config or CalendarConfig()
        self.session = None
        self.canvas = None
        self.preset_buttons = {}

        # Initialize error handler
        self.error_handler = ErrorHandler(self)

        self._init_ui()

        try:
            if events is None:
                events = EventLoader(self.config.data_file).load()
        except DataLoadError as e:
            self.error_handler.handle_error(e, "loading event data", show_dialog=False)
            self._show_load_error()
            return

        self._init_session(events)

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Cosmic Calendar")
        self.setStyleSheet(CalendarStyles.DIALOG_STYLE)

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(10, 10, 10, 10)
        self.main_layout.setSpacing(8)

        self.main_layout.addWidget(self._create_header())

        # Chart area: the canvas, or the error text if loading fails
        self.chart_container = QWidget()
        self.chart_layout = QVBoxLayout(self.chart_container)
        self.chart_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.addWidget(self.chart_container, stretch=1)

        self.stats_label = QLabel("")
        self.stats_label.setStyleSheet(CalendarStyles.STATS_LABEL)
        self.stats_label.setWordWrap(True)
        self.main_layout.addWidget(self.stats_label)

        self.main_layout.addWidget(self._create_controls())

        # Floating tooltip, positioned from global pointer coordinates
        self.tooltip_label = QLabel(self)
        self.tooltip_label.setStyleSheet(CalendarStyles.TOOLTIP_LABEL)
        self.tooltip_label.setTextFormat(Qt.RichText)
        self.tooltip_label.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.tooltip_label.hide()

        self._setup_keyboard_shortcuts()

    def _create_header(self):
        """
        Create the header section with the title and the current period.

        Returns:
            QWidget: Header widget
        """
        header_widget = QWidget()
        header_layout = QVBoxLayout(header_widget)
        header_layout.setContentsMargins(0, 0, 0, 0)
        header_layout.setSpacing(2)

        title_label = QLabel("The Cosmic Calendar")
        title_label.setFont(QFont("Segoe UI", 18, QFont.Bold))
        title_label.setStyleSheet(CalendarStyles.TITLE_LABEL)
        header_layout.addWidget(title_label)

        reset = PRESETS['reset']
        self.period_label = QLabel(reset.title)
        self.period_label.setStyleSheet(CalendarStyles.PERIOD_LABEL)
        header_layout.addWidget(self.period_label)

        self.range_label = QLabel(reset.range_text)
        self.range_label.setStyleSheet(CalendarStyles.RANGE_LABEL)
        header_layout.addWidget(self.range_label)

        return header_widget

    def _create_controls(self):
        controls = QWidget()
        layout = QHBoxLayout(controls)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addStretch()

        for name in PRESET_ORDER:
            button = QPushButton(PRESET_BUTTON_TEXT[name])
            button.setStyleSheet(CalendarStyles.BUTTON_STYLE)
            button.setToolTip(TooltipManager.get_preset_tooltip(name))
            button.setEnabled(False)
            button.clicked.connect(lambda checked=False, preset=name: self.apply_preset(preset))
            layout.addWidget(button)
            self.preset_buttons[name] = button

        layout.addStretch()
        return controls

    def _setup_keyboard_shortcuts(self):
        reset_shortcut = QShortcut(QKeySequence(Qt.Key_0), self)
        reset_shortcut.activated.connect(lambda: self.apply_preset('reset'))

        close_shortcut = QShortcut(QKeySequence(Qt.Key_Escape), self)
        close_shortcut.activated.connect(self.close)

    def _init_session(self, events):
        self.session = CalendarSession(events, self.config, parent=self)
        self.canvas = CalendarCanvas(self.session, self.chart_container)
        self.canvas.setToolTip(TooltipManager.get_canvas_tooltip('zoom_hint'))
        self.chart_layout.addWidget(self.canvas, alignment=Qt.AlignCenter)

        self.session.period_changed.connect(self._on_period_changed)
        self.session.stats_changed.connect(self.stats_label.setText)
        self.session.tooltip.tooltip_changed.connect(self._on_tooltip_changed)

        for button in self.preset_buttons.values():
            button.setEnabled(True)

        self.session.recompute()

    def _show_load_error(self):
        error_label = QLabel(LOAD_ERROR_TEXT)
        error_label.setStyleSheet(CalendarStyles.ERROR_LABEL)
        error_label.setAlignment(Qt.AlignCenter)
        error_label.setWordWrap(True)
        history = self.error_handler.get_error_history()
        if history:
            error_label.setToolTip(history[-1]['details'])
        self.chart_layout.addWidget(error_label)
        self.error_label = error_label
        logger.warning("Event data unavailable, showing fallback text")

    def apply_preset(self, name):
        """
        Run one of the preset zoom commands.

        Args:
            name (str): Preset name ('reset', 'december', 'last_day', 'last_hour')
        """
        if self.session is None:
            return
        self.session.apply_preset(name)

    def _on_period_changed(self, title, range_text):
        self.period_label.setText(title)
        self.range_label.setText(range_text)

    def _on_tooltip_changed(self, state):
        if not state.visible:
            self.tooltip_label.hide()
            return

        self.tooltip_label.setText(state.content)
        self.tooltip_label.adjustSize()
        pos = self.mapFromGlobal(QPoint(int(state.x), int(state.y)))
        self.tooltip_label.move(pos)
        self.tooltip_label.raise_()
        self.tooltip_label.show()
