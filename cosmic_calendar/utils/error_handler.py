"""
Error Handler Utility
=====================

Centralized error handling for the cosmic calendar: the exception hierarchy
raised by the data layer, plus logging and user notification for the
window that hosts the chart.
"""

import logging
import os
import traceback
from datetime import datetime
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QMessageBox

# Configure logger
logger = logging.getLogger(__name__)


class ErrorSeverity:
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class CalendarError(Exception):
    """Base exception for cosmic calendar errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize calendar error.

        Args:
            message: User-friendly error message
            details: Technical details for logging
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class DataLoadError(CalendarError):
    """
    The event dataset could not be read or parsed.

    Terminal for the session: the chart is never built.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 original_error: Optional[Exception] = None,
                 recovery_suggestions: Optional[list] = None):
        details = f"{message}\n"
        if source:
            details += f"Source: {source}\n"
        if original_error:
            details += f"Original error: {type(original_error).__name__}: {original_error}\n"
        if recovery_suggestions:
            details += "\nSuggested actions:\n"
            for i, suggestion in enumerate(recovery_suggestions, 1):
                details += f"{i}. {suggestion}\n"

        super().__init__(message, details, ErrorSeverity.CRITICAL)
        self.source = source
        self.original_error = original_error
        self.recovery_suggestions = recovery_suggestions or []


class MalformedRecordError(CalendarError):
    """A single event record failed validation."""

    def __init__(self, message: str, index: Optional[int] = None,
                 record: Optional[object] = None):
        details = message
        if index is not None:
            details = f"Record #{index}: {message}"
        if record is not None:
            details += f"\nRecord: {record!r}"
        super().__init__(message, details, ErrorSeverity.WARNING)
        self.index = index
        self.record = record


class RenderError(CalendarError):
    """Exception for rendering errors."""
    pass


class ErrorHandler(QObject):
    """
    Centralized error handler for the calendar window.

    Logs every handled error by severity, keeps a short history, and shows a
    message box when it has a parent widget to attach one to.

    Signals:
        error_occurred: Emitted when an error is handled (severity, message, details)
    """

    error_occurred = pyqtSignal(str, str, str)  # severity, message, details

    def __init__(self, parent=None):
        """
        Initialize error handler.

        Args:
            parent: Parent widget for message boxes
        """
        super().__init__(parent)
        self.parent_widget = parent
        self._error_count = 0
        self._last_errors = []
        self._max_stored_errors = 10

    def handle_error(self, error: Exception, context: str = "",
                     show_dialog: bool = True) -> None:
        """
        Handle an error with logging and user notification.

        Args:
            error: The exception that occurred
            context: Context description (e.g., "loading event data")
            show_dialog: Whether to show an error dialog to the user
        """
        self._error_count += 1

        if isinstance(error, CalendarError):
            message = error.message
            details = error.details
            severity = error.severity
        else:
            message = f"An unexpected error occurred while {context}" if context else "An unexpected error occurred"
            error_traceback = traceback.format_exc()
            details = f"Context: {context}\n{type(error).__name__}: {error}\n{error_traceback}"
            severity = ErrorSeverity.ERROR

        log_message = f"Error in {context}: {details}" if context else f"Error: {details}"

        if severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

        self._store_error(severity, message, details)
        self.error_occurred.emit(severity, message, details)

        if show_dialog and self.parent_widget is not None:
            self._show_error_dialog(message, details, severity)

    def _show_error_dialog(self, message: str, details: str, severity: str):
        if severity in (ErrorSeverity.CRITICAL, ErrorSeverity.ERROR):
            icon = QMessageBox.Critical
            title = "Critical Error" if severity == ErrorSeverity.CRITICAL else "Error"
        elif severity == ErrorSeverity.WARNING:
            icon = QMessageBox.Warning
            title = "Warning"
        else:
            icon = QMessageBox.Information
            title = "Information"

        msg_box = QMessageBox(self.parent_widget)
        msg_box.setIcon(icon)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setDetailedText(details)
        msg_box.setStandardButtons(QMessageBox.Ok)
        msg_box.exec_()

    def _store_error(self, severity: str, message: str, details: str):
        self._last_errors.append({
            'timestamp': datetime.now(),
            'severity': severity,
            'message': message,
            'details': details
        })

        # Keep only last N errors
        if len(self._last_errors) > self._max_stored_errors:
            self._last_errors = self._last_errors[-self._max_stored_errors:]

    def get_error_history(self) -> list:
        """
        Get recent error history.

        Returns:
            list: List of error records
        """
        return self._last_errors.copy()

    def get_error_count(self) -> int:
        return self._error_count


def create_data_load_error_with_guidance(source: str,
                                         original_error: Exception) -> DataLoadError:
    """
    Create a data load error with guidance based on the error type.

    Args:
        source: Path of the event data file
        original_error: The original exception

    Returns:
        DataLoadError: Configured error with recovery suggestions
    """
    if isinstance(original_error, FileNotFoundError):
        message = "Event data file not found"
        recovery_suggestions = [
            f"Verify the data file exists at: {source}",
            "Check the 'data_file' setting in the configuration file",
        ]
    elif isinstance(original_error, PermissionError):
        message = "Permission denied while reading event data"
        recovery_suggestions = [
            f"Check file permissions for: {source}",
        ]
    elif isinstance(original_error, ValueError):
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        message = "Event data file is malformed"
        recovery_suggestions = [
            "The file must contain a JSON array of event objects",
            "Check the file for truncation or encoding problems",
        ]
    else:
        message = "Error loading timeline data"
        recovery_suggestions = [
            f"Check the data file: {source}",
            "Check the error log for more details",
        ]

    if os.path.exists(source):
        recovery_suggestions.append(f"Data file size: {os.path.getsize(source):,} bytes")

    return DataLoadError(
        message=message,
        source=source,
        original_error=original_error,
        recovery_suggestions=recovery_suggestions
    )
