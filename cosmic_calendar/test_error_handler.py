"""
Tests for the error hierarchy and the error handler.
"""

from cosmic_calendar.utils.error_handler import (
    DataLoadError, ErrorHandler, ErrorSeverity, MalformedRecordError,
    create_data_load_error_with_guidance
)


def test_data_load_error_details():
    error = DataLoadError(
        "Event data file not found", source='events.json',
        original_error=FileNotFoundError('events.json'),
        recovery_suggestions=['Check the path']
    )
    assert error.severity == ErrorSeverity.CRITICAL
    assert 'Source: events.json' in error.details
    assert '1. Check the path' in error.details


def test_malformed_record_details():
    error = MalformedRecordError("Missing required field(s): type", 3, {'name': 'x'})
    assert error.details.startswith("Record #3: Missing required field(s): type")


def test_guidance_by_error_type():
    assert create_data_load_error_with_guidance('f', FileNotFoundError()).message == (
        "Event data file not found"
    )
    assert create_data_load_error_with_guidance('f', ValueError()).message == (
        "Event data file is malformed"
    )
    assert create_data_load_error_with_guidance('f', PermissionError()).recovery_suggestions


def test_handler_logs_stores_and_emits(caplog):
    handler = ErrorHandler()
    emitted = []
    handler.error_occurred.connect(lambda *args: emitted.append(args))

    handler.handle_error(DataLoadError("Event data file not found"), "loading event data")

    assert handler.get_error_count() == 1
    assert emitted[0][0] == ErrorSeverity.CRITICAL
    assert emitted[0][1] == "Event data file not found"
    assert any(record.levelname == 'CRITICAL' for record in caplog.records)


def test_handler_wraps_unexpected_errors():
    handler = ErrorHandler()
    handler.handle_error(RuntimeError('boom'), "drawing")

    [entry] = handler.get_error_history()
    assert entry['severity'] == ErrorSeverity.ERROR
    assert 'RuntimeError: boom' in entry['details']


def test_history_is_bounded():
    handler = ErrorHandler()
    for i in range(15):
        handler.handle_error(MalformedRecordError(f"bad {i}"))

    assert len(handler.get_error_history()) == 10
    assert handler.get_error_count() == 15

    assert handler.get_error_history()[-1]['message'] == "bad 14"
