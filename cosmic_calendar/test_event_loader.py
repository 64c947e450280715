"""
Tests for loading and validating the event dataset.
"""

import json
from datetime import datetime

import pytest

from cosmic_calendar.data.event_loader import EventLoader
from cosmic_calendar.data.models import EventType, FULL_YEAR
from cosmic_calendar.utils.error_handler import DataLoadError, ErrorSeverity


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding='utf-8')
    return path


VALID = {
    'name': 'Big Bang', 'date': '2024-01-01T00:00:00', 'type': 'cosmic',
    'importance': 10, 'description': 'The beginning.'
}


def test_bundled_dataset_loads():
    events = EventLoader().load()
    names = [event.name for event in events]

    assert len(names) == len(set(names))
    assert 'Big Bang' in names
    assert 'Humans' in names
    assert all(FULL_YEAR.contains(event.date) for event in events)
    assert {event.type for event in events} == set(EventType)


def test_valid_record(tmp_path):
    data_file = write_json(tmp_path / 'events.json', [VALID])
    [event] = EventLoader(data_file).load()

    assert event.name == 'Big Bang'
    assert event.date == datetime(2024, 1, 1)
    assert event.type == EventType.COSMIC
    assert event.importance == 10.0
    assert event.description == 'The beginning.'


def test_date_formats(tmp_path):
    records = [
        dict(VALID, name='a', date='2024-12-31'),
        dict(VALID, name='b', date='2024-12-31 23:58:00'),
        dict(VALID, name='c', date='2024-12-31T23:58:00Z'),
    ]
    events = EventLoader(write_json(tmp_path / 'events.json', records)).load()
    assert [event.date for event in events] == [
        datetime(2024, 12, 31),
        datetime(2024, 12, 31, 23, 58),
        datetime(2024, 12, 31, 23, 58),
    ]


def test_malformed_records_are_dropped(tmp_path):
    records = [
        VALID,
        {'name': 'No type', 'date': '2024-02-01', 'importance': 3},
        dict(VALID, name='Bad type', type='galactic'),
        dict(VALID, name='Bad date', date='the dawn of time'),
        dict(VALID, name='Outside year', date='2023-12-31T23:59:59'),
        dict(VALID, name='Negative', importance=-1),
        dict(VALID, name='Zero', importance=0),
        dict(VALID, name='Text importance', importance='huge'),
        dict(VALID, name='Bool importance', importance=True),
        'not an object',
        dict(VALID, description='A second Big Bang'),
        dict(VALID, name='No description', description=None),
    ]
    loader = EventLoader(write_json(tmp_path / 'events.json', records))
    events = loader.load()

    assert [event.name for event in events] == ['Big Bang', 'No description']
    assert events[0].description == 'The beginning.'
    assert events[1].description == ''
    assert len(loader.dropped_records) == 10
    assert all(error.severity == ErrorSeverity.WARNING for error in loader.dropped_records)
    assert loader.dropped_records[-1].index == 10


def test_non_finite_importance_is_dropped(tmp_path):
    data_file = tmp_path / 'events.json'
    data_file.write_text(
        '[{"name": "Big Bang", "date": "2024-01-01", "type": "cosmic", "importance": 10},'
        ' {"name": "Unbounded", "date": "2024-06-01", "type": "life", "importance": Infinity},'
        ' {"name": "Undefined", "date": "2024-07-01", "type": "life", "importance": NaN}]',
        encoding='utf-8'
    )
    loader = EventLoader(data_file)
    events = loader.load()

    assert [event.name for event in events] == ['Big Bang']
    assert [error.index for error in loader.dropped_records] == [1, 2]
    assert "'importance'" in loader.dropped_records[0].message


def test_missing_file(tmp_path):
    with pytest.raises(DataLoadError) as exc_info:
        EventLoader(tmp_path / 'missing.json').load()
    assert exc_info.value.message == "Event data file not found"
    assert exc_info.value.severity == ErrorSeverity.CRITICAL


def test_invalid_json(tmp_path):
    data_file = tmp_path / 'events.json'
    data_file.write_text('[{"name": ', encoding='utf-8')
    with pytest.raises(DataLoadError) as exc_info:
        EventLoader(data_file).load()
    assert exc_info.value.message == "Event data file is malformed"


def test_not_an_array(tmp_path):
    with pytest.raises(DataLoadError):
        EventLoader(write_json(tmp_path / 'events.json', {'events': [VALID]})).load()


def test_no_valid_records(tmp_path):
    records = [dict(VALID, type='galactic')]
    with pytest.raises(DataLoadError):
        EventLoader(write_json(tmp_path / 'events.json', records)).load()
