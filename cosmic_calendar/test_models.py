"""
Tests for the data model and date parsing.
"""

import datetime

import pytest

from cosmic_calendar.data.models import CosmicEvent, EventType, FULL_YEAR, TimeDomain, YEAR_END
from cosmic_calendar.utils.timestamp_parser import TimestampParser


def test_time_domain_requires_order():
    start = datetime.datetime(2024, 6, 1)
    with pytest.raises(ValueError):
        TimeDomain(start, start)
    with pytest.raises(ValueError):
        TimeDomain('2024-01-01', start)


def test_time_domain_clamping():
    wide = TimeDomain(datetime.datetime(2023, 6, 1), datetime.datetime(2025, 6, 1))
    assert wide.clamped_to(FULL_YEAR) == FULL_YEAR
    assert FULL_YEAR.contains(YEAR_END)
    assert FULL_YEAR.span_days == pytest.approx(366, abs=1e-4)


def test_marker_radii():
    small = CosmicEvent('a', datetime.datetime(2024, 1, 2), EventType.LIFE, 2)
    large = CosmicEvent('b', datetime.datetime(2024, 1, 2), EventType.LIFE, 18)
    assert (small.base_radius, small.hover_radius) == (3.0, 6.0)
    assert (large.base_radius, large.hover_radius) == (9.0, 12.0)


@pytest.mark.parametrize('text, expected', [
    ('2024-12-31T23:58:00', datetime.datetime(2024, 12, 31, 23, 58)),
    ('2024-12-31T23:58:00.000Z', datetime.datetime(2024, 12, 31, 23, 58)),
    ('2024-12-31T23:58:00+02:00', datetime.datetime(2024, 12, 31, 21, 58)),
    ('2024-12-31 23:58', datetime.datetime(2024, 12, 31, 23, 58)),
    ('2024-12-31', datetime.datetime(2024, 12, 31)),
])
def test_parse_timestamp(text, expected):
    assert TimestampParser.parse_timestamp(text) == expected


@pytest.mark.parametrize('value', [None, '', '   ', 'yesterday', 42])
def test_parse_timestamp_rejects(value):
    assert TimestampParser.parse_timestamp(value) is None
