"""
Tests for the calendar session: presets, gestures and hover.
"""

from datetime import datetime

import pytest

from cosmic_calendar.data.models import FULL_YEAR, YEAR_END, ZoomLevel
from cosmic_calendar.rendering.scale_transform import ZoomDelta
from cosmic_calendar.session import CalendarSession, PRESETS, PRESET_ORDER


@pytest.fixture
def session(sample_events):
    return CalendarSession(sample_events)


def visible_names(result):
    return {event.name for event in result.visible}


def test_presets_are_nested(session):
    domains = [session.apply_preset(name).domain for name in PRESET_ORDER]
    for outer, inner in zip(domains, domains[1:]):
        assert outer.contains_domain(inner)


def test_preset_domains(session):
    assert session.reset_zoom().domain == FULL_YEAR
    assert session.zoom_to_december().domain.start == datetime(2024, 12, 1)
    assert session.zoom_to_last_day().domain.start == datetime(2024, 12, 31)
    result = session.zoom_to_last_hour()
    assert result.domain.start == datetime(2024, 12, 31, 23)
    assert result.domain.end == YEAR_END


def test_big_bang_and_humans_scenario(big_bang, humans):
    session = CalendarSession([big_bang, humans])

    assert visible_names(session.reset_zoom()) == {'Big Bang', 'Humans'}
    assert visible_names(session.zoom_to_last_hour()) == {'Humans'}


def test_unknown_preset(session):
    with pytest.raises(ValueError):
        session.apply_preset('last_minute')


def test_preset_sets_label_and_period(session):
    periods = []
    session.period_changed.connect(lambda title, text: periods.append((title, text)))

    session.zoom_to_december()

    assert session.preset_label == ZoomLevel.MONTH
    assert session.zoom_level == ZoomLevel.MONTH
    assert periods == [('December - Life Explodes', 'Complex life emerges')]


def test_gesture_clears_preset_label(session):
    session.zoom_to_december()
    session.on_zoom_gesture(ZoomDelta(factor=1.0))

    assert session.preset_label is None
    assert session.period_title == f"{session.level_of_detail.label} View"
    assert ' - ' in session.period_range


def test_zoom_level_follows_span_not_preset(session):
    session.zoom_to_last_day()
    assert session.preset_label == ZoomLevel.DAY
    assert session.zoom_level == ZoomLevel.HOUR


def test_first_gesture_after_last_hour_clamps_magnification(session):
    session.zoom_to_last_hour()
    result = session.on_zoom_gesture(ZoomDelta(pan_x=1))

    assert session.scale.scale_factor == 50.0
    assert result.domain.span.total_seconds() == pytest.approx(
        FULL_YEAR.span.total_seconds() / 50, rel=1e-6
    )
    assert FULL_YEAR.contains_domain(result.domain)


def test_every_gesture_recomputes(session):
    domains = []
    session.domain_changed.connect(domains.append)

    for _ in range(3):
        session.on_zoom_gesture(ZoomDelta(factor=1.5, anchor_x=800))

    assert len(domains) == 3
    assert all(FULL_YEAR.contains_domain(domain) for domain in domains)
    assert domains[0].span > domains[-1].span


def test_recompute_publishes_axis_and_stats(session, sample_events):
    axes = []
    stats = []
    session.axis_changed.connect(lambda lod, ticks: axes.append((lod, ticks)))
    session.stats_changed.connect(stats.append)

    result = session.recompute()

    assert axes[0][0].level == ZoomLevel.YEAR
    assert axes[0][1] == result.ticks
    assert stats == [
        f"Viewing full year - {len(sample_events)} major events across 13.8 billion years"
    ]
    assert session.lifecycle.visible_keys == {event.name for event in sample_events}


def test_hover_shows_and_hides_tooltip(session, humans):
    session.recompute()
    session.handle_hover_enter((100, 100), humans)

    state = session.tooltip.state
    assert state.visible
    assert state.key == 'Humans'
    assert (state.x, state.y) == (110, 90)

    session.handle_hover_exit((100, 100), humans)
    assert not session.tooltip.state.visible


def test_hover_exit_of_other_marker_keeps_tooltip(session, humans, big_bang):
    session.recompute()
    session.handle_hover_enter((0, 0), big_bang)
    session.handle_hover_enter((10, 10), humans)
    session.handle_hover_exit((0, 0), big_bang)

    assert session.tooltip.hovered_key == 'Humans'


def test_tooltip_hidden_when_marker_leaves_view(session, big_bang):
    session.recompute()
    session.handle_hover_enter((0, 0), big_bang)
    assert session.tooltip.hovered_key == 'Big Bang'

    session.zoom_to_last_hour()
    assert session.tooltip.hovered_key is None


def test_hover_on_invisible_event_is_ignored(session, big_bang):
    session.zoom_to_last_hour()
    session.handle_hover_enter((0, 0), big_bang)
    assert not session.tooltip.state.visible
