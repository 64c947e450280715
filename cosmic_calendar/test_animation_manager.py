"""
Tests for the animation queue and its Qt clock.
"""

import pytest

from cosmic_calendar.utils.animation_manager import AnimationClock, AnimationQueue


def test_interpolates_with_easing():
    queue = AnimationQueue()
    queue.animate('a', 'radius', 10.0, 100, start_value=0.0)

    queue.advance(50)
    # InOutCubic passes through the midpoint at half time
    assert queue.value('a', 'radius') == pytest.approx(5.0)

    finished = queue.advance(50)
    assert queue.value('a', 'radius') == pytest.approx(10.0)
    assert [task.attribute for task in finished] == ['radius']
    assert not queue.is_animating()


def test_apply_callback_receives_every_value():
    applied = []
    queue = AnimationQueue(apply_callback=lambda *args: applied.append(args))
    queue.animate('a', 'opacity', 1.0, 100, start_value=0.0)
    queue.advance(100)

    assert applied[0] == ('a', 'opacity', 0.0)
    assert applied[-1] == ('a', 'opacity', pytest.approx(1.0))


def test_replacement_starts_from_current_value_and_drops_old_callback():
    calls = []
    queue = AnimationQueue()
    queue.animate('a', 'x', 10.0, 100, start_value=0.0, on_finish=lambda: calls.append('first'))
    queue.advance(50)

    task = queue.animate('a', 'x', 0.0, 100, on_finish=lambda: calls.append('second'))
    assert task.start_value == pytest.approx(5.0)
    assert len(queue) == 1

    queue.advance(200)
    assert calls == ['second']
    assert queue.value('a', 'x') == pytest.approx(0.0)


def test_cancel_freezes_values_without_callbacks():
    calls = []
    queue = AnimationQueue()
    queue.animate('a', 'x', 10.0, 100, start_value=0.0, on_finish=lambda: calls.append('x'))
    queue.animate('a', 'y', 10.0, 100, start_value=0.0)
    queue.animate('b', 'x', 10.0, 100, start_value=0.0)
    queue.advance(50)

    assert queue.cancel('a') == 2
    queue.advance(100)

    assert calls == []
    assert queue.value('a', 'x') == pytest.approx(5.0)
    assert queue.value('b', 'x') == pytest.approx(10.0)


def test_cancel_single_attribute():
    queue = AnimationQueue()
    queue.animate('a', 'x', 1.0, 100, start_value=0.0)
    queue.animate('a', 'y', 1.0, 100, start_value=0.0)
    queue.advance(50)
    assert queue.cancel('a', 'x') == 1
    queue.advance(50)

    assert queue.value('a', 'x') == pytest.approx(0.5)
    assert queue.value('a', 'y') == pytest.approx(1.0)
    assert not queue.is_animating()


def test_finish_callback_may_start_new_task():
    queue = AnimationQueue()
    bounced = []

    def bounce():
        bounced.append(queue.animate('a', 'radius', 0.0, 100))

    queue.animate('a', 'radius', 10.0, 100, start_value=0.0, on_finish=bounce)
    queue.advance(100)

    assert queue.is_animating('a')
    assert bounced[0].start_value == pytest.approx(10.0)
    queue.advance(50)
    assert queue.value('a', 'radius') == pytest.approx(5.0)


def test_set_value_cancels_running_task():
    queue = AnimationQueue()
    queue.animate('a', 'x', 10.0, 100, start_value=0.0)
    queue.set_value('a', 'x', 3.0)
    queue.advance(100)
    assert queue.value('a', 'x') == 3.0


def test_forget_drops_values():
    queue = AnimationQueue()
    queue.animate('a', 'x', 10.0, 100, start_value=0.0)
    queue.forget('a')
    assert queue.value('a', 'x') is None
    assert not queue.is_animating('a')


def test_zero_duration_finishes_on_next_advance():
    queue = AnimationQueue()
    queue.animate('a', 'x', 7.0, 0, start_value=0.0)
    queue.advance(0)
    assert queue.value('a', 'x') == pytest.approx(7.0)


def test_clock_runs_only_while_queue_has_work(qapp):
    queue = AnimationQueue()
    clock = AnimationClock(queue)

    clock.ensure_running()
    assert not clock.is_running()

    queue.animate('a', 'x', 1.0, 100, start_value=0.0)
    clock.ensure_running()
    assert clock.is_running()

    queue.advance(100)
    clock._tick()
    assert not clock.is_running()
