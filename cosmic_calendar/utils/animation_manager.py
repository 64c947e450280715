"""
Animation Manager - Timed attribute transitions for calendar markers.

This module provides:
- AnimationQueue: finite-duration tasks keyed by (marker key, attribute),
  advanced explicitly in milliseconds
- AnimationClock: a QTimer that advances a queue in real time

Attributes animate independently. Starting a task on a (key, attribute)
pair that already has one replaces it, and the new task starts from the
current interpolated value, so an interrupted transition never jumps.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from PyQt5.QtCore import QEasingCurve, QElapsedTimer, QObject, QTimer


@dataclass
class AnimationTask:
    """One running transition of a single numeric attribute."""
    key: Hashable
    attribute: str
    start_value: float
    end_value: float
    duration: float
    easing: QEasingCurve
    on_finish: Optional[Callable[[], None]] = None
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0

    def value(self) -> float:
        eased = self.easing.valueForProgress(self.progress)
        return self.start_value + (self.end_value - self.start_value) * eased


class AnimationQueue:
    """
    Explicit queue of attribute transitions.

    The queue owns the current value of every animated attribute. Each call
    to ``advance`` moves all tasks forward, reports the new values through
    ``apply_callback(key, attribute, value)`` and then runs the finish
    callbacks of tasks that completed.
    """

    def __init__(self, apply_callback: Optional[Callable[[Hashable, str, Any], None]] = None,
                 easing_type=QEasingCurve.InOutCubic):
        """
        Args:
            apply_callback: Receives every value change
            easing_type: QEasingCurve type used for new tasks
        """
        self.apply_callback = apply_callback
        self.easing_type = easing_type
        self._tasks: Dict[Tuple[Hashable, str], AnimationTask] = {}
        self._values: Dict[Tuple[Hashable, str], Any] = {}

    def animate(self, key: Hashable, attribute: str, end_value: float, duration: float,
                start_value: Optional[float] = None,
                on_finish: Optional[Callable[[], None]] = None) -> AnimationTask:
        """
        Start a transition, replacing any running one on the same attribute.

        The replaced task's finish callback is discarded.

        Args:
            key: Marker identity
            attribute: Attribute name ('x', 'radius', 'opacity', ...)
            end_value: Target value
            duration: Duration in milliseconds
            start_value: Initial value; defaults to the current value
            on_finish: Called once when the task completes

        Returns:
            AnimationTask: The new task
        """
        if start_value is None:
            start_value = self._values.get((key, attribute), end_value)
        else:
            self._set(key, attribute, start_value)

        task = AnimationTask(
            key=key,
            attribute=attribute,
            start_value=float(start_value),
            end_value=float(end_value),
            duration=float(duration),
            easing=QEasingCurve(self.easing_type),
            on_finish=on_finish,
        )
        self._tasks[(key, attribute)] = task
        return task

    def set_value(self, key: Hashable, attribute: str, value: Any):
        """Set a value immediately, canceling any transition on that attribute."""
        self._tasks.pop((key, attribute), None)
        self._set(key, attribute, value)

    def value(self, key: Hashable, attribute: str, default: Any = None) -> Any:
        return self._values.get((key, attribute), default)

    def cancel(self, key: Hashable, attribute: Optional[str] = None) -> int:
        """
        Stop transitions without running their finish callbacks.

        Values stay at their current interpolated state.

        Returns:
            int: Number of tasks canceled
        """
        doomed = [
            task_key for task_key in self._tasks
            if task_key[0] == key and (attribute is None or task_key[1] == attribute)
        ]
        for task_key in doomed:
            del self._tasks[task_key]
        return len(doomed)

    def forget(self, key: Hashable):
        """Drop all tasks and stored values of a key."""
        self.cancel(key)
        for value_key in [k for k in self._values if k[0] == key]:
            del self._values[value_key]

    def is_animating(self, key: Optional[Hashable] = None) -> bool:
        if key is None:
            return bool(self._tasks)
        return any(task_key[0] == key for task_key in self._tasks)

    def __len__(self):
        return len(self._tasks)

    def advance(self, elapsed_ms: float) -> List[AnimationTask]:
        """
        Move every task forward by ``elapsed_ms``.

        Returns:
            list: Tasks that finished during this step
        """
        finished = []
        for task_key, task in list(self._tasks.items()):
            task.elapsed += elapsed_ms
            self._set(task.key, task.attribute, task.value())
            if task.finished:
                del self._tasks[task_key]
                finished.append(task)

        # Callbacks run last so they may start new tasks on the same keys
        for task in finished:
            if task.on_finish is not None:
                task.on_finish()
        return finished

    def _set(self, key: Hashable, attribute: str, value: Any):
        self._values[(key, attribute)] = value
        if self.apply_callback is not None:
            self.apply_callback(key, attribute, value)


class AnimationClock(QObject):
    """
    Drives an AnimationQueue from the Qt event loop.

    Ticks roughly every 16 ms while the queue has work and stops itself when
    the queue drains.
    """

    FRAME_INTERVAL_MS = 16

    def __init__(self, queue: AnimationQueue, parent=None):
        super().__init__(parent)
        self.queue = queue
        self._timer = QTimer(self)
        self._timer.setInterval(self.FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._tick)
        self._elapsed = QElapsedTimer()

    def ensure_running(self):
        """Start ticking if the queue has work and the clock is idle."""
        if self.queue.is_animating() and not self._timer.isActive():
            self._elapsed.start()
            self._timer.start()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def stop(self):
        self._timer.stop()

    def _tick(self):
        elapsed = float(self._elapsed.restart())
        self.queue.advance(elapsed)
        if not self.queue.is_animating():
            self._timer.stop()
