"""
Marker Lifecycle - Reconciles visible markers across domain changes.

Every domain change produces a new visible event set. The MarkerLifecycleManager
diffs it against the markers currently shown, keyed by event name, and turns
the difference into timed transitions on an AnimationQueue:

- enter:  new markers grow from radius 0 / opacity 0 to their target
- update: kept markers move to their new target from wherever they are
- exit:   dropped markers shrink to radius 0 / opacity 0, then are removed

A marker whose exit is still running when its event becomes visible again
is revived in place: the exit is canceled and the marker animates to its
target from its current interpolated state.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional

from cosmic_calendar.data.models import CosmicEvent
from cosmic_calendar.rendering.scale_transform import BandScale, ScaleTransform
from cosmic_calendar.utils.animation_manager import AnimationQueue

logger = logging.getLogger(__name__)


ENTER = 'enter'
UPDATE = 'update'
EXIT = 'exit'


@dataclass(frozen=True)
class MarkerTarget:
    """Attribute values a marker transitions towards."""
    x: float
    y: float
    radius: float
    opacity: float
    color: str


@dataclass(frozen=True)
class KeyDiff:
    """Set difference between two visible key sets."""
    enter: FrozenSet[str]
    update: FrozenSet[str]
    exit: FrozenSet[str]


@dataclass(frozen=True)
class LifecycleAction:
    kind: str
    key: str
    event: CosmicEvent
    target: MarkerTarget
    duration: float
    revived: bool = False


@dataclass
class LifecyclePlan:
    """Disjoint enter/update/exit actions for one recompute."""
    enter: List[LifecycleAction] = field(default_factory=list)
    update: List[LifecycleAction] = field(default_factory=list)
    exit: List[LifecycleAction] = field(default_factory=list)

    @property
    def enter_keys(self) -> FrozenSet[str]:
        return frozenset(action.key for action in self.enter)

    @property
    def update_keys(self) -> FrozenSet[str]:
        return frozenset(action.key for action in self.update)

    @property
    def exit_keys(self) -> FrozenSet[str]:
        return frozenset(action.key for action in self.exit)


def diff_keys(previous: Iterable[str], following: Iterable[str]) -> KeyDiff:
    """
    Reconcile two key sets.

    Returns:
        KeyDiff: ``enter = following - previous``, ``update = following & previous``,
        ``exit = previous - following``
    """
    previous = frozenset(previous)
    following = frozenset(following)
    return KeyDiff(
        enter=following - previous,
        update=following & previous,
        exit=previous - following,
    )


class MarkerLifecycleManager:
    """
    Owns the render set of markers and schedules their transitions.

    The manager does not draw anything. The rendering backend listens on the
    AnimationQueue for attribute values and on the two callbacks for
    markers being created and removed.
    """

    ENTER_DURATION_MS = 750
    UPDATE_DURATION_MS = 750
    EXIT_DURATION_MS = 500
    HOVER_DURATION_MS = 200

    def __init__(self, queue: AnimationQueue,
                 on_marker_created: Optional[Callable[[str, CosmicEvent], None]] = None,
                 on_marker_removed: Optional[Callable[[str], None]] = None,
                 durations: Optional[Dict[str, float]] = None):
        """
        Args:
            queue: Animation queue the transitions run on
            on_marker_created: Called with (key, event) when a marker joins the render set
            on_marker_removed: Called with key once an exit transition completes
            durations: Optional overrides for 'enter', 'update', 'exit', 'hover' (ms)
        """
        self.queue = queue
        self.on_marker_created = on_marker_created
        self.on_marker_removed = on_marker_removed

        durations = durations or {}
        self.enter_duration = durations.get('enter', self.ENTER_DURATION_MS)
        self.update_duration = durations.get('update', self.UPDATE_DURATION_MS)
        self.exit_duration = durations.get('exit', self.EXIT_DURATION_MS)
        self.hover_duration = durations.get('hover', self.HOVER_DURATION_MS)

        self._events: Dict[str, CosmicEvent] = {}  # render set: visible + exiting
        self._visible = set()
        self._exiting = set()

    # State

    @property
    def visible_keys(self) -> FrozenSet[str]:
        return frozenset(self._visible)

    @property
    def exiting_keys(self) -> FrozenSet[str]:
        return frozenset(self._exiting)

    @property
    def rendered_keys(self) -> FrozenSet[str]:
        return frozenset(self._events)

    def marker_state(self, key: str) -> Optional[MarkerTarget]:
        """Current interpolated attributes of a rendered marker."""
        event = self._events.get(key)
        if event is None:
            return None
        return MarkerTarget(
            x=self.queue.value(key, 'x', 0.0),
            y=self.queue.value(key, 'y', 0.0),
            radius=self.queue.value(key, 'radius', 0.0),
            opacity=self.queue.value(key, 'opacity', 0.0),
            color=self.queue.value(key, 'color', event.color),
        )

    # Planning

    @staticmethod
    def target_for(event: CosmicEvent, scale: ScaleTransform, lanes: BandScale) -> MarkerTarget:
        return MarkerTarget(
            x=scale.project(event.date),
            y=lanes.center(event.type),
            radius=event.base_radius,
            opacity=1.0,
            color=event.color,
        )

    def reconcile(self, next_events: Iterable[CosmicEvent], scale: ScaleTransform,
                  lanes: BandScale) -> LifecyclePlan:
        """
        Diff the currently visible markers against ``next_events``.

        Pure with respect to the manager: nothing is scheduled until ``apply``.
        ``revived`` on enter actions reflects the exits running at planning time.
        """
        by_key = {event.name: event for event in next_events}
        diff = diff_keys(self._visible, by_key)
        plan = LifecyclePlan()

        for key in sorted(diff.enter):
            event = by_key[key]
            plan.enter.append(LifecycleAction(
                ENTER, key, event, self.target_for(event, scale, lanes),
                self.enter_duration, revived=key in self._exiting
            ))
        for key in sorted(diff.update):
            event = by_key[key]
            plan.update.append(LifecycleAction(
                UPDATE, key, event, self.target_for(event, scale, lanes), self.update_duration
            ))
        for key in sorted(diff.exit):
            event = self._events[key]
            current = self.marker_state(key)
            plan.exit.append(LifecycleAction(
                EXIT, key, event,
                MarkerTarget(current.x, current.y, 0.0, 0.0, current.color),
                self.exit_duration
            ))
        return plan

    def apply(self, plan: LifecyclePlan):
        """
        Schedule the transitions of a plan.

        Whether an entering key is revived or created is decided here from the
        markers still exiting, so a plan stays valid if the queue advanced
        since ``reconcile``.
        """
        for action in plan.exit:
            self._start_exit(action)
        for action in plan.enter:
            if action.key in self._exiting:
                self._revive(action)
            else:
                self._start_enter(action)
        for action in plan.update:
            self._move_to(action)

    def update(self, next_events: Iterable[CosmicEvent], scale: ScaleTransform,
               lanes: BandScale) -> LifecyclePlan:
        """Reconcile against ``next_events`` and apply the result."""
        plan = self.reconcile(next_events, scale, lanes)
        self.apply(plan)
        if plan.enter or plan.exit:
            logger.debug(
                f"Markers: {len(plan.enter)} entering, {len(plan.update)} updating, "
                f"{len(plan.exit)} exiting"
            )
        return plan

    # Hover

    def hover_enter(self, key: str) -> bool:
        """Grow a visible marker to its hover radius. Returns False if not visible."""
        event = self._events.get(key)
        if event is None or key not in self._visible:
            return False
        self.queue.animate(key, 'radius', event.hover_radius, self.hover_duration)
        return True

    def hover_exit(self, key: str) -> bool:
        """Shrink a visible marker back to its base radius."""
        event = self._events.get(key)
        if event is None or key not in self._visible:
            return False
        self.queue.animate(key, 'radius', event.base_radius, self.hover_duration)
        return True

    # Transitions

    def _start_enter(self, action: LifecycleAction):
        key, target = action.key, action.target
        self._events[key] = action.event
        self._visible.add(key)

        if self.on_marker_created is not None:
            self.on_marker_created(key, action.event)

        self.queue.set_value(key, 'color', target.color)
        self.queue.set_value(key, 'x', target.x)
        self.queue.set_value(key, 'y', target.y)
        self.queue.animate(key, 'radius', target.radius, action.duration, start_value=0.0)
        self.queue.animate(key, 'opacity', target.opacity, action.duration, start_value=0.0)

    def _revive(self, action: LifecycleAction):
        # Drop the pending exit (and its removal callback) and carry on from here
        self.queue.cancel(action.key)
        self._exiting.discard(action.key)
        self._events[action.key] = action.event
        self._visible.add(action.key)
        logger.debug(f"Revived exiting marker '{action.key}'")
        self._move_to(action)

    def _move_to(self, action: LifecycleAction):
        key, target = action.key, action.target
        self._events[key] = action.event
        self.queue.set_value(key, 'color', target.color)
        self.queue.animate(key, 'x', target.x, action.duration)
        self.queue.animate(key, 'y', target.y, action.duration)
        self.queue.animate(key, 'radius', target.radius, action.duration)
        self.queue.animate(key, 'opacity', target.opacity, action.duration)

    def _start_exit(self, action: LifecycleAction):
        key = action.key
        self._visible.discard(key)
        self._exiting.add(key)

        # Position transitions from an earlier update stop where they are
        self.queue.cancel(key, 'x')
        self.queue.cancel(key, 'y')
        self.queue.animate(key, 'radius', 0.0, action.duration)
        self.queue.animate(
            key, 'opacity', 0.0, action.duration,
            on_finish=lambda: self._remove(key)
        )

    def _remove(self, key: str):
        if key not in self._exiting:
            return
        self._exiting.discard(key)
        self._events.pop(key, None)
        self.queue.forget(key)
        if self.on_marker_removed is not None:
            self.on_marker_removed(key)
