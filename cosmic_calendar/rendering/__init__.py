"""
Rendering components for the cosmic calendar.
"""

from .scale_transform import ScaleTransform, BandScale, ZoomDelta
from .level_of_detail import LevelOfDetail, LevelOfDetailSelector
from .marker_lifecycle import MarkerLifecycleManager, LifecyclePlan, diff_keys
from .event_renderer import EventRenderer, MarkerItem

__all__ = [
    'ScaleTransform', 'BandScale', 'ZoomDelta',
    'LevelOfDetail', 'LevelOfDetailSelector',
    'MarkerLifecycleManager', 'LifecyclePlan', 'diff_keys',
    'EventRenderer', 'MarkerItem'
]
