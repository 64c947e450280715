"""
Event data for the cosmic calendar: models, loading and filtering.
"""

from .models import CosmicEvent, EventType, TimeDomain, ZoomLevel, FULL_YEAR
from .event_loader import EventLoader
from .event_filter import SortedEventIndex, visible

__all__ = [
    'CosmicEvent', 'EventType', 'TimeDomain', 'ZoomLevel', 'FULL_YEAR',
    'EventLoader', 'SortedEventIndex', 'visible'
]
