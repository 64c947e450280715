"""
Shared fixtures for the cosmic calendar tests.
"""

import os
from datetime import datetime

import pytest

# Qt widgets are created without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PyQt5.QtWidgets import QApplication

from cosmic_calendar.data.models import CosmicEvent, EventType


@pytest.fixture(scope='session')
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def big_bang():
    return CosmicEvent(
        name='Big Bang', date=datetime(2024, 1, 1), type=EventType.COSMIC,
        importance=10, description='Space, time and matter begin.'
    )


@pytest.fixture
def humans():
    return CosmicEvent(
        name='Humans', date=datetime(2024, 12, 31, 23, 58), type=EventType.HUMAN,
        importance=8, description='Human culture flourishes.'
    )


@pytest.fixture
def sample_events(big_bang, humans):
    """A small dataset touching every lane."""
    return [
        big_bang,
        CosmicEvent('Milky Way Forms', datetime(2024, 3, 15), EventType.COSMIC, 14),
        CosmicEvent('Earth Forms', datetime(2024, 9, 6), EventType.GEOLOGICAL, 16),
        CosmicEvent('Cambrian Explosion', datetime(2024, 12, 17), EventType.LIFE, 16),
        CosmicEvent('Dinosaur Extinction', datetime(2024, 12, 30, 6, 24), EventType.GEOLOGICAL, 16),
        CosmicEvent('Stone Tools', datetime(2024, 12, 31, 21, 54), EventType.HUMAN, 10),
        humans,
        CosmicEvent('Writing', datetime(2024, 12, 31, 23, 59, 49), EventType.HUMAN, 12),
    ]
