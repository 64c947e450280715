"""
Cosmic Calendar Module

Interactive timeline that maps the 13.8-billion-year history of the universe
onto a single calendar year, with continuous zoom and preset views of the
year, December, the last day and the last hour.
"""

__version__ = "1.0.0"

from .calendar_dialog import CalendarDialog

__all__ = ['CalendarDialog']
