"""
Utility modules for the cosmic calendar.
"""
