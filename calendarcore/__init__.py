"""
calendarcore - holiday resolution and permission evaluation for the scheduling calendar.
"""

__version__ = "1.0.0"
