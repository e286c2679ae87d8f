"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .access_control import AccessControlService, UserDirectoryProtocol
from .holiday_calendar import HolidayCalendarService, HolidayCatalogProtocol

__all__ = [
    "AccessControlService",
    "HolidayCalendarService",
    "HolidayCatalogProtocol",
    "UserDirectoryProtocol",
]
