"""
Domain layer - Pure business logic without external dependencies.
"""

from .holiday_resolver import HolidayResolver
from .models import Holiday, HolidayOccurrence, StoredHoliday, VirtualHoliday
from .permission_evaluator import AccessDecision, PermissionEvaluator
from .permissions import (
    MENU_SECTIONS,
    PermissionAction,
    PermissionKey,
    PermissionMatrix,
    SystemUser,
    UserGroup,
)

__all__ = [
    "AccessDecision",
    "Holiday",
    "HolidayOccurrence",
    "HolidayResolver",
    "MENU_SECTIONS",
    "PermissionAction",
    "PermissionEvaluator",
    "PermissionKey",
    "PermissionMatrix",
    "StoredHoliday",
    "SystemUser",
    "UserGroup",
    "VirtualHoliday",
]
