"""
Permission vocabulary: resource keys, action levels and group matrices.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Union

from .exceptions import InvalidPermissionActionError, UnknownPermissionKeyError


class PermissionKey(str, Enum):
    """Protectable areas of the application."""
    ROOMS = "rooms"
    STAFF = "staff"
    USERS = "users"
    HOLIDAYS = "holidays"
    CATEGORIES = "categories"
    DEPARTMENTS = "departments"
    OTHER_EVENTS = "otherEvents"
    PERMISSIONS = "permissions"
    SYSTEM_CONFIG = "systemConfig"
    WORK_SCHEDULES = "workSchedules"
    MEETING_SCHEDULES = "meetingSchedules"

    @classmethod
    def coerce(cls, value: Union["PermissionKey", str]) -> "PermissionKey":
        """Turn a string into a key, rejecting anything outside the known set."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownPermissionKeyError(f"Unknown permission key: {value!r}") from None


class PermissionAction(str, Enum):
    """Action levels, ordered NONE < VIEW < EDIT."""
    NONE = "NONE"
    VIEW = "VIEW"
    EDIT = "EDIT"

    @property
    def rank(self) -> int:
        return _ACTION_RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, PermissionAction):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, PermissionAction):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, PermissionAction):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, PermissionAction):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def coerce(cls, value: Union["PermissionAction", str]) -> "PermissionAction":
        """Turn a string into an action level."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidPermissionActionError(
                f"Unknown permission action: {value!r} (expected NONE, VIEW or EDIT)"
            ) from None


_ACTION_RANKS = {
    PermissionAction.NONE: 0,
    PermissionAction.VIEW: 1,
    PermissionAction.EDIT: 2,
}


@dataclass(frozen=True)
class PermissionMatrix:
    """
    Mapping of resource key to action level, owned by a user group.

    Keys missing from the matrix have level NONE.
    """
    levels: Mapping[PermissionKey, PermissionAction] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, str]) -> "PermissionMatrix":
        """
        Build a matrix from loosely typed data such as a JSON column.

        Raises:
            UnknownPermissionKeyError: If a key is not a known resource key
            InvalidPermissionActionError: If a value is not a known action
        """
        levels: Dict[PermissionKey, PermissionAction] = {}
        for key, action in raw.items():
            levels[PermissionKey.coerce(key)] = PermissionAction.coerce(action)
        return cls(levels=levels)

    @classmethod
    def full_access(cls) -> "PermissionMatrix":
        """Matrix granting EDIT on every resource."""
        return cls(levels={key: PermissionAction.EDIT for key in PermissionKey})

    def level(self, key: PermissionKey) -> PermissionAction:
        return self.levels.get(key, PermissionAction.NONE)

    def to_dict(self) -> Dict[str, str]:
        return {key.value: action.value for key, action in self.levels.items()}


@dataclass(frozen=True)
class UserGroup:
    """A group of users sharing one permission matrix."""
    id: str
    name: str
    permissions: PermissionMatrix = field(default_factory=PermissionMatrix)


@dataclass(frozen=True)
class SystemUser:
    """A login account. Its permissions are exactly its group's."""
    id: str
    username: str
    user_group_id: str


# UI section -> resource key gating it. "permissions" and "user-groups"
# share a key.
MENU_SECTIONS: Dict[str, PermissionKey] = {
    "staff-management": PermissionKey.STAFF,
    "department-management": PermissionKey.DEPARTMENTS,
    "event-management": PermissionKey.CATEGORIES,
    "room-management": PermissionKey.ROOMS,
    "work-schedule": PermissionKey.WORK_SCHEDULES,
    "meeting-schedule": PermissionKey.MEETING_SCHEDULES,
    "other-events": PermissionKey.OTHER_EVENTS,
    "holiday-management": PermissionKey.HOLIDAYS,
    "user-management": PermissionKey.USERS,
    "permissions": PermissionKey.PERMISSIONS,
    "user-groups": PermissionKey.PERMISSIONS,
    "system-config": PermissionKey.SYSTEM_CONFIG,
}

ALWAYS_VISIBLE_SECTIONS = ("dashboard",)
