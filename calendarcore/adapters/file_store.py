"""
File-backed holiday catalog and user directory.

Reads a single YAML or JSON document shaped like::

    holidays:
      - id: new-year
        name: New Year's Day
        date: 2024-01-01
        is_recurring: true
    user_groups:
      - id: staff-group
        name: Staff
        permissions: {rooms: VIEW, holidays: EDIT}
    users:
      - id: u1
        username: alice
        user_group_id: staff-group
"""

import json
import logging
from datetime import date as date_type
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pendulum
import yaml
from pendulum import DateTime
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.exceptions import DataFileError
from ..domain.models import Holiday, format_month_day
from ..domain.permissions import PermissionMatrix, SystemUser, UserGroup

logger = logging.getLogger(__name__)


def _to_str(value: Any) -> Any:
    return str(value) if isinstance(value, int) else value


class HolidayRecord(BaseModel):
    """Raw holiday row. Unknown fields are kept and passed through."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    date: Any
    name: str = ""
    is_recurring: bool = Field(default=False, alias="isRecurring")
    month_day: Optional[str] = Field(default=None, alias="monthDay")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Numeric ids from YAML become strings."""
        return _to_str(value)


class UserGroupRecord(BaseModel):
    """Raw user group row."""
    id: str
    name: str = ""
    permissions: Dict[str, str] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _to_str(value)


class UserRecord(BaseModel):
    """Raw system user row."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    user_group_id: str = Field(alias="userGroupId")

    @field_validator("id", "user_group_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _to_str(value)


class FileStore:
    """
    In-memory store built from a calendar data document.

    Holiday rows that fail validation are skipped with a warning so one bad
    row cannot break holiday queries. Groups and users are validated
    strictly: an unknown permission key fails the load.
    """

    def __init__(self, data: Mapping[str, Any], timezone: str = "UTC"):
        self.timezone = timezone
        self._holidays = self._load_holidays(data.get("holidays") or [])
        self._groups = {
            group.id: group for group in self._load_groups(data.get("user_groups") or [])
        }
        self._users = {user.id: user for user in self._load_users(data.get("users") or [])}

        logger.debug(
            "Loaded %d holidays, %d groups, %d users",
            len(self._holidays), len(self._groups), len(self._users)
        )

    @classmethod
    def load(cls, data_file: Path, timezone: str = "UTC") -> "FileStore":
        """
        Read a YAML or JSON data file.

        Raises:
            DataFileError: If the file is missing or cannot be parsed
        """
        if not data_file.exists():
            raise DataFileError(f"Data file not found: {data_file}")

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                if data_file.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise DataFileError(f"Invalid data file {data_file}: {exc}") from exc

        if not isinstance(data, dict):
            raise DataFileError("Data file must contain a mapping at the root level.")

        return cls(data, timezone=timezone)

    def get_holidays(self) -> List[Holiday]:
        return list(self._holidays)

    def get_user(self, user_id: str) -> Optional[SystemUser]:
        return self._users.get(user_id)

    def get_user_group(self, group_id: str) -> Optional[UserGroup]:
        return self._groups.get(group_id)

    def _load_holidays(self, rows: List[Any]) -> List[Holiday]:
        holidays: List[Holiday] = []

        for row in rows:
            try:
                record = HolidayRecord.model_validate(row)
                holidays.append(self._to_holiday(record))
            except (ValidationError, ValueError) as exc:
                logger.warning("Skipping invalid holiday record %r: %s", row, exc)
                continue

        return holidays

    def _to_holiday(self, record: HolidayRecord) -> Holiday:
        value = self._parse_date(record.date)

        month_day = record.month_day
        if record.is_recurring and month_day is None:
            month_day = format_month_day(value)

        return Holiday(
            id=record.id,
            date=value,
            is_recurring=record.is_recurring,
            month_day=month_day,
            name=record.name,
            extra=dict(record.model_extra or {}),
        )

    def _parse_date(self, value: Any) -> DateTime:
        if isinstance(value, datetime):
            return pendulum.instance(value, tz=self.timezone)
        if isinstance(value, date_type):
            return pendulum.datetime(value.year, value.month, value.day, tz=self.timezone)
        if isinstance(value, str):
            parsed = pendulum.parse(value, tz=self.timezone)
            if isinstance(parsed, DateTime):
                return parsed
        raise ValueError(f"Unsupported holiday date: {value!r}")

    def _load_groups(self, rows: List[Any]) -> List[UserGroup]:
        groups: List[UserGroup] = []

        for row in rows:
            try:
                record = UserGroupRecord.model_validate(row)
            except ValidationError as exc:
                raise DataFileError(f"Invalid user group record {row!r}: {exc}") from exc

            groups.append(UserGroup(
                id=record.id,
                name=record.name,
                permissions=PermissionMatrix.from_mapping(record.permissions),
            ))

        return groups

    def _load_users(self, rows: List[Any]) -> List[SystemUser]:
        users: List[SystemUser] = []

        for row in rows:
            try:
                record = UserRecord.model_validate(row)
            except ValidationError as exc:
                raise DataFileError(f"Invalid user record {row!r}: {exc}") from exc

            users.append(SystemUser(
                id=record.id,
                username=record.username,
                user_group_id=record.user_group_id,
            ))

        return users
