"""
Tests for domain models.
"""

import pendulum
import pytest
from datetime import date, datetime

from calendarcore.domain.models import (
    Holiday,
    StoredHoliday,
    VirtualHoliday,
    format_month_day,
    parse_month_day,
)
from calendarcore.domain.permissions import (
    PermissionAction,
    PermissionKey,
    PermissionMatrix,
)
from calendarcore.domain.exceptions import (
    InvalidPermissionActionError,
    UnknownPermissionKeyError,
)


class TestMonthDay:
    """Tests for MM-DD helpers."""

    def test_format_month_day_pads(self):
        """Test month and day are zero padded."""
        assert format_month_day(date(2024, 3, 7)) == "03-07"

    def test_parse_month_day(self):
        """Test parsing a valid month/day."""
        assert parse_month_day("12-25") == (12, 25)

    def test_parse_month_day_accepts_leap_day(self):
        """Test 02-29 is a valid recurrence key."""
        assert parse_month_day("02-29") == (2, 29)

    @pytest.mark.parametrize("value", ["1-1", "2024-01-01", "13-01", "02-30", ""])
    def test_parse_month_day_rejects_invalid(self, value):
        """Test malformed or impossible month/day strings raise."""
        with pytest.raises(ValueError):
            parse_month_day(value)


class TestHoliday:
    """Tests for Holiday model."""

    def test_create_recurring_derives_month_day(self):
        """Test recurring holidays get month_day from their date."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 9, 2), is_recurring=True, name="National Day")

        assert holiday.month_day == "09-02"
        assert holiday.is_recurring
        assert holiday.name == "National Day"

    def test_create_non_recurring_has_no_month_day(self):
        """Test non-recurring holidays never carry a month_day."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 9, 2))

        assert holiday.month_day is None

    def test_create_keeps_extra_fields(self):
        """Test opaque fields are stored in extra."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 9, 2), notes="closed")

        assert holiday.extra == {"notes": "closed"}

    def test_plain_date_keeps_calendar_day(self):
        """Test a plain date keeps its year-month-day."""
        holiday = Holiday(id="h1", date=date(2024, 1, 1))

        assert isinstance(holiday.date, pendulum.DateTime)
        assert holiday.date.to_date_string() == "2024-01-01"

    def test_naive_datetime_keeps_wall_time(self):
        """Test naive datetimes keep their wall-clock fields."""
        holiday = Holiday(id="h1", date=datetime(2024, 12, 31, 23, 0))

        assert holiday.date.to_date_string() == "2024-12-31"
        assert holiday.date.hour == 23

    def test_month_day_uses_stored_offset(self):
        """Test month_day follows the wall-clock date of the stored offset."""
        holiday = Holiday.create("ny", pendulum.datetime(2024, 12, 31, 18, 0, tz="UTC"), is_recurring=True)

        assert holiday.month_day == "12-31"
        assert holiday.date.to_date_string() == "2024-12-31"

    def test_inconsistent_month_day_raises(self):
        """Test a recurring month_day must match the date."""
        with pytest.raises(ValueError, match="does not match date"):
            Holiday(
                id="h1",
                date=pendulum.datetime(2024, 1, 1),
                is_recurring=True,
                month_day="01-02",
            )

    def test_recurring_without_month_day_is_allowed(self):
        """Test a data-integrity gap does not prevent construction."""
        holiday = Holiday(id="h1", date=pendulum.datetime(2024, 1, 1), is_recurring=True)

        assert holiday.month_day is None


class TestOccurrences:
    """Tests for StoredHoliday and VirtualHoliday."""

    def test_stored_exposes_record_fields(self):
        """Test a stored occurrence reads through to its record."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 1, 1), name="New Year")
        stored = StoredHoliday(record=holiday)

        assert stored.id == "h1"
        assert stored.date == holiday.date
        assert stored.name == "New Year"
        assert not stored.is_virtual

    def test_virtual_from_source_suffixes_id(self):
        """Test a virtual copy gets a year-suffixed id and the new date."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 1, 1), is_recurring=True, name="New Year", notes="x")
        occurs_on = pendulum.datetime(2030, 1, 1, tz="Asia/Ho_Chi_Minh")

        virtual = VirtualHoliday.from_source(holiday, occurs_on)

        assert virtual.is_virtual
        assert virtual.id == "h1-2030"
        assert virtual.source_id == "h1"
        assert virtual.year == 2030
        assert virtual.date == occurs_on
        assert virtual.name == "New Year"
        assert virtual.record.extra == {"notes": "x"}

    def test_virtual_does_not_touch_source(self):
        """Test the stored record is never mutated."""
        holiday = Holiday.create("h1", pendulum.datetime(2024, 1, 1), is_recurring=True)

        VirtualHoliday.from_source(holiday, pendulum.datetime(2030, 1, 1))

        assert holiday.id == "h1"
        assert holiday.date.year == 2024


class TestPermissionModels:
    """Tests for permission keys, actions and matrices."""

    def test_actions_are_totally_ordered(self):
        """Test NONE < VIEW < EDIT."""
        assert PermissionAction.NONE < PermissionAction.VIEW < PermissionAction.EDIT
        assert max(PermissionAction) is PermissionAction.EDIT

    def test_key_coerce_accepts_values(self):
        """Test camelCase string values map to keys."""
        assert PermissionKey.coerce("otherEvents") is PermissionKey.OTHER_EVENTS
        assert PermissionKey.coerce(PermissionKey.ROOMS) is PermissionKey.ROOMS

    def test_key_coerce_rejects_unknown(self):
        """Test typos are rejected instead of silently denied."""
        with pytest.raises(UnknownPermissionKeyError):
            PermissionKey.coerce("room")

    def test_matrix_from_mapping(self):
        """Test building a matrix from raw JSON-like data."""
        matrix = PermissionMatrix.from_mapping({"rooms": "EDIT", "staff": "VIEW"})

        assert matrix.level(PermissionKey.ROOMS) is PermissionAction.EDIT
        assert matrix.level(PermissionKey.STAFF) is PermissionAction.VIEW
        assert matrix.level(PermissionKey.USERS) is PermissionAction.NONE
        assert matrix.to_dict() == {"rooms": "EDIT", "staff": "VIEW"}

    def test_matrix_rejects_unknown_key(self):
        """Test unknown resource keys fail at the boundary."""
        with pytest.raises(UnknownPermissionKeyError):
            PermissionMatrix.from_mapping({"meetingRooms": "VIEW"})

    def test_matrix_rejects_unknown_action(self):
        """Test unknown action values fail at the boundary."""
        with pytest.raises(InvalidPermissionActionError):
            PermissionMatrix.from_mapping({"rooms": "ADMIN"})

    def test_full_access(self):
        """Test full access grants EDIT everywhere."""
        matrix = PermissionMatrix.full_access()

        assert all(matrix.level(key) is PermissionAction.EDIT for key in PermissionKey)
