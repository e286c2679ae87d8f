"""
Holiday membership and enumeration over a holiday catalog.

Pure domain logic: the catalog is passed in by the caller, nothing is
fetched, cached or mutated here.
"""

import logging
from datetime import date as date_type
from datetime import datetime
from typing import Iterable, List, Optional, Union

import pendulum
from pendulum import DateTime

from .models import (
    Holiday,
    HolidayOccurrence,
    StoredHoliday,
    VirtualHoliday,
    format_month_day,
    parse_month_day,
)

logger = logging.getLogger(__name__)

DateLike = Union[date_type, datetime]


class HolidayResolver:
    """
    Decides which calendar days are holidays and expands recurring entries.

    A holiday record's calendar day is the wall-clock date it was stored
    with, whatever its offset; its year and month_day come from that same
    date. Dates being asked about are read in ``timezone``, and record
    dates are placed on that timezone's wall clock when compared with them.

    Recurring holidays produce at most one occurrence per year: the stored
    record in its anchor year, a ``VirtualHoliday`` in every other year.
    """

    def __init__(self, timezone: str = "UTC"):
        self.timezone = timezone

    def is_holiday_date(self, date: DateLike, holidays: Iterable[Holiday]) -> bool:
        """
        Check whether ``date`` is a holiday in the catalog.

        A holiday matches on its exact calendar day, or, when recurring, on
        any day sharing its month_day. Time of day is ignored.
        """
        day = self.localize(date).date()
        month_day = format_month_day(day)

        for holiday in holidays:
            if holiday.date.date() == day:
                return True
            if holiday.is_recurring and holiday.month_day == month_day:
                return True

        return False

    def get_holidays_for_year(
        self,
        year: int,
        holidays: Iterable[Holiday]
    ) -> List[HolidayOccurrence]:
        """
        List every holiday occurring in ``year``, ascending by date.

        Args:
            year: Target calendar year
            holidays: Stored holiday records

        Returns:
            StoredHoliday entries for records dated in ``year`` plus
            VirtualHoliday entries for recurring records anchored elsewhere
        """
        occurrences: List[HolidayOccurrence] = []

        for holiday in holidays:
            if holiday.date.year == year:
                occurrences.append(StoredHoliday(record=holiday))
                continue

            if not holiday.is_recurring:
                continue

            occurs_on = self._recurrence_in_year(holiday, year)
            if occurs_on is not None:
                occurrences.append(VirtualHoliday.from_source(holiday, occurs_on))

        return sorted(occurrences, key=lambda occurrence: self.wall_time(occurrence.date))

    def get_holiday_dates_in_range(
        self,
        start: DateLike,
        end: DateLike,
        holidays: Iterable[Holiday]
    ) -> List[DateTime]:
        """
        Collect holiday dates falling within ``[start, end]``, ascending.

        Every year touched by the range is expanded, so ranges crossing New
        Year pick up recurring holidays on both sides. Returned dates are
        on the resolver timezone's wall clock.
        """
        range_start = self.localize(start)
        range_end = self.localize(end)
        catalog = list(holidays)

        dates: List[DateTime] = []
        for year in range(range_start.year, range_end.year + 1):
            for occurrence in self.get_holidays_for_year(year, catalog):
                occurs_at = self.wall_time(occurrence.date)
                if range_start <= occurs_at <= range_end:
                    dates.append(occurs_at)

        return dates

    def localize(self, value: DateLike) -> DateTime:
        """
        Express a date or datetime in the resolver's timezone.

        Plain dates become local midnight; naive datetimes are read as
        local wall time.
        """
        if isinstance(value, datetime):
            return pendulum.instance(value, tz=self.timezone).in_timezone(self.timezone)
        return pendulum.datetime(value.year, value.month, value.day, tz=self.timezone)

    def wall_time(self, value: DateTime) -> DateTime:
        """Keep a record date's wall-clock fields and attach the resolver timezone."""
        return pendulum.datetime(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            tz=self.timezone,
        )

    def _recurrence_in_year(self, holiday: Holiday, year: int) -> Optional[DateTime]:
        """Date of a recurring holiday in ``year``, or None if it cannot occur."""
        if not holiday.month_day:
            logger.warning(
                "Skipping recurring holiday %s: month_day is missing", holiday.id
            )
            return None

        month, day = parse_month_day(holiday.month_day)

        try:
            return pendulum.datetime(year, month, day, tz=self.timezone)
        except ValueError:
            # 02-29 outside leap years
            logger.debug("Holiday %s has no %s in %s", holiday.id, holiday.month_day, year)
            return None
