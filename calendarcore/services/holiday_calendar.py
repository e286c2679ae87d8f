"""
Application service answering working-day questions for schedule forms.

The service pulls a fresh holiday snapshot from a catalog adapter on every
call and delegates the date logic to the domain-level ``HolidayResolver``.
The catalog dependency is a simple protocol so tests can stub it.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from pendulum import Date, DateTime

from ..domain.exceptions import BlockedDateError
from ..domain.holiday_resolver import DateLike, HolidayResolver
from ..domain.models import Holiday, HolidayOccurrence

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class HolidayCatalogProtocol(Protocol):
    """Protocol describing the holiday source needed by the service."""

    def get_holidays(self) -> List[Holiday]:
        """Return all stored holiday records."""


class HolidayCalendarService:
    """
    Combines excluded weekdays and the holiday catalog into a working calendar.
    """

    def __init__(
        self,
        catalog: HolidayCatalogProtocol,
        resolver: HolidayResolver,
        exclude_weekdays: Sequence[int] = (5, 6),
    ) -> None:
        self._catalog = catalog
        self._resolver = resolver
        self._exclude_weekdays = list(exclude_weekdays)

    def holidays_for_year(self, year: int) -> List[HolidayOccurrence]:
        return self._resolver.get_holidays_for_year(year, self._catalog.get_holidays())

    def holiday_dates_in_range(self, start: DateLike, end: DateLike) -> List[DateTime]:
        return self._resolver.get_holiday_dates_in_range(
            start, end, self._catalog.get_holidays()
        )

    def is_holiday(self, date: DateLike) -> bool:
        return self._resolver.is_holiday_date(date, self._catalog.get_holidays())

    def is_excluded_weekday(self, date: DateLike) -> bool:
        return self._resolver.localize(date).day_of_week in self._exclude_weekdays

    def is_working_day(self, date: DateLike) -> bool:
        """A working day is neither an excluded weekday nor a holiday."""
        return not self.is_excluded_weekday(date) and not self.is_holiday(date)

    def working_days_in_range(self, start: DateLike, end: DateLike) -> List[Date]:
        """
        List the working days between ``start`` and ``end``, both inclusive.

        The catalog is read once for the whole range.
        """
        holidays = self._catalog.get_holidays()
        current = self._resolver.localize(start).start_of("day")
        last = self._resolver.localize(end)

        days: List[Date] = []
        while current <= last:
            if (
                current.day_of_week not in self._exclude_weekdays
                and not self._resolver.is_holiday_date(current, holidays)
            ):
                days.append(current.date())
            current = current.add(days=1)

        return days

    def ensure_schedulable(self, date: DateLike) -> None:
        """
        Reject dates that schedules may not be placed on.

        Raises:
            BlockedDateError: If the date is an excluded weekday or a holiday
        """
        local = self._resolver.localize(date)

        if local.day_of_week in self._exclude_weekdays:
            logger.debug("Rejected %s: excluded weekday", local.to_date_string())
            raise BlockedDateError(
                local, f"{WEEKDAY_NAMES[local.day_of_week]} is not a working day"
            )

        if self._resolver.is_holiday_date(local, self._catalog.get_holidays()):
            logger.debug("Rejected %s: holiday", local.to_date_string())
            raise BlockedDateError(local, "date is a holiday")
