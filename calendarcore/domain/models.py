"""
Domain models for holiday records and their per-year occurrences.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import date as date_type
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple, Union

import pendulum
from pendulum import DateTime

MONTH_DAY_PATTERN = re.compile(r"^(\d{2})-(\d{2})$")


def format_month_day(value: date_type) -> str:
    """Return the ``MM-DD`` key of a date, ignoring the year."""
    return f"{value.month:02d}-{value.day:02d}"


def parse_month_day(value: str) -> Tuple[int, int]:
    """
    Split an ``MM-DD`` string into (month, day).

    Raises:
        ValueError: If the string is not a valid month/day pair
    """
    match = MONTH_DAY_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"month_day must look like MM-DD, got {value!r}")

    month, day = int(match.group(1)), int(match.group(2))
    # 2000 is a leap year, so 02-29 is accepted here
    date_type(2000, month, day)
    return month, day


def _as_datetime(value: Union[date_type, datetime]) -> DateTime:
    if isinstance(value, datetime):
        return pendulum.instance(value)
    return pendulum.datetime(value.year, value.month, value.day)


@dataclass(frozen=True)
class Holiday:
    """
    A stored holiday record.

    The calendar day of a record is the wall-clock date of ``date`` in its
    own offset. Plain dates keep their year-month-day (held as midnight UTC).

    Invariant: a recurring holiday with a month_day must agree with the
    month and day of its date. A recurring holiday without a month_day is
    allowed here; the resolver skips it when expanding other years.
    """
    id: str
    date: DateTime
    is_recurring: bool = False
    month_day: Optional[str] = None
    name: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "date", _as_datetime(self.date))

        if self.month_day is not None:
            parse_month_day(self.month_day)
            if self.is_recurring and self.month_day != format_month_day(self.date):
                raise ValueError(
                    f"month_day {self.month_day} does not match date "
                    f"{self.date.format('YYYY-MM-DD')} of holiday {self.id}"
                )

    @classmethod
    def create(
        cls,
        id: str,
        date: Union[date_type, datetime],
        is_recurring: bool = False,
        name: str = "",
        **extra: Any,
    ) -> "Holiday":
        """Build a record, deriving month_day from the date for recurring holidays."""
        value = _as_datetime(date)
        month_day = format_month_day(value) if is_recurring else None
        return cls(
            id=id,
            date=value,
            is_recurring=is_recurring,
            month_day=month_day,
            name=name,
            extra=dict(extra),
        )


@dataclass(frozen=True)
class StoredHoliday:
    """A holiday exactly as it exists in the catalog."""
    record: Holiday

    is_virtual = False

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def date(self) -> DateTime:
        return self.record.date

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class VirtualHoliday:
    """
    A recurring holiday's occurrence in a year other than its anchor year.

    ``record`` is a copy of the source with the date moved to ``year`` and
    the id suffixed with it, so it never collides with a stored id.
    """
    record: Holiday
    source_id: str
    year: int

    is_virtual = True

    @classmethod
    def from_source(cls, source: Holiday, occurs_on: DateTime) -> "VirtualHoliday":
        record = replace(
            source,
            id=f"{source.id}-{occurs_on.year}",
            date=occurs_on,
        )
        return cls(record=record, source_id=source.id, year=occurs_on.year)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def date(self) -> DateTime:
        return self.record.date

    @property
    def name(self) -> str:
        return self.record.name


HolidayOccurrence = Union[StoredHoliday, VirtualHoliday]
