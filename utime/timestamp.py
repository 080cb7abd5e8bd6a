"""Microsecond-precision UTC timestamps.

A `Timestamp` is a count of microseconds since 1970-01-01T00:00:00Z that
always fits an unsigned 64-bit integer. It converts to and from calendar
fields, ISO-8601 text and `datetime` objects.

Example:
    >>> ts = Timestamp.from_civil(2150, 2, 2, 3, 1, 5, 30000)
    >>> ts.to_iso8601_datetime_text()
    '2150-02-02T03:01:05.030Z'
    >>> Timestamp.from_iso8601_text("2000-01-01T00:00:00.000Z").as_seconds()
    946684800
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from time import time_ns as current_time_ns
from typing import Any

from typing_extensions import override

from utime import iso8601
from utime.errors import Cause, ClockError, InvalidInput
from utime.gregorian import (
    CivilFields,
    days_before_month,
    days_before_year,
    days_in_month,
    days_in_year,
    is_leap_year,
)
from utime.util import (
    DAY,
    EPOCH_YEAR,
    HOUR,
    MAX_MICROS,
    MILLISECOND,
    MINUTE,
    SECOND,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime(EPOCH_YEAR, 1, 1, tzinfo=timezone.utc)

# (field, inclusive upper bound) checked after year and month
_TIME_LIMITS = (
    ("hour", 23),
    ("minute", 59),
    ("second", 59),
    ("microsecond", SECOND - 1),
)


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{name} must be an int.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )


def _reject(message: str, cause: Cause, field: str | None = None) -> InvalidInput:
    logger.debug("rejected input (%s, field=%s): %s", cause.value, field, message)
    return InvalidInput(message, cause, field)


@dataclass(frozen=True, order=True)
class Timestamp:
    micros: int = 0

    def __post_init__(self) -> None:
        _require_int("micros", self.micros)
        if self.micros < 0:
            raise _reject(
                f"Timestamp cannot be before the epoch, got {self.micros} microseconds",
                Cause.PRE_EPOCH,
                "micros",
            )
        if self.micros > MAX_MICROS:
            raise _reject(
                f"Timestamp ({self.micros}) exceeds the 64-bit microsecond range "
                f"(max {MAX_MICROS})",
                Cause.OVERFLOW,
                "micros",
            )

    @override
    def __str__(self) -> str:
        return self.to_iso8601_datetime_text()

    # Construction

    @classmethod
    def zero(cls) -> "Timestamp":
        """The epoch, 1970-01-01T00:00:00Z."""
        return cls(0)

    @classmethod
    def now(cls) -> "Timestamp":
        """Read the system clock.

        Raises:
            ClockError: If the clock reports a time before the epoch. This is a
                broken environment, not something callers are expected to handle.
        """
        nanos = current_time_ns()
        if nanos < 0:
            logger.critical("system clock is before the Unix epoch: %d ns", nanos)
            raise ClockError(f"System clock reports a pre-epoch time ({nanos} ns)")
        return cls(nanos // 1000)

    @classmethod
    def from_seconds(cls, seconds: int) -> "Timestamp":
        _require_int("seconds", seconds)
        return cls(seconds * SECOND)

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "Timestamp":
        _require_int("milliseconds", milliseconds)
        return cls(milliseconds * MILLISECOND)

    @classmethod
    def from_civil(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
    ) -> "Timestamp":
        """Encode UTC calendar fields as a timestamp.

        Args:
            year: 1970 or later
            month: 1-12
            day: 1 up to the length of the month (leap-year aware)
            hour: 0-23
            minute: 0-59
            second: 0-59 (no leap seconds)
            microsecond: 0-999999

        Raises:
            InvalidInput: If any field is out of range. Checks run in the
                order year, month, time of day, day of month.
            TypeError: If any field is not an int
        """
        fields = CivilFields(year, month, day, hour, minute, second, microsecond)
        for name, value in zip(CivilFields._fields, fields):
            _require_int(name, value)

        if year < EPOCH_YEAR:
            raise _reject(
                f"year must be {EPOCH_YEAR} or later, got {year}.\n"
                f"Dates before the Unix epoch cannot be represented.",
                Cause.PRE_EPOCH,
                "year",
            )
        if not 1 <= month <= 12:
            raise _reject(
                f"month must be in range [1, 12], got {month}",
                Cause.OUT_OF_RANGE,
                "month",
            )
        for name, limit in _TIME_LIMITS:
            value = getattr(fields, name)
            if not 0 <= value <= limit:
                raise _reject(
                    f"{name} must be in range [0, {limit}], got {value}",
                    Cause.OUT_OF_RANGE,
                    name,
                )

        leap = is_leap_year(year)
        month_length = days_in_month(leap, month)
        if not 1 <= day <= month_length:
            raise _reject(
                f"day must be in range [1, {month_length}] for {year}-{month:02d}, "
                f"got {day}",
                Cause.OUT_OF_RANGE,
                "day",
            )

        days = days_before_year(year) + days_before_month(leap, month) + day - 1
        micros = (
            days * DAY
            + hour * HOUR
            + minute * MINUTE
            + second * SECOND
            + microsecond
        )
        if micros > MAX_MICROS:
            raise _reject(
                f"{fields} is past the last representable instant",
                Cause.OVERFLOW,
                "year",
            )
        return cls(micros)

    @classmethod
    def from_iso8601_text(cls, text: str) -> "Timestamp":
        """Parse ``YYYY-MM-DDTHH:MM:SS.fffZ`` text.

        Raises:
            InvalidInput: On malformed text or out-of-range fields
        """
        return cls.from_civil(*iso8601.parse_datetime(text))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """Convert a timezone-aware datetime.

        Raises:
            TypeError: If `dt` is naive
            InvalidInput: If `dt` is before the epoch
        """
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise TypeError(
                f"Timestamp.from_datetime() requires a timezone-aware datetime.\n"
                f"Got naive datetime: {dt!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        delta = dt - _EPOCH
        return cls((delta.days * 86400 + delta.seconds) * SECOND + delta.microseconds)

    # Accessors

    def is_zero(self) -> bool:
        return self.micros == 0

    def as_microseconds(self) -> int:
        return self.micros

    def as_milliseconds(self) -> int:
        return self.micros // MILLISECOND

    def as_seconds(self) -> int:
        return self.micros // SECOND

    def to_datetime(self) -> datetime:
        """Return an aware UTC datetime.

        Raises:
            OverflowError: For instants past datetime's year 9999 limit
        """
        return _EPOCH + timedelta(microseconds=self.micros)

    def to_civil(self) -> CivilFields:
        """Decode into UTC calendar fields."""
        days, leftover = divmod(self.micros, DAY)
        hour, leftover = divmod(leftover, HOUR)
        minute, leftover = divmod(leftover, MINUTE)
        second, microsecond = divmod(leftover, SECOND)

        # No year is longer than 366 days, so this guess is never past the
        # true year and the search only moves forward.
        year = days // 366 + EPOCH_YEAR
        days -= days_before_year(year)
        while days >= days_in_year(year):
            days -= days_in_year(year)
            year += 1

        leap = is_leap_year(year)
        # No month is shorter than 28 days, so this estimate is never before the
        # true month. It can be one month late in a month's last days.
        month = min(days // 28, 11) + 1
        while days_before_month(leap, month) > days:
            month -= 1
        day = days - days_before_month(leap, month)
        if day >= days_in_month(leap, month):
            raise RuntimeError(
                f"Decoded day {day + 1} does not fit {year}-{month:02d} "
                f"(timestamp {self.micros})"
            )

        return CivilFields(year, month, day + 1, hour, minute, second, microsecond)

    def to_iso8601_datetime_text(self) -> str:
        return iso8601.format_datetime(self.to_civil())

    def to_iso8601_date_text(self) -> str:
        return iso8601.format_date(self.to_civil())
