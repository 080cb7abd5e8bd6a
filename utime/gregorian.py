"""Proleptic Gregorian calendar tables shared by the encoder and decoder."""

from typing import NamedTuple

from utime.util import EPOCH_YEAR

DAYS_OF_MONTH_LEAP = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
DAYS_OF_MONTH_NOLEAP = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Days elapsed in the year before each month begins
MONTH_OFFSETS_LEAP = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)
MONTH_OFFSETS_NOLEAP = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

# First century year the leap correction looks at. Only valid while the
# epoch floor is 1970; relaxing the floor means lowering this too.
FIRST_CORRECTED_CENTURY = 2000


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(leap: bool, month: int) -> int:
    """Number of days in `month` (1-12)."""
    table = DAYS_OF_MONTH_LEAP if leap else DAYS_OF_MONTH_NOLEAP
    return table[month - 1]


def days_before_month(leap: bool, month: int) -> int:
    """Number of days in the year before `month` (1-12) begins."""
    table = MONTH_OFFSETS_LEAP if leap else MONTH_OFFSETS_NOLEAP
    return table[month - 1]


def skipped_century_leap_days(year: int) -> int:
    """Count century years in [2000, year) that are not leap years.

    These are the years the plain divide-by-four leap count wrongly treats as
    leap. The target year itself is never included.
    """
    span = year - FIRST_CORRECTED_CENTURY
    if span <= 0:
        return 0
    # ceil(span / 100) centuries reached, minus the ones divisible by 400
    centuries = -(-span // 100)
    quad_centuries = -(-span // 400)
    return centuries - quad_centuries


def days_before_year(year: int) -> int:
    """Days from the epoch to January 1st of `year` (year >= 1970)."""
    leap_years = (year - (EPOCH_YEAR - 1)) // 4
    return (year - EPOCH_YEAR) * 365 + leap_years - skipped_century_leap_days(year)


class CivilFields(NamedTuple):
    """Calendar view of a timestamp in UTC."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    microsecond: int
