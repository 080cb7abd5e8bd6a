from .errors import Cause, ClockError, InvalidInput
from .gregorian import CivilFields, days_in_month, is_leap_year
from .timestamp import Timestamp
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND

__all__ = [
    "Timestamp",
    "CivilFields",
    "InvalidInput",
    "ClockError",
    "Cause",
    "is_leap_year",
    "days_in_month",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
]
