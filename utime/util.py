"""Utility constants for utime.

Time unit constants represent durations in microseconds.
These are used throughout the API for consistent time representation.
"""

# Time unit constants (all values in microseconds)
MILLISECOND = 1000
SECOND = 1_000_000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24

EPOCH_YEAR = 1970

# Largest value an unsigned 64-bit microsecond count can hold
MAX_MICROS = 2**64 - 1
