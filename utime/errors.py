"""Exceptions raised by utime.

Every rejected input surfaces as `InvalidInput`. The `cause` and `field`
attributes say which check failed; callers normally only catch the class.
"""

from enum import Enum


class Cause(Enum):
    PRE_EPOCH = "pre_epoch"
    OUT_OF_RANGE = "out_of_range"
    MALFORMED_TEXT = "malformed_text"
    OVERFLOW = "overflow"


class InvalidInput(ValueError):
    def __init__(self, message: str, cause: Cause, field: str | None = None):
        super().__init__(message)
        self.cause: Cause = cause
        self.field: str | None = field


class ClockError(RuntimeError):
    """The system clock reported a time before the Unix epoch."""
