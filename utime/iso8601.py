"""ISO-8601 text codec for UTC timestamps.

Output looks like ``2150-02-02T03:01:05.030Z``. Seconds always carry exactly
three fractional digits, so text only preserves millisecond precision:
microseconds below that are truncated on the way out.

Parsing accepts the same shape, with any number of fractional digits (or
none), an optional leading ``+`` on each number, and seconds written as
``5.`` or ``.5``. This module only deals with calendar fields; range checks
happen when the fields are encoded into a timestamp.
"""

import logging
import re

from utime.errors import Cause, InvalidInput
from utime.gregorian import CivilFields
from utime.util import MILLISECOND

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\+?[0-9]+")
# Either side of the point may be empty, but not both
_SECONDS = re.compile(r"\+?(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?")

# Fractional digits that fit in a microsecond count
_MICRO_DIGITS = 6


def format_datetime(fields: CivilFields) -> str:
    """Render fields as ``YYYY-MM-DDTHH:MM:SS.fffZ``."""
    millis = fields.microsecond // MILLISECOND
    return (
        f"{format_date(fields)}"
        f"T{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}.{millis:03d}Z"
    )


def format_date(fields: CivilFields) -> str:
    """Render fields as ``YYYY-MM-DD``."""
    return f"{fields.year}-{fields.month:02d}-{fields.day:02d}"


def parse_datetime(text: str) -> CivilFields:
    """Split ISO-8601 datetime text into calendar fields.

    Raises:
        InvalidInput: If the text does not have the
            ``YYYY-MM-DDTHH:MM:SS[.f...]Z`` structure.
        TypeError: If `text` is not a string
    """
    if not isinstance(text, str):
        raise TypeError(
            f"ISO-8601 text must be a str.\n"
            f"Got {type(text).__name__!r}: {text!r}"
        )

    date_part, sep, time_part = text.partition("T")
    if not sep:
        raise _malformed(text, "missing 'T' between date and time")

    date_fields = date_part.split("-")
    if len(date_fields) != 3:
        raise _malformed(text, "date must have exactly 3 '-' separated fields")
    year, month, day = (_parse_int(text, value) for value in date_fields)

    time_fields = time_part.split(":")
    if len(time_fields) != 3:
        raise _malformed(text, "time must have exactly 3 ':' separated fields")
    hour = _parse_int(text, time_fields[0])
    minute = _parse_int(text, time_fields[1])

    seconds_text = time_fields[2]
    if not seconds_text.endswith("Z"):
        raise _malformed(text, "missing trailing 'Z' (UTC marker)")
    match = _SECONDS.fullmatch(seconds_text[:-1])
    if match is None or not (match["whole"] or match["fraction"]):
        raise _malformed(text, f"bad seconds value {seconds_text[:-1]!r}")

    second = int(match["whole"] or "0")
    fraction = match["fraction"] or ""
    # Truncate to microseconds rather than round
    microsecond = int(fraction[:_MICRO_DIGITS].ljust(_MICRO_DIGITS, "0"))

    return CivilFields(year, month, day, hour, minute, second, microsecond)


def _parse_int(text: str, value: str) -> int:
    if _DIGITS.fullmatch(value) is None:
        raise _malformed(text, f"{value!r} is not a number")
    return int(value)


def _malformed(text: str, reason: str) -> InvalidInput:
    logger.debug("rejected ISO-8601 text %r: %s", text, reason)
    return InvalidInput(
        f"Invalid ISO-8601 datetime: {reason}.\n"
        f"Got: {text!r}\n"
        f"Expected format: YYYY-MM-DDTHH:MM:SS.fffZ (e.g. '2150-02-02T03:01:05.030Z')",
        Cause.MALFORMED_TEXT,
    )
