"""
Conversion between the time-of-day encodings used across the application.

Shops are created through a form that submits 12-hour strings ("9:00 AM"),
while the API and the database hand back 24-hour strings ("09:00" or
"09:00:00"). Everything here follows a pass-through policy: input that is not
a recognizable time is returned unchanged instead of raising, so a bad record
from the network never breaks a screen.
"""

import logging
import re

from .models import TimeFormat

logger = logging.getLogger(__name__)

NOT_SET = "Not set"

_TWELVE_HOUR = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_TWENTY_FOUR_HOUR = re.compile(r"^(\d{1,2}):(\d{2})$")
_WITH_SECONDS = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")


def get_time_format(text: str | None) -> TimeFormat:
    """Sniff which encoding a time string uses."""
    if not text:
        return TimeFormat.UNKNOWN

    text = text.strip()
    if _TWELVE_HOUR.match(text):
        return TimeFormat.TWELVE_HOUR
    if _TWENTY_FOUR_HOUR.match(text):
        return TimeFormat.TWENTY_FOUR_HOUR
    return TimeFormat.UNKNOWN


def convert_12_hour_to_24_hour(text: str | None) -> str:
    """
    Convert "9:00 AM" style input to "09:00".

    12 AM is midnight (00) and 12 PM is noon (12). Input that is not a valid
    12-hour time is returned unchanged.
    """
    if not text:
        return ""

    match = _TWELVE_HOUR.match(text.strip())
    if not match:
        logger.warning("Invalid 12-hour time format: %r", text)
        return text

    hour = int(match.group(1))
    minutes = match.group(2)
    period = match.group(3).upper()

    if hour > 12 or int(minutes) > 59:
        logger.warning("Invalid 12-hour time format: %r", text)
        return text

    if period == "PM" and hour != 12:
        hour += 12
    elif period == "AM" and hour == 12:
        hour = 0

    return f"{hour:02d}:{minutes}"


def parse_to_24_hour(text: str | None) -> str:
    """
    Normalize a time string to 24-hour "HH:MM".

    - "HH:MM" is returned as is
    - "HH:MM:SS" loses its seconds
    - "H:MM AM|PM" is converted
    - anything else passes through unchanged
    """
    if not text:
        return ""

    stripped = text.strip()

    if _TWENTY_FOUR_HOUR.match(stripped):
        return stripped

    if _TWELVE_HOUR.match(stripped):
        return convert_12_hour_to_24_hour(stripped)

    match = _WITH_SECONDS.match(stripped)
    if match:
        return f"{match.group(1)}:{match.group(2)}"

    logger.warning("Unknown time format: %r", text)
    return text


def split_24_hour(text: str | None) -> tuple[int, int] | None:
    """
    Split a 24-hour string (seconds tolerated) into hour and minute.
    Returns None if the string is not in 24-hour form.
    """
    if not text:
        return None

    stripped = text.strip()
    match = _TWENTY_FOUR_HOUR.match(stripped) or _WITH_SECONDS.match(stripped)
    if not match:
        return None

    return int(match.group(1)), int(match.group(2))


def format_to_12_hour(text: str | None) -> str:
    """
    Render a 24-hour string as "H:MM AM|PM".

    Minutes are kept exactly as supplied. Input that is not a 24-hour time
    is returned unchanged.
    """
    if not text:
        return ""

    stripped = text.strip()
    match = _TWENTY_FOUR_HOUR.match(stripped) or _WITH_SECONDS.match(stripped)
    if not match:
        return text

    hour = int(match.group(1))
    minutes = match.group(2)
    if hour > 23 or int(minutes) > 59:
        return text

    if hour == 0:
        # Midnight
        display_hour, period = 12, "AM"
    elif hour == 12:
        # Noon
        display_hour, period = 12, "PM"
    elif hour > 12:
        display_hour, period = hour - 12, "PM"
    else:
        display_hour, period = hour, "AM"

    return f"{display_hour}:{minutes} {period}"


def format_for_display(text: str | None) -> str:
    """
    Format a stored time for display in lists, maps and profiles.

    Example: "18:30:00" -> "6:30 PM", "" -> "Not set"
    """
    if not text:
        return NOT_SET

    return format_to_12_hour(parse_to_24_hour(text))
