"""Human-readable rendering of kickoff times for notification bodies."""

from datetime import datetime, timezone
from typing import Optional

import pytz

# en-GB short month names, fixed so output does not depend on the host locale
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sept",
    "Oct",
    "Nov",
    "Dec",
)

UNKNOWN_KICKOFF = "TBC"


def format_kickoff(kickoff: Optional[datetime], tz_name: str = "UTC") -> str:
    """Render a kickoff time as day, abbreviated month and 24h time.

    Naive datetimes are assumed to be UTC.

    Example:
        >>> format_kickoff(datetime(2024, 3, 5, 19, 30, tzinfo=timezone.utc))
        '5 Mar, 19:30'
    """
    if kickoff is None:
        return UNKNOWN_KICKOFF

    if kickoff.tzinfo is None:
        kickoff = kickoff.replace(tzinfo=timezone.utc)
    local = kickoff.astimezone(pytz.timezone(tz_name))

    month = MONTH_ABBREVIATIONS[local.month - 1]
    return f"{local.day} {month}, {local:%H:%M}"
