"""Parse the cafe's post timestamps into Notion date values."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Union

DATE_PATTERN = re.compile(
    r"(\d{4})\.(\d{1,2})\.(\d{1,2})\.?"
    r"\s*(?:(오전|오후|AM|PM)\s*)?"
    r"(?:(\d{1,2}):(\d{2}))?",
    re.IGNORECASE,
)
PM_MARKERS = {"오후", "pm"}
AM_MARKERS = {"오전", "am"}


def parse_post_date(
    text: Optional[str], utc_offset_hours: int = 9
) -> Optional[Union[dt.date, dt.datetime]]:
    """Parse ``YYYY.M.D [meridiem] [H:MM]``.

    Returns a :class:`datetime.date` when only the date is present, an aware
    :class:`datetime.datetime` in a fixed UTC offset when a time follows, and
    ``None`` when nothing usable is found.
    """
    if not text:
        return None
    match = DATE_PATTERN.search(text.strip())
    if not match:
        return None
    year, month, day, meridiem, hour_raw, minute_raw = match.groups()
    try:
        if hour_raw is None:
            return dt.date(int(year), int(month), int(day))

        hour = int(hour_raw)
        marker = (meridiem or "").lower()
        if marker in PM_MARKERS and hour < 12:
            hour += 12
        elif marker in AM_MARKERS and hour == 12:
            hour = 0
        return dt.datetime(
            int(year),
            int(month),
            int(day),
            hour,
            int(minute_raw),
            tzinfo=dt.timezone(dt.timedelta(hours=utc_offset_hours)),
        )
    except ValueError:
        return None


def to_notion_date(text: Optional[str], utc_offset_hours: int = 9) -> Optional[str]:
    """ISO string suitable for a Notion ``date.start`` value."""
    parsed = parse_post_date(text, utc_offset_hours)
    return parsed.isoformat() if parsed is not None else None
