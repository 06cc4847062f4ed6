# src/makibot/core/zones.py

"""
Display timezone helpers.

A display zone is any tzinfo: a fixed offset (`GMT+08:00`, `+5:30`) or an IANA
zone name (`Asia/Singapore`). Deadline/Event timestamps are converted to it
when tasks are loaded and rendered with `format_human`.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(
    r"^(?:GMT|UTC)?\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def system_zone() -> tzinfo:
    """Zone of the host clock (what the process shows by default)."""
    tz = datetime.now().astimezone().tzinfo
    return tz if tz is not None else timezone.utc


def parse_zone(text: str) -> tzinfo:
    """
    Parse a display zone.

    Accepts `UTC`/`GMT`/`Z`, offsets relative to GMT (`+08:00`, `-5`, `+0530`,
    `GMT+8`), and IANA zone names. Raises ValueError for anything else.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("Empty timezone")

    if raw.upper() in {"UTC", "GMT", "Z"}:
        return timezone.utc

    m = _OFFSET_RE.match(raw)
    if m:
        hours = int(m.group("hours"))
        minutes = int(m.group("minutes") or 0)
        if hours > 18 or minutes > 59 or (hours == 18 and minutes):
            raise ValueError(f"Offset out of range: {raw}")
        delta = timedelta(hours=hours, minutes=minutes)
        if m.group("sign") == "-":
            delta = -delta
        return timezone(delta, name=f"GMT{format_offset(delta)}")

    try:
        return ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {raw}") from e


def format_offset(delta: timedelta) -> str:
    total = int(delta.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def zone_name(tz: tzinfo) -> str:
    key = getattr(tz, "key", None)
    if key:
        return str(key)
    return tz.tzname(None) or str(tz)


def format_human(dt: datetime) -> str:
    """Render a timestamp like `Mar 1 2024, 9:00am`."""
    hour = dt.hour % 12 or 12
    suffix = "am" if dt.hour < 12 else "pm"
    return f"{dt:%b} {dt.day} {dt.year}, {hour}:{dt:%M}{suffix}"
