# chatlog/analytics/windows.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from chatlog.core.errors import InvalidDate


def parse_timestamp(value: str) -> datetime:
    """
    Strict ISO-8601 parse. The value must be a full timestamp carrying
    an explicit designator (Z or +HH:MM); bare dates and naive times fail.
    """
    if not isinstance(value, str) or "T" not in value.upper():
        raise InvalidDate(f"not a timestamp: {value!r}")
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError as e:
        raise InvalidDate(f"not a timestamp: {value!r}") from e
    if dt.tzinfo is None:
        raise InvalidDate(f"timestamp must include Z or an offset: {value!r}")
    return dt


def day_of(value: str) -> date:
    # the day as written, no conversion to UTC
    return parse_timestamp(value).date()


@dataclass(frozen=True)
class DateRange:
    """
    Day-granular bounds. Time of day in the raw bound is discarded, so
    1985-10-26T00:00:00Z and 1985-10-26T23:00:00Z select the same events.
    Both sides are inclusive.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None


def _bound(raw: Optional[str]) -> Optional[date]:
    if raw is None or raw == "":
        return None
    return day_of(raw)


def parse_range(from_raw: Optional[str], to_raw: Optional[str]) -> DateRange:
    return DateRange(start=_bound(from_raw), end=_bound(to_raw))
