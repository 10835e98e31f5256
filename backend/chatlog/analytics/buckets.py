# chatlog/analytics/buckets.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from chatlog.analytics.windows import parse_timestamp


class Granularity(str, Enum):
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"

    @classmethod
    def from_param(cls, raw: Optional[str]) -> "Granularity":
        """
        Names match exactly ("DAY" is unknown). Unknown or missing values
        fall back to MINUTE, i.e. full precision.
        """
        if not raw:
            return cls.MINUTE
        try:
            return cls(raw)
        except ValueError:
            return cls.MINUTE


def format_key(dt: datetime) -> str:
    # isoformat zero-pads years below 1000, strftime("%Y") does not
    key = dt.isoformat(timespec="seconds")
    if key.endswith("+00:00"):
        return key[:-6] + "Z"
    return key


def bucket_key(granularity: Granularity, timestamp: str) -> str:
    if granularity is Granularity.DAY:
        dt = parse_timestamp(timestamp)
        return format_key(dt.replace(hour=0, minute=0, second=0, microsecond=0))
    if granularity is Granularity.HOUR:
        dt = parse_timestamp(timestamp)
        return format_key(dt.replace(minute=0, second=0, microsecond=0))
    return timestamp
