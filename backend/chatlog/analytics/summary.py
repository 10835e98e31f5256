# chatlog/analytics/summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal

from chatlog.analytics.buckets import Granularity, bucket_key
from chatlog.analytics.windows import parse_timestamp
from chatlog.ledger.models import ChatEvent

# event type -> counter attribute on SummaryRow
_COUNTERS = {
    "enter": "enters",
    "leave": "leaves",
    "comment": "comments",
    "highfive": "highfives",
}


@dataclass
class SummaryRow:
    date: str
    enters: int = 0
    leaves: int = 0
    comments: int = 0
    highfives: int = 0

    @property
    def total(self) -> int:
        return self.enters + self.leaves + self.comments + self.highfives

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "enters": self.enters,
            "leaves": self.leaves,
            "comments": self.comments,
            "highfives": self.highfives,
        }


def summarize(
    events: Iterable[ChatEvent],
    granularity: Granularity,
    *,
    order: Literal["chronological", "first_seen"] = "chronological",
) -> List[SummaryRow]:
    """
    Roll events up into one row per bucket key.

    Only buckets that received at least one known event type get a row.
    With order="first_seen" rows come back in the order their bucket was
    first met during the fold.
    """
    rows: Dict[str, SummaryRow] = {}
    for ev in events:
        attr = _COUNTERS.get(ev.type)
        if attr is None:
            continue
        key = bucket_key(granularity, ev.date)
        row = rows.get(key)
        if row is None:
            row = rows[key] = SummaryRow(date=key)
        setattr(row, attr, getattr(row, attr) + 1)

    out = list(rows.values())
    if order == "chronological":
        out.sort(key=lambda r: parse_timestamp(r.date))
    return out
