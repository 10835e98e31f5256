from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from chatlog.analytics.buckets import Granularity
from chatlog.analytics.summary import SummaryRow, summarize
from chatlog.analytics.windows import parse_range, parse_timestamp
from chatlog.core.errors import MissingRange
from chatlog.ledger.models import ChatEvent
from chatlog.ledger.repository import EventRepository

log = logging.getLogger("chatlog.query")


class EventQueryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = EventRepository(db)

    def list_events(self, from_raw: Optional[str], to_raw: Optional[str]) -> List[ChatEvent]:
        date_range = parse_range(from_raw, to_raw)
        events = self.repo.query_by_range(date_range)
        # by instant, not by string: offsets differ between rows
        events.sort(key=lambda ev: parse_timestamp(ev.date))
        return events

    def summary_events(
        self,
        from_raw: Optional[str],
        to_raw: Optional[str],
        by: Optional[str] = None,
    ) -> List[SummaryRow]:
        date_range = parse_range(from_raw, to_raw)
        if not date_range.is_bounded:
            raise MissingRange("summary requires both `from` and `to`")
        granularity = Granularity.from_param(by)
        events = self.repo.query_by_range(date_range)
        rows = summarize(events, granularity)
        log.debug(
            "Summarized %s event(s) into %s %s bucket(s)",
            len(events),
            len(rows),
            granularity.value,
        )
        return rows

    def clear_events(self) -> int:
        deleted = self.repo.clear()
        log.info("Cleared %s event(s)", deleted)
        return deleted
