# chatlog/ingestion/service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy.orm import Session

from chatlog.analytics.windows import day_of
from chatlog.ingestion.schemas import EventIn
from chatlog.ingestion.validators import coerce_batch
from chatlog.ledger.models import ChatEvent
from chatlog.ledger.repository import EventRepository

log = logging.getLogger("chatlog.ingest")


def now_iso() -> str:
    # 2024-01-01T12:00:00.000Z, the shape browsers produce with toISOString()
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def to_row(event: EventIn) -> ChatEvent:
    date = event.date or now_iso()
    return ChatEvent(
        type=event.type,
        user=event.user,
        other_user=event.other_user,
        message=event.message,
        date=date,
        day=day_of(date),
    )


class IngestionService:
    """
    Insert path for chat events.

    Guarantees:
    - every row validated before anything is written
    - one transaction per batch
    - missing dates stamped with the current UTC time
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = EventRepository(db)

    def ingest(self, payload: Any) -> int:
        events: List[EventIn] = coerce_batch(payload)
        rows = [to_row(ev) for ev in events]
        stored = self.repo.insert_many(rows)
        log.info("Stored %s event(s)", stored)
        return stored
