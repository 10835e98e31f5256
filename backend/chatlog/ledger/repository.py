from __future__ import annotations

from typing import Dict, List, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from chatlog.analytics.windows import DateRange
from chatlog.ledger.models import ChatEvent


class EventRepository:
    """
    Append-only event log. Rows are never updated; the only delete is
    the full reset in clear().
    """

    def __init__(self, db: Session):
        self.db = db

    # -------------------------
    # WRITE
    # -------------------------

    def insert_many(self, rows: Sequence[ChatEvent]) -> int:
        if not rows:
            return 0
        try:
            self.db.add_all(list(rows))
            # one commit per batch: readers see all rows or none
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return len(rows)

    def clear(self) -> int:
        try:
            deleted = self.db.query(ChatEvent).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return deleted

    # -------------------------
    # READ
    # -------------------------

    def query_by_range(self, date_range: DateRange) -> List[ChatEvent]:
        q = self.db.query(ChatEvent)
        if date_range.start is not None:
            q = q.filter(ChatEvent.day >= date_range.start)
        if date_range.end is not None:
            q = q.filter(ChatEvent.day <= date_range.end)
        return q.all()

    def count_by_type(self) -> Dict[str, int]:
        rows = (
            self.db.query(ChatEvent.type, func.count(ChatEvent.id))
            .group_by(ChatEvent.type)
            .all()
        )
        return {t: n for t, n in rows}
