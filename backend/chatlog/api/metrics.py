from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chatlog.ledger.db import get_db
from chatlog.ledger.models import EVENT_TYPES
from chatlog.ledger.repository import EventRepository


router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("")
def metrics(db: Session = Depends(get_db)):
    """
    Lightweight counters for debugging (not Prometheus grade).
    """
    counts = EventRepository(db).count_by_type()
    by_type = {t: counts.get(t, 0) for t in EVENT_TYPES}
    return {
        "events": sum(counts.values()),
        "by_type": by_type,
    }
