# chatlog/api/events.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chatlog.api.deps import ERROR, range_params
from chatlog.ledger.db import get_db
from chatlog.query.service import EventQueryService

router = APIRouter(prefix="/events", tags=["events"])

log = logging.getLogger("chatlog.api")


# -------------------------
# LIST EVENTS
# -------------------------
@router.get("")
def list_events(
    rng: dict = Depends(range_params),
    db: Session = Depends(get_db),
):
    try:
        events = EventQueryService(db).list_events(rng["from_raw"], rng["to_raw"])
    except ValueError as e:
        log.info("Rejected event query: %s", e)
        return JSONResponse(status_code=422, content=ERROR)
    except SQLAlchemyError:
        log.exception("Event query failed")
        return JSONResponse(status_code=422, content=ERROR)
    return {"events": [ev.to_dict() for ev in events]}


# -------------------------
# SUMMARY
# -------------------------
@router.get("/summary")
def summary(
    rng: dict = Depends(range_params),
    by: Optional[str] = Query(default=None, description="minute | hour | day"),
    db: Session = Depends(get_db),
):
    try:
        rows = EventQueryService(db).summary_events(rng["from_raw"], rng["to_raw"], by)
    except ValueError as e:
        log.info("Rejected summary query: %s", e)
        return JSONResponse(status_code=422, content=ERROR)
    except SQLAlchemyError:
        log.exception("Summary query failed")
        return JSONResponse(status_code=422, content=ERROR)
    return {"events": [r.to_dict() for r in rows]}
