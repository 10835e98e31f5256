from __future__ import annotations

import logging
from typing import Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chatlog.api.deps import ERROR, OK
from chatlog.ledger.db import get_db
from chatlog.ingestion.service import IngestionService
from chatlog.query.service import EventQueryService

router = APIRouter(prefix="/events", tags=["ingestion"])

log = logging.getLogger("chatlog.api")


@router.post("")
def ingest_events(
    payload: Union[List[Dict[str, Any]], Dict[str, Any], None] = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Accept either a single event object or an array of them.
    """
    try:
        IngestionService(db).ingest(payload)
        return OK
    except ValueError as e:
        log.info("Rejected event batch: %s", e)
        return JSONResponse(status_code=422, content=ERROR)
    except SQLAlchemyError:
        log.exception("Event insert failed")
        return JSONResponse(status_code=422, content=ERROR)


@router.post("/clear")
def clear_events(db: Session = Depends(get_db)):
    try:
        EventQueryService(db).clear_events()
        return OK
    except SQLAlchemyError:
        log.exception("Event clear failed")
        return JSONResponse(status_code=422, content=ERROR)
