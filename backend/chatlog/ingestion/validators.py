from __future__ import annotations

from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from chatlog.core.errors import InvalidEvent
from chatlog.ingestion.schemas import EventIn

_BATCH = TypeAdapter(List[EventIn])


def coerce_batch(payload: Any) -> List[EventIn]:
    """
    Normalize a request body into a list of validated events.

    Accepts a single EventIn, a list of them, or raw dicts (the
    simulator and tests hand in plain mappings). Any bad row fails the
    whole batch.
    """
    if payload is None:
        raise InvalidEvent("request body required")
    if isinstance(payload, EventIn):
        return [payload]
    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise InvalidEvent("body must be an event object or an array of events")
    try:
        return _BATCH.validate_python(payload)
    except ValidationError as e:
        raise InvalidEvent(f"event validation failed: {e}") from e
