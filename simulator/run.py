from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from chatlog.ingestion.service import IngestionService
from chatlog.ledger.db import SessionLocal, engine
from chatlog.ledger.models import Base
from chatlog.ledger.repository import EventRepository


SCENARIO_DIR = os.path.join(os.path.dirname(__file__), "scenarios")


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _parse_base_time(value: str | None) -> datetime:
    if not value or value.lower() == "now":
        return _now_utc()
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _iso(ts: datetime) -> str:
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="seconds").replace("+00:00", "Z")


def _default_scenario(name: str) -> Dict[str, Any]:
    if name == "hill_valley":
        return {
            "name": name,
            "description": "Doc and Marty across three timelines.",
            "base_time": "1985-10-26T09:00:00Z",
            "events": [
                {"type": "enter", "user": "Doc", "offset_sec": 0},
                {
                    "type": "comment",
                    "user": "Doc",
                    "offset_sec": 60,
                    "message": "I love plutonium!",
                },
                {
                    "type": "highfive",
                    "user": "Marty",
                    "other_user": "Doc",
                    "offset_sec": 120,
                },
                {"type": "leave", "user": "Doc", "offset_sec": 180},
                {
                    "type": "comment",
                    "user": "Doc",
                    "offset_sec": -945907140,
                    "message": "The flux capacitor!",
                },
                {
                    "type": "comment",
                    "user": "Doc",
                    "offset_sec": 946684860,
                    "message": "Roads? Where we're going we don't need roads.",
                },
            ],
        }
    if name == "busy_room":
        return {
            "name": name,
            "description": "Steady chatter for an hour, useful for hour/minute summaries.",
            "base_time": "now",
            "events": [
                {"type": "enter", "user": "Marty", "offset_sec": -3600},
                {
                    "type": "comment",
                    "user": "Marty",
                    "offset_sec": -3540,
                    "repeat": 60,
                    "repeat_every_sec": 55,
                    "message": "Great Scott!",
                },
                {
                    "type": "highfive",
                    "user": "Biff",
                    "other_user": "Marty",
                    "offset_sec": -1800,
                    "repeat": 5,
                    "repeat_every_sec": 300,
                },
                {"type": "leave", "user": "Marty", "offset_sec": -30},
            ],
        }
    raise ValueError(f"Unknown scenario: {name}")


def _load_scenario(name: str) -> Dict[str, Any]:
    path = os.path.join(SCENARIO_DIR, f"{name}.json")
    if os.path.exists(path) and os.path.getsize(path) > 0:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return _default_scenario(name)


def expand_events(spec: Dict[str, Any], base_time: datetime) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    offset = int(spec.get("offset_sec", 0))
    repeat = int(spec.get("repeat", 1))
    step = int(spec.get("repeat_every_sec", 0))

    for i in range(repeat):
        ts = base_time + timedelta(seconds=offset + (i * step))
        ev = {
            "type": spec["type"],
            "user": spec["user"],
            "date": _iso(ts),
        }
        if spec.get("other_user"):
            ev["other_user"] = spec["other_user"]
        if spec.get("message"):
            ev["message"] = spec["message"]
        out.append(ev)
    return out


def run_scenario(name: str, *, clear: bool = False, dry_run: bool = False) -> None:
    scenario = _load_scenario(name)
    base_time = _parse_base_time(scenario.get("base_time"))
    events: List[Dict[str, Any]] = []
    for spec in scenario.get("events", []):
        events.extend(expand_events(spec, base_time))

    if dry_run:
        print(f"[demo] scenario={name} events={len(events)}")
        return

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        cleared = EventRepository(db).clear() if clear else 0
        stored = IngestionService(db).ingest(events)
    finally:
        db.close()

    print(f"[demo] scenario={name} total={len(events)} stored={stored} cleared={cleared}")


def main():
    import argparse

    p = argparse.ArgumentParser()
    p.add_argument("--scenario", default="hill_valley")
    p.add_argument("--clear", action="store_true")
    p.add_argument("--dry-run", action="store_true")
    args = p.parse_args()

    run_scenario(args.scenario, clear=args.clear, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
