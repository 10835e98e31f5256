from datetime import datetime, timezone

from chatlog.ledger.models import ChatEvent
from chatlog.query.service import EventQueryService
from simulator.run import _default_scenario, _load_scenario, expand_events, run_scenario


def test_expand_repeats_relative_to_base():
    base = datetime(1985, 10, 26, 9, 0, tzinfo=timezone.utc)
    out = expand_events(
        {"type": "comment", "user": "Doc", "offset_sec": 60, "repeat": 3, "repeat_every_sec": 60,
         "message": "Great Scott!"},
        base,
    )
    assert [e["date"] for e in out] == [
        "1985-10-26T09:01:00Z",
        "1985-10-26T09:02:00Z",
        "1985-10-26T09:03:00Z",
    ]
    assert all(e["message"] == "Great Scott!" for e in out)


def test_hill_valley_hits_the_three_dates():
    scenario = _default_scenario("hill_valley")
    base = datetime(1985, 10, 26, 9, 0, tzinfo=timezone.utc)
    dates = {e["date"] for spec in scenario["events"] for e in expand_events(spec, base)}
    assert {"1955-11-05T09:01:00Z", "1985-10-26T09:01:00Z", "2015-10-26T09:01:00Z"} <= dates


def test_run_scenario_stores_events(db, capsys):
    run_scenario("hill_valley", clear=True)
    assert db.query(ChatEvent).count() == 6
    assert "stored=6" in capsys.readouterr().out


def test_json_scenario_is_loaded_from_disk(db):
    scenario = _load_scenario("lunch_rush")
    assert scenario["name"] == "lunch_rush"
    assert scenario["base_time"] == "2015-10-21T11:55:00Z"

    run_scenario("lunch_rush", clear=True)
    rows = EventQueryService(db).summary_events(
        "2015-10-21T00:00:00Z", "2015-10-21T23:59:59Z", "hour"
    )
    assert [r.to_dict() for r in rows] == [
        {"date": "2015-10-21T11:00:00Z", "enters": 2, "leaves": 0, "comments": 2, "highfives": 0},
        {"date": "2015-10-21T12:00:00Z", "enters": 1, "leaves": 2, "comments": 2, "highfives": 1},
    ]
