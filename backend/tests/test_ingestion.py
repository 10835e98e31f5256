import pytest
from sqlalchemy.exc import IntegrityError

from chatlog.core.errors import InvalidEvent
from chatlog.ingestion.schemas import EventIn
from chatlog.ingestion.service import IngestionService, now_iso
from chatlog.ingestion.validators import coerce_batch
from chatlog.ledger.models import ChatEvent
from chatlog.ledger.repository import EventRepository


def test_coerce_single_and_list():
    one = coerce_batch({"type": "enter", "user": "Doc", "date": "1985-10-26T09:00:00Z"})
    assert len(one) == 1 and isinstance(one[0], EventIn)
    many = coerce_batch(
        [
            {"type": "enter", "user": "Doc"},
            {"type": "leave", "user": "Doc"},
        ]
    )
    assert [e.type for e in many] == ["enter", "leave"]


def test_other_user_aliases():
    for key in ("otheruser", "otherUser", "other_user"):
        (ev,) = coerce_batch({"type": "highfive", "user": "Marty", key: "Doc"})
        assert ev.other_user == "Doc"


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "enter",
        {},
        {"type": "enter"},
        {"user": "Doc"},
        {"type": "wave", "user": "Doc"},
        {"type": "enter", "user": "   "},
        {"type": "enter", "user": "Doc", "date": "1985-10-26"},
        {"type": "enter", "user": "Doc", "date": "agnel"},
    ],
)
def test_coerce_rejects(payload):
    with pytest.raises(InvalidEvent):
        coerce_batch(payload)


def test_one_bad_row_fails_the_batch(db):
    with pytest.raises(InvalidEvent):
        IngestionService(db).ingest(
            [
                {"type": "enter", "user": "Doc", "date": "1985-10-26T09:00:00Z"},
                {"type": "enter"},
            ]
        )
    assert db.query(ChatEvent).count() == 0


def test_ingest_stores_rows_and_derives_day(db):
    stored = IngestionService(db).ingest(
        {
            "type": "highfive",
            "user": "Marty",
            "otheruser": "Doc",
            "date": "1985-10-26T09:02:00Z",
        }
    )
    assert stored == 1
    row = db.query(ChatEvent).one()
    assert row.other_user == "Doc"
    assert row.date == "1985-10-26T09:02:00Z"
    assert row.day.isoformat() == "1985-10-26"
    assert row.to_dict()["otherUser"] == "Doc"


def test_missing_date_defaults_to_now(db):
    IngestionService(db).ingest({"type": "enter", "user": "Doc"})
    row = db.query(ChatEvent).one()
    assert row.date.endswith("Z")
    assert len(row.date) == len("2024-01-01T12:00:00.000Z")


def test_text_fields_stored_as_sent(db):
    IngestionService(db).ingest(
        {
            "type": "highfive",
            "user": " Marty ",
            "otheruser": "  Doc",
            "message": "  Great Scott!  ",
            "date": "1985-10-26T09:02:00Z",
        }
    )
    row = db.query(ChatEvent).one()
    assert row.user == " Marty "
    assert row.other_user == "  Doc"
    assert row.message == "  Great Scott!  "


def test_now_iso_shape():
    value = now_iso()
    assert value[10] == "T" and value.endswith("Z") and value[19] == "."


def test_empty_batch_is_a_noop(db):
    assert IngestionService(db).ingest([]) == 0


def test_store_failure_rolls_back_whole_batch(db):
    rows = [
        ChatEvent(type="enter", user="Doc", date="1985-10-26T09:00:00Z", day=None),
    ]
    with pytest.raises(IntegrityError):
        EventRepository(db).insert_many(rows)
    assert db.query(ChatEvent).count() == 0
