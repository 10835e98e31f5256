from datetime import datetime, timezone
from sqlalchemy import Column, Date, DateTime, Integer, String, Text, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


EVENT_TYPES = ("enter", "leave", "comment", "highfive")


class ChatEvent(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String, nullable=False)  # enter | leave | comment | highfive
    user = Column(String, nullable=False)

    other_user = Column(String, nullable=True)  # free text, not a FK
    message = Column(Text, nullable=True)

    # ISO-8601 string exactly as received; bucket keys are cut from it
    date = Column(String, nullable=False)
    # calendar day of `date` in its own offset, for range predicates
    day = Column(Date, nullable=False)

    received_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_events_day", "day"),
        Index("ix_events_type_day", "type", "day"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "user": self.user,
            "otherUser": self.other_user,
            "message": self.message,
            "date": self.date,
        }
