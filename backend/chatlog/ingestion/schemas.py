from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from chatlog.analytics.windows import parse_timestamp


EventType = Literal["enter", "leave", "comment", "highfive"]


class EventIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: EventType
    user: str = Field(min_length=1)

    # clients send `otheruser`; accept the camel/snake spellings too
    other_user: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("otheruser", "otherUser", "other_user"),
    )
    message: Optional[str] = None

    # defaults to "now" at ingest time when omitted
    date: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _full_timestamp(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        # InvalidDate is a ValueError, so pydantic reports it as a field error
        parse_timestamp(v)
        return v

    @field_validator("user")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        # rejected when blank, stored as sent otherwise
        if not v.strip():
            raise ValueError("user must not be blank")
        return v
