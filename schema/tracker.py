from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from schema.base import CamelModel
from schema.tracker_type import TrackerTypeResponse


class TrackerCreate(CamelModel):
    person_id: int
    tracker_type_id: int
    name: Optional[str] = Field(None, max_length=100, description="Defaults to the tracker type name")

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class TrackerResponse(CamelModel):
    id: int
    name: str
    active: bool
    tracker_type_id: int
    tracker_type: TrackerTypeResponse


class TrackerListItem(TrackerResponse):
    rounds_count: int = 0
    latest_round_created_at: Optional[datetime] = None
