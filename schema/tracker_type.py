from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from schema.base import CamelModel


class TrackerTypeBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class TrackerTypeCreate(TrackerTypeBase):
    pass


class TrackerTypeUpdate(TrackerTypeBase):
    pass


class TrackerTypeDelete(CamelModel):
    deactivate_trackers: bool = Field(False, description="Also deactivate trackers of this type")


class TrackerTypeResponse(TrackerTypeBase):
    id: int
    active: bool


class TrackerTypeStatsResponse(TrackerTypeResponse):
    created_at: Optional[datetime] = None
    categories_count: int
    trackers_count: int
    rounds_count: int
