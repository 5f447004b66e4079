from pydantic import Field, model_validator
from datetime import date as dt_date
from typing import Literal, Optional

from schema.base import CamelModel
from models.entry import EntryStatusEnum


class EntryUpsert(CamelModel):
    round_id: int
    category_id: int
    date: dt_date = Field(..., description="Local calendar day (YYYY-MM-DD)")
    mode: Literal["cycle", "set"] = "cycle"
    status: Optional[EntryStatusEnum] = None

    @model_validator(mode="after")
    def status_required_for_set(self):
        if self.mode == "set" and self.status is None:
            raise ValueError("status is required when mode is 'set'")
        return self


class EntryResponse(CamelModel):
    id: int
    round_id: int
    category_id: int
    date: dt_date
    status: EntryStatusEnum
