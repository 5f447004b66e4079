from pydantic import Field
from datetime import date as dt_date

from schema.base import CamelModel


class WeightUpsert(CamelModel):
    round_id: int
    date: dt_date = Field(..., description="Any day inside the week being recorded")
    weight: float = Field(..., gt=0, description="Weight in the configured unit")


class WeightEntryResponse(CamelModel):
    id: int
    round_id: int
    week_index: int
    weight: float
    date: dt_date
