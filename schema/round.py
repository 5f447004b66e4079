from __future__ import annotations
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime, date as dt_date

from schema.base import CamelModel
from schema.entry import EntryResponse
from schema.person import PersonResponse
from schema.weight import WeightEntryResponse
from models.round import ALLOWED_ROUND_LENGTHS


class RoundStart(CamelModel):
    person_id: int
    tracker_id: int
    start_date: Optional[dt_date] = Field(None, description="Defaults to today in the app timezone")
    length_weeks: Optional[int] = Field(None, description="4 or 8; defaults to the app setting")
    goal_weight: Optional[float] = Field(None, gt=0)

    @field_validator("length_weeks")
    @classmethod
    def check_length(cls, value):
        if value is not None and value not in ALLOWED_ROUND_LENGTHS:
            raise ValueError("lengthWeeks must be 4 or 8")
        return value


class RoundUpdate(CamelModel):
    """Only the fields present in the request are applied; goalWeight=null clears it"""
    start_date: Optional[dt_date] = None
    goal_weight: Optional[float] = Field(None, gt=0)


class RoundCreatedResponse(CamelModel):
    id: int


class RoundCategoryResponse(CamelModel):
    category_id: int
    display_name: str
    sort_order: int
    allow_days_off_per_week: int = 0
    allow_treat: bool = False
    allow_sick: bool = False


class CategoryCompletionResponse(CamelModel):
    category_id: int
    percent: Optional[float] = None
    weekly_percents: List[float] = []


class CompletionResponse(CamelModel):
    completed_weeks: int
    total_percent: Optional[float] = None
    weekly_total_percents: List[float] = []
    categories: List[CategoryCompletionResponse] = []


class TrackerSummary(CamelModel):
    id: int
    name: str
    tracker_type_id: int
    tracker_type_name: str


class RoundResponse(CamelModel):
    id: int
    person_id: int
    tracker_id: int
    start_date: dt_date
    length_weeks: int
    goal_weight: Optional[float] = None
    created_at: Optional[datetime] = None
    active: bool
    round_categories: List[RoundCategoryResponse] = []
    entries: List[EntryResponse] = []
    weight_entries: List[WeightEntryResponse] = []
    completion: CompletionResponse


class RoundDetailResponse(RoundResponse):
    person: PersonResponse


class RoundHistoryItem(RoundResponse):
    round_number: int
    tracker: TrackerSummary


class LatestRoundResponse(CamelModel):
    round: Optional[RoundResponse] = None
    round_number: int = 0
