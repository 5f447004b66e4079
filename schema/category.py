from pydantic import Field, field_validator
from typing import Literal, Optional

from schema.base import CamelModel
from models.category import MAX_DAYS_OFF_PER_WEEK


class CategoryCreate(CamelModel):
    tracker_type_id: int
    name: str = Field(..., min_length=1, max_length=100)
    allow_days_off_per_week: int = Field(0, ge=0, le=MAX_DAYS_OFF_PER_WEEK)
    allow_treat: bool = False
    allow_sick: bool = False
    apply_to_existing: bool = Field(False, description="Add to each tracker's latest round")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    allow_days_off_per_week: Optional[int] = Field(None, ge=0, le=MAX_DAYS_OFF_PER_WEEK)
    allow_treat: Optional[bool] = None
    allow_sick: Optional[bool] = None
    apply_to_existing: bool = Field(False, description="Rename snapshots in each tracker's latest round")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class CategoryDelete(CamelModel):
    remove_from_active_rounds: bool = False


class CategoryReorder(CamelModel):
    category_id: int
    direction: Literal["up", "down"]


class CategoryResponse(CamelModel):
    id: int
    tracker_type_id: int
    name: str
    sort_order: int
    allow_days_off_per_week: int
    allow_treat: bool
    allow_sick: bool
    active: bool
