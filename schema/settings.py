from pydantic import Field, field_validator
from typing import Optional

from schema.base import CamelModel
from models.app_settings import WeightUnitEnum
from models.round import ALLOWED_ROUND_LENGTHS
from utils.timezone_utils import is_valid_timezone

WEIGHT_UNIT_ALIASES = {
    "LBS": WeightUnitEnum.LBS,
    "LB": WeightUnitEnum.LBS,
    "KG": WeightUnitEnum.KG,
    "KGS": WeightUnitEnum.KG,
}


class AppSettingsResponse(CamelModel):
    round_length_weeks: int
    week_starts_on: int
    timezone: str
    weight_unit: WeightUnitEnum


class AppSettingsUpdate(CamelModel):
    weight_unit: Optional[WeightUnitEnum] = None
    round_length_weeks: Optional[int] = None
    week_starts_on: Optional[int] = Field(None, ge=0, le=6)
    timezone: Optional[str] = None

    @field_validator("weight_unit", mode="before")
    @classmethod
    def normalize_weight_unit(cls, value):
        if value is None or isinstance(value, WeightUnitEnum):
            return value
        unit = WEIGHT_UNIT_ALIASES.get(str(value).strip().upper())
        if unit is None:
            raise ValueError("weightUnit must be LBS or KG")
        return unit

    @field_validator("round_length_weeks")
    @classmethod
    def check_round_length(cls, value):
        if value is not None and value not in ALLOWED_ROUND_LENGTHS:
            raise ValueError("roundLengthWeeks must be 4 or 8")
        return value

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value):
        if value is not None and not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value
