from pydantic import Field, field_validator
from datetime import datetime
from typing import Optional

from schema.base import CamelModel


class PersonBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Display name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class PersonCreate(PersonBase):
    """Schema for creating a person (also creates a default tracker)"""
    pass


class PersonUpdate(PersonBase):
    """Schema for renaming a person"""
    pass


class PersonResponse(PersonBase):
    id: int
    created_at: Optional[datetime] = None
