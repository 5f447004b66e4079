from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from database import Base
import enum

SETTINGS_ID = "singleton"


class WeightUnitEnum(enum.Enum):
    LBS = "LBS"
    KG = "KG"


class AppSettings(Base):
    __tablename__ = "app_settings"

    id = Column(String(20), primary_key=True, default=SETTINGS_ID)
    round_length_weeks = Column(Integer, nullable=False, default=8)
    week_starts_on = Column(Integer, nullable=False, default=0)
    timezone = Column(String(64), nullable=False, default="America/New_York")
    weight_unit = Column(Enum(WeightUnitEnum), nullable=False, default=WeightUnitEnum.LBS)
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )
