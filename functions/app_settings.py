# functions/app_settings.py
"""
Application settings.

The AppSettings row is read once at startup into an immutable AppConfig that
lives on ``app.state`` and is handed to routes through ``get_app_config``.
PATCH /settings writes the row and swaps in a fresh AppConfig.
"""
import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.app_settings import AppSettings, WeightUnitEnum, SETTINGS_ID

logger = logging.getLogger("habit_wheel")

DEFAULT_SETTINGS = {
    "id": SETTINGS_ID,
    "round_length_weeks": 8,
    "week_starts_on": 0,
    "timezone": "America/New_York",
    "weight_unit": WeightUnitEnum.LBS,
}


@dataclass(frozen=True)
class AppConfig:
    round_length_weeks: int = 8
    week_starts_on: int = 0
    timezone: str = "America/New_York"
    weight_unit: WeightUnitEnum = WeightUnitEnum.LBS

    @classmethod
    def from_row(cls, row: AppSettings) -> "AppConfig":
        return cls(
            round_length_weeks=row.round_length_weeks,
            week_starts_on=row.week_starts_on,
            timezone=row.timezone,
            weight_unit=row.weight_unit,
        )


def get_or_create_settings(db: Session) -> AppSettings:
    row = db.query(AppSettings).filter(AppSettings.id == SETTINGS_ID).first()
    if row:
        return row

    row = AppSettings(**DEFAULT_SETTINGS)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("⚙️ Created default app settings", extra={"color": True})
    return row


def load_app_config(db: Session) -> AppConfig:
    return AppConfig.from_row(get_or_create_settings(db))


def update_settings(db: Session, changes: dict) -> AppSettings:
    """Apply the provided fields to the settings row and commit"""
    row = get_or_create_settings(db)
    for field, value in changes.items():
        setattr(row, field, value)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    return row


def get_app_config(request: Request, db: Session = Depends(get_db)) -> AppConfig:
    """FastAPI dependency returning the config loaded at startup"""
    config = getattr(request.app.state, "app_config", None)
    if config is None:
        config = load_app_config(db)
        request.app.state.app_config = config
    return config
