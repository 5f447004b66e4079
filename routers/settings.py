from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from functions.app_settings import AppConfig, get_or_create_settings, update_settings
from schema.settings import AppSettingsResponse, AppSettingsUpdate

import logging
logger = logging.getLogger("habit_wheel")

settings_router = APIRouter(prefix="/settings", tags=["Settings"])


@settings_router.get("", response_model=AppSettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    return get_or_create_settings(db)


@settings_router.patch("", response_model=AppSettingsResponse)
def patch_settings(data: AppSettingsUpdate, request: Request, db: Session = Depends(get_db)):
    """Update app-wide settings and refresh the in-process config"""
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="weightUnit must be LBS or KG"
        )

    row = update_settings(db, changes)
    request.app.state.app_config = AppConfig.from_row(row)
    logger.info(f"⚙️ Settings updated: {list(changes.keys())}", extra={"color": True})
    return row
