from fastapi import APIRouter, Body, Depends, HTTPException, Response, status, Query
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.category import Category
from models.round import Round
from models.tracker import Tracker
from models.tracker_type import TrackerType
from schema.tracker_type import (
    TrackerTypeCreate, TrackerTypeUpdate, TrackerTypeDelete,
    TrackerTypeResponse, TrackerTypeStatsResponse
)

import logging
logger = logging.getLogger("habit_wheel")

tracker_type_router = APIRouter(prefix="/tracker-types", tags=["Tracker Types"])


def _get_active_type_or_404(db: Session, tracker_type_id: int) -> TrackerType:
    tracker_type = db.query(TrackerType).filter(TrackerType.id == tracker_type_id).first()
    if not tracker_type or not tracker_type.active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tracker type not found"
        )
    return tracker_type


@tracker_type_router.get("", response_model=None)
def list_tracker_types(
    include_inactive: bool = Query(False, alias="includeInactive"),
    include_stats: bool = Query(False, alias="includeStats"),
    db: Session = Depends(get_db)
):
    """List tracker types, optionally with category/tracker/round counts"""
    query = db.query(TrackerType)
    if not include_inactive:
        query = query.filter(TrackerType.active)
    tracker_types = query.order_by(TrackerType.created_at.asc(), TrackerType.id.asc()).all()

    if not include_stats:
        return [TrackerTypeResponse.model_validate(tt) for tt in tracker_types]

    stats = []
    for tt in tracker_types:
        rounds_count = db.query(func.count(Round.id)).join(
            Tracker, Round.tracker_id == Tracker.id
        ).filter(Tracker.tracker_type_id == tt.id).scalar()

        stats.append(TrackerTypeStatsResponse(
            id=tt.id,
            name=tt.name,
            active=tt.active,
            created_at=tt.created_at,
            categories_count=db.query(Category).filter(Category.tracker_type_id == tt.id).count(),
            trackers_count=db.query(Tracker).filter(Tracker.tracker_type_id == tt.id).count(),
            rounds_count=rounds_count or 0,
        ))
    return stats


@tracker_type_router.post("", response_model=TrackerTypeResponse, status_code=status.HTTP_201_CREATED)
def create_tracker_type(data: TrackerTypeCreate, response: Response, db: Session = Depends(get_db)):
    """Create a tracker type, or reactivate an inactive one with the same name"""
    existing = db.query(TrackerType).filter(TrackerType.name == data.name).first()

    if existing and existing.active:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Tracker type already exists."
        )

    try:
        if existing:
            existing.reactivate()
            db.commit()
            db.refresh(existing)
            response.status_code = status.HTTP_200_OK
            logger.info(f"♻️ Reactivated tracker type {existing.id} ({existing.name})", extra={"color": True})
            return existing

        tracker_type = TrackerType(name=data.name)
        db.add(tracker_type)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(tracker_type)
    logger.info(f"🆕 Created tracker type {tracker_type.id} ({tracker_type.name})", extra={"color": True})
    return tracker_type


@tracker_type_router.patch("/{tracker_type_id}", response_model=TrackerTypeResponse)
def rename_tracker_type(tracker_type_id: int, data: TrackerTypeUpdate, db: Session = Depends(get_db)):
    tracker_type = _get_active_type_or_404(db, tracker_type_id)

    duplicate = db.query(TrackerType).filter(
        TrackerType.name == data.name,
        TrackerType.id != tracker_type_id
    ).first()
    if duplicate:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Tracker type name already exists."
        )

    tracker_type.name = data.name
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(tracker_type)
    return tracker_type


@tracker_type_router.delete("/{tracker_type_id}")
def deactivate_tracker_type(
    tracker_type_id: int,
    data: Optional[TrackerTypeDelete] = Body(None),
    db: Session = Depends(get_db)
):
    """Deactivate a tracker type and its categories (and trackers if asked)"""
    tracker_type = _get_active_type_or_404(db, tracker_type_id)
    deactivate_trackers = data.deactivate_trackers if data else False

    try:
        tracker_type.deactivate()
        for category in db.query(Category).filter(Category.tracker_type_id == tracker_type_id).all():
            category.deactivate()

        if deactivate_trackers:
            for tracker in db.query(Tracker).filter(Tracker.tracker_type_id == tracker_type_id).all():
                tracker.deactivate()

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"🚫 Deactivated tracker type {tracker_type_id} (trackers deactivated: {deactivate_trackers})",
        extra={"color": True}
    )
    return {"ok": True}
