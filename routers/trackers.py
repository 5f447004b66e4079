from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from database import get_db
from functions.round_queries import latest_round
from models.person import Person
from models.round import Round
from models.tracker import Tracker
from models.tracker_type import TrackerType
from schema.tracker import TrackerCreate, TrackerResponse, TrackerListItem

import logging
logger = logging.getLogger("habit_wheel")

tracker_router = APIRouter(prefix="/trackers", tags=["Trackers"])


@tracker_router.get("", response_model=List[TrackerListItem])
def list_trackers(
    person_id: Optional[int] = Query(None, alias="personId"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db)
):
    """Trackers of a person with round counts"""
    if person_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="personId is required"
        )

    query = db.query(Tracker).filter(Tracker.person_id == person_id)
    if not include_inactive:
        query = query.filter(Tracker.active)
    trackers = query.order_by(Tracker.created_at.asc(), Tracker.name.asc(), Tracker.id.asc()).all()

    items = []
    for tracker in trackers:
        latest = latest_round(db, tracker.id)
        items.append(TrackerListItem(
            id=tracker.id,
            name=tracker.name,
            active=tracker.active,
            tracker_type_id=tracker.tracker_type_id,
            tracker_type=tracker.tracker_type,
            rounds_count=db.query(Round).filter(Round.tracker_id == tracker.id).count(),
            latest_round_created_at=latest.created_at if latest else None,
        ))
    return items


@tracker_router.post("", response_model=TrackerResponse, status_code=status.HTTP_201_CREATED)
def create_tracker(data: TrackerCreate, db: Session = Depends(get_db)):
    """Give a person another tracker, named after its type by default"""
    person = db.query(Person).filter(Person.id == data.person_id).first()
    if not person:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Person not found"
        )

    tracker_type = db.query(TrackerType).filter(TrackerType.id == data.tracker_type_id).first()
    if not tracker_type or not tracker_type.active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tracker type not found"
        )

    same_type_count = db.query(Tracker).filter(
        Tracker.person_id == data.person_id,
        Tracker.tracker_type_id == data.tracker_type_id
    ).count()
    default_name = tracker_type.name if same_type_count == 0 else f"{tracker_type.name} {same_type_count + 1}"

    tracker = Tracker(
        person_id=data.person_id,
        tracker_type_id=data.tracker_type_id,
        name=data.name or default_name
    )

    try:
        db.add(tracker)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(tracker)
    logger.info(f"📋 Created tracker {tracker.id} ({tracker.name}) for person {person.id}", extra={"color": True})
    return tracker


@tracker_router.delete("/{tracker_id}")
def delete_tracker(tracker_id: int, db: Session = Depends(get_db)):
    """Soft delete when the tracker has rounds, hard delete otherwise"""
    tracker = db.query(Tracker).filter(Tracker.id == tracker_id).first()
    if not tracker or not tracker.active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tracker not found"
        )

    active_count = db.query(Tracker).filter(
        Tracker.person_id == tracker.person_id,
        Tracker.active
    ).count()
    if active_count <= 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot remove the last active tracker for a person."
        )

    has_rounds = db.query(Round).filter(Round.tracker_id == tracker_id).count() > 0

    try:
        if has_rounds:
            tracker.deactivate()
        else:
            db.delete(tracker)
        db.commit()
    except Exception:
        db.rollback()
        raise

    action = "deactivated" if has_rounds else "deleted"
    logger.info(f"🗑️ Tracker {tracker_id} {action}", extra={"color": True})
    return {"ok": True}
