from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, selectinload
from typing import Optional, List

from database import get_db
from functions.app_settings import AppConfig, get_app_config
from functions.round_views import history_payloads, round_payload
from models.person import Person
from models.round import Round, RoundCategory
from models.tracker import Tracker
from models.tracker_type import TrackerType
from schema.person import PersonCreate, PersonUpdate, PersonResponse
from schema.round import RoundHistoryItem, LatestRoundResponse
from utils.timezone_utils import local_today

import logging
logger = logging.getLogger("habit_wheel")

people_router = APIRouter(prefix="/people", tags=["People"])

DEFAULT_TRACKER_TYPE_NAME = "Default"


def _get_person_or_404(db: Session, person_id: int) -> Person:
    person = db.query(Person).filter(Person.id == person_id).first()
    if not person:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Person not found"
        )
    return person


def _check_tracker_owner(db: Session, person_id: int, tracker_id: Optional[int]):
    if tracker_id is None:
        return
    tracker = db.query(Tracker).filter(Tracker.id == tracker_id).first()
    if not tracker or tracker.person_id != person_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tracker not found for person"
        )


def _round_query(db: Session):
    return db.query(Round).options(
        selectinload(Round.round_categories).selectinload(RoundCategory.category),
        selectinload(Round.entries),
        selectinload(Round.weight_entries),
        selectinload(Round.tracker).selectinload(Tracker.tracker_type),
    )


@people_router.get("", response_model=List[PersonResponse])
def list_people(db: Session = Depends(get_db)):
    return db.query(Person).order_by(Person.created_at.asc(), Person.id.asc()).all()


@people_router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
def create_person(data: PersonCreate, db: Session = Depends(get_db)):
    """Create a person with a tracker of the default tracker type"""
    try:
        tracker_type = db.query(TrackerType).filter(
            TrackerType.name == DEFAULT_TRACKER_TYPE_NAME
        ).first()
        if tracker_type is None:
            tracker_type = TrackerType(name=DEFAULT_TRACKER_TYPE_NAME)
            db.add(tracker_type)
        else:
            tracker_type.reactivate()
        db.flush()

        person = Person(name=data.name)
        db.add(person)
        db.flush()

        db.add(Tracker(
            person_id=person.id,
            tracker_type_id=tracker_type.id,
            name=DEFAULT_TRACKER_TYPE_NAME
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(person)
    logger.info(f"👤 Created person {person.id} ({person.name})", extra={"color": True})
    return person


@people_router.get("/{person_id}", response_model=PersonResponse)
def get_person(person_id: int, db: Session = Depends(get_db)):
    return _get_person_or_404(db, person_id)


@people_router.patch("/{person_id}", response_model=PersonResponse)
def rename_person(person_id: int, data: PersonUpdate, db: Session = Depends(get_db)):
    person = _get_person_or_404(db, person_id)
    person.name = data.name

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(person)
    return person


@people_router.delete("/{person_id}")
def delete_person(person_id: int, db: Session = Depends(get_db)):
    """Delete a person with all trackers, rounds and entries"""
    person = _get_person_or_404(db, person_id)

    try:
        db.delete(person)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"🗑️ Deleted person {person_id}", extra={"color": True})
    return {"ok": True}


@people_router.get("/{person_id}/rounds", response_model=List[RoundHistoryItem])
def get_round_history(
    person_id: int,
    tracker_id: Optional[int] = Query(None, alias="trackerId", description="Only rounds of this tracker"),
    config: AppConfig = Depends(get_app_config),
    db: Session = Depends(get_db)
):
    """Round history; roundNumber counts rounds per tracker type"""
    _get_person_or_404(db, person_id)
    _check_tracker_owner(db, person_id, tracker_id)

    rounds = _round_query(db).filter(
        Round.person_id == person_id
    ).order_by(Round.created_at.asc(), Round.id.asc()).all()

    items = history_payloads(db, rounds, local_today(config.timezone))
    if tracker_id is not None:
        items = [item for item in items if item["tracker_id"] == tracker_id]
    return items


@people_router.get("/{person_id}/latest-round", response_model=LatestRoundResponse)
def get_latest_round(
    person_id: int,
    tracker_id: Optional[int] = Query(None, alias="trackerId"),
    config: AppConfig = Depends(get_app_config),
    db: Session = Depends(get_db)
):
    """The active round (most recently created) and how many rounds exist in scope"""
    _get_person_or_404(db, person_id)
    _check_tracker_owner(db, person_id, tracker_id)

    query = _round_query(db).filter(Round.person_id == person_id)
    if tracker_id is not None:
        query = query.filter(Round.tracker_id == tracker_id)

    round_count = query.count()
    if round_count == 0:
        return {"round": None, "round_number": 0}

    latest = query.order_by(Round.created_at.desc(), Round.id.desc()).first()
    return {
        "round": round_payload(latest, True, local_today(config.timezone)),
        "round_number": round_count,
    }
