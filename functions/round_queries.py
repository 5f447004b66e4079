# functions/round_queries.py
from typing import List, Optional

from sqlalchemy.orm import Session

from models.round import Round
from models.tracker import Tracker


def latest_round(db: Session, tracker_id: int) -> Optional[Round]:
    """The active round of a tracker: the most recently created one"""
    return db.query(Round).filter(
        Round.tracker_id == tracker_id
    ).order_by(Round.created_at.desc(), Round.id.desc()).first()


def is_active_round(db: Session, round_: Round) -> bool:
    latest = latest_round(db, round_.tracker_id)
    return latest is not None and latest.id == round_.id


def latest_rounds_for_tracker_type(db: Session, tracker_type_id: int) -> List[Round]:
    """Most recent round of every tracker built from this tracker type"""
    trackers = db.query(Tracker).filter(Tracker.tracker_type_id == tracker_type_id).all()
    rounds = []
    for tracker in trackers:
        latest = latest_round(db, tracker.id)
        if latest is not None:
            rounds.append(latest)
    return rounds
