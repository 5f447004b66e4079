# functions/round_lifecycle.py
"""
Round lifecycle: start, shift start date, edit goal weight, delete.

Validation happens before anything is written; each operation commits once
and rolls back everything on failure.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from models.category import Category
from models.entry import Entry
from models.person import Person
from models.round import Round, RoundCategory, ALLOWED_ROUND_LENGTHS
from models.tracker import Tracker
from utils.errors import NotFound, ValidationFailed
from utils.timezone_utils import days_between, shift_date

logger = logging.getLogger("habit_wheel")

_UNSET = object()


def start_round(
    db: Session,
    person_id: int,
    tracker_id: int,
    start_date: date,
    length_weeks: int,
    goal_weight: Optional[float] = None,
) -> Round:
    """Create a round and freeze the tracker type's active categories into it"""
    if length_weeks not in ALLOWED_ROUND_LENGTHS:
        raise ValidationFailed("lengthWeeks must be 4 or 8")
    if goal_weight is not None and goal_weight <= 0:
        raise ValidationFailed("goalWeight must be > 0")

    person = db.query(Person).filter(Person.id == person_id).first()
    if not person:
        raise NotFound("Person not found")

    tracker = db.query(Tracker).filter(
        Tracker.id == tracker_id,
        Tracker.person_id == person_id,
        Tracker.active
    ).first()
    if not tracker:
        raise NotFound("Tracker not found for person")

    categories = db.query(Category).filter(
        Category.tracker_type_id == tracker.tracker_type_id,
        Category.active
    ).order_by(Category.sort_order.asc(), Category.id.asc()).all()

    if not categories:
        raise ValidationFailed("No active categories. Add/enable categories first.")

    new_round = Round(
        person_id=person_id,
        tracker_id=tracker_id,
        start_date=start_date,
        length_weeks=length_weeks,
        goal_weight=goal_weight,
    )
    new_round.round_categories = [
        RoundCategory(category_id=c.id, sort_order=c.sort_order, display_name=c.name)
        for c in categories
    ]

    try:
        db.add(new_round)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_round)

    logger.info(
        f"🟢 Started round {new_round.id} for person {person_id} / tracker {tracker_id} "
        f"({length_weeks} weeks from {start_date.isoformat()}, {len(categories)} categories)",
        extra={"color": True}
    )
    return new_round


def shift_round_entries(db: Session, round_: Round, delta_days: int) -> int:
    """
    Move every entry and weight sample of the round by ``delta_days``.

    Rows are updated one at a time in an order that never lands on a date
    still held by another row of the same category: newest first when moving
    forward, oldest first when moving backward.
    """
    if delta_days == 0:
        return 0

    order = Entry.date.desc() if delta_days > 0 else Entry.date.asc()
    entries = db.query(Entry).filter(Entry.round_id == round_.id).order_by(order).all()

    for entry in entries:
        entry.date = shift_date(entry.date, delta_days)
        db.flush()

    # week_index is relative to the start, only the captured day moves
    for weight_entry in round_.weight_entries:
        weight_entry.date = shift_date(weight_entry.date, delta_days)

    return len(entries)


def edit_round(
    db: Session,
    round_id: int,
    start_date: Optional[date] = None,
    goal_weight=_UNSET,
) -> Round:
    """Shift the start date and/or set (or clear, with None) the goal weight"""
    round_ = db.query(Round).filter(Round.id == round_id).first()
    if not round_:
        raise NotFound("Round not found")
    if goal_weight is not _UNSET and goal_weight is not None and goal_weight <= 0:
        raise ValidationFailed("goalWeight must be > 0")

    try:
        if start_date is not None and start_date != round_.start_date:
            delta = days_between(round_.start_date, start_date)
            moved = shift_round_entries(db, round_, delta)
            round_.start_date = start_date
            logger.info(
                f"↔️ Round {round_id} start moved by {delta:+d} days ({moved} entries shifted)",
                extra={"color": True}
            )

        if goal_weight is not _UNSET:
            round_.goal_weight = goal_weight

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(round_)
    return round_


def delete_round(db: Session, round_id: int) -> None:
    """Hard delete; entries, snapshots and weights go with the round"""
    round_ = db.query(Round).filter(Round.id == round_id).first()
    if not round_:
        raise NotFound("Round not found")

    try:
        db.delete(round_)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"🗑️ Deleted round {round_id}", extra={"color": True})
