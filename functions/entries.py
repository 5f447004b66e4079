# functions/entries.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from functions.status_cycle import resolve_status
from models.category import Category
from models.entry import Entry, EntryStatusEnum
from models.round import Round, RoundCategory
from utils.errors import NotFound, ValidationFailed
from utils.timezone_utils import is_within_round

logger = logging.getLogger("habit_wheel")


def apply_entry_status(
    db: Session,
    round_id: int,
    category_id: int,
    day: date,
    mode: str = "cycle",
    status: Optional[EntryStatusEnum] = None,
) -> Entry:
    """
    Cycle or set the status of one (round, category, day) cell and upsert it.

    The category's current allowTreat/allowSick decide which statuses are
    reachable. An invalid "set" raises InvalidStatus before anything is written.
    """
    round_ = db.query(Round).filter(Round.id == round_id).first()
    if not round_:
        raise NotFound("Round not found")

    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFound("Category not found")

    in_round = db.query(RoundCategory).filter(
        RoundCategory.round_id == round_id,
        RoundCategory.category_id == category_id
    ).first()
    if not in_round:
        raise NotFound("Category is not part of this round")

    if not is_within_round(day, round_.start_date, round_.length_weeks):
        raise ValidationFailed("Date is outside this round")

    entry = db.query(Entry).filter(
        Entry.round_id == round_id,
        Entry.category_id == category_id,
        Entry.date == day
    ).first()

    new_status = resolve_status(
        mode,
        entry.status if entry else None,
        status,
        category.allow_treat,
        category.allow_sick,
    )

    try:
        if entry:
            entry.status = new_status
        else:
            entry = Entry(round_id=round_id, category_id=category_id, date=day, status=new_status)
            db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(entry)
    return entry
