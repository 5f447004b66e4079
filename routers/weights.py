from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from models.round import Round
from models.weight_entry import WeightEntry
from schema.weight import WeightUpsert, WeightEntryResponse
from utils.timezone_utils import is_within_round, week_index_for

import logging
logger = logging.getLogger("habit_wheel")

weight_router = APIRouter(prefix="/weights", tags=["Weights"])


@weight_router.post("", response_model=WeightEntryResponse)
def upsert_weight(data: WeightUpsert, db: Session = Depends(get_db)):
    """Record the weight for the round week containing ``date`` (one per week)"""
    round_ = db.query(Round).filter(Round.id == data.round_id).first()
    if not round_:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Round not found"
        )

    if not is_within_round(data.date, round_.start_date, round_.length_weeks):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date is outside this round"
        )

    week_index = week_index_for(data.date, round_.start_date)
    weight_entry = db.query(WeightEntry).filter(
        WeightEntry.round_id == round_.id,
        WeightEntry.week_index == week_index
    ).first()

    try:
        if weight_entry:
            weight_entry.weight = data.weight
            weight_entry.date = data.date
        else:
            weight_entry = WeightEntry(
                round_id=round_.id,
                week_index=week_index,
                weight=data.weight,
                date=data.date
            )
            db.add(weight_entry)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(weight_entry)
    logger.info(
        f"⚖️ Round {round_.id} week {week_index + 1}: {data.weight}",
        extra={"color": True}
    )
    return weight_entry
