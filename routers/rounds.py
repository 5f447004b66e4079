from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from database import get_db
from functions.app_settings import AppConfig, get_app_config
from functions.round_lifecycle import start_round, edit_round, delete_round
from functions.round_queries import is_active_round
from functions.round_views import round_payload
from models.round import Round, RoundCategory
from schema.round import RoundStart, RoundUpdate, RoundCreatedResponse, RoundDetailResponse
from utils.timezone_utils import local_today

round_router = APIRouter(prefix="/rounds", tags=["Rounds"])


def _round_detail(db: Session, round_id: int, config: AppConfig) -> dict:
    round_ = db.query(Round).options(
        selectinload(Round.person),
        selectinload(Round.round_categories).selectinload(RoundCategory.category),
        selectinload(Round.entries),
        selectinload(Round.weight_entries),
    ).filter(Round.id == round_id).first()

    if not round_:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Round not found"
        )

    payload = round_payload(round_, is_active_round(db, round_), local_today(config.timezone))
    payload["person"] = round_.person
    return payload


@round_router.post("/start", response_model=RoundCreatedResponse, status_code=status.HTTP_201_CREATED)
def start_new_round(
    data: RoundStart,
    config: AppConfig = Depends(get_app_config),
    db: Session = Depends(get_db)
):
    """Start a round and snapshot the tracker type's active categories"""
    created = start_round(
        db,
        person_id=data.person_id,
        tracker_id=data.tracker_id,
        start_date=data.start_date or local_today(config.timezone),
        length_weeks=data.length_weeks or config.round_length_weeks,
        goal_weight=data.goal_weight,
    )
    return created


@round_router.get("/{round_id}", response_model=RoundDetailResponse)
def get_round(
    round_id: int,
    config: AppConfig = Depends(get_app_config),
    db: Session = Depends(get_db)
):
    return _round_detail(db, round_id, config)


@round_router.patch("/{round_id}", response_model=RoundDetailResponse)
def update_round(
    round_id: int,
    data: RoundUpdate,
    config: AppConfig = Depends(get_app_config),
    db: Session = Depends(get_db)
):
    """Move the start date (entries follow) and/or change the goal weight"""
    provided = data.model_fields_set
    if "start_date" not in provided and "goal_weight" not in provided:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate or goalWeight required"
        )

    changes = {}
    if "start_date" in provided:
        if data.start_date is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="startDate cannot be empty"
            )
        changes["start_date"] = data.start_date
    if "goal_weight" in provided:
        changes["goal_weight"] = data.goal_weight

    edit_round(db, round_id, **changes)
    return _round_detail(db, round_id, config)


@round_router.delete("/{round_id}")
def remove_round(round_id: int, db: Session = Depends(get_db)):
    """Permanently delete a round with its entries, snapshots and weights"""
    delete_round(db, round_id)
    return {"ok": True}
