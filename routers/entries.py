from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from functions.entries import apply_entry_status
from schema.entry import EntryUpsert, EntryResponse

entry_router = APIRouter(prefix="/entries", tags=["Entries"])


@entry_router.post("", response_model=EntryResponse)
def upsert_entry(data: EntryUpsert, db: Session = Depends(get_db)):
    """Cycle a cell to its next status, or set an explicit one (mode="set")"""
    return apply_entry_status(
        db,
        round_id=data.round_id,
        category_id=data.category_id,
        day=data.date,
        mode=data.mode,
        status=data.status,
    )
