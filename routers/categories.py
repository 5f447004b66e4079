from fastapi import APIRouter, Body, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from database import get_db
from functions.category_lifecycle import (
    create_category, update_category, delete_category, reorder_category
)
from models.category import Category
from schema.category import (
    CategoryCreate, CategoryUpdate, CategoryDelete, CategoryReorder, CategoryResponse
)

category_router = APIRouter(prefix="/categories", tags=["Categories"])


@category_router.get("", response_model=List[CategoryResponse])
def list_categories(
    tracker_type_id: Optional[int] = Query(None, alias="trackerTypeId"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db)
):
    """Categories in ring order, optionally for one tracker type"""
    query = db.query(Category)
    if tracker_type_id is not None:
        query = query.filter(Category.tracker_type_id == tracker_type_id)
    if not include_inactive:
        query = query.filter(Category.active)
    return query.order_by(
        Category.tracker_type_id.asc(),
        Category.sort_order.asc(),
        Category.id.asc()
    ).all()


@category_router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def add_category(data: CategoryCreate, db: Session = Depends(get_db)):
    return create_category(
        db,
        tracker_type_id=data.tracker_type_id,
        name=data.name,
        allow_days_off_per_week=data.allow_days_off_per_week,
        allow_treat=data.allow_treat,
        allow_sick=data.allow_sick,
        apply_to_existing=data.apply_to_existing,
    )


# Declared before /{category_id} so "reorder" is not parsed as an id
@category_router.patch("/reorder", response_model=CategoryResponse)
def move_category(data: CategoryReorder, db: Session = Depends(get_db)):
    return reorder_category(db, data.category_id, data.direction)


@category_router.patch("/{category_id}", response_model=CategoryResponse)
def edit_category(category_id: int, data: CategoryUpdate, db: Session = Depends(get_db)):
    if data.name is None and data.allow_days_off_per_week is None \
            and data.allow_treat is None and data.allow_sick is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nothing to update"
        )

    return update_category(
        db,
        category_id,
        name=data.name,
        allow_days_off_per_week=data.allow_days_off_per_week,
        allow_treat=data.allow_treat,
        allow_sick=data.allow_sick,
        apply_to_existing=data.apply_to_existing,
    )


@category_router.delete("/{category_id}")
def remove_category(
    category_id: int,
    data: Optional[CategoryDelete] = Body(None),
    remove_from_active_rounds: bool = Query(False, alias="removeFromActiveRounds"),
    db: Session = Depends(get_db)
):
    """Soft delete; rounds keep their snapshot unless removeFromActiveRounds is set"""
    remove = remove_from_active_rounds or (data.remove_from_active_rounds if data else False)
    delete_category(db, category_id, remove_from_active_rounds=remove)
    return {"ok": True}
