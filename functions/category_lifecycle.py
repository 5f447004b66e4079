# functions/category_lifecycle.py
"""
Category create / edit / delete / reorder for a tracker type.

Rounds keep their own frozen RoundCategory rows. Only the explicit flags
(applyToExisting, removeFromActiveRounds) touch them, and only on each
tracker's most recent round.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from functions.round_queries import latest_rounds_for_tracker_type
from models.category import Category, MAX_ACTIVE_CATEGORIES, MAX_DAYS_OFF_PER_WEEK
from models.entry import Entry
from models.round import RoundCategory
from models.tracker_type import TrackerType
from utils.errors import CategoryCapacityError, Conflict, NotFound, ValidationFailed

logger = logging.getLogger("habit_wheel")


def _check_days_off(value: Optional[int]):
    if value is not None and not 0 <= value <= MAX_DAYS_OFF_PER_WEEK:
        raise ValidationFailed(f"allowDaysOffPerWeek must be between 0 and {MAX_DAYS_OFF_PER_WEEK}")


def _active_count(db: Session, tracker_type_id: int) -> int:
    return db.query(Category).filter(
        Category.tracker_type_id == tracker_type_id,
        Category.active
    ).count()


def _next_sort_order(db: Session, tracker_type_id: int) -> int:
    current_max = db.query(func.max(Category.sort_order)).filter(
        Category.tracker_type_id == tracker_type_id,
        Category.active
    ).scalar()
    return (current_max or 0) + 1


def _add_to_latest_rounds(db: Session, category: Category) -> int:
    added = 0
    for round_ in latest_rounds_for_tracker_type(db, category.tracker_type_id):
        if any(rc.category_id == category.id for rc in round_.round_categories):
            continue
        round_.round_categories.append(
            RoundCategory(category_id=category.id, sort_order=category.sort_order, display_name=category.name)
        )
        added += 1
    return added


def create_category(
    db: Session,
    tracker_type_id: int,
    name: str,
    allow_days_off_per_week: int = 0,
    allow_treat: bool = False,
    allow_sick: bool = False,
    apply_to_existing: bool = False,
) -> Category:
    """
    Create a category, or reactivate an inactive one with the same name.

    Raises:
        NotFound: tracker type missing or inactive
        Conflict: an active category already has this name
        CategoryCapacityError: the tracker type already has 5 active categories
    """
    name = (name or "").strip()
    if not name:
        raise ValidationFailed("name required")
    _check_days_off(allow_days_off_per_week)

    tracker_type = db.query(TrackerType).filter(TrackerType.id == tracker_type_id).first()
    if not tracker_type or not tracker_type.active:
        raise NotFound("Tracker type not found")

    existing = db.query(Category).filter(
        Category.tracker_type_id == tracker_type_id,
        Category.name == name
    ).first()

    if existing and existing.active:
        raise Conflict("Category already exists.")

    if _active_count(db, tracker_type_id) >= MAX_ACTIVE_CATEGORIES:
        raise CategoryCapacityError(MAX_ACTIVE_CATEGORIES)

    sort_order = _next_sort_order(db, tracker_type_id)

    try:
        if existing:
            category = existing
            category.reactivate()
            category.sort_order = sort_order
            action = "Reactivated"
        else:
            category = Category(tracker_type_id=tracker_type_id, name=name, sort_order=sort_order)
            db.add(category)
            action = "Created"

        category.allow_days_off_per_week = allow_days_off_per_week
        category.allow_treat = allow_treat
        category.allow_sick = allow_sick
        db.flush()

        if apply_to_existing:
            _add_to_latest_rounds(db, category)

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(category)

    logger.info(f"🏷️ {action} category '{name}' for tracker type {tracker_type_id}", extra={"color": True})
    return category


def update_category(
    db: Session,
    category_id: int,
    name: Optional[str] = None,
    allow_days_off_per_week: Optional[int] = None,
    allow_treat: Optional[bool] = None,
    allow_sick: Optional[bool] = None,
    apply_to_existing: bool = False,
) -> Category:
    """Edit a category; with apply_to_existing the new name reaches the latest rounds"""
    _check_days_off(allow_days_off_per_week)

    category = db.query(Category).filter(Category.id == category_id).first()
    if not category or not category.active:
        raise NotFound("Category not found")

    if name is not None:
        name = name.strip()
        if not name:
            raise ValidationFailed("name required")
        duplicate = db.query(Category).filter(
            Category.tracker_type_id == category.tracker_type_id,
            Category.name == name,
            Category.id != category.id
        ).first()
        if duplicate:
            raise Conflict("Category name already exists.")

    try:
        if name is not None:
            category.name = name
        if allow_days_off_per_week is not None:
            category.allow_days_off_per_week = allow_days_off_per_week
        if allow_treat is not None:
            category.allow_treat = allow_treat
        if allow_sick is not None:
            category.allow_sick = allow_sick

        if apply_to_existing:
            round_ids = [r.id for r in latest_rounds_for_tracker_type(db, category.tracker_type_id)]
            if round_ids:
                db.query(RoundCategory).filter(
                    RoundCategory.round_id.in_(round_ids),
                    RoundCategory.category_id == category.id
                ).update({RoundCategory.display_name: category.name}, synchronize_session="fetch")

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int, remove_from_active_rounds: bool = False) -> Category:
    """Soft delete; optionally strip the category out of each tracker's latest round"""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category or not category.active:
        raise NotFound("Category not found")

    try:
        category.deactivate()

        if remove_from_active_rounds:
            round_ids = [r.id for r in latest_rounds_for_tracker_type(db, category.tracker_type_id)]
            if round_ids:
                removed = db.query(Entry).filter(
                    Entry.round_id.in_(round_ids),
                    Entry.category_id == category.id
                ).delete(synchronize_session="fetch")
                db.query(RoundCategory).filter(
                    RoundCategory.round_id.in_(round_ids),
                    RoundCategory.category_id == category.id
                ).delete(synchronize_session="fetch")
                logger.info(
                    f"🧹 Removed category {category_id} from {len(round_ids)} rounds ({removed} entries)",
                    extra={"color": True}
                )

        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(category)
    return category


def reorder_category(db: Session, category_id: int, direction: str) -> Category:
    """Swap sort order with the adjacent active category; no-op at either end"""
    if direction not in ("up", "down"):
        raise ValidationFailed("categoryId and direction required")

    current = db.query(Category).filter(Category.id == category_id).first()
    if not current or not current.active:
        raise NotFound("Category not found")

    query = db.query(Category).filter(
        Category.tracker_type_id == current.tracker_type_id,
        Category.active,
        Category.id != current.id
    )
    if direction == "up":
        neighbor = query.filter(Category.sort_order < current.sort_order).order_by(Category.sort_order.desc()).first()
    else:
        neighbor = query.filter(Category.sort_order > current.sort_order).order_by(Category.sort_order.asc()).first()

    if not neighbor:
        return current

    try:
        current.sort_order, neighbor.sort_order = neighbor.sort_order, current.sort_order
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(current)
    return current
