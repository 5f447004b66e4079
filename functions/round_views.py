# functions/round_views.py
"""Build round payloads (snapshot categories, entries, weights, completion)"""
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from functions.completion import calculate_completion, completed_weeks
from functions.round_queries import latest_round
from models.round import Round
from schema.entry import EntryResponse
from schema.round import (
    CategoryCompletionResponse,
    CompletionResponse,
    RoundCategoryResponse,
    TrackerSummary,
)
from schema.weight import WeightEntryResponse


def _as_percent(fraction: Optional[float]) -> Optional[float]:
    if fraction is None:
        return None
    return round(fraction * 100, 2)


def snapshot_categories(round_: Round) -> List[RoundCategoryResponse]:
    """Frozen names/order from the round plus the live category allowances"""
    rows = []
    for rc in sorted(round_.round_categories, key=lambda r: (r.sort_order, r.id)):
        category = rc.category
        rows.append(RoundCategoryResponse(
            category_id=rc.category_id,
            display_name=rc.display_name,
            sort_order=rc.sort_order,
            allow_days_off_per_week=category.allow_days_off_per_week if category else 0,
            allow_treat=category.allow_treat if category else False,
            allow_sick=category.allow_sick if category else False,
        ))
    return rows


def round_completion(
    round_: Round,
    categories: List[RoundCategoryResponse],
    is_active: bool,
    today: date,
) -> CompletionResponse:
    window = completed_weeks(round_.start_date, round_.length_weeks, today, is_active)
    result = calculate_completion(
        round_.start_date,
        round_.length_weeks,
        categories,
        round_.entries,
        window_weeks=window,
    )
    return CompletionResponse(
        completed_weeks=result.completed_weeks,
        total_percent=_as_percent(result.total),
        weekly_total_percents=[_as_percent(p) for p in result.weekly_total],
        categories=[
            CategoryCompletionResponse(
                category_id=c.category_id,
                percent=_as_percent(c.percent),
                weekly_percents=[_as_percent(p) for p in c.weekly],
            )
            for c in result.categories
        ],
    )


def round_payload(round_: Round, is_active: bool, today: date) -> Dict:
    categories = snapshot_categories(round_)
    entries = sorted(round_.entries, key=lambda e: (e.date, e.category_id))
    return {
        "id": round_.id,
        "person_id": round_.person_id,
        "tracker_id": round_.tracker_id,
        "start_date": round_.start_date,
        "length_weeks": round_.length_weeks,
        "goal_weight": round_.goal_weight,
        "created_at": round_.created_at,
        "active": is_active,
        "round_categories": categories,
        "entries": [EntryResponse.model_validate(e) for e in entries],
        "weight_entries": [WeightEntryResponse.model_validate(w) for w in round_.weight_entries],
        "completion": round_completion(round_, categories, is_active, today),
    }


def tracker_summary(round_: Round) -> TrackerSummary:
    tracker = round_.tracker
    return TrackerSummary(
        id=tracker.id,
        name=tracker.name,
        tracker_type_id=tracker.tracker_type_id,
        tracker_type_name=tracker.tracker_type.name,
    )


def history_payloads(db: Session, rounds: List[Round], today: date) -> List[Dict]:
    """
    Rounds in creation order, each numbered within its tracker type.

    Only the latest round of each tracker is active.
    """
    active_ids = set()
    for tracker_id in {r.tracker_id for r in rounds}:
        latest = latest_round(db, tracker_id)
        if latest is not None:
            active_ids.add(latest.id)

    type_counts: Dict[int, int] = {}
    items = []
    for round_ in rounds:
        type_id = round_.tracker.tracker_type_id
        type_counts[type_id] = type_counts.get(type_id, 0) + 1

        payload = round_payload(round_, round_.id in active_ids, today)
        payload["round_number"] = type_counts[type_id]
        payload["tracker"] = tracker_summary(round_)
        items.append(payload)
    return items
