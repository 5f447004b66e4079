# functions/completion.py
"""
Completion percentages for a round.

Pure functions, no database access. The same calculation serves the live
wheel of an active round and the read-only history of finished rounds; only
the number of weeks in the window differs.

All percentages are fractions in [0, 1]. A window with no weeks yields None
("not measurable yet"), which is different from 0.0 ("nothing achieved").
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.entry import EntryStatusEnum

DAYS_PER_WEEK = 7

STATUS_SCORES = {
    EntryStatusEnum.DONE: 1.0,
    EntryStatusEnum.HALF: 0.5,
}


@dataclass(frozen=True)
class CategoryRule:
    category_id: int
    allow_days_off_per_week: int = 0


@dataclass(frozen=True)
class DayStatus:
    category_id: int
    date: date
    status: EntryStatusEnum


@dataclass
class CategoryCompletion:
    category_id: int
    weekly: List[float] = field(default_factory=list)
    percent: Optional[float] = None


@dataclass
class RoundCompletion:
    completed_weeks: int
    weekly_total: List[float] = field(default_factory=list)
    total: Optional[float] = None
    categories: List[CategoryCompletion] = field(default_factory=list)


def status_score(status) -> float:
    if isinstance(status, str):
        try:
            status = EntryStatusEnum(status.upper())
        except ValueError:
            return 0.0
    return STATUS_SCORES.get(status, 0.0)


def required_days(allow_days_off_per_week: int) -> int:
    return max(0, DAYS_PER_WEEK - (allow_days_off_per_week or 0))


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def completed_weeks(
    start_date: date,
    length_weeks: int,
    today: date,
    is_active: bool = True,
) -> int:
    """
    Weeks that count toward the percentages.

    Historical rounds always use the full length. Active rounds count only
    fully elapsed weeks, clamped to [0, length_weeks].
    """
    if not is_active:
        return length_weeks
    elapsed = (today - start_date).days
    return max(0, min(length_weeks, elapsed // DAYS_PER_WEEK))


def index_statuses(entries: Iterable) -> Dict[Tuple[int, date], EntryStatusEnum]:
    """Map (category_id, date) -> status for quick lookups"""
    return {(e.category_id, e.date): e.status for e in entries}


def week_score(
    statuses: Dict[Tuple[int, date], EntryStatusEnum],
    category_id: int,
    start_date: date,
    week_index: int,
) -> float:
    first_day = start_date + timedelta(days=week_index * DAYS_PER_WEEK)
    return sum(
        status_score(statuses.get((category_id, first_day + timedelta(days=offset)), EntryStatusEnum.EMPTY))
        for offset in range(DAYS_PER_WEEK)
    )


def weekly_category_percent(score: float, allow_days_off_per_week: int) -> float:
    """min(score, required) / required, with required == 0 meaning 100%"""
    required = required_days(allow_days_off_per_week)
    if required <= 0:
        return 1.0
    return _clamp(min(score, required) / required)


def calculate_completion(
    start_date: date,
    length_weeks: int,
    categories: Sequence,
    entries: Iterable,
    window_weeks: Optional[int] = None,
) -> RoundCompletion:
    """
    Per-category and total completion for the first ``window_weeks`` weeks.

    Args:
        start_date: First day of the round
        length_weeks: Round length; also the default window
        categories: Objects with ``category_id`` and ``allow_days_off_per_week``
        entries: Objects with ``category_id``, ``date`` and ``status``
        window_weeks: Number of weeks to include (see completed_weeks)

    Returns:
        RoundCompletion with weekly series and window averages

    Example:
        One category with no days off, week 1 has DONE + HALF:
        weekly == [1.5 / 7] == [0.214...]
    """
    if window_weeks is None:
        window_weeks = length_weeks
    window_weeks = max(0, min(length_weeks, window_weeks))

    statuses = index_statuses(entries)
    result = RoundCompletion(completed_weeks=window_weeks)

    earned_by_week = [0.0] * window_weeks
    required_by_week = [0] * window_weeks

    for cat in categories:
        allow_off = getattr(cat, "allow_days_off_per_week", 0) or 0
        required = required_days(allow_off)
        completion = CategoryCompletion(category_id=cat.category_id)

        for week in range(window_weeks):
            score = week_score(statuses, cat.category_id, start_date, week)
            completion.weekly.append(weekly_category_percent(score, allow_off))
            earned_by_week[week] += min(score, required)
            required_by_week[week] += required

        completion.percent = _mean(completion.weekly)
        result.categories.append(completion)

    if categories:
        for week in range(window_weeks):
            if required_by_week[week] <= 0:
                result.weekly_total.append(1.0)
            else:
                result.weekly_total.append(_clamp(earned_by_week[week] / required_by_week[week]))

    result.total = _mean(result.weekly_total)
    return result
