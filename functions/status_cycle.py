# functions/status_cycle.py
"""
Entry status cycle.

Every category cycles through EMPTY -> HALF -> DONE -> OFF and back to EMPTY.
Categories that allow treats append TREAT after OFF, and categories that
allow sick days append SICK after that.
"""
import logging
from typing import List, Optional

from models.entry import EntryStatusEnum
from utils.errors import InvalidStatus

logger = logging.getLogger("habit_wheel")

BASE_CYCLE = (
    EntryStatusEnum.EMPTY,
    EntryStatusEnum.HALF,
    EntryStatusEnum.DONE,
    EntryStatusEnum.OFF,
)


def effective_cycle(allow_treat: bool, allow_sick: bool) -> List[EntryStatusEnum]:
    """Statuses reachable for a category, in click order"""
    cycle = list(BASE_CYCLE)
    if allow_treat:
        cycle.append(EntryStatusEnum.TREAT)
    if allow_sick:
        cycle.append(EntryStatusEnum.SICK)
    return cycle


def next_status(current: Optional[EntryStatusEnum], cycle: List[EntryStatusEnum]) -> EntryStatusEnum:
    """
    Status after one click.

    A missing entry counts as EMPTY. A stored status that is no longer part of
    the cycle (the category stopped allowing it) resets to the start of the cycle.
    """
    if current is None:
        current = EntryStatusEnum.EMPTY

    if current not in cycle:
        logger.warning(f"⚠️ Status {current.value} is not in cycle {[s.value for s in cycle]}, resetting")
        return cycle[0]

    idx = cycle.index(current)
    return cycle[(idx + 1) % len(cycle)]


def validate_status(requested: EntryStatusEnum, cycle: List[EntryStatusEnum]) -> EntryStatusEnum:
    if requested not in cycle:
        raise InvalidStatus(f"Invalid status {requested.value} for this category")
    return requested


def resolve_status(
    mode: str,
    current: Optional[EntryStatusEnum],
    requested: Optional[EntryStatusEnum],
    allow_treat: bool,
    allow_sick: bool,
) -> EntryStatusEnum:
    """Apply a "cycle" or "set" operation and return the resulting status"""
    cycle = effective_cycle(allow_treat, allow_sick)

    if mode == "set":
        if requested is None:
            raise InvalidStatus("status is required when mode is 'set'")
        return validate_status(requested, cycle)

    return next_status(current, cycle)
