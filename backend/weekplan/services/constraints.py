from __future__ import annotations

from weekplan.schemas.generator import GenerationSettings
from weekplan.services.ledger import ResourceLedger


def has_capacity_for(
    ledger: ResourceLedger,
    faculty_capacity: dict[str, int],
    faculty_id: str,
    periods: int = 1,
) -> bool:
    capacity = faculty_capacity.get(faculty_id)
    if capacity is None:
        return True
    return ledger.load_of(faculty_id) + periods <= capacity


def is_slot_available(
    ledger: ResourceLedger,
    settings: GenerationSettings,
    faculty_capacity: dict[str, int],
    faculty_id: str,
    room_id: str,
    section_id: str,
    day: str,
    period: int,
    batch: str | None = None,
) -> bool:
    """Hard-constraint check for a single period.

    Only a one-period load increment is considered; multi-period callers must
    also call :func:`has_capacity_for` with the full block size.
    """
    if period == settings.schedule_policy.lunch_period:
        return False
    if not ledger.is_free("faculty", faculty_id, day, period):
        return False
    if not ledger.is_free("room", room_id, day, period):
        return False
    if not ledger.is_free("section", section_id, day, period, batch):
        return False
    return has_capacity_for(ledger, faculty_capacity, faculty_id, 1)


def can_place_theory(
    ledger: ResourceLedger,
    settings: GenerationSettings,
    subject_id: str,
    section_id: str,
    day: str,
    period: int,
    daily_cap: int | None = None,
) -> bool:
    cap = daily_cap if daily_cap is not None else settings.max_daily_repetitions
    if ledger.sessions_on(subject_id, section_id, day) >= cap:
        return False
    placed = ledger.subject_periods(subject_id, section_id, day)
    return _longest_run_with(placed, period) <= settings.max_consecutive_periods


def _longest_run_with(placed: set[int], period: int) -> int:
    # Walk outward from the candidate in both directions.
    run = 1
    below = period - 1
    while below in placed:
        run += 1
        below -= 1
    above = period + 1
    while above in placed:
        run += 1
        above += 1
    return run
