"""Single-slot checks for manual timetable edits.

This path is lighter than generation: it rejects faculty, room and section
collisions, slots outside the calendar and the lunch period, but does not re-check weekly load or per-day
repetition caps. A manual override may therefore exceed those soft limits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from weekplan.core.exceptions import ResourceNotFoundError
from weekplan.schemas.entities import FacultyPayload, RoomPayload, SectionPayload
from weekplan.schemas.settings import SchedulePolicy
from weekplan.schemas.timetable import TimetableEntryPayload


@dataclass(frozen=True)
class EditDecision:
    accepted: bool
    reason: str
    conflict_type: str | None = None
    conflicting_entry: TimetableEntryPayload | None = None


def _same_slot(left: TimetableEntryPayload, right: TimetableEntryPayload) -> bool:
    return left.day == right.day and left.period == right.period


def _parallel_batches(left: TimetableEntryPayload, right: TimetableEntryPayload) -> bool:
    return (
        left.section_id == right.section_id
        and left.batch is not None
        and right.batch is not None
        and left.batch != right.batch
    )


def validate_entry_edit(
    candidate: TimetableEntryPayload,
    entries: Iterable[TimetableEntryPayload],
    *,
    faculty: Iterable[FacultyPayload] = (),
    rooms: Iterable[RoomPayload] = (),
    sections: Iterable[SectionPayload] = (),
    policy: SchedulePolicy | None = None,
) -> EditDecision:
    policy = policy or SchedulePolicy()
    faculty_names = {item.id: item.name for item in faculty}
    room_names = {item.id: item.name for item in rooms}
    section_names = {item.id: item.name for item in sections}

    def section_name(entry: TimetableEntryPayload) -> str:
        return section_names.get(entry.section_id, entry.section_id)

    if candidate.day not in policy.days or candidate.period not in policy.periods:
        return EditDecision(
            accepted=False,
            reason=f"Conflict: {candidate.day} P{candidate.period} is outside the timetable calendar.",
            conflict_type="calendar_conflict",
        )

    lunch_period = policy.lunch_period
    if candidate.period == lunch_period:
        return EditDecision(
            accepted=False,
            reason=f"Conflict: Period {lunch_period} is the lunch break and cannot be scheduled.",
            conflict_type="lunch_conflict",
        )

    others = [entry for entry in entries if entry.id != candidate.id and _same_slot(entry, candidate)]

    clash = next((entry for entry in others if entry.faculty_id == candidate.faculty_id), None)
    if clash is not None:
        name = faculty_names.get(candidate.faculty_id, candidate.faculty_id)
        return EditDecision(
            accepted=False,
            reason=f"Conflict: {name} is already teaching Section {section_name(clash)} at this time.",
            conflict_type="faculty_conflict",
            conflicting_entry=clash,
        )

    clash = next(
        (
            entry
            for entry in others
            if entry.room_id == candidate.room_id and not _parallel_batches(entry, candidate)
        ),
        None,
    )
    if clash is not None:
        name = room_names.get(candidate.room_id, candidate.room_id)
        return EditDecision(
            accepted=False,
            reason=f"Conflict: Room {name} is already occupied by Section {section_name(clash)} at this time.",
            conflict_type="room_conflict",
            conflicting_entry=clash,
        )

    clash = next(
        (
            entry
            for entry in others
            if entry.section_id == candidate.section_id
            and (entry.batch is None or candidate.batch is None or entry.batch == candidate.batch)
        ),
        None,
    )
    if clash is not None:
        who = f"Section {section_name(clash)}"
        if candidate.batch:
            who = f"{who} {candidate.batch}"
        return EditDecision(
            accepted=False,
            reason=f"Conflict: {who} already has a class at this time.",
            conflict_type="section_conflict",
            conflicting_entry=clash,
        )

    return EditDecision(accepted=True, reason=f"Saved {candidate.day} P{candidate.period} for Section {section_name(candidate)}.")


def apply_entry_edit(
    candidate: TimetableEntryPayload,
    entries: Iterable[TimetableEntryPayload],
) -> list[TimetableEntryPayload]:
    """Return a new list with ``candidate`` replacing its namesake, or appended."""
    updated = list(entries)
    for index, entry in enumerate(updated):
        if entry.id == candidate.id:
            updated[index] = candidate
            return updated
    updated.append(candidate)
    return updated


def remove_entry(entry_id: str, entries: Iterable[TimetableEntryPayload]) -> list[TimetableEntryPayload]:
    current = list(entries)
    remaining = [entry for entry in current if entry.id != entry_id]
    if len(remaining) == len(current):
        raise ResourceNotFoundError("Timetable entry", entry_id)
    return remaining
