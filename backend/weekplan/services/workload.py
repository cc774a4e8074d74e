from __future__ import annotations

from collections import Counter
from typing import Iterable

from weekplan.schemas.entities import FacultyPayload
from weekplan.schemas.generator import FacultyLoadSummary
from weekplan.schemas.timetable import TimetableEntryPayload


def designation_workload_cap(designation: str | None) -> int:
    """Weekly ceiling by job title; only consulted when designation caps are enabled."""
    normalized = (designation or "").strip().lower().replace(".", "")
    if "assistant professor" in normalized or "asst professor" in normalized:
        return 16
    if "associate professor" in normalized or "professor" in normalized:
        return 14
    return 16


def effective_capacity(faculty: FacultyPayload, enforce_designation_caps: bool = False) -> int:
    if not enforce_designation_caps:
        return faculty.weekly_load
    return min(faculty.weekly_load, designation_workload_cap(faculty.designation))


def capacity_map(faculty: Iterable[FacultyPayload], enforce_designation_caps: bool = False) -> dict[str, int]:
    return {item.id: effective_capacity(item, enforce_designation_caps) for item in faculty}


def summarize_faculty_load(
    entries: Iterable[TimetableEntryPayload],
    faculty: Iterable[FacultyPayload],
    enforce_designation_caps: bool = False,
) -> list[FacultyLoadSummary]:
    assigned = Counter(entry.faculty_id for entry in entries)
    summaries: list[FacultyLoadSummary] = []
    for item in faculty:
        capacity = effective_capacity(item, enforce_designation_caps)
        count = assigned.get(item.id, 0)
        summaries.append(
            FacultyLoadSummary(
                faculty_id=item.id,
                faculty_name=item.name,
                capacity=capacity,
                assigned=count,
                remaining=max(0, capacity - count),
            )
        )
    return summaries
