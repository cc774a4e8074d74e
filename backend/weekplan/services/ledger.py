"""Occupancy bookkeeping shared by every placement phase.

The ledger answers "is this faculty/room/section stream busy at (day, period)"
and tracks how many periods each faculty member and each (subject, section, day)
has consumed so far. It never refuses a booking; callers consult
:mod:`weekplan.services.constraints` before calling :meth:`ResourceLedger.occupy`.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Iterable, Literal

from weekplan.schemas.timetable import TimetableEntryPayload

EntityKind = Literal["faculty", "room", "section"]

# Marker stored in the section stream set for a whole-class (unbatched) booking.
WHOLE_CLASS = None


class ResourceLedger:
    def __init__(self) -> None:
        self.faculty_busy: set[tuple[str, str, int]] = set()
        self.room_busy: set[tuple[str, str, int]] = set()
        self.section_streams: dict[tuple[str, str, int], set[str | None]] = defaultdict(set)
        self.faculty_load: Counter[str] = Counter()
        self.subject_day_counts: Counter[tuple[str, str, str]] = Counter()
        self._subject_day_periods: dict[tuple[str, str, str], set[int]] = defaultdict(set)

    @classmethod
    def from_entries(cls, entries: Iterable[TimetableEntryPayload]) -> "ResourceLedger":
        ledger = cls()
        for entry in entries:
            ledger.occupy(
                entry.faculty_id,
                entry.room_id,
                entry.section_id,
                entry.day,
                entry.period,
                batch=entry.batch,
                subject_id=entry.subject_id,
            )
        return ledger

    def occupy(
        self,
        faculty_id: str,
        room_id: str,
        section_id: str,
        day: str,
        period: int,
        batch: str | None = None,
        subject_id: str | None = None,
    ) -> None:
        self.faculty_busy.add((faculty_id, day, period))
        self.room_busy.add((room_id, day, period))
        self.section_streams[(section_id, day, period)].add(batch)
        self.faculty_load[faculty_id] += 1
        if subject_id is not None:
            key = (subject_id, section_id, day)
            self.subject_day_counts[key] += 1
            self._subject_day_periods[key].add(period)

    def is_free(
        self,
        kind: EntityKind,
        entity_id: str,
        day: str,
        period: int,
        batch: str | None = None,
    ) -> bool:
        if kind == "faculty":
            return (entity_id, day, period) not in self.faculty_busy
        if kind == "room":
            return (entity_id, day, period) not in self.room_busy
        if kind == "section":
            return self._section_stream_free(entity_id, day, period, batch)
        raise ValueError(f"Unknown entity kind: {kind}")

    def _section_stream_free(self, section_id: str, day: str, period: int, batch: str | None) -> bool:
        streams = self.section_streams.get((section_id, day, period))
        if not streams:
            return True
        # Whole class contains every batch: it blocks all of them and is blocked by any.
        if batch is WHOLE_CLASS:
            return False
        return WHOLE_CLASS not in streams and batch not in streams

    def load_of(self, faculty_id: str) -> int:
        return self.faculty_load[faculty_id]

    def sessions_on(self, subject_id: str, section_id: str, day: str) -> int:
        return self.subject_day_counts[(subject_id, section_id, day)]

    def subject_periods(self, subject_id: str, section_id: str, day: str) -> set[int]:
        return set(self._subject_day_periods.get((subject_id, section_id, day), ()))

    def section_busy_periods(self, section_id: str, day: str, periods: Iterable[int]) -> list[int]:
        return [period for period in periods if self.section_streams.get((section_id, day, period))]
