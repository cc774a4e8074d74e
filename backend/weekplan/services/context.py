from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field

from weekplan.schemas.entities import (
    FacultyPayload,
    LabSubjectPayload,
    RoomPayload,
    SectionPayload,
    TheorySubjectPayload,
)
from weekplan.schemas.generator import GenerationSettings, UnscheduledRequirement
from weekplan.schemas.timetable import TimetableEntryPayload
from weekplan.services.ledger import ResourceLedger

logger = logging.getLogger(__name__)

Subject = TheorySubjectPayload | LabSubjectPayload


@dataclass
class SchedulingContext:
    """Mutable state for one generation run, handed to each phase in turn."""

    settings: GenerationSettings
    faculty: dict[str, FacultyPayload]
    rooms: dict[str, RoomPayload]
    faculty_capacity: dict[str, int]
    random: random.Random
    ledger: ResourceLedger = field(default_factory=ResourceLedger)
    entries: list[TimetableEntryPayload] = field(default_factory=list)
    unscheduled: list[UnscheduledRequirement] = field(default_factory=list)
    unfilled_gaps: int = 0

    def working_days(self, section: SectionPayload) -> list[str]:
        return self.settings.schedule_policy.working_days_for(section.year, section.working_days)

    def rooms_of_kind(self, kind: str) -> list[RoomPayload]:
        return [room for room in self.rooms.values() if room.type == kind]

    def new_entry_id(self) -> str:
        # Drawn from the run's generator so seeded runs reproduce ids too.
        return str(uuid.UUID(int=self.random.getrandbits(128), version=4))

    def book(
        self,
        *,
        subject_id: str,
        faculty_id: str,
        room_id: str,
        section_id: str,
        day: str,
        period: int,
        batch: str | None = None,
    ) -> TimetableEntryPayload:
        entry = TimetableEntryPayload(
            id=self.new_entry_id(),
            day=day,
            period=period,
            subject_id=subject_id,
            faculty_id=faculty_id,
            room_id=room_id,
            section_id=section_id,
            batch=batch,
        )
        self.ledger.occupy(faculty_id, room_id, section_id, day, period, batch=batch, subject_id=subject_id)
        self.entries.append(entry)
        return entry

    def report_unscheduled(
        self,
        *,
        subject: Subject,
        section: SectionPayload,
        placed: int,
        reason: str,
        batch: str | None = None,
    ) -> None:
        required = subject.periods_per_week
        missing = max(0, required - placed)
        if missing == 0:
            return
        logger.warning(
            "Unscheduled sessions | subject=%s section=%s batch=%s required=%s placed=%s reason=%s",
            subject.code,
            section.id,
            batch,
            required,
            placed,
            reason,
        )
        self.unscheduled.append(
            UnscheduledRequirement(
                subject_id=subject.id,
                subject_code=subject.code,
                section_id=section.id,
                batch=batch,
                kind=subject.type,
                required=required,
                placed=placed,
                unscheduled=missing,
                reason=reason,
            )
        )
