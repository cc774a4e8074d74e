from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from weekplan.schemas.conflict import ConflictDetail, ConflictReport
from weekplan.schemas.entities import FacultyPayload, RoomPayload, SectionPayload
from weekplan.schemas.generator import GenerationSettings
from weekplan.schemas.timetable import TimetableEntryPayload
from weekplan.services.context import Subject
from weekplan.services.workload import effective_capacity


class ConflictService:
    def __init__(
        self,
        entries: Iterable[TimetableEntryPayload],
        *,
        faculty: Iterable[FacultyPayload] = (),
        rooms: Iterable[RoomPayload] = (),
        sections: Iterable[SectionPayload] = (),
        subjects: Iterable[Subject] = (),
        settings: GenerationSettings | None = None,
        filler_subject_ids: Iterable[str] = (),
    ):
        self.entries: List[TimetableEntryPayload] = list(entries)
        self.faculty: Dict[str, FacultyPayload] = {item.id: item for item in faculty}
        self.rooms: Dict[str, RoomPayload] = {item.id: item for item in rooms}
        self.sections: Dict[str, SectionPayload] = {item.id: item for item in sections}
        self.subjects: Dict[str, Subject] = {item.id: item for item in subjects}
        self.settings = settings or GenerationSettings()
        self.filler_subject_ids = set(filler_subject_ids)

    def _faculty_name(self, faculty_id: str) -> str:
        item = self.faculty.get(faculty_id)
        return item.name if item else faculty_id

    def _room_name(self, room_id: str) -> str:
        item = self.rooms.get(room_id)
        return item.name if item else room_id

    def _section_name(self, section_id: str) -> str:
        item = self.sections.get(section_id)
        return item.name if item else section_id

    def detect_conflicts(self) -> ConflictReport:
        conflicts: List[ConflictDetail] = []
        lunch_period = self.settings.schedule_policy.lunch_period

        # Bucket by slot; only entries sharing (day, period) can collide.
        entries_by_slot = defaultdict(list)
        for entry in self.entries:
            entries_by_slot[entry.slot].append(entry)
            if entry.period == lunch_period:
                conflicts.append(ConflictDetail(
                    id=f"lunch-{entry.id}",
                    conflict_type="lunch_conflict",
                    description=f"Entry scheduled in lunch period on {entry.day}",
                    severity="hard",
                    day=entry.day,
                    period=entry.period,
                    affected_entries=[entry.id],
                ))

        for (day, period), slot_entries in entries_by_slot.items():
            n = len(slot_entries)
            for i in range(n):
                e1 = slot_entries[i]
                for j in range(i + 1, n):
                    e2 = slot_entries[j]
                    parallel_batches = (
                        e1.section_id == e2.section_id
                        and e1.batch is not None
                        and e2.batch is not None
                        and e1.batch != e2.batch
                    )
                    if e1.faculty_id == e2.faculty_id:
                        conflicts.append(ConflictDetail(
                            id=f"fac-{e1.id}-{e2.id}",
                            conflict_type="faculty_conflict",
                            description=f"Faculty overlap for {self._faculty_name(e1.faculty_id)} on {day} P{period}",
                            severity="hard",
                            day=day,
                            period=period,
                            affected_entries=[e1.id, e2.id],
                        ))
                    if e1.room_id == e2.room_id and not parallel_batches:
                        conflicts.append(ConflictDetail(
                            id=f"room-{e1.id}-{e2.id}",
                            conflict_type="room_conflict",
                            description=f"Room overlap in {self._room_name(e1.room_id)} on {day} P{period}",
                            severity="hard",
                            day=day,
                            period=period,
                            affected_entries=[e1.id, e2.id],
                        ))
                    if e1.section_id == e2.section_id and not parallel_batches:
                        conflicts.append(ConflictDetail(
                            id=f"sec-{e1.id}-{e2.id}",
                            conflict_type="section_conflict",
                            description=f"Section {self._section_name(e1.section_id)} double-booked on {day} P{period}",
                            severity="hard",
                            day=day,
                            period=period,
                            affected_entries=[e1.id, e2.id],
                        ))

        conflicts.extend(self._workload_conflicts())
        conflicts.extend(self._distribution_conflicts())
        return ConflictReport(conflicts=conflicts)

    def _workload_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        by_faculty = defaultdict(list)
        for entry in self.entries:
            by_faculty[entry.faculty_id].append(entry.id)
        for faculty_id, entry_ids in by_faculty.items():
            faculty = self.faculty.get(faculty_id)
            if faculty is None:
                continue
            capacity = effective_capacity(faculty, self.settings.enforce_designation_caps)
            if len(entry_ids) <= capacity:
                continue
            conflicts.append(ConflictDetail(
                id=f"load-{faculty_id}",
                conflict_type="workload_overflow",
                description=f"{faculty.name} has {len(entry_ids)} periods against a weekly load of {capacity}",
                severity="hard",
                affected_entries=entry_ids,
            ))
        return conflicts

    def _distribution_conflicts(self) -> List[ConflictDetail]:
        conflicts: List[ConflictDetail] = []
        grouped = defaultdict(list)
        for entry in self.entries:
            subject = self.subjects.get(entry.subject_id)
            if subject is None or subject.type != "Theory" or subject.id in self.filler_subject_ids:
                continue
            grouped[(entry.subject_id, entry.section_id, entry.day)].append(entry)

        for (subject_id, section_id, day), items in grouped.items():
            subject = self.subjects[subject_id]
            cap = subject.max_sessions_per_day or self.settings.max_daily_repetitions
            ids = [item.id for item in items]
            if len(items) > cap:
                conflicts.append(ConflictDetail(
                    id=f"rep-{subject_id}-{section_id}-{day}",
                    conflict_type="daily_repetition",
                    description=f"{subject.code} appears {len(items)} times on {day} for Section {self._section_name(section_id)}",
                    severity="soft",
                    day=day,
                    affected_entries=ids,
                ))
            periods = Counter(item.period for item in items)
            run = best = 0
            previous = None
            for period in sorted(periods):
                run = run + 1 if previous is not None and period == previous + 1 else 1
                best = max(best, run)
                previous = period
            if best > self.settings.max_consecutive_periods:
                conflicts.append(ConflictDetail(
                    id=f"run-{subject_id}-{section_id}-{day}",
                    conflict_type="consecutive_run",
                    description=f"{subject.code} runs {best} consecutive periods on {day} for Section {self._section_name(section_id)}",
                    severity="soft",
                    day=day,
                    affected_entries=ids,
                ))
        return conflicts
