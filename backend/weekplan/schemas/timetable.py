from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from weekplan.schemas.entities import FacultyPayload, RoomPayload, SectionPayload, SubjectPayload
from weekplan.schemas.settings import SchedulePolicy, normalize_day


class TimetableEntryPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    day: str
    period: int = Field(ge=1, le=16)
    subject_id: str = Field(alias="subjectId", min_length=1, max_length=36)
    faculty_id: str = Field(alias="facultyId", min_length=1, max_length=36)
    room_id: str = Field(alias="roomId", min_length=1, max_length=36)
    section_id: str = Field(alias="sectionId", min_length=1, max_length=36)
    batch: str | None = Field(default=None, min_length=1, max_length=50)

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        return normalize_day(value)

    @property
    def slot(self) -> tuple[str, int]:
        return (self.day, self.period)


class TimetablePayload(BaseModel):
    faculty_data: list[FacultyPayload] = Field(default_factory=list, alias="facultyData")
    room_data: list[RoomPayload] = Field(default_factory=list, alias="roomData")
    section_data: list[SectionPayload] = Field(default_factory=list, alias="sectionData")
    subject_data: list[SubjectPayload] = Field(default_factory=list, alias="subjectData")
    timetable_data: list[TimetableEntryPayload] = Field(default_factory=list, alias="timetableData")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="after")
    def validate_references(self) -> "TimetablePayload":
        subject_ids = {subject.id for subject in self.subject_data}
        room_ids = {room.id for room in self.room_data}
        faculty_ids = {faculty.id for faculty in self.faculty_data}
        section_ids = {section.id for section in self.section_data}

        for entry in self.timetable_data:
            if entry.subject_id not in subject_ids:
                raise ValueError(f"Entry {entry.id} references unknown subjectId {entry.subject_id}")
            if entry.room_id not in room_ids:
                raise ValueError(f"Entry {entry.id} references unknown roomId {entry.room_id}")
            if entry.faculty_id not in faculty_ids:
                raise ValueError(f"Entry {entry.id} references unknown facultyId {entry.faculty_id}")
            if entry.section_id not in section_ids:
                raise ValueError(f"Entry {entry.id} references unknown sectionId {entry.section_id}")

        ensure_unique("faculty", self.faculty_data)
        ensure_unique("room", self.room_data)
        ensure_unique("section", self.section_data)
        ensure_unique("subject", self.subject_data)
        ensure_unique("entry", self.timetable_data)
        return self


def ensure_unique(label: str, items: list[BaseModel]) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for item in items:
        if item.id in seen:
            duplicates.add(item.id)
        else:
            seen.add(item.id)
    if duplicates:
        raise ValueError(f"Duplicate {label} id(s): {', '.join(sorted(duplicates))}")


class EntryEditRequest(BaseModel):
    payload: TimetablePayload
    entry: TimetableEntryPayload
    schedule_policy: SchedulePolicy | None = Field(default=None, alias="schedulePolicy")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_entry_references(self) -> "EntryEditRequest":
        checks = (
            ("subjectId", self.entry.subject_id, {item.id for item in self.payload.subject_data}),
            ("facultyId", self.entry.faculty_id, {item.id for item in self.payload.faculty_data}),
            ("roomId", self.entry.room_id, {item.id for item in self.payload.room_data}),
            ("sectionId", self.entry.section_id, {item.id for item in self.payload.section_data}),
        )
        for label, value, known in checks:
            if value not in known:
                raise ValueError(f"Entry {self.entry.id} references unknown {label} {value}")
        return self


class EntryEditResponse(BaseModel):
    accepted: bool
    message: str
    entry: TimetableEntryPayload
    timetable_data: list[TimetableEntryPayload] = Field(default_factory=list, alias="timetableData")

    model_config = {"populate_by_name": True}


class EntryRemoveRequest(BaseModel):
    payload: TimetablePayload
    entry_id: str = Field(alias="entryId", min_length=1, max_length=36)

    model_config = {"populate_by_name": True}


class EntryRemoveResponse(BaseModel):
    removed_id: str = Field(alias="removedId")
    timetable_data: list[TimetableEntryPayload] = Field(default_factory=list, alias="timetableData")

    model_config = {"populate_by_name": True}
