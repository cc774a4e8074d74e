from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from weekplan.schemas.entities import FacultyPayload, RoomPayload, SectionPayload, SubjectPayload
from weekplan.schemas.settings import SchedulePolicy
from weekplan.schemas.timetable import TimetableEntryPayload, ensure_unique

BatchStrategy = Literal["lab_subjects", "headcount"]

DEFAULT_LAB_BLOCKS: list[tuple[int, int]] = [(1, 2), (2, 3), (6, 7), (3, 4)]


class GenerationSettings(BaseModel):
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)
    batch_strategy: BatchStrategy = "lab_subjects"
    max_lab_batch_size: int | None = Field(default=None, ge=1, le=500)
    max_daily_repetitions: int = Field(default=2, ge=1, le=8)
    max_consecutive_periods: int = Field(default=2, ge=1, le=8)
    preferred_lab_blocks: list[tuple[int, int]] = Field(default_factory=lambda: list(DEFAULT_LAB_BLOCKS), min_length=1)
    max_post_lunch_fillers: int = Field(default=1, ge=0, le=8)
    enforce_designation_caps: bool = False
    schedule_policy: SchedulePolicy = Field(default_factory=SchedulePolicy)

    @field_validator("preferred_lab_blocks")
    @classmethod
    def validate_block_shape(cls, value: list[tuple[int, int]]) -> list[tuple[int, int]]:
        for first, second in value:
            if second != first + 1:
                raise ValueError(f"Lab block ({first}, {second}) must be two adjacent periods")
        return value

    @model_validator(mode="after")
    def validate_blocks_against_calendar(self) -> "GenerationSettings":
        policy = self.schedule_policy
        teaching = set(policy.teaching_periods)
        for block in self.preferred_lab_blocks:
            if policy.lunch_period in block:
                raise ValueError(f"Lab block {block} overlaps the lunch period")
            if not set(block) <= teaching:
                raise ValueError(f"Lab block {block} uses periods outside the calendar")
        return self


class FillerActivity(BaseModel):
    subject_id: str = Field(alias="subjectId", min_length=1, max_length=36)
    room_id: str = Field(alias="roomId", min_length=1, max_length=36)

    model_config = {"populate_by_name": True}


class GenerateTimetableRequest(BaseModel):
    faculty: list[FacultyPayload] = Field(default_factory=list)
    rooms: list[RoomPayload] = Field(default_factory=list)
    subjects: list[SubjectPayload] = Field(default_factory=list)
    sections: list[SectionPayload] = Field(default_factory=list)
    library: FillerActivity | None = None
    sports: FillerActivity | None = None
    settings_override: GenerationSettings | None = Field(default=None, alias="settingsOverride")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_references(self) -> "GenerateTimetableRequest":
        ensure_unique("faculty", self.faculty)
        ensure_unique("room", self.rooms)
        ensure_unique("subject", self.subjects)
        ensure_unique("section", self.sections)

        faculty_ids = {item.id for item in self.faculty}
        room_ids = {item.id for item in self.rooms}
        for subject in self.subjects:
            if subject.assigned_faculty_id not in faculty_ids:
                raise ValueError(
                    f"Subject {subject.code} references unknown assignedFacultyId {subject.assigned_faculty_id}"
                )
            if subject.type == "Lab":
                unknown = [room_id for room_id in subject.allowed_room_ids if room_id not in room_ids]
                if unknown:
                    raise ValueError(f"Subject {subject.code} references unknown room(s): {', '.join(unknown)}")
        for section in self.sections:
            if section.default_room_id and section.default_room_id not in room_ids:
                raise ValueError(f"Section {section.id} references unknown defaultRoomId {section.default_room_id}")
        return self


class UnscheduledRequirement(BaseModel):
    subject_id: str = Field(alias="subjectId")
    subject_code: str = Field(alias="subjectCode")
    section_id: str = Field(alias="sectionId")
    batch: str | None = None
    kind: Literal["Theory", "Lab"]
    required: int = Field(ge=0)
    placed: int = Field(ge=0)
    unscheduled: int = Field(ge=0)
    reason: str

    model_config = {"populate_by_name": True}


class FacultyLoadSummary(BaseModel):
    faculty_id: str = Field(alias="facultyId")
    faculty_name: str = Field(alias="facultyName")
    capacity: int = Field(ge=0)
    assigned: int = Field(ge=0)
    remaining: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class GenerateTimetableResponse(BaseModel):
    entries: list[TimetableEntryPayload] = Field(default_factory=list)
    unscheduled: list[UnscheduledRequirement] = Field(default_factory=list)
    unscheduled_count: int = Field(default=0, alias="unscheduledCount", ge=0)
    unfilled_gaps: int = Field(default=0, alias="unfilledGaps", ge=0)
    faculty_load: list[FacultyLoadSummary] = Field(default_factory=list, alias="facultyLoad")
    runtime_ms: int = Field(default=0, alias="runtimeMs", ge=0)
    settings_used: GenerationSettings = Field(alias="settingsUsed")

    model_config = {"populate_by_name": True}
