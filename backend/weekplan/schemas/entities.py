from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, EmailStr, Field, field_validator

from weekplan.schemas.settings import normalize_day

ALL_SECTIONS = "ALL"

SubjectKind = Literal["Theory", "Lab"]


class FacultyPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(min_length=1, max_length=200)
    designation: str = Field(default="", max_length=100)
    department: str = Field(default="", max_length=200)
    email: EmailStr | None = None
    weekly_load: int = Field(alias="weeklyLoad", ge=0, le=60)

    model_config = {"populate_by_name": True}


class RoomPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(min_length=1, max_length=100)
    type: SubjectKind
    capacity: int = Field(default=60, ge=1, le=1000)


class SubjectBase(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    abbreviation: str = Field(default="", max_length=50)
    year: int = Field(ge=1, le=6)
    semester: int = Field(ge=1, le=12)
    section: str = Field(default=ALL_SECTIONS, min_length=1, max_length=50)
    periods_per_week: int = Field(alias="periodsPerWeek", ge=0, le=40)
    assigned_faculty_id: str = Field(alias="assignedFacultyId", min_length=1, max_length=36)

    model_config = {"populate_by_name": True}

    @field_validator("section")
    @classmethod
    def normalize_section(cls, value: str) -> str:
        trimmed = value.strip()
        if trimmed.upper() in {ALL_SECTIONS, "*"}:
            return ALL_SECTIONS
        return trimmed

    @property
    def label(self) -> str:
        return self.abbreviation or self.code

    def applies_to(self, section: "SectionPayload") -> bool:
        if self.year != section.year or self.semester != section.semester:
            return False
        return self.section == ALL_SECTIONS or self.section == section.name


class TheorySubjectPayload(SubjectBase):
    type: Literal["Theory"] = "Theory"
    max_sessions_per_day: int | None = Field(default=None, alias="maxSessionsPerDay", ge=1, le=8)


class LabSubjectPayload(SubjectBase):
    type: Literal["Lab"] = "Lab"
    allowed_room_ids: list[str] = Field(default_factory=list, alias="allowedRoomIds")


SubjectPayload = Annotated[Union[TheorySubjectPayload, LabSubjectPayload], Field(discriminator="type")]


class SectionPayload(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    year: int = Field(ge=1, le=6)
    semester: int = Field(ge=1, le=12)
    name: str = Field(min_length=1, max_length=50)
    class_teacher_id: str | None = Field(default=None, alias="classTeacherId")
    default_room_id: str | None = Field(default=None, alias="defaultRoomId")
    wef_date: str | None = Field(default=None, alias="wefDate")
    strength: int | None = Field(default=None, ge=1, le=1000)
    working_days: list[str] | None = Field(default=None, alias="workingDays")

    model_config = {"populate_by_name": True}

    @field_validator("working_days")
    @classmethod
    def normalize_working_days(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [normalize_day(day) for day in value]
