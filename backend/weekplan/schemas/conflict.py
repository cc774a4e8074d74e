from pydantic import BaseModel, Field
from typing import Literal, List

from weekplan.schemas.generator import GenerationSettings
from weekplan.schemas.timetable import TimetablePayload

ConflictType = Literal[
    "faculty_conflict",
    "room_conflict",
    "section_conflict",
    "lunch_conflict",
    "workload_overflow",
    "daily_repetition",
    "consecutive_run",
]

class ConflictDetail(BaseModel):
    id: str
    conflict_type: ConflictType
    description: str
    severity: Literal["hard", "soft"]
    day: str | None = None
    period: int | None = None
    affected_entries: List[str]  # Timetable entry IDs involved

class ConflictReport(BaseModel):
    conflicts: List[ConflictDetail] = Field(default_factory=list)

    @property
    def hard_conflicts(self) -> int:
        return sum(1 for item in self.conflicts if item.severity == "hard")


class ConflictDetectRequest(BaseModel):
    payload: TimetablePayload
    filler_subject_ids: List[str] = Field(default_factory=list, alias="fillerSubjectIds")
    settings_override: GenerationSettings | None = Field(default=None, alias="settingsOverride")

    model_config = {"populate_by_name": True}
