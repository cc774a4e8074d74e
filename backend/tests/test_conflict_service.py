import pytest

from weekplan.schemas.entities import FacultyPayload, RoomPayload, SectionPayload, TheorySubjectPayload
from weekplan.schemas.generator import GenerationSettings
from weekplan.schemas.timetable import TimetableEntryPayload
from weekplan.services.conflict_service import ConflictService


@pytest.fixture
def resources():
    return {
        "faculty": [
            FacultyPayload(id="f1", name="Prof A", weeklyLoad=10),
            FacultyPayload(id="f2", name="Prof B", weeklyLoad=2),
        ],
        "rooms": [
            RoomPayload(id="r1", name="Room 1", type="Theory"),
            RoomPayload(id="r2", name="Room 2", type="Theory"),
        ],
        "sections": [
            SectionPayload(id="s1", year=3, semester=5, name="A"),
            SectionPayload(id="s2", year=3, semester=5, name="B"),
        ],
        "subjects": [
            TheorySubjectPayload(id="c1", code="C1", name="Course 1", year=3, semester=5, periodsPerWeek=3, assignedFacultyId="f1"),
            TheorySubjectPayload(id="c2", code="C2", name="Course 2", year=3, semester=5, periodsPerWeek=3, assignedFacultyId="f2"),
            TheorySubjectPayload(id="lib", code="LIB", name="Library", year=1, semester=1, periodsPerWeek=0, assignedFacultyId="f1"),
        ],
    }


def slot(entry_id, day, period, subject_id, faculty_id, room_id, section_id, batch=None):
    return TimetableEntryPayload(
        id=entry_id,
        day=day,
        period=period,
        subjectId=subject_id,
        facultyId=faculty_id,
        roomId=room_id,
        sectionId=section_id,
        batch=batch,
    )


def detect(entries, resources, **kwargs):
    return ConflictService(entries, **resources, **kwargs).detect_conflicts()


def test_detect_room_conflict(resources):
    report = detect(
        [
            slot("s1", "MON", 1, "c1", "f1", "r1", "s1"),
            slot("s2", "MON", 1, "c2", "f2", "r1", "s2"),
        ],
        resources,
    )

    assert len(report.conflicts) == 1
    conflict = report.conflicts[0]
    assert conflict.conflict_type == "room_conflict"
    assert "Room overlap in Room 1" in conflict.description
    assert set(conflict.affected_entries) == {"s1", "s2"}


def test_detect_faculty_conflict(resources):
    report = detect(
        [
            slot("s1", "MON", 1, "c1", "f1", "r1", "s1"),
            slot("s2", "MON", 1, "c1", "f1", "r2", "s2"),
        ],
        resources,
    )

    assert [item.conflict_type for item in report.conflicts] == ["faculty_conflict"]
    assert "Faculty overlap for Prof A" in report.conflicts[0].description


def test_parallel_batches_are_not_conflicts(resources):
    report = detect(
        [
            slot("s1", "TUE", 1, "c1", "f1", "r1", "s1", batch="BATCH A"),
            slot("s2", "TUE", 1, "c2", "f2", "r1", "s1", batch="BATCH B"),
        ],
        resources,
    )

    assert report.conflicts == []


def test_whole_class_and_batch_overlap_is_a_section_conflict(resources):
    report = detect(
        [
            slot("s1", "TUE", 1, "c1", "f1", "r1", "s1"),
            slot("s2", "TUE", 1, "c2", "f2", "r2", "s1", batch="BATCH B"),
        ],
        resources,
    )

    assert [item.conflict_type for item in report.conflicts] == ["section_conflict"]
    assert report.hard_conflicts == 1


def test_lunch_and_overload_are_hard_conflicts(resources):
    report = detect(
        [
            slot("s1", "WED", 5, "c2", "f2", "r1", "s1"),
            slot("s2", "THU", 1, "c2", "f2", "r1", "s1"),
            slot("s3", "FRI", 1, "c2", "f2", "r1", "s1"),
        ],
        resources,
    )

    kinds = {item.conflict_type for item in report.conflicts}
    assert kinds == {"lunch_conflict", "workload_overflow"}
    assert report.hard_conflicts == 2


def test_repetition_and_long_runs_are_soft(resources):
    entries = [slot(f"e{period}", "MON", period, "c1", "f1", "r1", "s1") for period in (1, 2, 3)]

    report = detect(entries, resources)

    assert {item.conflict_type for item in report.conflicts} == {"daily_repetition", "consecutive_run"}
    assert report.hard_conflicts == 0


def test_fillers_are_exempt_from_distribution_checks(resources):
    entries = [slot(f"e{period}", "MON", period, "lib", "f1", "r1", "s1") for period in (1, 2, 3)]

    assert detect(entries, resources, filler_subject_ids=["lib"]).conflicts == []


def test_no_conflicts(resources):
    report = detect(
        [
            slot("s1", "MON", 1, "c1", "f1", "r1", "s1"),
            slot("s2", "MON", 2, "c2", "f2", "r1", "s1"),
        ],
        resources,
    )

    assert len(report.conflicts) == 0


def test_designation_caps_apply_to_workload_audit(resources):
    resources["faculty"] = [FacultyPayload(id="f1", name="Prof A", designation="Professor", weeklyLoad=18)]
    days = ["MON", "TUE", "WED"]
    entries = [
        slot(f"{day}{period}", day, period, "c1" if period % 2 else "lib", "f1", "r1", "s1")
        for day in days
        for period in (1, 2, 3, 4, 6)
    ]

    relaxed = detect(entries, resources, filler_subject_ids=["lib"])
    capped = detect(
        entries,
        resources,
        filler_subject_ids=["lib"],
        settings=GenerationSettings(enforce_designation_caps=True),
    )

    assert [item.conflict_type for item in relaxed.conflicts] == []
    assert [item.conflict_type for item in capped.conflicts] == ["workload_overflow"]
    assert "weekly load of 14" in capped.conflicts[0].description
