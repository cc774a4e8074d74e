import pytest

from weekplan.schemas.timetable import TimetableEntryPayload
from weekplan.services.ledger import ResourceLedger


def test_occupy_marks_faculty_room_and_load():
    ledger = ResourceLedger()
    ledger.occupy("f1", "r1", "s1", "MON", 2, subject_id="t1")

    assert not ledger.is_free("faculty", "f1", "MON", 2)
    assert not ledger.is_free("room", "r1", "MON", 2)
    assert ledger.is_free("faculty", "f1", "MON", 3)
    assert ledger.is_free("room", "r1", "TUE", 2)
    assert ledger.load_of("f1") == 1
    assert ledger.sessions_on("t1", "s1", "MON") == 1
    assert ledger.subject_periods("t1", "s1", "MON") == {2}


def test_whole_class_booking_blocks_every_batch():
    ledger = ResourceLedger()
    ledger.occupy("f1", "r1", "s1", "MON", 1)

    assert not ledger.is_free("section", "s1", "MON", 1)
    assert not ledger.is_free("section", "s1", "MON", 1, "BATCH A")
    assert not ledger.is_free("section", "s1", "MON", 1, "BATCH C")
    assert ledger.is_free("section", "s2", "MON", 1)


def test_batch_booking_blocks_whole_class_but_not_sibling_batches():
    ledger = ResourceLedger()
    ledger.occupy("f1", "r5", "s1", "TUE", 1, batch="BATCH A")

    assert not ledger.is_free("section", "s1", "TUE", 1, "BATCH A")
    assert ledger.is_free("section", "s1", "TUE", 1, "BATCH B")
    assert not ledger.is_free("section", "s1", "TUE", 1)


def test_counters_accumulate_across_bookings():
    ledger = ResourceLedger()
    ledger.occupy("f1", "r1", "s1", "MON", 1, subject_id="t1")
    ledger.occupy("f1", "r1", "s1", "MON", 3, subject_id="t1")
    ledger.occupy("f1", "r1", "s2", "MON", 4, subject_id="t1")

    assert ledger.load_of("f1") == 3
    assert ledger.sessions_on("t1", "s1", "MON") == 2
    assert ledger.sessions_on("t1", "s2", "MON") == 1
    assert ledger.section_busy_periods("s1", "MON", [1, 2, 3, 4]) == [1, 3]


def test_from_entries_rebuilds_occupancy():
    entries = [
        TimetableEntryPayload(id="e1", day="WED", period=6, subjectId="t1", facultyId="f2", roomId="r2", sectionId="s1"),
        TimetableEntryPayload(id="e2", day="WED", period=6, subjectId="l1", facultyId="f3", roomId="r5", sectionId="s2", batch="BATCH B"),
    ]
    ledger = ResourceLedger.from_entries(entries)

    assert not ledger.is_free("faculty", "f2", "WED", 6)
    assert not ledger.is_free("room", "r5", "WED", 6)
    assert ledger.is_free("section", "s2", "WED", 6, "BATCH A")
    assert not ledger.is_free("section", "s2", "WED", 6)
    assert ledger.sessions_on("t1", "s1", "WED") == 1


def test_unknown_entity_kind_is_rejected():
    ledger = ResourceLedger()
    with pytest.raises(ValueError):
        ledger.is_free("building", "b1", "MON", 1)
