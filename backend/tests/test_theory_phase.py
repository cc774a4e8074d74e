from collections import Counter

import pytest

from weekplan.schemas.entities import SectionPayload, TheorySubjectPayload
from weekplan.services.theory_phase import daily_shares, place_theory, theory_subjects_for

ROOMS = [
    {"id": "r1", "name": "N 305", "type": "Theory"},
    {"id": "r2", "name": "N 313", "type": "Theory"},
    {"id": "r5", "name": "IT LAB 1", "type": "Lab"},
]

FACULTY = [
    {"id": "fa", "name": "Prof A", "weeklyLoad": 18},
    {"id": "fb", "name": "Prof B", "weeklyLoad": 18},
    {"id": "fc", "name": "Prof C", "weeklyLoad": 2},
]


def theory(subject_id, code, faculty_id, periods, year=3, semester=5, **extra):
    return TheorySubjectPayload(
        id=subject_id,
        code=code,
        name=code,
        year=year,
        semester=semester,
        periodsPerWeek=periods,
        assignedFacultyId=faculty_id,
        **extra,
    )


def section(year=3, semester=5, **extra):
    return SectionPayload(id="s1", year=year, semester=semester, name="A", **extra)


@pytest.mark.parametrize(
    "sessions,expected",
    [
        (0, []),
        (1, [1]),
        (3, [1, 1, 1]),
        (4, [2, 2]),
        (5, [2, 2, 1]),
        (6, [2, 2, 2]),
    ],
)
def test_daily_shares(sessions, expected):
    assert daily_shares(sessions) == expected


def test_subjects_are_ordered_by_weekly_requirement():
    subjects = [theory("t1", "B1", "fa", 3), theory("t2", "A1", "fb", 4), theory("t3", "X1", "fb", 4, year=2)]

    ordered = theory_subjects_for(section(), subjects)

    assert [item.id for item in ordered] == ["t2", "t1"]


def test_small_requirement_spreads_one_per_day_before_lunch(make_context):
    ctx = make_context(ROOMS, FACULTY)

    place_theory(ctx, section(defaultRoomId="r1"), [theory("t1", "T1", "fa", 3)])

    assert ctx.unscheduled == []
    assert len({entry.day for entry in ctx.entries}) == 3
    assert {entry.period for entry in ctx.entries} == {1}


def test_four_sessions_pair_up_on_two_days(make_context):
    ctx = make_context(ROOMS, FACULTY)

    place_theory(ctx, section(defaultRoomId="r1"), [theory("t1", "T1", "fa", 4)])

    per_day = Counter(entry.day for entry in ctx.entries)
    assert sorted(per_day.values()) == [2, 2]
    assert {entry.period for entry in ctx.entries} == {1, 2}


def test_default_room_is_used(make_context):
    ctx = make_context(ROOMS, FACULTY)

    place_theory(ctx, section(defaultRoomId="r2"), [theory("t1", "T1", "fa", 3)])

    assert {entry.room_id for entry in ctx.entries} == {"r2"}


def test_without_default_room_only_theory_rooms_are_used(make_context):
    ctx = make_context(ROOMS, FACULTY)

    place_theory(ctx, section(), [theory("t1", "T1", "fa", 4), theory("t2", "T2", "fb", 3)])

    assert len(ctx.entries) == 7
    assert {entry.room_id for entry in ctx.entries} <= {"r1", "r2"}


def test_missing_theory_rooms_are_reported(make_context):
    ctx = make_context([{"id": "r5", "name": "IT LAB 1", "type": "Lab"}], FACULTY)

    place_theory(ctx, section(), [theory("t1", "T1", "fa", 3)])

    assert ctx.entries == []
    [residual] = ctx.unscheduled
    assert residual.reason == "no_theory_room"
    assert residual.unscheduled == 3


def test_weekly_load_shortfall_becomes_a_residual(make_context):
    ctx = make_context(ROOMS, FACULTY)

    place_theory(ctx, section(defaultRoomId="r1"), [theory("t1", "T1", "fc", 3)])

    assert len(ctx.entries) == 2
    [residual] = ctx.unscheduled
    assert residual.placed == 2
    assert residual.unscheduled == 1
    assert residual.reason == "no_feasible_theory_slot"


def test_per_subject_daily_cap_limits_short_weeks(make_context):
    ctx = make_context(ROOMS, FACULTY)
    subject = theory("t1", "T1", "fa", 4, maxSessionsPerDay=1)

    place_theory(ctx, section(defaultRoomId="r1", workingDays=["MON", "TUE"]), [subject])

    assert sorted(entry.day for entry in ctx.entries) == ["MON", "TUE"]
    [residual] = ctx.unscheduled
    assert residual.placed == 2
    assert residual.unscheduled == 2


def test_final_year_sections_skip_friday_and_saturday(make_context):
    ctx = make_context(ROOMS, FACULTY)
    subjects = [
        theory("t1", "T1", "fa", 4, year=4, semester=7),
        theory("t2", "T2", "fb", 4, year=4, semester=7),
    ]

    place_theory(ctx, section(year=4, semester=7, defaultRoomId="r1"), subjects)

    assert len(ctx.entries) == 8
    assert {entry.day for entry in ctx.entries} <= {"MON", "TUE", "WED", "THU"}


def test_theory_never_lands_on_lunch_or_beside_itself_three_times(make_context):
    ctx = make_context(ROOMS, FACULTY)
    subjects = [theory("t1", "T1", "fa", 6), theory("t2", "T2", "fb", 5)]

    place_theory(ctx, section(defaultRoomId="r1", workingDays=["MON", "TUE", "WED"]), subjects)

    lunch = ctx.settings.schedule_policy.lunch_period
    assert all(entry.period != lunch for entry in ctx.entries)
    per_day = Counter((entry.subject_id, entry.day) for entry in ctx.entries)
    assert max(per_day.values()) <= ctx.settings.max_daily_repetitions
    assert len(ctx.entries) + sum(item.unscheduled for item in ctx.unscheduled) == 11
