from __future__ import annotations

import logging
import math

from weekplan.schemas.entities import RoomPayload, SectionPayload, TheorySubjectPayload
from weekplan.services.constraints import can_place_theory, is_slot_available
from weekplan.services.context import SchedulingContext, Subject

logger = logging.getLogger(__name__)


def daily_shares(sessions: int) -> list[int]:
    """Split a weekly requirement into per-day shares.

    Up to three sessions go one per day; four or more pair up, e.g. 4 -> [2, 2],
    5 -> [2, 2, 1].
    """
    if sessions <= 0:
        return []
    if sessions <= 3:
        return [1] * sessions
    day_count = math.ceil(sessions / 2)
    base, extra = divmod(sessions, day_count)
    return [base + 1 if index < extra else base for index in range(day_count)]


def theory_subjects_for(section: SectionPayload, subjects: list[Subject]) -> list[TheorySubjectPayload]:
    theory = [
        subject
        for subject in subjects
        if isinstance(subject, TheorySubjectPayload) and subject.periods_per_week > 0 and subject.applies_to(section)
    ]
    return sorted(theory, key=lambda item: (-item.periods_per_week, item.code, item.id))


def candidate_rooms(ctx: SchedulingContext, section: SectionPayload) -> list[RoomPayload]:
    if section.default_room_id:
        room = ctx.rooms.get(section.default_room_id)
        if room is not None:
            return [room]
        logger.warning(
            "Section default room missing; using any theory room | section=%s room=%s",
            section.id,
            section.default_room_id,
        )
    return ctx.rooms_of_kind("Theory")


def _place_on_day(
    ctx: SchedulingContext,
    section: SectionPayload,
    subject: TheorySubjectPayload,
    day: str,
    target: int,
    rooms: list[RoomPayload],
) -> int:
    policy = ctx.settings.schedule_policy
    placed = 0
    for period in policy.pre_lunch_periods + policy.post_lunch_periods:
        if placed >= target:
            break
        if not can_place_theory(
            ctx.ledger,
            ctx.settings,
            subject.id,
            section.id,
            day,
            period,
            daily_cap=subject.max_sessions_per_day,
        ):
            continue
        for room in rooms:
            if is_slot_available(
                ctx.ledger,
                ctx.settings,
                ctx.faculty_capacity,
                subject.assigned_faculty_id,
                room.id,
                section.id,
                day,
                period,
            ):
                ctx.book(
                    subject_id=subject.id,
                    faculty_id=subject.assigned_faculty_id,
                    room_id=room.id,
                    section_id=section.id,
                    day=day,
                    period=period,
                )
                placed += 1
                break
    return placed


def place_theory(ctx: SchedulingContext, section: SectionPayload, subjects: list[Subject]) -> None:
    theory = theory_subjects_for(section, subjects)
    if not theory:
        return
    rooms = candidate_rooms(ctx, section)
    working_days = ctx.working_days(section)

    for subject in theory:
        required = subject.periods_per_week
        if not rooms:
            ctx.report_unscheduled(subject=subject, section=section, placed=0, reason="no_theory_room")
            continue

        shares = daily_shares(required)
        days = list(working_days)
        ctx.random.shuffle(days)

        placed = 0
        carry = 0
        for index, day in enumerate(days):
            if placed >= required:
                break
            if index == len(days) - 1:
                target = required - placed
            else:
                target = (shares[index] if index < len(shares) else 0) + carry
            if target <= 0:
                continue
            got = _place_on_day(ctx, section, subject, day, target, rooms)
            placed += got
            # A day's shortfall moves on to the next day tried.
            carry = target - got

        ctx.report_unscheduled(
            subject=subject,
            section=section,
            placed=placed,
            reason="no_feasible_theory_slot",
        )
