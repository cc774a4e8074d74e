from __future__ import annotations

import logging
from dataclasses import dataclass

from weekplan.schemas.entities import RoomPayload, SectionPayload
from weekplan.schemas.generator import FillerActivity
from weekplan.services.constraints import is_slot_available
from weekplan.services.context import SchedulingContext, Subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedFiller:
    subject: Subject
    room: RoomPayload

    @property
    def faculty_id(self) -> str:
        return self.subject.assigned_faculty_id


def resolve_filler(
    ctx: SchedulingContext,
    activity: FillerActivity | None,
    subjects_by_id: dict[str, Subject],
    label: str,
) -> ResolvedFiller | None:
    if activity is None:
        logger.info("No %s filler configured; skipping that part of gap filling", label)
        return None
    subject = subjects_by_id.get(activity.subject_id)
    room = ctx.rooms.get(activity.room_id)
    if subject is None or room is None:
        logger.warning(
            "Filler reference unresolved | filler=%s subject=%s room=%s",
            label,
            activity.subject_id,
            activity.room_id,
        )
        return None
    return ResolvedFiller(subject=subject, room=room)


def _try_fill(ctx: SchedulingContext, section: SectionPayload, filler: ResolvedFiller, day: str, period: int) -> bool:
    if not is_slot_available(
        ctx.ledger,
        ctx.settings,
        ctx.faculty_capacity,
        filler.faculty_id,
        filler.room.id,
        section.id,
        day,
        period,
    ):
        return False
    ctx.book(
        subject_id=filler.subject.id,
        faculty_id=filler.faculty_id,
        room_id=filler.room.id,
        section_id=section.id,
        day=day,
        period=period,
    )
    return True


def fill_gaps(
    ctx: SchedulingContext,
    section: SectionPayload,
    library: ResolvedFiller | None,
    sports: ResolvedFiller | None,
) -> None:
    if library is None and sports is None:
        return
    policy = ctx.settings.schedule_policy
    pre_lunch = policy.pre_lunch_periods
    post_lunch = policy.post_lunch_periods

    for day in ctx.working_days(section):
        busy_pre = ctx.ledger.section_busy_periods(section.id, day, pre_lunch)
        if not busy_pre:
            # Treated as a non-working day for this cohort.
            continue

        if library is not None:
            for period in pre_lunch:
                if period in busy_pre:
                    continue
                if not _try_fill(ctx, section, library, day, period):
                    ctx.unfilled_gaps += 1

        if sports is None or ctx.settings.max_post_lunch_fillers == 0 or not post_lunch:
            continue
        busy_post = ctx.ledger.section_busy_periods(section.id, day, post_lunch)
        if len(busy_post) * 2 >= len(post_lunch):
            continue
        filled = 0
        for period in reversed(post_lunch):
            if filled >= ctx.settings.max_post_lunch_fillers:
                break
            if period in busy_post:
                continue
            if _try_fill(ctx, section, sports, day, period):
                filled += 1
