"""Laboratory placement with batch splitting and rotation.

Every section is handled on its own. The class is split into parallel batches,
and each rotation round places one contiguous block per active batch, each batch
in its own lab room, all at the same (day, block). A round is committed in full
or not at all.

Batch count is a configuration decision:

* ``lab_subjects``: one batch per distinct lab subject, so a full rotation
  cycles every batch through every lab.
* ``headcount``: ``ceil(strength / per-room capacity)``, where the per-room
  capacity is ``max_lab_batch_size`` or, when unset, the smallest lab room.
"""

from __future__ import annotations

import logging
import math
from string import ascii_uppercase

from weekplan.schemas.entities import LabSubjectPayload, RoomPayload, SectionPayload
from weekplan.services.constraints import has_capacity_for, is_slot_available
from weekplan.services.context import SchedulingContext, Subject

logger = logging.getLogger(__name__)

Assignment = tuple[str | None, LabSubjectPayload]
Placement = list[tuple[str | None, LabSubjectPayload, RoomPayload]]


def batch_label(index: int, batch_count: int) -> str | None:
    if batch_count <= 1:
        return None
    if index < len(ascii_uppercase):
        return f"BATCH {ascii_uppercase[index]}"
    return f"BATCH {index + 1}"


def lab_subjects_for(section: SectionPayload, subjects: list[Subject]) -> list[LabSubjectPayload]:
    labs = [
        subject
        for subject in subjects
        if isinstance(subject, LabSubjectPayload) and subject.periods_per_week > 0 and subject.applies_to(section)
    ]
    return sorted(labs, key=lambda item: (item.code, item.id))


def resolve_batch_count(
    ctx: SchedulingContext,
    section: SectionPayload,
    labs: list[LabSubjectPayload],
    lab_rooms: list[RoomPayload],
) -> int:
    by_subjects = max(1, len(labs))
    if ctx.settings.batch_strategy == "lab_subjects":
        return by_subjects

    if section.strength is None:
        logger.warning(
            "Section has no headcount; falling back to lab-subject batching | section=%s labs=%s",
            section.id,
            len(labs),
        )
        return by_subjects
    per_room = ctx.settings.max_lab_batch_size
    if per_room is None:
        if not lab_rooms:
            return by_subjects
        per_room = min(room.capacity for room in lab_rooms)
    return max(1, math.ceil(section.strength / per_room))


def rotation_assignments(
    round_index: int,
    batches: list[str | None],
    labs: list[LabSubjectPayload],
    remaining: dict[tuple[str, str | None], int],
    block_size: int,
) -> list[Assignment]:
    width = max(len(batches), len(labs))
    assignments: list[Assignment] = []
    for batch_index, batch in enumerate(batches):
        subject_index = (batch_index + round_index) % width
        if subject_index >= len(labs):
            continue
        subject = labs[subject_index]
        if remaining[(subject.id, batch)] >= block_size:
            assignments.append((batch, subject))
    return assignments


def _try_rotation(
    ctx: SchedulingContext,
    section: SectionPayload,
    day: str,
    block: tuple[int, ...],
    assignments: list[Assignment],
    lab_rooms: list[RoomPayload],
) -> Placement | None:
    def candidate_rooms(subject: LabSubjectPayload) -> list[RoomPayload]:
        if not subject.allowed_room_ids:
            return lab_rooms
        return [room for room in lab_rooms if room.id in subject.allowed_room_ids]

    reserved_faculty: set[str] = set()
    options: list[list[RoomPayload]] = []
    for batch, subject in assignments:
        faculty_id = subject.assigned_faculty_id
        if faculty_id in reserved_faculty:
            return None
        if not has_capacity_for(ctx.ledger, ctx.faculty_capacity, faculty_id, len(block)):
            return None
        free_rooms = [
            candidate
            for candidate in candidate_rooms(subject)
            if all(
                is_slot_available(
                    ctx.ledger,
                    ctx.settings,
                    ctx.faculty_capacity,
                    faculty_id,
                    candidate.id,
                    section.id,
                    day,
                    period,
                    batch,
                )
                for period in block
            )
        ]
        if not free_rooms:
            return None
        reserved_faculty.add(faculty_id)
        options.append(free_rooms)

    matched = match_rooms(options)
    if matched is None:
        return None
    return [(batch, subject, room) for (batch, subject), room in zip(assignments, matched)]


def match_rooms(options: list[list[RoomPayload]]) -> list[RoomPayload] | None:
    """Give every batch a distinct room from its own options, or return None.

    Augmenting-path bipartite matching; batch counts are small, so the simple
    depth-first version is enough.
    """
    owner: dict[str, int] = {}
    rooms_by_id = {room.id: room for rooms in options for room in rooms}

    def assign(batch_index: int, seen: set[str]) -> bool:
        for room in options[batch_index]:
            if room.id in seen:
                continue
            seen.add(room.id)
            holder = owner.get(room.id)
            if holder is None or assign(holder, seen):
                owner[room.id] = batch_index
                return True
        return False

    for batch_index in range(len(options)):
        if not assign(batch_index, set()):
            return None

    chosen: list[RoomPayload | None] = [None] * len(options)
    for room_id, batch_index in owner.items():
        chosen[batch_index] = rooms_by_id[room_id]
    return chosen


def place_labs(ctx: SchedulingContext, section: SectionPayload, subjects: list[Subject]) -> None:
    labs = lab_subjects_for(section, subjects)
    if not labs:
        return

    lab_rooms = ctx.rooms_of_kind("Lab")
    batch_count = resolve_batch_count(ctx, section, labs, lab_rooms)
    batches = [batch_label(index, batch_count) for index in range(batch_count)]

    if len(lab_rooms) < batch_count:
        logger.warning(
            "Lab rotation skipped | section=%s batches=%s lab_rooms=%s",
            section.id,
            batch_count,
            len(lab_rooms),
        )
        for subject in labs:
            for batch in batches:
                ctx.report_unscheduled(
                    subject=subject,
                    section=section,
                    placed=0,
                    reason="insufficient_lab_rooms",
                    batch=batch,
                )
        return

    blocks = [tuple(block) for block in ctx.settings.preferred_lab_blocks]
    block_size = len(blocks[0])
    remaining = {(subject.id, batch): subject.periods_per_week for subject in labs for batch in batches}

    days = list(ctx.working_days(section))
    ctx.random.shuffle(days)
    used_days: set[str] = set()
    width = max(len(batches), len(labs))
    round_index = 0
    idle_rounds = 0
    committed_rounds = 0

    while any(value >= block_size for value in remaining.values()):
        assignments = rotation_assignments(round_index, batches, labs, remaining, block_size)
        if not assignments:
            idle_rounds += 1
            if idle_rounds >= width:
                break
            round_index += 1
            continue
        idle_rounds = 0

        chosen_day: str | None = None
        chosen_block: tuple[int, ...] | None = None
        placement: Placement | None = None
        for day in days:
            if day in used_days:
                continue
            for block in blocks:
                placement = _try_rotation(ctx, section, day, block, assignments, lab_rooms)
                if placement is not None:
                    chosen_day, chosen_block = day, block
                    break
            if placement is not None:
                break

        if placement is None or chosen_day is None or chosen_block is None:
            logger.info(
                "No feasible lab block left | section=%s round=%s pending_batches=%s",
                section.id,
                round_index,
                len(assignments),
            )
            break

        for batch, subject, room in placement:
            for period in chosen_block:
                ctx.book(
                    subject_id=subject.id,
                    faculty_id=subject.assigned_faculty_id,
                    room_id=room.id,
                    section_id=section.id,
                    day=chosen_day,
                    period=period,
                    batch=batch,
                )
            remaining[(subject.id, batch)] -= len(chosen_block)
        used_days.add(chosen_day)
        committed_rounds += 1
        round_index += 1

    logger.info(
        "Lab rotation finished | section=%s batches=%s rounds=%s",
        section.id,
        batch_count,
        committed_rounds,
    )

    for subject in labs:
        for batch in batches:
            left = remaining[(subject.id, batch)]
            if left <= 0:
                continue
            ctx.report_unscheduled(
                subject=subject,
                section=section,
                placed=subject.periods_per_week - left,
                reason="no_feasible_lab_block" if left >= block_size else "partial_lab_block",
                batch=batch,
            )
