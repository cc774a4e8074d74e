import logging

from fastapi import APIRouter, Depends

from weekplan.api.deps import get_generation_settings
from weekplan.core.exceptions import SlotConflictError
from weekplan.schemas.generator import GenerationSettings
from weekplan.schemas.timetable import (
    EntryEditRequest,
    EntryEditResponse,
    EntryRemoveRequest,
    EntryRemoveResponse,
)
from weekplan.services.edit_validator import apply_entry_edit, remove_entry, validate_entry_edit

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/entries/validate", response_model=EntryEditResponse)
def save_entry(
    request: EntryEditRequest,
    defaults: GenerationSettings = Depends(get_generation_settings),
) -> EntryEditResponse:
    payload = request.payload
    decision = validate_entry_edit(
        request.entry,
        payload.timetable_data,
        faculty=payload.faculty_data,
        rooms=payload.room_data,
        sections=payload.section_data,
        policy=request.schedule_policy or defaults.schedule_policy,
    )
    if not decision.accepted:
        clash = decision.conflicting_entry
        raise SlotConflictError(
            decision.reason,
            details={
                "conflict_type": decision.conflict_type,
                "conflicting_entry_id": clash.id if clash else None,
                "section_id": clash.section_id if clash else None,
            },
        )

    updated = apply_entry_edit(request.entry, payload.timetable_data)
    logger.info(
        "Manual slot edit saved | entry=%s section=%s day=%s period=%s",
        request.entry.id,
        request.entry.section_id,
        request.entry.day,
        request.entry.period,
    )
    return EntryEditResponse(
        accepted=True,
        message=decision.reason,
        entry=request.entry,
        timetable_data=updated,
    )


@router.post("/entries/remove", response_model=EntryRemoveResponse)
def delete_entry(request: EntryRemoveRequest) -> EntryRemoveResponse:
    remaining = remove_entry(request.entry_id, request.payload.timetable_data)
    logger.info("Timetable entry removed | entry=%s", request.entry_id)
    return EntryRemoveResponse(removed_id=request.entry_id, timetable_data=remaining)
