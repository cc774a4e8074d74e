from fastapi import APIRouter, Depends

from weekplan.api.deps import get_generation_settings
from weekplan.schemas.conflict import ConflictDetectRequest, ConflictReport
from weekplan.schemas.generator import GenerationSettings
from weekplan.services.conflict_service import ConflictService

router = APIRouter()

@router.post("/detect", response_model=ConflictReport)
def detect_conflicts(
    request: ConflictDetectRequest,
    defaults: GenerationSettings = Depends(get_generation_settings),
):
    payload = request.payload
    service = ConflictService(
        payload.timetable_data,
        faculty=payload.faculty_data,
        rooms=payload.room_data,
        sections=payload.section_data,
        subjects=payload.subject_data,
        settings=request.settings_override or defaults,
        filler_subject_ids=request.filler_subject_ids,
    )
    return service.detect_conflicts()
