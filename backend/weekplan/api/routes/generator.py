import logging

from fastapi import APIRouter, Depends

from weekplan.api.deps import get_generation_settings
from weekplan.schemas.generator import GenerateTimetableRequest, GenerateTimetableResponse, GenerationSettings
from weekplan.services.generator import generate_timetable

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/generate/settings", response_model=GenerationSettings)
def read_generation_settings(defaults: GenerationSettings = Depends(get_generation_settings)) -> GenerationSettings:
    return defaults


@router.post("/generate", response_model=GenerateTimetableResponse)
def generate(
    payload: GenerateTimetableRequest,
    defaults: GenerationSettings = Depends(get_generation_settings),
) -> GenerateTimetableResponse:
    settings = payload.settings_override or defaults
    result = generate_timetable(payload, settings)
    if result.unscheduled_count:
        logger.warning(
            "Generated timetable is partial | entries=%s unscheduled=%s requirements=%s",
            len(result.entries),
            result.unscheduled_count,
            len(result.unscheduled),
        )
    return result
