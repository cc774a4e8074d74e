from fastapi import Depends

from weekplan.core.config import Settings, get_settings
from weekplan.schemas.generator import GenerationSettings
from weekplan.services.generator import default_generation_settings


def get_generation_settings(settings: Settings = Depends(get_settings)) -> GenerationSettings:
    return default_generation_settings(settings)
