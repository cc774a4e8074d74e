import random

import pytest
from fastapi.testclient import TestClient #fake http client that calls the FastAPI routes without running a server

from weekplan.main import app
from weekplan.sample_data import sample_request
from weekplan.schemas.entities import FacultyPayload, RoomPayload
from weekplan.schemas.generator import GenerationSettings
from weekplan.services.context import SchedulingContext
from weekplan.services.workload import capacity_map


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def sample():
    return sample_request()


@pytest.fixture()
def make_context():
    """Build a fresh scheduling context around the given rooms and faculty."""

    def _build(rooms: list[dict], faculty: list[dict], seed: int = 7, **overrides) -> SchedulingContext:
        settings = GenerationSettings(random_seed=seed, **overrides)
        faculty_models = [FacultyPayload.model_validate(item) for item in faculty]
        room_models = [RoomPayload.model_validate(item) for item in rooms]
        return SchedulingContext(
            settings=settings,
            faculty={item.id: item for item in faculty_models},
            rooms={item.id: item for item in room_models},
            faculty_capacity=capacity_map(faculty_models),
            random=random.Random(seed),
        )

    return _build
