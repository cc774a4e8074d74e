from __future__ import annotations

import logging
import random
from time import perf_counter

from pydantic import ValidationError

from weekplan.core.config import Settings, get_settings
from weekplan.core.exceptions import ConfigurationError
from weekplan.schemas.entities import SectionPayload
from weekplan.schemas.generator import GenerateTimetableRequest, GenerateTimetableResponse, GenerationSettings
from weekplan.services.context import SchedulingContext, Subject
from weekplan.services.gap_fill import fill_gaps, resolve_filler
from weekplan.services.lab_phase import place_labs
from weekplan.services.theory_phase import place_theory
from weekplan.services.workload import capacity_map, summarize_faculty_load

logger = logging.getLogger(__name__)


def default_generation_settings(app_settings: Settings | None = None) -> GenerationSettings:
    app_settings = app_settings or get_settings()
    try:
        return GenerationSettings(
            random_seed=app_settings.generation_random_seed,
            batch_strategy=app_settings.lab_batch_strategy,
            max_lab_batch_size=app_settings.max_lab_batch_size,
            enforce_designation_caps=app_settings.enforce_designation_caps,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid generation defaults: {exc.errors()[0]['msg']}") from exc


class TimetableGenerator:
    """Runs the lab, theory and gap-filling phases over one fresh ledger."""

    def __init__(self, *, request: GenerateTimetableRequest, settings: GenerationSettings) -> None:
        self.request = request
        self.settings = settings
        self.sections: list[SectionPayload] = sorted(request.sections, key=lambda item: (item.year, item.semester, item.name, item.id))
        self.subjects_by_id: dict[str, Subject] = {subject.id: subject for subject in request.subjects}

        filler_ids = {
            activity.subject_id for activity in (request.library, request.sports) if activity is not None
        }
        self.academic_subjects: list[Subject] = [
            subject for subject in request.subjects if subject.id not in filler_ids
        ]

        self.context = SchedulingContext(
            settings=settings,
            faculty={item.id: item for item in request.faculty},
            rooms={item.id: item for item in request.rooms},
            faculty_capacity=capacity_map(request.faculty, settings.enforce_designation_caps),
            random=random.Random(settings.random_seed),
        )

    def _sections_with_days(self) -> list[SectionPayload]:
        active: list[SectionPayload] = []
        for section in self.sections:
            if not self.context.working_days(section):
                logger.warning("Section has no working days; skipping | section=%s", section.id)
                continue
            active.append(section)
        return active

    def run(self) -> GenerateTimetableResponse:
        started = perf_counter()
        ctx = self.context
        sections = self._sections_with_days()
        logger.info(
            "Generation started | sections=%s subjects=%s rooms=%s faculty=%s seed=%s strategy=%s",
            len(sections),
            len(self.academic_subjects),
            len(ctx.rooms),
            len(ctx.faculty),
            self.settings.random_seed,
            self.settings.batch_strategy,
        )

        for section in sections:
            place_labs(ctx, section, self.academic_subjects)
        for section in sections:
            place_theory(ctx, section, self.academic_subjects)

        library = resolve_filler(ctx, self.request.library, self.subjects_by_id, "library")
        sports = resolve_filler(ctx, self.request.sports, self.subjects_by_id, "sports")
        for section in sections:
            fill_gaps(ctx, section, library, sports)

        runtime_ms = int((perf_counter() - started) * 1000)
        unscheduled_count = sum(item.unscheduled for item in ctx.unscheduled)
        logger.info(
            "Generation finished | entries=%s unscheduled=%s unfilled_gaps=%s runtime_ms=%s",
            len(ctx.entries),
            unscheduled_count,
            ctx.unfilled_gaps,
            runtime_ms,
        )
        return GenerateTimetableResponse(
            entries=list(ctx.entries),
            unscheduled=list(ctx.unscheduled),
            unscheduled_count=unscheduled_count,
            unfilled_gaps=ctx.unfilled_gaps,
            faculty_load=summarize_faculty_load(
                ctx.entries,
                self.request.faculty,
                self.settings.enforce_designation_caps,
            ),
            runtime_ms=runtime_ms,
            settings_used=self.settings,
        )


def generate_timetable(
    request: GenerateTimetableRequest,
    settings: GenerationSettings | None = None,
) -> GenerateTimetableResponse:
    resolved = settings or request.settings_override or default_generation_settings()
    return TimetableGenerator(request=request, settings=resolved).run()
