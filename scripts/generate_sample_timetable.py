"""Generate the sample IT department timetable and print one grid per section.

Run:
  PYTHONPATH=backend python scripts/generate_sample_timetable.py --seed 7
"""

from __future__ import annotations

import argparse
import logging

from weekplan.core.logging_config import configure_logging
from weekplan.sample_data import sample_request
from weekplan.schemas.generator import GenerateTimetableResponse, GenerationSettings
from weekplan.schemas.settings import PERIOD_TIMES
from weekplan.services.generator import generate_timetable

CELL_WIDTH = 16


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="random seed for repeatable output")
    parser.add_argument(
        "--batch-strategy",
        choices=["lab_subjects", "headcount"],
        default="lab_subjects",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def _print_grids(result: GenerateTimetableResponse) -> None:
    request = sample_request()
    subjects = {item.id: item for item in request.subjects}
    policy = result.settings_used.schedule_policy

    for section in request.sections:
        print(f"\nYear {section.year} / Sem {section.semester} / Section {section.name}")
        header = "DAY  " + "".join(
            ("LUNCH" if period == policy.lunch_period else PERIOD_TIMES.get(period, f"P{period}"))[:CELL_WIDTH - 1].ljust(CELL_WIDTH)
            for period in policy.periods
        )
        print(header)
        for day in policy.working_days_for(section.year, section.working_days):
            cells = []
            for period in policy.periods:
                slot_entries = [
                    entry
                    for entry in result.entries
                    if entry.section_id == section.id and entry.day == day and entry.period == period
                ]
                labels = [
                    subjects[entry.subject_id].label + (f"({entry.batch[-1]})" if entry.batch else "")
                    for entry in slot_entries
                ]
                cells.append("/".join(labels)[:CELL_WIDTH - 1].ljust(CELL_WIDTH) if labels else "-".ljust(CELL_WIDTH))
            print(f"{day:<5}" + "".join(cells))


def main() -> None:
    args = _parse_args()
    configure_logging(args.log_level)
    settings = GenerationSettings(random_seed=args.seed, batch_strategy=args.batch_strategy)
    result = generate_timetable(sample_request(), settings)

    _print_grids(result)
    print(f"\nEntries: {len(result.entries)}  Unscheduled periods: {result.unscheduled_count}  Unfilled gaps: {result.unfilled_gaps}")
    for item in result.unscheduled:
        batch = f" {item.batch}" if item.batch else ""
        print(f"  - {item.subject_code} section={item.section_id}{batch}: {item.unscheduled} of {item.required} ({item.reason})")
    logging.getLogger(__name__).info("Sample generation completed in %sms", result.runtime_ms)


if __name__ == "__main__":
    main()
