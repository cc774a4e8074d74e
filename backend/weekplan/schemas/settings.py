from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

DAY_VALUES = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

DEFAULT_DAYS = ["MON", "TUE", "WED", "THU", "FRI", "SAT"]
# Seven columns: four periods, lunch, two periods.
DEFAULT_PERIODS = [1, 2, 3, 4, 5, 6, 7]
DEFAULT_LUNCH_PERIOD = 5

PERIOD_TIMES = {
    1: "9.40am to 10.40am",
    2: "10.40am to 11.40am",
    3: "11.40am to 12.40pm",
    4: "12.40pm to 1.40pm",
    5: "1:40pm to 2:10pm",
    6: "2:10pm to 3:10pm",
    7: "3:10pm to 4:10pm",
}

DEFAULT_NON_WORKING_DAYS_BY_YEAR: dict[int, list[str]] = {4: ["FRI", "SAT"]}


def normalize_day(value: str) -> str:
    day = value.strip().upper()[:3]
    if day not in DAY_VALUES:
        raise ValueError(f"Invalid day value: {value}")
    return day


class SchedulePolicy(BaseModel):
    days: list[str] = Field(default_factory=lambda: list(DEFAULT_DAYS), min_length=1, max_length=7)
    periods: list[int] = Field(default_factory=lambda: list(DEFAULT_PERIODS), min_length=2, max_length=16)
    lunch_period: int = DEFAULT_LUNCH_PERIOD
    non_working_days_by_year: dict[int, list[str]] = Field(
        default_factory=lambda: {year: list(days) for year, days in DEFAULT_NON_WORKING_DAYS_BY_YEAR.items()}
    )

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for item in value:
            day = normalize_day(item)
            if day in normalized:
                raise ValueError(f"Duplicate day entry: {day}")
            normalized.append(day)
        return normalized

    @field_validator("periods")
    @classmethod
    def validate_periods(cls, value: list[int]) -> list[int]:
        if any(item < 1 for item in value):
            raise ValueError("Periods must be positive integers")
        if len(set(value)) != len(value):
            raise ValueError("Duplicate period entries")
        return sorted(value)

    @field_validator("non_working_days_by_year")
    @classmethod
    def validate_non_working_days(cls, value: dict[int, list[str]]) -> dict[int, list[str]]:
        return {year: [normalize_day(day) for day in days] for year, days in value.items()}

    @model_validator(mode="after")
    def validate_lunch(self) -> "SchedulePolicy":
        if self.lunch_period not in self.periods:
            raise ValueError("lunch_period must be one of the configured periods")
        if not self.pre_lunch_periods:
            raise ValueError("At least one period must precede lunch")
        return self

    @property
    def teaching_periods(self) -> list[int]:
        return [period for period in self.periods if period != self.lunch_period]

    @property
    def pre_lunch_periods(self) -> list[int]:
        return [period for period in self.periods if period < self.lunch_period]

    @property
    def post_lunch_periods(self) -> list[int]:
        return [period for period in self.periods if period > self.lunch_period]

    def working_days_for(self, year: int, explicit: list[str] | None = None) -> list[str]:
        """Days a cohort attends, in calendar order.

        An explicit per-section list wins over the year-based exclusions.
        """
        if explicit:
            return [day for day in self.days if day in explicit]
        excluded = set(self.non_working_days_by_year.get(year, []))
        return [day for day in self.days if day not in excluded]
