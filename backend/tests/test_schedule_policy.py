import pytest
from pydantic import ValidationError

from weekplan.core.config import Settings
from weekplan.schemas.settings import SchedulePolicy, normalize_day


def test_default_calendar():
    policy = SchedulePolicy()

    assert policy.days == ["MON", "TUE", "WED", "THU", "FRI", "SAT"]
    assert policy.pre_lunch_periods == [1, 2, 3, 4]
    assert policy.post_lunch_periods == [6, 7]
    assert policy.teaching_periods == [1, 2, 3, 4, 6, 7]


def test_working_days_by_year():
    policy = SchedulePolicy()

    assert policy.working_days_for(4) == ["MON", "TUE", "WED", "THU"]
    assert policy.working_days_for(3) == policy.days
    assert policy.working_days_for(4, ["SAT", "MON"]) == ["MON", "SAT"]


def test_day_names_are_normalized():
    assert normalize_day(" monday ") == "MON"
    with pytest.raises(ValueError):
        normalize_day("Someday")


def test_lunch_must_be_a_configured_period():
    with pytest.raises(ValidationError):
        SchedulePolicy(lunch_period=9)
    with pytest.raises(ValidationError):
        SchedulePolicy(lunch_period=1)


def test_duplicate_days_are_rejected():
    with pytest.raises(ValidationError):
        SchedulePolicy(days=["MON", "monday"])


def test_cors_origins_accept_csv_and_json():
    assert Settings(cors_origins="http://a.test, http://b.test").cors_origins == ["http://a.test", "http://b.test"]
    assert Settings(cors_origins='["http://c.test"]').cors_origins == ["http://c.test"]


def test_log_level_is_upper_cased():
    assert Settings(log_level=" debug ").log_level == "DEBUG"
