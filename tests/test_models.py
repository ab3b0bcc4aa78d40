from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from jobmarket_analytics.models import (
    CategoryStats,
    ExperienceLevel,
    FilterCriteria,
    JobCountRecord,
    MetricType,
    SalaryRange,
)


def _payload(**overrides: object) -> dict[str, object]:
    rec: dict[str, object] = {
        "id": 17,
        "category": "java",
        "count": 1234,
        "fetchedAt": "2025-03-01T06:00:00",
        "location": "all-locations",
        "metricType": "TOTAL",
    }
    rec.update(overrides)
    return rec


def test_job_count_record_parses_wire_payload() -> None:
    rec = JobCountRecord.model_validate(_payload())
    assert rec.fetched_at == datetime(2025, 3, 1, 6, tzinfo=timezone.utc)
    assert rec.metric_type is MetricType.TOTAL
    assert rec.model_dump(by_alias=True)["fetchedAt"] == rec.fetched_at


def test_job_count_record_ignores_unknown_fields() -> None:
    rec = JobCountRecord.model_validate(_payload(city="wroclaw"))
    assert not hasattr(rec, "city")


def test_job_count_record_rejects_negative_count() -> None:
    with pytest.raises(ValidationError):
        JobCountRecord.model_validate(_payload(count=-1))


def test_job_count_record_rejects_bad_timestamp() -> None:
    with pytest.raises(ValidationError):
        JobCountRecord.model_validate(_payload(fetchedAt="yesterday"))


def test_job_count_record_rejects_unknown_metric() -> None:
    with pytest.raises(ValidationError):
        JobCountRecord.model_validate(_payload(metricType="ONSITE"))


def test_job_count_record_is_immutable() -> None:
    rec = JobCountRecord.model_validate(_payload())
    with pytest.raises(ValidationError):
        rec.count = 5  # type: ignore[misc]


def test_filter_criteria_accepts_snake_and_camel_keys() -> None:
    a = FilterCriteria(experience_level=ExperienceLevel.MID, date_range={"start": date(2025, 1, 1)})
    b = FilterCriteria.model_validate({"experienceLevel": "MID", "dateRange": {"start": "2025-01-01"}})
    assert a == b


def test_enum_labels_and_salary_bounds() -> None:
    assert MetricType.REMOTE_WITH_SALARY.label == "Remote + Salary"
    assert ExperienceLevel.SENIOR.label == "Senior"
    assert SalaryRange.UNDER_25K.label == "< 25k"
    assert (SalaryRange.UNDER_25K.min_salary, SalaryRange.UNDER_25K.max_salary) == (None, 25000)
    assert (SalaryRange.RANGE_25_30K.min_salary, SalaryRange.RANGE_25_30K.max_salary) == (25000, 30000)
    assert (SalaryRange.OVER_30K.min_salary, SalaryRange.OVER_30K.max_salary) == (30000, None)


def test_category_stats_dumps_camel_case() -> None:
    stats = CategoryStats(category="java", records=[], latest_count=0, previous_count=0, change_percent=0.0)
    dumped = stats.model_dump(mode="json", by_alias=True)
    assert set(dumped) == {"category", "records", "latestCount", "previousCount", "changePercent"}


def test_naive_fetched_at_is_read_as_utc() -> None:
    naive = JobCountRecord.model_validate(_payload())
    aware = JobCountRecord.model_validate(_payload(fetchedAt="2025-03-01T08:00:00+02:00"))
    assert naive.fetched_at.tzinfo is timezone.utc
    assert aware.fetched_at.utcoffset() == timedelta(hours=2)
    assert naive.fetched_at == aware.fetched_at
