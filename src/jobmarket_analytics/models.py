"""Pydantic models shared by the query builder, reducers and API client.

Wire payloads from the job-market API use camelCase keys (`fetchedAt`,
`metricType`); models expose snake_case attributes and accept either form.
Dump with `by_alias=True` to get the wire shape back.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MetricType(str, Enum):
    """Which job count a record measures. Exactly one is selected per query."""
    TOTAL = "TOTAL"
    WITH_SALARY = "WITH_SALARY"
    REMOTE = "REMOTE"
    REMOTE_WITH_SALARY = "REMOTE_WITH_SALARY"

    @property
    def label(self) -> str:
        return METRIC_TYPE_LABELS[self]


class ExperienceLevel(str, Enum):
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"

    @property
    def label(self) -> str:
        return EXPERIENCE_LEVEL_LABELS[self]


class SalaryRange(str, Enum):
    """Monthly salary bands; bounds are in PLN, `None` means open-ended."""
    UNDER_25K = "UNDER_25K"
    RANGE_25_30K = "RANGE_25_30K"
    OVER_30K = "OVER_30K"

    @property
    def label(self) -> str:
        return SALARY_RANGE_LABELS[self]

    @property
    def min_salary(self) -> int | None:
        return SALARY_RANGE_BOUNDS[self][0]

    @property
    def max_salary(self) -> int | None:
        return SALARY_RANGE_BOUNDS[self][1]


METRIC_TYPE_LABELS = {
    MetricType.TOTAL: "Total",
    MetricType.WITH_SALARY: "With Salary",
    MetricType.REMOTE: "Remote",
    MetricType.REMOTE_WITH_SALARY: "Remote + Salary",
}

EXPERIENCE_LEVEL_LABELS = {
    ExperienceLevel.JUNIOR: "Junior",
    ExperienceLevel.MID: "Mid",
    ExperienceLevel.SENIOR: "Senior",
}

SALARY_RANGE_LABELS = {
    SalaryRange.UNDER_25K: "< 25k",
    SalaryRange.RANGE_25_30K: "25-30k",
    SalaryRange.OVER_30K: "> 30k",
}

SALARY_RANGE_BOUNDS: dict[SalaryRange, tuple[int | None, int | None]] = {
    SalaryRange.UNDER_25K: (None, 25000),
    SalaryRange.RANGE_25_30K: (25000, 30000),
    SalaryRange.OVER_30K: (30000, None),
}


def _assume_utc(value: datetime) -> datetime:
    """Treat naive timestamps from the API as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class JobCountRecord(_WireModel):
    """One fetched job count for a category at a point in time.

    Attributes:
        id: Record identifier assigned by the API.
        category: Category slug (e.g. 'java').
        count: Number of open offers, never negative.
        fetched_at: When the count was scraped; naive values are read as UTC.
        location: Location slug the count applies to ('all-locations', 'remote', a city).
        metric_type: Which count this is.
    """
    id: int
    category: str
    count: int = Field(..., ge=0)
    fetched_at: UtcDatetime
    location: str
    metric_type: MetricType


class Category(_WireModel):
    id: int
    name: str
    slug: str
    active: bool = True


class City(_WireModel):
    id: int
    name: str
    slug: str
    active: bool = True


class DateRange(_WireModel):
    """Inclusive calendar-day bounds; either side may be open."""
    start: date | None = None
    end: date | None = None


class FilterCriteria(_WireModel):
    """Optional facet selection. Every unset field means "no restriction"."""
    date_range: DateRange | None = None
    metric_type: MetricType | None = None
    city: str | None = None
    experience_level: ExperienceLevel | None = None
    salary_range: SalaryRange | None = None


class CategoryStats(_WireModel):
    """Per-category summary of one query's observations, newest first."""
    category: str
    records: list[JobCountRecord]
    latest_count: int
    previous_count: int
    change_percent: float


class LatestCount(_WireModel):
    """Most recent value and its delta; deltas are `None` without history."""
    category: str
    metric_type: MetricType
    count: int
    fetched_at: UtcDatetime
    change_from_previous: int | None = None
    percentage_change: float | None = None


class SeriesPoint(_WireModel):
    label: str
    value: int
    fetched_at: UtcDatetime


class CategoryColor(_WireModel):
    slug: str
    primary: str
    gradient: str
    glow: str


class CountRange(_WireModel):
    """Min / max / average over the counts in one `CategoryStats`."""
    data_points: int = Field(..., ge=0)
    min_count: int
    max_count: int
    avg_count: float


class TopPerformer(_WireModel):
    category: str
    change_percent: float


class DashboardSummary(_WireModel):
    """Totals across every category that returned data for a query."""
    total_jobs: int = Field(..., ge=0)
    average_growth: float
    top_performer: TopPerformer | None = None
    category_count: int = Field(..., ge=0)
