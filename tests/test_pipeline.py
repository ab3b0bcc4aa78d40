from __future__ import annotations

from datetime import datetime

import pytest
import requests
from pydantic import ValidationError

from jobmarket_analytics.ingest import api_client
from jobmarket_analytics.models import Category, FilterCriteria, JobCountRecord, MetricType
from jobmarket_analytics.pipeline import active_slugs, load_category_stats


def _records(category: str, *counts: int) -> list[JobCountRecord]:
    return [
        JobCountRecord(
            id=i,
            category=category,
            count=c,
            fetched_at=datetime(2025, 5, i + 1),
            location="all-locations",
            metric_type=MetricType.TOTAL,
        )
        for i, c in enumerate(counts)
    ]


DATA = {
    "java": _records("java", 100, 120),
    "python": _records("python", 80),
    "empty": [],
}


def _fetch(category: str, criteria: FilterCriteria | None) -> list[JobCountRecord]:
    if category == "broken":
        raise requests.ConnectionError("connection refused")
    return DATA[category]


def test_failed_and_empty_categories_are_omitted() -> None:
    out = load_category_stats(["java", "broken", "empty", "python"], fetch=_fetch)

    assert list(out) == ["java", "python"]
    assert out["java"].latest_count == 120
    assert out["java"].change_percent == 20.0
    assert out["python"].change_percent == 0


def test_inactive_categories_are_not_fetched() -> None:
    fetched: list[str] = []

    def fetch(category: str, criteria: FilterCriteria | None) -> list[JobCountRecord]:
        fetched.append(category)
        return DATA[category]

    categories = [
        Category(id=1, name="Java", slug="java", active=True),
        Category(id=2, name="Python", slug="python", active=False),
    ]
    out = load_category_stats(categories, fetch=fetch)

    assert list(out) == ["java"]
    assert fetched == ["java"]


def test_criteria_is_passed_to_every_fetch() -> None:
    seen: list[FilterCriteria | None] = []
    criteria = FilterCriteria(metric_type=MetricType.REMOTE, city="krakow")

    def fetch(category: str, c: FilterCriteria | None) -> list[JobCountRecord]:
        seen.append(c)
        return DATA[category]

    load_category_stats(["java", "python"], criteria, fetch=fetch)
    assert seen == [criteria, criteria]


def test_no_categories() -> None:
    assert load_category_stats([], fetch=_fetch) == {}


def test_active_slugs_dedupes_and_keeps_order() -> None:
    assert active_slugs(["ai", "java", "ai", "data"]) == ["ai", "java", "data"]


def _invalid_payload_error() -> ValidationError:
    try:
        JobCountRecord.model_validate({"id": 1, "category": "data", "count": -1})
    except ValidationError as exc:
        return exc
    raise AssertionError("payload unexpectedly validated")


def test_validation_error_in_one_category_is_isolated() -> None:
    def fetch(category: str, criteria: FilterCriteria | None) -> list[JobCountRecord]:
        if category == "data":
            raise _invalid_payload_error()
        return DATA[category]

    out = load_category_stats(["data", "java"], fetch=fetch)
    assert list(out) == ["java"]


def test_unexpected_error_in_one_category_is_isolated() -> None:
    def fetch(category: str, criteria: FilterCriteria | None) -> list[JobCountRecord]:
        if category == "bad":
            raise ValueError("category slug must be a non-empty string")
        return DATA[category]

    out = load_category_stats(["java", "bad", "python"], fetch=fetch)
    assert list(out) == ["java", "python"]
    assert out["java"].latest_count == 120


def test_blank_slugs_never_reach_the_api(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[str] = []

    def fake_get_json(path: str, params: object, settings: object) -> list[dict[str, object]]:
        requested.append(path)
        return [{
            "id": 1,
            "category": "java",
            "count": 42,
            "fetchedAt": "2025-05-01T06:00:00",
            "location": "all-locations",
            "metricType": "TOTAL",
        }]

    monkeypatch.setattr(api_client, "_get_json", fake_get_json)
    categories = [
        Category(id=1, name="Java", slug="java", active=True),
        Category(id=2, name="Blank", slug=" ", active=True),
    ]

    out = load_category_stats(categories)

    assert list(out) == ["java"]
    assert out["java"].latest_count == 42
    assert requested == ["/api/stats/java"]


def test_active_slugs_drops_blank_slugs() -> None:
    assert active_slugs(["", "  ", "ai", Category(id=1, name="x", slug="", active=True)]) == ["ai"]
