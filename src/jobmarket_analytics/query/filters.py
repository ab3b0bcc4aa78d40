"""Facet filter builder.

Turns an optional `FilterCriteria` into the ordered list of query terms the
stats endpoints expect. The ordering is fixed so the encoded query can be used
as a cache key.
"""
from __future__ import annotations

from datetime import date, datetime
from urllib.parse import urlencode

from jobmarket_analytics.models import FilterCriteria, MetricType

QueryTerms = list[tuple[str, str]]

EMPTY_CRITERIA = FilterCriteria()


def format_day(value: date) -> str:
    """Return `value` as `YYYY-MM-DD`.

    A `datetime` is truncated in its own zone; it is never shifted to UTC
    first, since that can move the calendar day.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _facet_terms(criteria: FilterCriteria) -> QueryTerms:
    metric_type = criteria.metric_type or MetricType.TOTAL
    terms: QueryTerms = [("metricType", metric_type.value)]

    if criteria.city:
        terms.append(("city", criteria.city))
    if criteria.experience_level is not None:
        terms.append(("experienceLevel", criteria.experience_level.value))
    if criteria.salary_range is not None:
        terms.append(("salaryRange", criteria.salary_range.value))
    return terms


def _require_category(category: str) -> None:
    if not category or not category.strip():
        raise ValueError("category slug must be a non-empty string")


def build_filter_query(category: str, criteria: FilterCriteria | None = None) -> QueryTerms:
    """Return the ordered query terms for a category's historical stats.

    Args:
        category: Category slug the query is for (the endpoint path, not a term).
        criteria: Optional facet selection; `None` means no restriction.

    Returns:
        List of `(key, value)` pairs. `metricType` is always first (TOTAL when
        unset), followed by `city`, `experienceLevel`, `salaryRange`,
        `startDate` and `endDate` for the facets that are present.

    Raises:
        ValueError: if `category` is empty.
    """
    _require_category(category)
    criteria = criteria or EMPTY_CRITERIA
    terms = _facet_terms(criteria)

    date_range = criteria.date_range
    if date_range is not None:
        if date_range.start is not None:
            terms.append(("startDate", format_day(date_range.start)))
        if date_range.end is not None:
            terms.append(("endDate", format_day(date_range.end)))
    return terms


def build_latest_query(category: str, criteria: FilterCriteria | None = None) -> QueryTerms:
    """Same as `build_filter_query` minus the date terms.

    The latest-count endpoint always looks at the newest record, so a date
    range in `criteria` is ignored.
    """
    _require_category(category)
    return _facet_terms(criteria or EMPTY_CRITERIA)


def encode_query(terms: QueryTerms) -> str:
    """URL-encode terms in their given order (stable, usable as a cache key)."""
    return urlencode(terms)
