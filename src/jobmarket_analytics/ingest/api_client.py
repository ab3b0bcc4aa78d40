"""Thin client for the job-market REST API.

All HTTP details live here; callers get validated models back. Errors from
the server surface as `requests.HTTPError`, malformed payloads as
`pydantic.ValidationError`.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import certifi
import requests  # type: ignore[import-untyped]
from pydantic import TypeAdapter

from jobmarket_analytics.config import Settings, get_settings
from jobmarket_analytics.models import Category, City, FilterCriteria, JobCountRecord, LatestCount
from jobmarket_analytics.query.filters import QueryTerms, build_filter_query, build_latest_query

log = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[JobCountRecord])
_CATEGORIES = TypeAdapter(list[Category])
_CITIES = TypeAdapter(list[City])


def _get_json(path: str, params: QueryTerms | None, settings: Settings) -> Any:
    """Do one HTTP GET against the API and return the decoded JSON body.

    Args:
        path: Endpoint path starting with '/'.
        params: Ordered query terms, sent in the given order.
        settings: Provides the base URL and timeout.

    Raises:
        requests.HTTPError: on a non-2xx response.
    """
    url = f"{settings.api_base_url}{path}"
    log.debug("GET %s params=%s", url, params)
    resp = requests.get(
        url,
        params=params,
        headers={"Accept": "application/json"},
        timeout=settings.request_timeout,
        verify=certifi.where(),
    )
    resp.raise_for_status()
    return resp.json()


def _stats_path(category: str) -> str:
    return f"/api/stats/{quote(category, safe='')}"


def fetch_observations(
    category: str,
    criteria: FilterCriteria | None = None,
    settings: Settings | None = None,
) -> list[JobCountRecord]:
    """Fetch the raw job-count history for one category.

    Args:
        category: Category slug.
        criteria: Optional facet selection, encoded with `build_filter_query`.
        settings: Optional settings; read from the environment when omitted.

    Returns:
        Validated records in the order the API returned them.
    """
    s = settings or get_settings()
    terms = build_filter_query(category, criteria)
    payload = _get_json(_stats_path(category), terms, s)
    records = _RECORDS.validate_python(payload)
    log.info("Fetched %d records for category=%s", len(records), category)
    return records


def fetch_latest(
    category: str,
    criteria: FilterCriteria | None = None,
    settings: Settings | None = None,
) -> LatestCount:
    """Fetch the server-computed latest count for one category."""
    s = settings or get_settings()
    terms = build_latest_query(category, criteria)
    payload = _get_json(f"{_stats_path(category)}/latest", terms, s)
    return LatestCount.model_validate(payload)


def fetch_categories(settings: Settings | None = None) -> list[Category]:
    """Fetch all tracked categories (active and inactive)."""
    s = settings or get_settings()
    return _CATEGORIES.validate_python(_get_json("/api/categories", None, s))


def fetch_cities(settings: Settings | None = None) -> list[City]:
    """Fetch all tracked cities (active and inactive)."""
    s = settings or get_settings()
    return _CITIES.validate_python(_get_json("/api/cities", None, s))
