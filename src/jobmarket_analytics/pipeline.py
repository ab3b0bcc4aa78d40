"""Fetch-and-reduce orchestration across categories.

Module notes:
- Each category is fetched and reduced in its own delayed task.
- A failing or empty category is logged and left out; it never affects the
  others.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable
from typing import cast, Any as TypingAny

import requests  # type: ignore[import-untyped]
from dask import delayed, compute  # type: ignore[attr-defined]
from pydantic import ValidationError

from jobmarket_analytics.aggregate.stats import compute_category_stats
from jobmarket_analytics.models import Category, CategoryStats, FilterCriteria, JobCountRecord

log = logging.getLogger(__name__)

FetchObservations = Callable[[str, FilterCriteria | None], list[JobCountRecord]]

FETCH_ERRORS = (requests.RequestException, ValidationError)


def _default_fetch(category: str, criteria: FilterCriteria | None) -> list[JobCountRecord]:
    from jobmarket_analytics.ingest.api_client import fetch_observations

    return fetch_observations(category, criteria)


def _process_category(
    slug: str,
    criteria: FilterCriteria | None,
    fetch: FetchObservations,
) -> CategoryStats | None:
    """Runs inside a worker (delayed task).

    Returns the category's stats, or `None` when the fetch or the reduction
    failed, or the fetch came back empty. Errors never leave the task.
    """
    try:
        records = fetch(slug, criteria)
        if not records:
            log.info("Skipping category=%s: no records for this filter", slug)
            return None
        return compute_category_stats(slug, records)
    except FETCH_ERRORS as exc:
        log.warning("Skipping category=%s: fetch failed (%s)", slug, exc)
    except Exception:
        log.exception("Skipping category=%s: unexpected error", slug)
    return None


def active_slugs(categories: Iterable[Category | str]) -> list[str]:
    """Return slugs of active categories in order, dropping blanks and duplicates."""
    seen: dict[str, None] = {}
    for c in categories:
        if isinstance(c, str):
            slug = c
        elif c.active:
            slug = c.slug
        else:
            continue
        if slug.strip():
            seen.setdefault(slug, None)
    return list(seen)


def load_category_stats(
    categories: Iterable[Category | str],
    criteria: FilterCriteria | None = None,
    fetch: FetchObservations | None = None,
) -> dict[str, CategoryStats]:
    """Fetch and reduce every active category concurrently.

    Args:
        categories: `Category` models (inactive ones are ignored) or bare slugs.
        criteria: Facet selection applied to every category.
        fetch: Observation source; defaults to the HTTP API client.

    Returns:
        Mapping of slug to `CategoryStats` for the categories that returned
        data, in input order.
    """
    slugs = active_slugs(categories)
    if not slugs:
        return {}

    fetch_fn = fetch or _default_fetch
    tasks = [delayed(_process_category)(slug, criteria, fetch_fn) for slug in slugs]

    # `compute` is untyped in our environment; cast to Any before calling
    results = cast(TypingAny, compute)(*tasks, scheduler="threads")

    out = {slug: stats for slug, stats in zip(slugs, results) if stats is not None}
    log.info("Loaded stats for %d of %d categories", len(out), len(slugs))
    return out
