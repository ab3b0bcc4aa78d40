"""Per-category reducers.

Two reducers with deliberately different missing-data policies:

- `compute_category_stats` treats "no history" as a flat trend (0% change).
- `compute_latest_count` treats "no history" as no signal (`None` deltas).

Expectations:
- Input: observations for one category and one filter combination, already
  validated by the API client. Input order is irrelevant and never mutated.
- Ordering: newest first by `fetched_at`; equal timestamps fall back to `id`
  so output is reproducible.
"""
from __future__ import annotations

from typing import Iterable

from jobmarket_analytics.models import CategoryStats, JobCountRecord, LatestCount


def _recency_key(record: JobCountRecord) -> tuple:
    return (record.fetched_at, record.id)


def sort_by_recency(records: Iterable[JobCountRecord]) -> list[JobCountRecord]:
    """Return a new list ordered newest first (ties: higher `id` first)."""
    return sorted(records, key=_recency_key, reverse=True)


def percent_change(latest: int, previous: int) -> float:
    """Return `(latest - previous) / previous * 100`, or 0.0 when `previous` is 0."""
    if previous > 0:
        return (latest - previous) / previous * 100.0
    return 0.0


def compute_category_stats(category: str, records: Iterable[JobCountRecord]) -> CategoryStats:
    """Reduce a category's observations into a `CategoryStats` summary.

    Args:
        category: Category slug the observations belong to.
        records: Observations in any order.

    Returns:
        `CategoryStats` with records newest first. With fewer than two records
        `previous_count` equals `latest_count`, so `change_percent` is 0.
        Empty input gives all zeros; check `records` to detect "no data".
    """
    ordered = sort_by_recency(records)

    latest_count = ordered[0].count if ordered else 0
    previous_count = ordered[1].count if len(ordered) > 1 else latest_count

    return CategoryStats(
        category=category,
        records=ordered,
        latest_count=latest_count,
        previous_count=previous_count,
        change_percent=percent_change(latest_count, previous_count),
    )


def compute_latest_count(category: str, records: Iterable[JobCountRecord]) -> LatestCount | None:
    """Project the most recent observation and its delta to the one before it.

    Only the two newest records are looked at; the full history is not kept.

    Args:
        category: Category slug the observations belong to.
        records: Observations in any order.

    Returns:
        `LatestCount`, or `None` when there are no observations. Both deltas
        are `None` when there is a single observation. A previous count of 0
        gives `percentage_change == 0.0`.
    """
    latest: JobCountRecord | None = None
    previous: JobCountRecord | None = None
    for record in records:
        key = _recency_key(record)
        if latest is None or key > _recency_key(latest):
            latest, previous = record, latest
        elif previous is None or key > _recency_key(previous):
            previous = record

    if latest is None:
        return None

    change: int | None = None
    pct: float | None = None
    if previous is not None:
        change = latest.count - previous.count
        pct = percent_change(latest.count, previous.count)

    return LatestCount(
        category=category,
        metric_type=latest.metric_type,
        count=latest.count,
        fetched_at=latest.fetched_at,
        change_from_previous=change,
        percentage_change=pct,
    )
