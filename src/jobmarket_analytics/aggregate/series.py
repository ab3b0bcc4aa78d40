"""Chart series shaping.

Turns a `CategoryStats` into an oldest-first list of labelled points, and
optionally into a small pandas frame for the chart renderer.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable

import pandas as pd

from jobmarket_analytics.models import CategoryStats, SeriesPoint

LabelFormat = Callable[[datetime], str]

SERIES_COLUMNS = ["fetched_at", "label", "value"]


def format_label(moment: datetime) -> str:
    """Short month/day label, e.g. 'Jan 5'."""
    return f"{moment:%b} {moment.day}"


def shape_series(stats: CategoryStats, label_format: LabelFormat | None = None) -> list[SeriesPoint]:
    """Return the stats' records as chronologically ascending chart points.

    The records are re-sorted by `(fetched_at, id)` rather than reversed, so
    equal timestamps keep a stable order.

    Args:
        stats: Summary produced by `compute_category_stats`.
        label_format: Optional callable rendering a timestamp as a label;
            defaults to `format_label`.

    Returns:
        One `SeriesPoint` per record; empty when `stats.records` is empty.
    """
    fmt = label_format or format_label
    ordered = sorted(stats.records, key=lambda r: (r.fetched_at, r.id))
    return [
        SeriesPoint(label=fmt(r.fetched_at), value=r.count, fetched_at=r.fetched_at)
        for r in ordered
    ]


def series_frame(points: list[SeriesPoint]) -> pd.DataFrame:
    """Return the points as a DataFrame with `fetched_at`, `label`, `value`.

    Row order follows `points`; an empty list gives an empty frame with the
    same columns.
    """
    if not points:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    pdf = pd.DataFrame([p.model_dump(include=set(SERIES_COLUMNS)) for p in points])
    pdf["fetched_at"] = pd.to_datetime(pdf["fetched_at"])
    pdf["value"] = pdf["value"].astype(int)
    return pdf[SERIES_COLUMNS]
