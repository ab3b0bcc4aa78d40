"""Cross-category summaries and trend presentation helpers.

These build the figures shown around the chart: the min/max/average row for
the selected category, and the totals across all categories for a query.
"""
from __future__ import annotations

from typing import Literal, Mapping

import pandas as pd

from jobmarket_analytics.models import CategoryStats, CountRange, DashboardSummary, TopPerformer

Trend = Literal["up", "down", "flat"]


def count_range(stats: CategoryStats) -> CountRange:
    """Return min, max and average of the counts in `stats.records`.

    Args:
        stats: Summary produced by `compute_category_stats`.

    Returns:
        `CountRange`; all zeros when there are no records.
    """
    if not stats.records:
        return CountRange(data_points=0, min_count=0, max_count=0, avg_count=0.0)

    counts = pd.Series([r.count for r in stats.records], dtype="int64")
    return CountRange(
        data_points=int(counts.size),
        min_count=int(counts.min()),
        max_count=int(counts.max()),
        avg_count=float(counts.mean()),
    )


def trend_direction(change_percent: float) -> Trend:
    if change_percent > 0:
        return "up"
    if change_percent < 0:
        return "down"
    return "flat"


def format_change(change_percent: float) -> str:
    """Signed one-decimal percentage, e.g. '+12.5%', '-8.3%', '0.0%'."""
    sign = "+" if change_percent > 0 else ""
    return f"{sign}{change_percent:.1f}%"


def build_dashboard_summary(stats_by_category: Mapping[str, CategoryStats]) -> DashboardSummary:
    """Aggregate per-category stats into dashboard-wide totals.

    Categories without records are left out entirely.

    Args:
        stats_by_category: Mapping of category slug to its stats.

    Returns:
        `DashboardSummary` with the summed latest counts, the mean change,
        the category with the largest change (first one wins on ties), and
        the number of categories counted.
    """
    rows = [
        {"category": slug, "latest_count": s.latest_count, "change_percent": s.change_percent}
        for slug, s in stats_by_category.items()
        if s.records
    ]
    if not rows:
        return DashboardSummary(total_jobs=0, average_growth=0.0, top_performer=None, category_count=0)

    pdf = pd.DataFrame(rows)
    best = pdf.loc[pdf["change_percent"].idxmax()]

    return DashboardSummary(
        total_jobs=int(pdf["latest_count"].sum()),
        average_growth=float(pdf["change_percent"].mean()),
        top_performer=TopPerformer(
            category=str(best["category"]),
            change_percent=float(best["change_percent"]),
        ),
        category_count=len(pdf),
    )
