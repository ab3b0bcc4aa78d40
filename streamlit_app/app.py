from __future__ import annotations

import altair as alt
import requests
import streamlit as st

from jobmarket_analytics.config import get_settings
from jobmarket_analytics.ingest.api_client import fetch_categories, fetch_cities
from jobmarket_analytics.models import (
    DateRange,
    ExperienceLevel,
    FilterCriteria,
    MetricType,
    SalaryRange,
)
from jobmarket_analytics.pipeline import load_category_stats
from jobmarket_analytics.aggregate.colors import resolve_color
from jobmarket_analytics.aggregate.series import series_frame, shape_series
from jobmarket_analytics.aggregate.summary import (
    build_dashboard_summary,
    count_range,
    format_change,
)

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Job Market Trends", layout="wide")
st.title("📊 Job Market Trends")

settings = get_settings()

try:
    categories = [c for c in fetch_categories(settings) if c.active]
    cities = [c for c in fetch_cities(settings) if c.active]
except requests.RequestException as exc:  # pragma: no cover - runtime failure handling
    st.error(f"Unable to reach the job-market API at {settings.api_base_url}: {exc}")
    st.stop()

if not categories:
    st.warning("No active categories are tracked yet.")
    st.stop()

# =====================================================
# Filters
# =====================================================
with st.sidebar:
    st.header("Filters")
    metric_type = st.selectbox(
        "Metric",
        list(MetricType),
        index=list(MetricType).index(settings.default_metric_type),
        format_func=lambda m: m.label,
    )
    city_names = {c.slug: c.name for c in cities}
    city = st.selectbox(
        "Location",
        [None, *city_names],
        format_func=lambda s: "All Locations" if s is None else city_names[s],
    )
    experience = st.selectbox(
        "Experience",
        [None, *ExperienceLevel],
        format_func=lambda e: "All Levels" if e is None else e.label,
    )
    salary = st.selectbox(
        "Salary",
        [None, *SalaryRange],
        format_func=lambda r: "Any Salary" if r is None else r.label,
    )
    start_date = st.date_input("Start date", value=None)
    end_date = st.date_input("End date", value=None)

criteria = FilterCriteria(
    date_range=DateRange(start=start_date, end=end_date) if (start_date or end_date) else None,
    metric_type=metric_type,
    city=city,
    experience_level=experience,
    salary_range=salary,
)

stats_by_category = load_category_stats(categories, criteria)

# =====================================================
# SECTION 0 — OVERVIEW
# =====================================================
summary = build_dashboard_summary(stats_by_category)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total Jobs", f"{summary.total_jobs:,}")
c2.metric("Average Growth", format_change(summary.average_growth))
c3.metric(
    "Top Performer",
    summary.top_performer.category if summary.top_performer else "N/A",
    format_change(summary.top_performer.change_percent) if summary.top_performer else None,
)
c4.metric("Categories", summary.category_count)

st.divider()

# =====================================================
# SECTION 1 — CATEGORY TREND
# =====================================================
names = {c.slug: c.name for c in categories}
selected = st.radio(
    "Category",
    [c.slug for c in categories],
    horizontal=True,
    format_func=lambda s: names.get(s, s),
)

stats = stats_by_category.get(selected)
if stats is None:
    st.info("No data available for this category yet.")
    st.stop()

color = resolve_color(selected)
st.metric(
    f"{names.get(selected, selected)} · {metric_type.label}",
    f"{stats.latest_count:,}",
    format_change(stats.change_percent),
)

rng = count_range(stats)
r1, r2, r3, r4 = st.columns(4)
r1.metric("Data Points", rng.data_points)
r2.metric("Min Count", f"{rng.min_count:,}")
r3.metric("Max Count", f"{rng.max_count:,}")
r4.metric("Average", f"{rng.avg_count:,.0f}")

df_series = series_frame(shape_series(stats))
chart = (
    alt.Chart(df_series)
    .mark_area(
        line={"color": color.primary},
        color=color.gradient,
        point={"color": color.primary},
    )
    .encode(
        x=alt.X("fetched_at:T", title=None),
        y=alt.Y("value:Q", title="Job offers", scale=alt.Scale(zero=False)),
        tooltip=[alt.Tooltip("label:N", title="Date"), alt.Tooltip("value:Q", title="Jobs", format=",")],
    )
    .properties(height=360)
)
st.altair_chart(chart, use_container_width=True)
