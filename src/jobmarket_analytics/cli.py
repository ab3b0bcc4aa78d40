"""Command-line interface for querying job-market trends.

Provides subcommands: `categories`, `cities`, `stats`, `latest` and
`summary`. Each command is implemented as a `cmd_*` function that accepts an
argparse namespace and prints JSON to stdout.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any

import requests  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from jobmarket_analytics.config import get_settings
from jobmarket_analytics.logging_config import configure_logging
from jobmarket_analytics.models import (
    DateRange,
    ExperienceLevel,
    FilterCriteria,
    MetricType,
    SalaryRange,
)
from jobmarket_analytics.query.filters import build_filter_query, encode_query
from jobmarket_analytics.aggregate.stats import compute_category_stats, compute_latest_count
from jobmarket_analytics.aggregate.series import shape_series
from jobmarket_analytics.aggregate.summary import (
    build_dashboard_summary,
    count_range,
    format_change,
    trend_direction,
)
from jobmarket_analytics.aggregate.colors import resolve_color
from jobmarket_analytics.ingest.api_client import (
    fetch_categories,
    fetch_cities,
    fetch_latest,
    fetch_observations,
)
from jobmarket_analytics.pipeline import load_category_stats

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    """Build `FilterCriteria` from the shared facet options.

    An unset `--metric-type` falls back to the configured default.
    """
    start, end = args.start_date, args.end_date
    date_range = DateRange(start=start, end=end) if (start or end) else None
    return FilterCriteria(
        date_range=date_range,
        metric_type=args.metric_type or get_settings().default_metric_type,
        city=args.city,
        experience_level=args.experience_level,
        salary_range=args.salary_range,
    )


def _dump(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, list):
        return [_dump(o) for o in obj]
    if isinstance(obj, dict):
        return {k: _dump(v) for k, v in obj.items()}
    return obj


def _emit(payload: Any) -> None:
    json.dump(_dump(payload), sys.stdout, indent=2)
    sys.stdout.write("\n")


# --------------------------------------------------
# Commands
# --------------------------------------------------
def cmd_categories(_: argparse.Namespace) -> None:
    """Print all tracked categories."""
    _emit(fetch_categories())


def cmd_cities(_: argparse.Namespace) -> None:
    """Print all tracked cities."""
    _emit(fetch_cities())


def cmd_stats(args: argparse.Namespace) -> None:
    """Print stats, range figures, chart series and color for one category.

    Args:
        args: argparse namespace with `category` and the facet options.
    """
    criteria = _criteria_from_args(args)
    log.info("Query: %s", encode_query(build_filter_query(args.category, criteria)))

    records = fetch_observations(args.category, criteria)
    stats = compute_category_stats(args.category, records)
    if not stats.records:
        log.warning("No data for category=%s with the selected filters", args.category)

    _emit({
        "stats": stats,
        "range": count_range(stats),
        "trend": trend_direction(stats.change_percent),
        "change": format_change(stats.change_percent),
        "series": shape_series(stats),
        "color": resolve_color(args.category),
    })


def cmd_latest(args: argparse.Namespace) -> None:
    """Print the latest count and its delta for one category.

    By default the delta is computed locally from the filtered history so it
    follows the same date range as `stats`; `--server` asks the API instead.
    """
    criteria = _criteria_from_args(args)
    if args.server:
        _emit(fetch_latest(args.category, criteria))
        return

    latest = compute_latest_count(args.category, fetch_observations(args.category, criteria))
    if latest is None:
        log.warning("No data for category=%s with the selected filters", args.category)
    _emit(latest)


def cmd_summary(args: argparse.Namespace) -> None:
    """Print dashboard-wide totals across all active categories."""
    criteria = _criteria_from_args(args)
    stats_by_category = load_category_stats(fetch_categories(), criteria)
    _emit({
        "summary": build_dashboard_summary(stats_by_category),
        "categories": {
            slug: {
                "latestCount": s.latest_count,
                "changePercent": s.change_percent,
                "change": format_change(s.change_percent),
            }
            for slug, s in stats_by_category.items()
        },
    })


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


def _add_facet_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--metric-type", type=MetricType, choices=_values(MetricType), default=None)
    p.add_argument("--city", default=None)
    p.add_argument("--experience-level", type=ExperienceLevel, choices=_values(ExperienceLevel), default=None)
    p.add_argument("--salary-range", type=SalaryRange, choices=_values(SalaryRange), default=None)
    p.add_argument("--start-date", type=date.fromisoformat, default=None)
    p.add_argument("--end-date", type=date.fromisoformat, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="jobmarket")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("categories")
    sub.add_parser("cities")

    p_stats = sub.add_parser("stats")
    p_stats.add_argument("category")
    _add_facet_options(p_stats)

    p_latest = sub.add_parser("latest")
    p_latest.add_argument("category")
    p_latest.add_argument("--server", action="store_true")
    _add_facet_options(p_latest)

    p_summary = sub.add_parser("summary")
    _add_facet_options(p_summary)

    return p


COMMANDS = {
    "categories": cmd_categories,
    "cities": cmd_cities,
    "stats": cmd_stats,
    "latest": cmd_latest,
    "summary": cmd_summary,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(level=settings.log_level)

    try:
        COMMANDS[args.cmd](args)
    except requests.RequestException as exc:
        log.error("Request to %s failed: %s", settings.api_base_url, exc)
        return 1
    except ValidationError as exc:
        log.error("Unexpected response from %s: %s", settings.api_base_url, exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
