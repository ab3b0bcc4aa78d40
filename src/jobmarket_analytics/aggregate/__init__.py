"""Aggregation helpers.

This package reduces raw job-count observations into the read-optimized
shapes the dashboard renders: per-category statistics, latest-value tiles,
chart series, cross-category summaries, and category colors. Everything here
is a pure function of its inputs.
"""
