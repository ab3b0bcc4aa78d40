"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (optionally from a `.env` file at the project
root) and validates the numeric and enumerated ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

from jobmarket_analytics.models import MetricType

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_API_URL = "http://localhost:8080"


@dataclass(frozen=True)
class Settings:
    """Container for client configuration read from the environment.

    Attributes:
        api_base_url: Base URL of the job-market API (no trailing slash).
        request_timeout: HTTP timeout in seconds.
        log_level: Numeric logging level.
        default_metric_type: Metric type used when a query does not pick one.
    """
    api_base_url: str
    request_timeout: float
    log_level: int
    default_metric_type: MetricType


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `JOBMARKET_TIMEOUT`, `JOBMARKET_LOG_LEVEL` or
            `JOBMARKET_METRIC_TYPE` hold invalid values.
    """
    api_base_url = os.getenv("JOBMARKET_API_URL", DEFAULT_API_URL).strip().rstrip("/")
    raw_timeout = os.getenv("JOBMARKET_TIMEOUT", "30").strip()
    raw_level = os.getenv("JOBMARKET_LOG_LEVEL", "INFO").strip().upper()
    raw_metric = os.getenv("JOBMARKET_METRIC_TYPE", MetricType.TOTAL.value).strip().upper()

    try:
        request_timeout = float(raw_timeout)
    except ValueError:
        raise RuntimeError(
            f"JOBMARKET_TIMEOUT must be a number of seconds, got {raw_timeout!r}."
        ) from None
    if request_timeout <= 0:
        raise RuntimeError("JOBMARKET_TIMEOUT must be positive.")

    log_level = logging.getLevelName(raw_level)
    if not isinstance(log_level, int):
        raise RuntimeError(
            f"JOBMARKET_LOG_LEVEL must be a logging level name, got {raw_level!r}."
        )

    try:
        default_metric_type = MetricType(raw_metric)
    except ValueError:
        choices = ", ".join(m.value for m in MetricType)
        raise RuntimeError(
            f"JOBMARKET_METRIC_TYPE must be one of {choices}, got {raw_metric!r}."
        ) from None

    return Settings(
        api_base_url=api_base_url or DEFAULT_API_URL,
        request_timeout=request_timeout,
        log_level=log_level,
        default_metric_type=default_metric_type,
    )
