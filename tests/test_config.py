from __future__ import annotations

import logging

import pytest

from jobmarket_analytics.config import DEFAULT_API_URL, get_settings
from jobmarket_analytics.models import MetricType

ENV_VARS = ("JOBMARKET_API_URL", "JOBMARKET_TIMEOUT", "JOBMARKET_LOG_LEVEL", "JOBMARKET_METRIC_TYPE")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = get_settings()
    assert s.api_base_url == DEFAULT_API_URL
    assert s.request_timeout == 30.0
    assert s.log_level == logging.INFO
    assert s.default_metric_type is MetricType.TOTAL


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOBMARKET_API_URL", "https://api.example.com/")
    monkeypatch.setenv("JOBMARKET_TIMEOUT", "5.5")
    monkeypatch.setenv("JOBMARKET_LOG_LEVEL", "debug")
    monkeypatch.setenv("JOBMARKET_METRIC_TYPE", "remote")
    s = get_settings()
    assert s.api_base_url == "https://api.example.com"
    assert s.request_timeout == 5.5
    assert s.log_level == logging.DEBUG
    assert s.default_metric_type is MetricType.REMOTE


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("JOBMARKET_TIMEOUT", "soon"),
        ("JOBMARKET_TIMEOUT", "0"),
        ("JOBMARKET_LOG_LEVEL", "LOUD"),
        ("JOBMARKET_METRIC_TYPE", "ONSITE"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError, match=name):
        get_settings()
