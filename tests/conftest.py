"""Shared fixtures for fortune score tests."""

import datetime as dt
import random

import pytest

from fortune_score.expression import ExpressionSynthesizer

_ENV_VARS = (
    "FORTUNE_ALGORITHM",
    "FORTUNE_CODE_PASSWORD",
    "FORTUNE_RANDOM_ORG_API_KEY",
    "FORTUNE_REMOTE_TIMEOUT_MS",
    "FORTUNE_BASE_DIGIT",
    "FORTUNE_DISPLAY_MODE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host environment variables out of configuration loading."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def new_year():
    return dt.date(2024, 1, 1)


@pytest.fixture()
def april_first():
    return dt.date(2024, 4, 1)


@pytest.fixture()
def synthesizer():
    """Base-6 synthesizer with a seeded generator."""
    return ExpressionSynthesizer(6, rng=random.Random(1234))
