"""Tests for the calculate_fortune() entry point."""

import datetime as dt
import logging

import pytest

from fortune_score import (
    Algorithm,
    FortuneResult,
    InvalidIdentificationCodeError,
    RemoteDateError,
    ScoreSource,
    calculate_fortune,
    load_config,
    render_fortune,
)
from fortune_score.expression import evaluate
from fortune_score.remote.base import RandomSource
from fortune_score.score import identification_code_score, linear_score, modulo_score

CODE = "ABCD-1234-5678-90EF"


class FixedSource(RandomSource):
    """In-memory source returning a preset value; ``None`` simulates a timeout."""

    name = "fixed"

    def __init__(self, value=None):
        self._value = value
        self.calls = []

    def fetch(self, timeout_ms):
        self.calls.append(timeout_ms)
        return self._value


def test_modulo_fortune(new_year):
    result = calculate_fortune("user42", new_year, {"algorithm": "modulo"})
    assert result == FortuneResult("user42", new_year, 65, Algorithm.MODULO, ScoreSource.LOCAL)


def test_linear_fortune_default(new_year):
    result = calculate_fortune("user42", new_year, today=new_year)
    assert result.algorithm is Algorithm.LINEAR
    assert result.score == linear_score("user42-2024-01-01") == 5


def test_day_defaults_to_today(new_year):
    result = calculate_fortune("user42", config={"algorithm": "modulo"}, today=new_year)
    assert result.day == new_year
    assert result.score == 65


def test_accepts_loaded_config(new_year):
    config = load_config({"algorithm": "gaussian"})
    first = calculate_fortune("user42", new_year, config)
    second = calculate_fortune("user42", new_year, config)
    assert first == second
    assert first.algorithm is Algorithm.GAUSSIAN


class TestIdentificationCode:
    CONFIG = {"algorithm": "linear", "identification": {"password": "secret"}}

    def test_code_takes_precedence(self, april_first):
        result = calculate_fortune("user42", april_first, self.CONFIG, code=CODE)
        assert result.algorithm is Algorithm.IDENTIFICATION_CODE
        assert result.score == identification_code_score(CODE, april_first, "secret")

    def test_reproducible(self, april_first):
        first = calculate_fortune("user42", april_first, self.CONFIG, code=CODE)
        second = calculate_fortune("someone-else", april_first, self.CONFIG, code=CODE)
        assert first.score == second.score

    def test_code_is_normalized(self, april_first):
        lower = calculate_fortune("user42", april_first, self.CONFIG, code=" abcd-1234-5678-90ef ")
        upper = calculate_fortune("user42", april_first, self.CONFIG, code=CODE)
        assert lower.score == upper.score

    def test_malformed_code_rejected(self, april_first):
        with pytest.raises(InvalidIdentificationCodeError):
            calculate_fortune("user42", april_first, self.CONFIG, code="1234")

    def test_code_ignored_without_password(self, april_first):
        result = calculate_fortune("user42", april_first, {"algorithm": "linear"}, code=CODE)
        assert result.algorithm is Algorithm.LINEAR


class TestRemote:
    CONFIG = {"algorithm": "remote", "remote": {"api_key": "key", "timeout_ms": 3000}}

    def test_remote_success(self, new_year):
        source = FixedSource(88)
        result = calculate_fortune("user42", new_year, self.CONFIG, today=new_year, source=source)
        assert result == FortuneResult("user42", new_year, 88, Algorithm.REMOTE, ScoreSource.REMOTE)
        assert source.calls == [3000]

    def test_timeout_falls_back_to_modulo(self, new_year, caplog):
        source = FixedSource(None)
        with caplog.at_level(logging.WARNING, logger="fortune_score.api"):
            result = calculate_fortune("user42", new_year, self.CONFIG, today=new_year, source=source)
        assert result.score == modulo_score("user42-2024-01-01") == 65
        assert result.source is ScoreSource.FALLBACK
        assert result.algorithm is Algorithm.MODULO
        assert "modulo fallback" in caplog.text

    def test_missing_key_falls_back(self, new_year):
        result = calculate_fortune("user42", new_year, {"algorithm": "remote"}, today=new_year)
        assert result.source is ScoreSource.FALLBACK
        assert result.score == 65

    def test_remote_wins_over_code_today(self, new_year):
        config = {**self.CONFIG, "identification": {"password": "secret"}}
        result = calculate_fortune("user42", new_year, config, code=CODE, today=new_year, source=FixedSource(12))
        assert result.source is ScoreSource.REMOTE
        assert result.score == 12

    def test_other_day_uses_code(self, new_year, april_first):
        config = {**self.CONFIG, "identification": {"password": "secret"}}
        source = FixedSource(12)
        result = calculate_fortune("user42", april_first, config, code=CODE, today=new_year, source=source)
        assert result.algorithm is Algorithm.IDENTIFICATION_CODE
        assert source.calls == []

    def test_other_day_without_code_raises(self, new_year):
        with pytest.raises(RemoteDateError, match="only available for today"):
            calculate_fortune(
                "user42", dt.date(2023, 12, 31), self.CONFIG, today=new_year, source=FixedSource(12)
            )


class TestRenderFortune:
    def test_plain(self, new_year):
        config = load_config({"algorithm": "modulo"})
        result = calculate_fortune("user42", new_year, config)
        assert render_fortune(result, config) == "65"

    def test_binary(self, new_year):
        config = load_config({"algorithm": "modulo", "display": {"mode": "binary"}})
        result = calculate_fortune("user42", new_year, config)
        assert render_fortune(result, config) == "1000001"

    def test_expression_uses_configured_base(self, new_year):
        config = load_config({"algorithm": "modulo", "expression": {"base_digit": 7}, "display": {"mode": "expression"}})
        result = calculate_fortune("user42", new_year, config)
        rendered = render_fortune(result, config)
        assert evaluate(rendered) == 65
        assert set(ch for ch in rendered if ch.isdigit()) == {"7"}

    def test_expression_with_shared_synthesizer(self, new_year, synthesizer):
        config = load_config({"algorithm": "modulo", "display": {"mode": "expression"}})
        result = calculate_fortune("user42", new_year, config)
        assert evaluate(render_fortune(result, config, synthesizer)) == 65
        assert synthesizer.cached(65)
