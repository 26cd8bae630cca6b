"""Tests for score rendering."""

import pytest

from fortune_score.display import DisplayMode, render_score
from fortune_score.expression import OutOfRangeError, evaluate


@pytest.mark.parametrize(
    ("mode", "score", "expected"),
    [
        (DisplayMode.PLAIN, 73, "73"),
        (DisplayMode.BINARY, 5, "101"),
        (DisplayMode.BINARY, 0, "0"),
        (DisplayMode.OCTAL, 100, "144"),
        (DisplayMode.HEX, 90, "5A"),
    ],
)
def test_numeric_modes(mode, score, expected):
    assert render_score(score, mode) == expected


def test_default_mode_is_plain():
    assert render_score(42) == "42"


def test_expression_mode(synthesizer):
    for score in (0, 7, 42, 73, 100):
        assert evaluate(render_score(score, DisplayMode.EXPRESSION, synthesizer)) == score


def test_expression_mode_requires_synthesizer():
    with pytest.raises(ValueError, match="requires an ExpressionSynthesizer"):
        render_score(42, DisplayMode.EXPRESSION)


@pytest.mark.parametrize("score", [-1, 101])
def test_out_of_range_score(score):
    with pytest.raises(OutOfRangeError):
        render_score(score, DisplayMode.BINARY)
