"""Render a score in one of the supported display modes."""

from __future__ import annotations

from enum import Enum

from fortune_score.expression import ExpressionSynthesizer
from fortune_score.expression.synthesizer import check_target


class DisplayMode(Enum):
    """How a score is shown to the user."""

    PLAIN = "plain"
    BINARY = "binary"
    OCTAL = "octal"
    HEX = "hex"
    EXPRESSION = "expression"


def render_score(
    score: int,
    mode: DisplayMode = DisplayMode.PLAIN,
    synthesizer: ExpressionSynthesizer | None = None,
) -> str:
    """Format *score* according to *mode*.

    Parameters
    ----------
    score : int
        Score in ``[0, 100]``.
    mode : DisplayMode
        Output format.
    synthesizer : ExpressionSynthesizer | None
        Required for ``DisplayMode.EXPRESSION``; owns the base digit and
        the expression cache.

    Returns
    -------
    str

    Raises
    ------
    OutOfRangeError
        If *score* is outside ``[0, 100]``.
    ValueError
        If expression mode is requested without a synthesizer.
    """
    check_target(score)
    if mode is DisplayMode.PLAIN:
        return str(score)
    if mode is DisplayMode.BINARY:
        return format(score, "b")
    if mode is DisplayMode.OCTAL:
        return format(score, "o")
    if mode is DisplayMode.HEX:
        return format(score, "X")
    if mode is DisplayMode.EXPRESSION:
        if synthesizer is None:
            msg = "Expression display requires an ExpressionSynthesizer"
            raise ValueError(msg)
        return synthesizer.synthesize(score)
    msg = f"Unknown display mode: {mode!r}"
    raise ValueError(msg)
