"""Expression synthesizer: scores disguised as single-digit arithmetic."""

from fortune_score.expression.digits import OutOfRangeError, digit_literals
from fortune_score.expression.evaluator import ExpressionError, evaluate
from fortune_score.expression.synthesizer import ExpressionSynthesizer, Strategy, synthesize

__all__ = [
    "ExpressionError",
    "ExpressionSynthesizer",
    "OutOfRangeError",
    "Strategy",
    "digit_literals",
    "evaluate",
    "synthesize",
]
