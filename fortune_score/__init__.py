"""Deterministic daily fortune scores and their disguised arithmetic renderings."""

from fortune_score.api import RemoteDateError, calculate_fortune, render_fortune
from fortune_score.config import FortuneConfig, load_config
from fortune_score.dates import build_seed, month_day, parse_date
from fortune_score.display import DisplayMode, render_score
from fortune_score.expression import ExpressionSynthesizer, OutOfRangeError, Strategy, evaluate, synthesize
from fortune_score.hashing import hash32, hash64
from fortune_score.models import Algorithm, FortuneResult, ScoreSource
from fortune_score.score import InvalidIdentificationCodeError, compute, normalize_identification_code

__all__ = [
    "Algorithm",
    "DisplayMode",
    "ExpressionSynthesizer",
    "FortuneConfig",
    "FortuneResult",
    "InvalidIdentificationCodeError",
    "OutOfRangeError",
    "RemoteDateError",
    "ScoreSource",
    "Strategy",
    "build_seed",
    "calculate_fortune",
    "compute",
    "evaluate",
    "hash32",
    "hash64",
    "load_config",
    "month_day",
    "normalize_identification_code",
    "parse_date",
    "render_fortune",
    "render_score",
    "synthesize",
]
