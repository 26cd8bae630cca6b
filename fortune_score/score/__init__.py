"""Score engine: deterministic per-user, per-day fortune strategies."""

from fortune_score.score.scorer import (
    InvalidIdentificationCodeError,
    compute,
    gaussian_score,
    identification_code_score,
    is_valid_identification_code,
    linear_score,
    modulo_score,
    normal_random,
    normalize_identification_code,
)

__all__ = [
    "InvalidIdentificationCodeError",
    "compute",
    "gaussian_score",
    "identification_code_score",
    "is_valid_identification_code",
    "linear_score",
    "modulo_score",
    "normal_random",
    "normalize_identification_code",
]
