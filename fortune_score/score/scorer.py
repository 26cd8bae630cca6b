"""Deterministic fortune scoring strategies.

Every strategy here is a pure function of its inputs: the same seed (and,
where relevant, date, code and password) always yields the same score.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import re

from fortune_score.dates import day_of_year, weekday_weight
from fortune_score.hashing import hash32, hash64
from fortune_score.models import MAX_SCORE, MIN_SCORE, Algorithm

logger = logging.getLogger(__name__)

IDENTIFICATION_CODE_PATTERN = re.compile(r"^[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}$")

_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280
_GAUSSIAN_EPSILON = 0.0001
_GAUSSIAN_SPREAD = 15
_CODE_DIVISOR = 527.0
_CODE_PERFECT_THRESHOLD = 970


class InvalidIdentificationCodeError(ValueError):
    """Raised when an identification code is not ``XXXX-XXXX-XXXX-XXXX`` hex."""


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int) -> int:
    return min(MAX_SCORE, max(MIN_SCORE, value))


def normalize_identification_code(code: str) -> str:
    """Strip and upper-case *code*, then validate its format.

    Parameters
    ----------
    code : str
        Raw code as typed by the user.

    Returns
    -------
    str
        Canonical upper-case code.

    Raises
    ------
    InvalidIdentificationCodeError
        If the code does not match ``XXXX-XXXX-XXXX-XXXX`` with hex digits.
    """
    formatted = (code or "").strip().upper()
    if not IDENTIFICATION_CODE_PATTERN.match(formatted):
        msg = f"Invalid identification code: {code!r}"
        raise InvalidIdentificationCodeError(msg)
    return formatted


def is_valid_identification_code(code: str) -> bool:
    """Return True if *code* is already in canonical form."""
    return bool(IDENTIFICATION_CODE_PATTERN.match(code or ""))


def modulo_score(seed: str) -> int:
    """``abs(hash32(seed)) mod 101``."""
    return abs(hash32(seed)) % (MAX_SCORE + 1)


def linear_score(seed: str) -> int:
    """One linear-congruential step over the seed hash, scaled onto [0, 100]."""
    h = hash32(seed)
    state = (h * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
    return state * (MAX_SCORE + 1) // _LCG_MODULUS


def normal_random(seed: str) -> float:
    """Fractional part of ``sin(hash32(seed)) * 10000``, in ``[0, 1)``."""
    factor = math.sin(hash32(seed)) * 10000
    return factor - math.floor(factor)


def gaussian_score(seed: str, day: dt.date) -> int:
    """Box-Muller transform of a weekday-weighted pseudo-random value.

    The uniform input is averaged with :func:`~fortune_score.dates.weekday_weight`
    before the transform, and the second uniform is re-derived from the
    string form of that weighted value, so scores cluster around 50.

    Parameters
    ----------
    seed : str
        User/date seed string.
    day : datetime.date
        Day the seed refers to; supplies the weekday weight.

    Returns
    -------
    int
        Score between 0 and 100 inclusive.
    """
    weighted = (normal_random(seed) + weekday_weight(day)) / 2
    u1 = weighted or _GAUSSIAN_EPSILON
    u2 = normal_random(repr(weighted)) or _GAUSSIAN_EPSILON
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return _clamp(_round_half_up(z * _GAUSSIAN_SPREAD + 50))


def identification_code_score(code: str, day: dt.date, password: str) -> int:
    """Reproducible score shared with any other implementation of the same scheme.

    Parameters
    ----------
    code : str
        Canonical identification code (already validated).
    day : datetime.date
        Day to score.
    password : str
        Configuration-wide salt.

    Returns
    -------
    int
        100 for roughly 3% of inputs, otherwise a near-linear map onto [0, 99].
    """
    h1 = hash64(f"asdfgbn{day_of_year(day)}12#3$45{day.year}IUY")
    h2 = hash64(f"{password}{code}0*8&6{day.day}kjhg")
    merged = h1 // 3 + h2 // 3
    normalized = abs(float(merged) / _CODE_DIVISOR)
    raw = _round_half_up(normalized) % 1001
    if raw >= _CODE_PERFECT_THRESHOLD:
        return MAX_SCORE
    return _round_half_up(raw / 969.0 * 99.0)


def compute(
    seed: str,
    algorithm: Algorithm,
    day: dt.date,
    *,
    code: str | None = None,
    password: str | None = None,
) -> int:
    """Score *seed* with one of the local strategies.

    Parameters
    ----------
    seed : str
        User/date seed (see :func:`~fortune_score.dates.build_seed`).
    algorithm : Algorithm
        Local strategy to apply.
    day : datetime.date
        Day the seed refers to.
    code : str | None
        Identification code, required for ``IDENTIFICATION_CODE``.
    password : str | None
        Configuration salt, required for ``IDENTIFICATION_CODE``.

    Returns
    -------
    int
        Score between 0 and 100 inclusive.

    Raises
    ------
    ValueError
        For ``REMOTE`` (not a local strategy) or a missing code/password.
    InvalidIdentificationCodeError
        If *code* is not in canonical form.
    """
    if algorithm is Algorithm.MODULO:
        score = modulo_score(seed)
    elif algorithm is Algorithm.LINEAR:
        score = linear_score(seed)
    elif algorithm is Algorithm.GAUSSIAN:
        score = gaussian_score(seed, day)
    elif algorithm is Algorithm.IDENTIFICATION_CODE:
        if not code or not password:
            msg = "Identification-code scoring requires both a code and a password"
            raise ValueError(msg)
        if not is_valid_identification_code(code):
            msg = f"Invalid identification code: {code!r}"
            raise InvalidIdentificationCodeError(msg)
        score = identification_code_score(code, day, password)
    else:
        msg = f"{algorithm!r} is not a local scoring algorithm"
        raise ValueError(msg)

    logger.debug("Scored seed=%s algorithm=%s score=%d", seed, algorithm.value, score)
    return score
