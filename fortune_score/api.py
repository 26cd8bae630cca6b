"""Package-level entry point: calculate_fortune()."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any

from fortune_score.config import FortuneConfig, load_config
from fortune_score.dates import build_seed
from fortune_score.display import DisplayMode, render_score
from fortune_score.expression import ExpressionSynthesizer
from fortune_score.models import Algorithm, FortuneResult, ScoreSource
from fortune_score.remote import RandomSource, RandomSourceRegistry
from fortune_score.score import compute, identification_code_score, modulo_score, normalize_identification_code

logger = logging.getLogger(__name__)


class RemoteDateError(ValueError):
    """Raised when true randomness is requested for a day other than today."""


def calculate_fortune(
    user_id: str,
    day: dt.date | None = None,
    config: FortuneConfig | str | Path | dict[str, Any] | None = None,
    *,
    code: str | None = None,
    today: dt.date | None = None,
    source: RandomSource | None = None,
) -> FortuneResult:
    """Compute the fortune score of *user_id* for *day*.

    A bound identification code takes precedence over the configured
    algorithm whenever a password is configured, except that remote mode
    still fetches a true-random score for the current day. A failed remote
    fetch falls back to the modulo strategy over the user's seed for today.

    Parameters
    ----------
    user_id : str
        User identifier.
    day : datetime.date | None
        Day to score. Defaults to *today*.
    config : FortuneConfig | str | Path | dict | None
        Loaded configuration, or anything :func:`~fortune_score.config.load_config`
        accepts.
    code : str | None
        The user's identification code, if one is bound. Normalized and
        validated before any scoring happens.
    today : datetime.date | None
        Current date. Defaults to ``datetime.date.today()``.
    source : RandomSource | None
        Randomness source for remote mode. Built from ``config.remote``
        when omitted.

    Returns
    -------
    FortuneResult

    Raises
    ------
    InvalidIdentificationCodeError
        If *code* is malformed.
    RemoteDateError
        If remote mode is asked for another day and no identification code
        can stand in.

    Examples
    --------
    >>> result = calculate_fortune("user42", dt.date(2024, 1, 1), {"algorithm": "modulo"})
    >>> result.score
    65
    """
    if not isinstance(config, FortuneConfig):
        config = load_config(config)
    today = today or dt.date.today()
    day = day or today

    if code is not None:
        code = normalize_identification_code(code)
    use_code = bool(code) and config.identification.enabled

    if config.algorithm is Algorithm.REMOTE:
        if day == today:
            return _remote_fortune(user_id, today, config, source)
        if not use_code:
            msg = f"Remote randomness is only available for today ({today.isoformat()}), not {day.isoformat()}"
            raise RemoteDateError(msg)

    if use_code:
        score = identification_code_score(code, day, config.identification.password)
        result = FortuneResult(user_id, day, score, Algorithm.IDENTIFICATION_CODE)
    else:
        score = compute(build_seed(user_id, day), config.algorithm, day)
        result = FortuneResult(user_id, day, score, config.algorithm)

    logger.info(
        "Fortune user=%s day=%s algorithm=%s score=%d",
        user_id,
        day.isoformat(),
        result.algorithm.value,
        result.score,
    )
    return result


def _remote_fortune(
    user_id: str,
    today: dt.date,
    config: FortuneConfig,
    source: RandomSource | None,
) -> FortuneResult:
    """Fetch a true-random score, falling back to modulo over today's seed."""
    if source is None:
        source = RandomSourceRegistry.create(config.remote.source, api_key=config.remote.api_key)

    score = source.fetch(config.remote.timeout_ms)
    if score is not None:
        logger.info("Fortune user=%s day=%s source=%s score=%d", user_id, today.isoformat(), source.name, score)
        return FortuneResult(user_id, today, score, Algorithm.REMOTE, ScoreSource.REMOTE)

    seed = build_seed(user_id, today)
    score = modulo_score(seed)
    logger.warning("Remote source %s unavailable; modulo fallback for user=%s score=%d", source.name, user_id, score)
    return FortuneResult(user_id, today, score, Algorithm.MODULO, ScoreSource.FALLBACK)


def render_fortune(
    result: FortuneResult,
    config: FortuneConfig,
    synthesizer: ExpressionSynthesizer | None = None,
) -> str:
    """Render *result* in the configured display mode.

    A synthesizer for ``config.expression.base_digit`` is created when
    expression mode is configured and none is supplied. Callers rendering
    many scores should pass a long-lived synthesizer to benefit from its
    expression cache.
    """
    if synthesizer is None and config.display_mode is DisplayMode.EXPRESSION:
        synthesizer = ExpressionSynthesizer(config.expression.base_digit)
    return render_score(result.score, config.display_mode, synthesizer)
