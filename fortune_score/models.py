"""Shared data models for fortune scoring."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum

MIN_SCORE = 0
MAX_SCORE = 100


class Algorithm(Enum):
    """Scoring strategy selectable in configuration."""

    MODULO = "modulo"
    LINEAR = "linear"
    GAUSSIAN = "gaussian"
    IDENTIFICATION_CODE = "identification_code"
    REMOTE = "remote"


class ScoreSource(Enum):
    """Where a score actually came from."""

    LOCAL = "local"
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FortuneResult:
    """A computed fortune for one user on one day.

    Parameters
    ----------
    user_id : str
        User the score belongs to.
    day : datetime.date
        Calendar day the score was computed for.
    score : int
        Score between 0 and 100 inclusive.
    algorithm : Algorithm
        Strategy that produced ``score``. ``Algorithm.MODULO`` when a
        remote fetch fell back to local computation.
    source : ScoreSource
        ``REMOTE`` for a true-random score, ``FALLBACK`` when the remote
        fetch failed, ``LOCAL`` otherwise.
    """

    user_id: str
    day: dt.date
    score: int
    algorithm: Algorithm
    source: ScoreSource = ScoreSource.LOCAL
