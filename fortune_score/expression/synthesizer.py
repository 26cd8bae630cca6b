"""Disguise a score as an arithmetic expression over a single base digit."""

from __future__ import annotations

import logging
import math
import random
from enum import Enum

from fortune_score.expression.digits import MAX_LITERAL, OutOfRangeError, check_base, digit_literals
from fortune_score.models import MAX_SCORE, MIN_SCORE

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 3
_MAX_MIXED_DEPTH = 8


class Strategy(Enum):
    """Top-level decomposition used to build an expression."""

    DECIMAL = "decimal"
    FACTORIZATION = "factorization"
    MIXED = "mixed"


class _MixedSplit(Enum):
    TENS = "tens"
    BASE_MULTIPLE = "base_multiple"
    POWER_OF_TWO = "power_of_two"
    SMALLEST_FACTOR = "smallest_factor"


def check_target(target: int) -> int:
    """Return *target* if it is an integer in ``[0, 100]``."""
    if isinstance(target, bool) or not isinstance(target, int) or not MIN_SCORE <= target <= MAX_SCORE:
        msg = f"Target must be an integer in [{MIN_SCORE}, {MAX_SCORE}], got {target!r}"
        raise OutOfRangeError(msg)
    return target


class ExpressionSynthesizer:
    """Generate varied expressions that evaluate to a target score.

    Every leaf of a generated expression is the base digit, either bare or
    inside one of the closed-form literals from
    :func:`~fortune_score.expression.digits.digit_literals`. Non-trivial
    results are remembered per target (up to ``cache_size`` distinct
    strings); once a slot is full, further requests pick from it at random.

    Parameters
    ----------
    base_digit : int
        Digit in ``[1, 9]`` every expression is built from.
    rng : random.Random | None
        Source of randomness for strategy selection. A fresh unseeded
        generator is used when omitted.
    cache_size : int
        Maximum distinct expressions remembered per target.
    """

    def __init__(
        self,
        base_digit: int,
        rng: random.Random | None = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self._base = check_base(base_digit)
        self._literals = digit_literals(self._base)
        self._rng = rng or random.Random()
        self._cache_size = cache_size
        self._cache: dict[int, tuple[str, ...]] = {}

    @property
    def base_digit(self) -> int:
        return self._base

    def literal(self, n: int) -> str:
        """Closed-form expression for a digit ``n`` in ``[0, 10]``."""
        if not 0 <= n <= MAX_LITERAL:
            msg = f"No digit literal for {n!r}"
            raise OutOfRangeError(msg)
        return self._literals[n]

    def cached(self, target: int) -> tuple[str, ...]:
        """Expressions remembered for *target*, oldest first."""
        return self._cache.get(target, ())

    def clear(self) -> None:
        """Forget all remembered expressions."""
        self._cache = {}

    def synthesize(self, target: int, strategy: Strategy | None = None) -> str:
        """Return an expression that evaluates to *target*.

        Parameters
        ----------
        target : int
            Score in ``[0, 100]``.
        strategy : Strategy | None
            Force a decomposition. Forced calls always build a new
            expression instead of reading the cache.

        Returns
        -------
        str

        Raises
        ------
        OutOfRangeError
            If *target* is outside ``[0, 100]``.
        """
        check_target(target)
        if strategy is None:
            if target <= MAX_LITERAL:
                return self.literal(target)
            slot = self._cache.get(target, ())
            if len(slot) >= self._cache_size:
                return self._rng.choice(slot)
            strategy = self._rng.choice(list(Strategy))

        if strategy is Strategy.DECIMAL:
            expr = self._decimal(target)
        elif strategy is Strategy.FACTORIZATION:
            expr = self._factorize(target)
        elif strategy is Strategy.MIXED:
            expr = self._mixed(target, 0)
        else:
            msg = f"Unknown strategy: {strategy!r}"
            raise ValueError(msg)

        logger.debug("Synthesized target=%d base=%d strategy=%s expr=%s", target, self._base, strategy.value, expr)
        if target > MAX_LITERAL:
            self._remember(target, expr)
        return expr

    def _remember(self, target: int, expr: str) -> None:
        # Replace the slot wholesale so concurrent readers never see a partial update.
        slot = self._cache.get(target, ())
        if expr not in slot and len(slot) < self._cache_size:
            self._cache[target] = (*slot, expr)

    def _decimal(self, target: int) -> str:
        lit = self.literal
        ten = lit(10)
        if target <= MAX_LITERAL:
            return lit(target)
        if target == MAX_SCORE:
            return f"({ten} * {ten})"

        tens, ones = divmod(target, 10)
        candidates: list[str] = []
        if target <= 20:
            candidates.append(f"({ten} + {lit(target - 10)})")
        if ones == 0:
            candidates.append(f"({lit(tens)} * {ten})")
        if target <= 50:
            candidates.append(f"(({lit(tens)} * {ten}) + {lit(ones)})")
        elif ones:
            candidates.append(f"({self._decimal(tens * 10)} + {lit(ones)})")
            candidates.append(f"({self._decimal((tens + 1) * 10)} - {lit(10 - ones)})")
        return self._rng.choice(candidates)

    def _factorize(self, target: int) -> str:
        ten = self.literal(10)
        if target <= MAX_LITERAL:
            return self.literal(target)
        if target == MAX_SCORE:
            return f"({ten} * {ten})"
        return self._decompose(target)

    def _decompose(self, n: int) -> str:
        lit = self.literal
        if n <= MAX_LITERAL:
            return lit(n)
        for i in range(min(9, math.isqrt(n)), 1, -1):
            if n % i == 0:
                quotient = n // i
                rest = lit(quotient) if quotient <= MAX_LITERAL else self._decompose(quotient)
                return f"({lit(i)} * {rest})"

        # No small factor: correct from a neighbouring multiple of ten.
        lower = n // 10 * 10
        upper = lower + 10
        if upper <= MAX_SCORE and self._rng.random() < 0.5:
            return f"({self._decompose(upper)} - {lit(upper - n)})"
        return f"({self._decompose(lower)} + {lit(n - lower)})"

    def _mixed(self, target: int, depth: int) -> str:
        lit = self.literal
        b = lit(self._base)
        if target == 0:
            return f"({b} - {b})"
        if target <= MAX_LITERAL:
            return lit(target)
        if depth >= _MAX_MIXED_DEPTH:
            return self._decimal(target)
        if target == MAX_SCORE:
            if self._base > 1 and MAX_SCORE % self._base == 0:
                return f"({b} * {self._mixed(MAX_SCORE // self._base, depth + 1)})"
            ten = lit(10)
            return f"({ten} * {ten})"

        split = self._rng.choice(list(_MixedSplit))
        if split is _MixedSplit.BASE_MULTIPLE and self._base == 1:
            split = _MixedSplit.TENS

        if split is _MixedSplit.TENS:
            return self._mixed_tens(target, depth)
        if split is _MixedSplit.BASE_MULTIPLE:
            return self._mixed_base_multiple(target, depth)
        if split is _MixedSplit.POWER_OF_TWO:
            return self._mixed_power_of_two(target, depth)
        return self._mixed_smallest_factor(target, depth)

    def _mixed_tens(self, target: int, depth: int) -> str:
        lit = self.literal
        lower = target // 10 * 10
        ones = target - lower
        if ones == 0:
            return f"({lit(target // 10)} * {lit(10)})"
        upper = lower + 10
        if upper <= MAX_SCORE and self._rng.random() < 0.5:
            return f"({self._mixed(upper, depth + 1)} - {lit(upper - target)})"
        return f"({self._mixed(lower, depth + 1)} + {lit(ones)})"

    def _mixed_base_multiple(self, target: int, depth: int) -> str:
        b = self.literal(self._base)
        quotient, remainder = divmod(target, self._base)
        if remainder == 0:
            return f"({b} * {self._mixed(quotient, depth + 1)})"
        if remainder <= self._base / 2:
            return f"(({b} * {self._mixed(quotient, depth + 1)}) + {self.literal(remainder)})"
        return f"(({b} * {self._mixed(quotient + 1, depth + 1)}) - {self.literal(self._base - remainder)})"

    def _mixed_power_of_two(self, target: int, depth: int) -> str:
        lit = self.literal
        b = lit(self._base)
        shift = (target // self._base).bit_length() - 1
        low = self._base << shift
        remainder = target - low
        if remainder == 0:
            return f"({b} << {lit(shift)})"
        overshoot = (low << 1) - target
        if self._rng.random() < 0.5:
            return f"(({b} << {lit(shift + 1)}) - {self._mixed(overshoot, depth + 1)})"
        return f"(({b} << {lit(shift)}) + {self._mixed(remainder, depth + 1)})"

    def _mixed_smallest_factor(self, target: int, depth: int) -> str:
        lit = self.literal
        for i in range(2, 10):
            if target % i == 0:
                quotient = target // i
                rest = lit(quotient) if quotient <= MAX_LITERAL else self._mixed(quotient, depth + 1)
                return f"({lit(i)} * {rest})"
        half = target // 2
        return f"({self._mixed(half, depth + 1)} + {self._mixed(target - half, depth + 1)})"


def synthesize(target: int, base: int, strategy: Strategy | None = None) -> str:
    """One-off synthesis with a fresh, uncached synthesizer."""
    check_target(target)
    return ExpressionSynthesizer(base).synthesize(target, strategy)
