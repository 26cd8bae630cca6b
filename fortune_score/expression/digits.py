"""Closed-form literals for 0-10 written only with one repeated base digit."""

from __future__ import annotations

from functools import lru_cache

MIN_BASE = 1
MAX_BASE = 9
MAX_LITERAL = 10


class OutOfRangeError(ValueError):
    """Raised when a target or base digit is outside its supported domain."""


def check_base(base: int) -> int:
    """Return *base* if it is an integer digit in ``[1, 9]``."""
    if isinstance(base, bool) or not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
        msg = f"Base digit must be an integer in [{MIN_BASE}, {MAX_BASE}], got {base!r}"
        raise OutOfRangeError(msg)
    return base


@lru_cache(maxsize=MAX_BASE, typed=True)
def digit_literals(base: int) -> tuple[str, ...]:
    """Expressions for 0 through 10 built from *base* alone.

    ``b / b`` stands for one throughout; the forms lean on ``+`` binding
    tighter than ``<<``, which binds tighter than ``|``. The entry for
    *base* itself is the bare digit.

    Parameters
    ----------
    base : int
        Base digit in ``[1, 9]``.

    Returns
    -------
    tuple[str, ...]
        Eleven expressions; index ``n`` evaluates to ``n``.
    """
    b = check_base(base)
    one = f"{b} / {b}"
    literals = [
        f"({b} ^ {b})",
        f"({one})",
        f"({one} << {one})",
        f"({one} << {one} | {one})",
        f"({one} << {one} + {one})",
        f"({one} << {one} + {one} | {one})",
        f"({one} + {one} + {one} << {one})",
        f"({one} + {one} + {one} << {one} | {one})",
        f"({one} << {one} + {one} + {one})",
        f"({one} << {one} + {one} + {one} | {one})",
        f"(({one} << {one} + {one}) + {one} << {one})",
    ]
    literals[b] = str(b)
    return tuple(literals)
