"""Non-cryptographic string hashes used to seed every scoring strategy."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

DJB2_SEED = 5381
HASH64_XOR = 0xA98F501BC684032F


def _code_units(s: str) -> list[int]:
    """Return the UTF-16 code units of *s*.

    Characters outside the Basic Multilingual Plane contribute two units
    (a surrogate pair), so hashes agree with UTF-16 based implementations.
    """
    raw = s.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def hash32(s: str) -> int:
    """DJB2 multiplicative hash with 32-bit signed wraparound.

    Parameters
    ----------
    s : str
        Input string. The empty string hashes to ``5381``.

    Returns
    -------
    int
        Signed 32-bit integer.
    """
    acc = DJB2_SEED
    for unit in _code_units(s):
        acc = _to_int32(acc * 33 + unit)
    return acc


def hash64(s: str) -> int:
    """DJB2-style XOR hash over 64-bit unsigned integers.

    ``acc = (acc << 5) ^ acc ^ unit`` for every code unit, truncated to
    64 bits at each step, then XOR-ed with :data:`HASH64_XOR`.

    Parameters
    ----------
    s : str
        Input string.

    Returns
    -------
    int
        Unsigned 64-bit integer.
    """
    acc = DJB2_SEED
    for unit in _code_units(s):
        acc = ((acc << 5) ^ acc ^ unit) & _MASK64
    return acc ^ HASH64_XOR
