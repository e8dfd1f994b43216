"""Lehmer mixing step and range conversion.

Everything here is pure: the stateful generator in `lehmer.generator` only owns a
32-bit word and feeds it through `rnd`.
"""

from __future__ import annotations

import math
import numbers

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "InvalidRangeError",
    "LEHMER_ADD",
    "LEHMER_MUL_1",
    "LEHMER_MUL_2",
    "UINT32_MAX",
    "check_double_range",
    "check_int_range",
    "convert_to_double_range",
    "convert_to_int_range",
    "rnd",
    "u32",
]

UINT32_MAX = 0xFFFFFFFF
INT32_MAX = 0x7FFFFFFF
INT32_MIN = -0x80000000
_U64_MASK = 0xFFFFFFFFFFFFFFFF

# These three literals define the sequence; changing any of them breaks
# compatibility with every recorded stream.
LEHMER_ADD = 0xE120FC15
LEHMER_MUL_1 = 0x4A39B70D
LEHMER_MUL_2 = 0x12FAD5C9


class InvalidRangeError(ValueError):
    """Raised when a bounded draw gets `max_value <= min_value`."""

    def __init__(self, min_value: float, max_value: float, *, reason: str | None = None) -> None:
        self.min_value = min_value
        self.max_value = max_value
        detail = reason if reason is not None else "max_value must be greater than min_value"
        super().__init__(f"invalid range [{min_value!r}, {max_value!r}): {detail}")


def u32(value: int) -> int:
    return int(value) & UINT32_MAX


def _fold(tmp: int) -> int:
    return ((tmp >> 32) ^ tmp) & UINT32_MAX


def rnd(seed: int) -> int:
    """Advance a 32-bit word to its pseudo-random successor.

    Matches:
      s1  = seed + 0xE120FC15          (mod 2**32)
      m1  = fold(s1 * 0x4A39B70D)      (mod 2**64)
      out = fold(m1 * 0x12FAD5C9)      (mod 2**64)
    where `fold(t)` XORs the high and low halves of `t` and keeps 32 bits.
    """
    s1 = (int(seed) + LEHMER_ADD) & UINT32_MAX
    m1 = _fold((s1 * LEHMER_MUL_1) & _U64_MASK)
    return _fold((m1 * LEHMER_MUL_2) & _U64_MASK)


def _check_bound_types(min_value: object, max_value: object, kind: type, label: str) -> None:
    for value in (min_value, max_value):
        if isinstance(value, bool) or not isinstance(value, kind):
            raise TypeError(f"range bounds must be {label}, got {type(value).__name__}")


def check_int_range(min_value: int, max_value: int) -> tuple[int, int]:
    _check_bound_types(min_value, max_value, numbers.Integral, "integers")
    min_value = int(min_value)
    max_value = int(max_value)
    for value in (min_value, max_value):
        if not INT32_MIN <= value <= INT32_MAX:
            raise InvalidRangeError(
                min_value,
                max_value,
                reason=f"bound {value!r} is outside the signed 32-bit range",
            )
    if max_value <= min_value:
        raise InvalidRangeError(min_value, max_value)
    return min_value, max_value


def check_double_range(min_value: float, max_value: float) -> tuple[float, float]:
    _check_bound_types(min_value, max_value, numbers.Real, "real numbers")
    min_value = float(min_value)
    max_value = float(max_value)
    if math.isnan(min_value) or math.isnan(max_value):
        raise InvalidRangeError(min_value, max_value, reason="bounds must not be NaN")
    if max_value <= min_value:
        raise InvalidRangeError(min_value, max_value)
    return min_value, max_value


def convert_to_int_range(raw: int, min_value: int, max_value: int) -> int:
    """Map a raw 32-bit draw into `[min_value, max_value)`.

    `raw` keeps its full unsigned magnitude, so the remainder is never negative.
    """
    min_value, max_value = check_int_range(min_value, max_value)
    return u32(raw) % (max_value - min_value) + min_value


def convert_to_double_range(raw: int, min_value: float, max_value: float) -> float:
    """Map a raw 32-bit draw into `[min_value, max_value)` in double precision.

    A raw value of exactly `UINT32_MAX` lands on `max_value`.
    """
    min_value, max_value = check_double_range(min_value, max_value)
    return float(u32(raw)) / UINT32_MAX * (max_value - min_value) + min_value
