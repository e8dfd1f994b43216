from __future__ import annotations

from typing import Protocol

from .core import (
    INT32_MAX,
    check_double_range,
    check_int_range,
    convert_to_double_range,
    convert_to_int_range,
    rnd,
)
from .seed import SeedSource, normalize_seed, resolve_seed


class RandomSource(Protocol):
    def next(self, min_or_max: int | None = None, max_value: int | None = None) -> int: ...

    def next_double(self, min_or_max: float | None = None, max_value: float | None = None) -> float: ...

    def next_bytes(self, buffer: bytearray | memoryview) -> None: ...


def _int_bounds(min_or_max: int | None, max_value: int | None) -> tuple[int, int]:
    if min_or_max is None:
        if max_value is not None:
            raise TypeError("max_value given without min_value")
        return 0, INT32_MAX
    if max_value is None:
        return 0, min_or_max
    return min_or_max, max_value


def _double_bounds(min_or_max: float | None, max_value: float | None) -> tuple[float, float]:
    if min_or_max is None:
        if max_value is not None:
            raise TypeError("max_value given without min_value")
        return 0.0, 1.0
    if max_value is None:
        return 0.0, min_or_max
    return min_or_max, max_value


class LehmerRandom:
    """Lehmer-mix generator holding a single 32-bit state word.

    Each draw replaces the state with `rnd(state)` and converts the new state,
    so the same seed always replays the same sequence. Instances are not
    synchronized; share one across threads only behind an external lock.

    Argument shapes mirror the familiar overloads:
      next()          -> [0, INT32_MAX)
      next(hi)        -> [0, hi)
      next(lo, hi)    -> [lo, hi)
    and likewise for `next_double` with a default range of [0.0, 1.0).
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int | None = None, *, seed_source: SeedSource | None = None) -> None:
        self._state = resolve_seed(seed, seed_source)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state=0x{self._state:08x})"

    @property
    def state(self) -> int:
        return self._state

    def reseed(self, seed: int) -> None:
        self._state = normalize_seed(seed)

    def next_u32(self) -> int:
        self._state = rnd(self._state)
        return self._state

    def next(self, min_or_max: int | None = None, max_value: int | None = None) -> int:
        lo, hi = _int_bounds(min_or_max, max_value)
        return self._next_int(lo, hi)

    def next_double(self, min_or_max: float | None = None, max_value: float | None = None) -> float:
        lo, hi = _double_bounds(min_or_max, max_value)
        return self._next_double(lo, hi)

    def next_bytes(self, buffer: bytearray | memoryview) -> None:
        """Fill `buffer` in place, one `next()` per byte (low 8 bits)."""
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("next_bytes() needs a writable buffer")
        view = view.cast("B")
        for idx in range(len(view)):
            view[idx] = self.next() & 0xFF

    def _next_int(self, min_value: int, max_value: int) -> int:
        # Validate first: a rejected range must not consume a draw.
        min_value, max_value = check_int_range(min_value, max_value)
        return convert_to_int_range(self.next_u32(), min_value, max_value)

    def _next_double(self, min_value: float, max_value: float) -> float:
        min_value, max_value = check_double_range(min_value, max_value)
        return convert_to_double_range(self.next_u32(), min_value, max_value)


def rnd_int(
    min_value: int,
    max_value: int,
    seed: int | None = None,
    *,
    seed_source: SeedSource | None = None,
) -> int:
    """One-shot integer draw in `[min_value, max_value)` from `seed`."""
    min_value, max_value = check_int_range(min_value, max_value)
    return convert_to_int_range(rnd(resolve_seed(seed, seed_source)), min_value, max_value)


def rnd_double(
    min_value: float,
    max_value: float,
    seed: int | None = None,
    *,
    seed_source: SeedSource | None = None,
) -> float:
    """One-shot float draw in `[min_value, max_value)` from `seed`."""
    min_value, max_value = check_double_range(min_value, max_value)
    return convert_to_double_range(rnd(resolve_seed(seed, seed_source)), min_value, max_value)


__all__ = [
    "LehmerRandom",
    "RandomSource",
    "rnd_double",
    "rnd_int",
]
