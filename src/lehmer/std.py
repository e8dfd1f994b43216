from __future__ import annotations

import random

from .generator import LehmerRandom

_TWO_POW_32 = 4294967296.0


class LehmerStdRandom(random.Random):
    """`random.Random` running on the Lehmer stream.

    Everything inherited from the stdlib (`randrange`, `choice`, `shuffle`,
    `gauss`, ...) is built on `random()` and `getrandbits()`, both of which
    advance the wrapped generator. `random()` divides by 2**32, so unlike
    `LehmerRandom.next_double()` it never returns 1.0.
    """

    VERSION = 1

    def __init__(self, x: int | None = None) -> None:
        super().__init__(x)

    @property
    def generator(self) -> LehmerRandom:
        return self._rng

    def seed(self, a: int | None = None, version: int = 2) -> None:  # type: ignore[override]
        self._rng = LehmerRandom(a)
        self.gauss_next = None

    def random(self) -> float:
        return self._rng.next_u32() / _TWO_POW_32

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        if k == 0:
            return 0
        words = (k + 31) // 32
        value = 0
        for _ in range(words):
            value = (value << 32) | self._rng.next_u32()
        return value >> (words * 32 - k)

    def getstate(self) -> tuple[int, int, float | None]:
        return (self.VERSION, self._rng.state, self.gauss_next)

    def setstate(self, state: tuple[int, int, float | None]) -> None:
        version, word, gauss_next = state
        if version != self.VERSION:
            raise ValueError(f"state with version {version!r} passed to {type(self).__name__} (expected {self.VERSION})")
        self._rng.reseed(word)
        self.gauss_next = gauss_next


__all__ = ["LehmerStdRandom"]
