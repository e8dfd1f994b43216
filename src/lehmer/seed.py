from __future__ import annotations

import time
from typing import Callable

from .core import INT32_MIN, UINT32_MAX
from .trace import rng_trace

SeedSource = Callable[[], int]


def tick_count_seed() -> int:
    """Millisecond tick counter truncated to an unsigned 32-bit word."""
    seed = (time.monotonic_ns() // 1_000_000) & UINT32_MAX
    rng_trace("seed", source="tick", seed=f"0x{seed:08x}")
    return seed


def normalize_seed(seed: int) -> int:
    """Reinterpret a signed or unsigned 32-bit seed as unsigned."""
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError(f"seed must be an int, got {type(seed).__name__}")
    if not INT32_MIN <= seed <= UINT32_MAX:
        raise ValueError(f"seed {seed!r} does not fit in 32 bits")
    return seed & UINT32_MAX


def resolve_seed(seed: int | None, seed_source: SeedSource | None = None) -> int:
    if seed is not None:
        return normalize_seed(seed)
    source = tick_count_seed if seed_source is None else seed_source
    return normalize_seed(int(source()) & UINT32_MAX)


__all__ = [
    "SeedSource",
    "normalize_seed",
    "resolve_seed",
    "tick_count_seed",
]
