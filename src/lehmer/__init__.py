from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .core import InvalidRangeError, rnd
from .generator import LehmerRandom, RandomSource, rnd_double, rnd_int
from .std import LehmerStdRandom

try:
    __version__ = version("lehmer-random")
except PackageNotFoundError:  # pragma: no cover
    # Allow running from source (e.g. `PYTHONPATH=src`) without installed package metadata.
    __version__ = "0.0.0+dev"

__all__ = [
    "InvalidRangeError",
    "LehmerRandom",
    "LehmerStdRandom",
    "RandomSource",
    "rnd",
    "rnd_double",
    "rnd_int",
]
