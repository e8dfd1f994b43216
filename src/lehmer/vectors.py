from __future__ import annotations

from collections.abc import Iterable

import msgspec

from .core import LEHMER_ADD, LEHMER_MUL_1, LEHMER_MUL_2, rnd
from .seed import normalize_seed

LEHMER_CONSTANTS = (LEHMER_ADD, LEHMER_MUL_1, LEHMER_MUL_2)


class SeedVector(msgspec.Struct, forbid_unknown_fields=True):
    seed: int
    raw: list[int] = msgspec.field(default_factory=list)


class VectorFile(msgspec.Struct, forbid_unknown_fields=True):
    constants: list[int]
    vectors: list[SeedVector] = msgspec.field(default_factory=list)


def raw_sequence(seed: int, count: int) -> list[int]:
    """Successive state words a generator seeded with `seed` would produce."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    state = normalize_seed(seed)
    out: list[int] = []
    for _ in range(count):
        state = rnd(state)
        out.append(state)
    return out


def build_vector_file(seeds: Iterable[int], count: int) -> VectorFile:
    return VectorFile(
        constants=list(LEHMER_CONSTANTS),
        vectors=[SeedVector(seed=normalize_seed(seed), raw=raw_sequence(seed, count)) for seed in seeds],
    )


def encode_vector_file(data: VectorFile) -> bytes:
    return msgspec.json.format(msgspec.json.encode(data), indent=2)


def decode_vector_file(blob: bytes | str) -> VectorFile:
    return msgspec.json.decode(blob, type=VectorFile)


def constants_match(data: VectorFile) -> bool:
    return tuple(data.constants) == LEHMER_CONSTANTS


def verify_vector_file(data: VectorFile) -> list[int]:
    """Return the seeds whose recorded sequence no longer matches `rnd`.

    A file recorded under different constants fails every vector.
    """
    if not constants_match(data):
        return [vector.seed for vector in data.vectors]
    mismatched: list[int] = []
    for vector in data.vectors:
        if raw_sequence(vector.seed, len(vector.raw)) != list(vector.raw):
            mismatched.append(vector.seed)
    return mismatched


__all__ = [
    "LEHMER_CONSTANTS",
    "SeedVector",
    "VectorFile",
    "build_vector_file",
    "constants_match",
    "decode_vector_file",
    "encode_vector_file",
    "raw_sequence",
    "verify_vector_file",
]
