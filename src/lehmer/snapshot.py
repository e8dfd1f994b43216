from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from construct import Const, ConstructError, Int32ul, Struct

from .generator import LehmerRandom

SNAPSHOT_MAGIC = b"LHMR"
SNAPSHOT_VERSION = 1
SNAPSHOT_SIZE = 0x0C
SNAPSHOT_SUFFIX = ".lhmr"

SNAPSHOT_STRUCT = Struct(
    "magic" / Const(SNAPSHOT_MAGIC),
    "version" / Int32ul,
    "state" / Int32ul,
)


class SnapshotError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    version: int
    state: int

    def to_generator(self) -> LehmerRandom:
        return LehmerRandom(self.state)


def dump_state(rng: LehmerRandom) -> bytes:
    return SNAPSHOT_STRUCT.build({"version": SNAPSHOT_VERSION, "state": rng.state})


def parse_snapshot(blob: bytes) -> StateSnapshot:
    if len(blob) != SNAPSHOT_SIZE:
        raise SnapshotError(f"snapshot must be {SNAPSHOT_SIZE} bytes, got {len(blob)}")
    try:
        parsed = SNAPSHOT_STRUCT.parse(blob)
    except ConstructError as exc:
        raise SnapshotError(f"not a lehmer state snapshot: {exc}") from exc
    version = int(parsed.version)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {version} (expected {SNAPSHOT_VERSION})")
    return StateSnapshot(version=version, state=int(parsed.state))


def restore_state(blob: bytes) -> LehmerRandom:
    return parse_snapshot(blob).to_generator()


def save_state(path: Path, rng: LehmerRandom) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_state(rng))
    return path


def load_state(path: Path) -> LehmerRandom:
    return restore_state(path.read_bytes())


__all__ = [
    "SNAPSHOT_MAGIC",
    "SNAPSHOT_SIZE",
    "SNAPSHOT_STRUCT",
    "SNAPSHOT_SUFFIX",
    "SNAPSHOT_VERSION",
    "SnapshotError",
    "StateSnapshot",
    "dump_state",
    "load_state",
    "parse_snapshot",
    "restore_state",
    "save_state",
]
