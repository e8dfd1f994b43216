from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock


@dataclass(slots=True)
class _TraceSink:
    path: Path
    seq: int = 0


_TRACE_LOCK = Lock()
_TRACE_SINK: _TraceSink | None = None


def _one_line(value: object) -> str:
    return str(value).replace("\n", "\\n")


def _format_fields(fields: dict[str, object]) -> str:
    return " ".join(f"{key}={_one_line(fields[key])}" for key in sorted(fields))


def rng_trace_path() -> Path | None:
    with _TRACE_LOCK:
        return None if _TRACE_SINK is None else _TRACE_SINK.path


def init_rng_trace(*, base_dir: Path, command: str, **fields: object) -> Path:
    """Start appending rng events to a fresh log under `base_dir/logs/trace`."""
    command_name = str(command).strip().lower() or "unknown"
    stamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = base_dir / "logs" / "trace" / f"rng-{command_name}-pid{os.getpid()}-{stamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)

    global _TRACE_SINK
    with _TRACE_LOCK:
        _TRACE_SINK = _TraceSink(path=path)

    rng_trace("init", command=command_name, pid=os.getpid(), **fields)
    return path


def rng_trace(event: str, **fields: object) -> None:
    """Append one event line; a no-op until `init_rng_trace` has been called."""
    with _TRACE_LOCK:
        sink = _TRACE_SINK
        if sink is None:
            return
        sink.seq += 1
        stamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
        line = f"{stamp} seq={sink.seq} event={str(event).strip()}"
        payload = _format_fields(fields)
        if payload:
            line += f" {payload}"
        with sink.path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


def close_rng_trace() -> None:
    global _TRACE_SINK
    with _TRACE_LOCK:
        _TRACE_SINK = None


__all__ = [
    "close_rng_trace",
    "init_rng_trace",
    "rng_trace",
    "rng_trace_path",
]
