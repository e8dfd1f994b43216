from __future__ import annotations

from pathlib import Path

import msgspec
import typer

from .core import InvalidRangeError, check_double_range, check_int_range
from .generator import LehmerRandom
from .paths import default_runtime_dir
from .seed import normalize_seed
from .snapshot import SnapshotError, parse_snapshot, save_state
from .trace import close_rng_trace, init_rng_trace, rng_trace
from .vectors import build_vector_file, constants_match, decode_vector_file, encode_vector_file, verify_vector_file


app = typer.Typer(add_completion=False)
snapshot_app = typer.Typer(add_completion=False)
app.add_typer(snapshot_app, name="snapshot")


def _parse_int_auto(text: str, *, param_hint: str | None = None) -> int:
    try:
        return int(text, 0)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid integer: {text!r}", param_hint=param_hint) from exc


def _parse_float(text: str, *, param_hint: str | None = None) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid number: {text!r}", param_hint=param_hint) from exc


def _parse_seed(seed: str | None) -> int | None:
    if seed is None:
        return None
    value = _parse_int_auto(seed, param_hint="--seed")
    try:
        return normalize_seed(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--seed") from exc


def _build_rng(seed: str | None) -> LehmerRandom:
    return LehmerRandom(_parse_seed(seed))


def _check_count(count: int) -> None:
    if count < 0:
        raise typer.BadParameter("count must be non-negative", param_hint="--count")


@app.command("draw")
def cmd_draw(
    seed: str | None = typer.Option(None, help="seed (decimal or 0x-hex; default: tick count)"),
    count: int = typer.Option(1, help="number of draws"),
    min_value: str | None = typer.Option(None, "--min", help="inclusive lower bound (default: 0)"),
    max_value: str | None = typer.Option(None, "--max", help="exclusive upper bound"),
    double: bool = typer.Option(False, "--double", help="draw floating-point values"),
    trace: bool = typer.Option(False, "--trace", help="write an rng event log under base-dir/logs/trace"),
    base_dir: Path = typer.Option(
        default_runtime_dir(),
        "--base-dir",
        "--runtime-dir",
        help="base path for runtime files (default: per-user OS data dir; override with LEHMER_RUNTIME_DIR)",
    ),
) -> None:
    """Print draws from a seeded generator, one per line."""
    _check_count(count)
    if min_value is not None and max_value is None:
        raise typer.BadParameter("--min requires --max", param_hint="--min")

    seed_value = _parse_seed(seed)
    try:
        if double:
            lo_f, hi_f = check_double_range(
                0.0 if min_value is None else _parse_float(min_value, param_hint="--min"),
                1.0 if max_value is None else _parse_float(max_value, param_hint="--max"),
            )
        elif max_value is not None:
            lo_i, hi_i = check_int_range(
                0 if min_value is None else _parse_int_auto(min_value, param_hint="--min"),
                _parse_int_auto(max_value, param_hint="--max"),
            )
    except InvalidRangeError as exc:
        raise typer.BadParameter(str(exc), param_hint="--min/--max") from exc

    if trace:
        trace_path = init_rng_trace(base_dir=base_dir, command="draw", seed=seed or "tick", count=count, double=double)
        typer.echo(f"trace: {trace_path}", err=True)
    try:
        rng = LehmerRandom(seed_value)
        rng_trace("start", state=f"0x{rng.state:08x}")
        for idx in range(count):
            if double:
                value: float = rng.next_double(lo_f, hi_f)
            elif max_value is not None:
                value = rng.next(lo_i, hi_i)
            else:
                value = rng.next()
            rng_trace("draw", index=idx, value=value)
            typer.echo(str(value))
    finally:
        if trace:
            close_rng_trace()


@app.command("bytes")
def cmd_bytes(
    seed: str | None = typer.Option(None, help="seed (decimal or 0x-hex; default: tick count)"),
    count: int = typer.Option(16, help="number of bytes"),
) -> None:
    """Fill a byte buffer from a seeded generator and print it as hex."""
    _check_count(count)
    rng = _build_rng(seed)
    buffer = bytearray(count)
    rng.next_bytes(buffer)
    typer.echo(buffer.hex())


@app.command("vectors")
def cmd_vectors(
    seeds: list[str] | None = typer.Option(None, "--seed", help="seed to record (repeatable)"),
    count: int = typer.Option(8, help="raw draws per seed"),
    out: Path | None = typer.Option(None, "--out", help="write JSON here instead of stdout"),
    verify: Path | None = typer.Option(None, "--verify", help="check a previously recorded vector file"),
) -> None:
    """Record or verify golden raw-state vectors as JSON."""
    if verify is not None:
        if not verify.is_file():
            typer.echo(f"vector file not found: {verify}", err=True)
            raise typer.Exit(code=1)
        try:
            data = decode_vector_file(verify.read_bytes())
        except msgspec.DecodeError as exc:
            typer.echo(f"invalid vector file {verify}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        if not constants_match(data):
            recorded = ", ".join(f"0x{value:08x}" for value in data.constants)
            typer.echo(f"constants mismatch in {verify}: recorded [{recorded}]", err=True)
            raise typer.Exit(code=1)
        try:
            mismatched = verify_vector_file(data)
        except (TypeError, ValueError) as exc:
            typer.echo(f"invalid vector file {verify}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        if mismatched:
            listed = ", ".join(f"0x{seed:08x}" for seed in mismatched)
            typer.echo(f"mismatched seeds: {listed}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"ok: {len(data.vectors)} vectors")
        return

    _check_count(count)
    if not seeds:
        raise typer.BadParameter("at least one seed is required", param_hint="--seed")
    parsed = [_parse_int_auto(text, param_hint="--seed") for text in seeds]
    try:
        blob = encode_vector_file(build_vector_file(parsed, count))
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--seed") from exc
    if out is None:
        typer.echo(blob.decode("utf-8"))
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(blob + b"\n")
    typer.echo(f"wrote {len(parsed)} vectors to {out}")


@snapshot_app.command("save")
def cmd_snapshot_save(
    path: Path = typer.Argument(..., help="snapshot file to write"),
    seed: str | None = typer.Option(None, help="seed (decimal or 0x-hex; default: tick count)"),
    advance: int = typer.Option(0, help="draws to skip before saving"),
) -> None:
    """Save a generator's state word to a snapshot file."""
    if advance < 0:
        raise typer.BadParameter("advance must be non-negative", param_hint="--advance")
    rng = _build_rng(seed)
    for _ in range(advance):
        rng.next_u32()
    save_state(path, rng)
    typer.echo(f"saved state 0x{rng.state:08x} to {path}")


@snapshot_app.command("show")
def cmd_snapshot_show(
    path: Path = typer.Argument(..., help="snapshot file to read"),
    count: int = typer.Option(0, help="also print this many next() draws from the restored state"),
) -> None:
    """Print a snapshot's state word and optionally continue its sequence."""
    _check_count(count)
    if not path.is_file():
        typer.echo(f"snapshot not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        snapshot = parse_snapshot(path.read_bytes())
    except SnapshotError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"version: {snapshot.version}")
    typer.echo(f"state: 0x{snapshot.state:08x}")
    rng = snapshot.to_generator()
    for _ in range(count):
        typer.echo(str(rng.next()))


def main(argv: list[str] | None = None) -> None:
    app(prog_name="lehmer", args=argv)


if __name__ == "__main__":
    main()
