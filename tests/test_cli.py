from __future__ import annotations

from pathlib import Path

import msgspec
from typer.testing import CliRunner

from lehmer.cli import app


def _lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def test_draw_prints_next_values() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0", "--count", "3"])
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == ["321050320", "1058056618", "1992895981"]


def test_draw_accepts_hex_seed_and_bounds() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0x2a", "--count", "5", "--min", "0", "--max", "100"])
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == ["28", "98", "0", "20", "40"]


def test_draw_doubles() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0", "--double"])
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == [str(321050320 / 4294967295)]


def test_draw_rejects_invalid_range() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0", "--min", "5", "--max", "5"])
    assert result.exit_code == 2
    assert "invalid range" in result.output


def test_draw_requires_max_with_min() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0", "--min", "5"])
    assert result.exit_code == 2
    assert "requires --max" in result.output


def test_draw_rejects_oversized_seed() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "0x100000000"])
    assert result.exit_code == 2


def test_draw_trace_writes_log(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["draw", "--seed", "7", "--count", "2", "--trace", "--base-dir", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "1754802637" in result.output

    logs = sorted((tmp_path / "logs" / "trace").glob("rng-draw-*.log"))
    assert len(logs) == 1
    text = logs[0].read_text(encoding="utf-8")
    assert "event=init" in text
    assert "event=start state=0x00000007" in text
    assert "event=draw index=0 value=1754802637" in text
    assert "event=draw index=1 value=1279464464" in text


def test_bytes_prints_hex() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["bytes", "--seed", "0", "--count", "8"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "d0aaed5ad251f224"


def test_vectors_to_stdout() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["vectors", "--seed", "0", "--seed", "1", "--count", "2"])
    assert result.exit_code == 0, result.output
    data = msgspec.json.decode(result.output)
    assert data["vectors"][0] == {"seed": 0, "raw": [321050320, 1058056618]}
    assert data["vectors"][1]["raw"] == [3697677177, 1166716369]


def test_vectors_requires_seed() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["vectors"])
    assert result.exit_code == 2


def test_vectors_write_then_verify(tmp_path: Path) -> None:
    runner = CliRunner()
    out = tmp_path / "golden.json"
    result = runner.invoke(app, ["vectors", "--seed", "42", "--count", "4", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.is_file()

    result = runner.invoke(app, ["vectors", "--verify", str(out)])
    assert result.exit_code == 0, result.output
    assert "ok: 1 vectors" in result.output

    tampered = out.read_text(encoding="utf-8").replace("4177205028", "4177205029")
    out.write_text(tampered, encoding="utf-8")
    result = runner.invoke(app, ["vectors", "--verify", str(out)])
    assert result.exit_code == 1
    assert "0x0000002a" in result.output


def test_snapshot_save_and_show(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "rng.lhmr"
    result = runner.invoke(app, ["snapshot", "save", str(path), "--seed", "0", "--advance", "2"])
    assert result.exit_code == 0, result.output
    assert "0x3f10a9aa" in result.output

    result = runner.invoke(app, ["snapshot", "show", str(path), "--count", "1"])
    assert result.exit_code == 0, result.output
    assert _lines(result.output) == ["version: 1", "state: 0x3f10a9aa", "1992895981"]


def test_snapshot_show_rejects_garbage(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "bad.lhmr"
    path.write_bytes(b"not a snapshot")
    result = runner.invoke(app, ["snapshot", "show", str(path)])
    assert result.exit_code == 1


def test_vectors_verify_rejects_seed_outside_32_bits(tmp_path: Path) -> None:
    path = tmp_path / "wide.json"
    path.write_text(
        '{"constants": [3777035285, 1245296397, 318428617], "vectors": [{"seed": 4294967296, "raw": [1]}]}',
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(app, ["vectors", "--verify", str(path)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "invalid vector file" in result.output


def test_vectors_verify_rejects_foreign_constants(tmp_path: Path) -> None:
    path = tmp_path / "foreign.json"
    path.write_text('{"constants": [1, 2, 3], "vectors": [{"seed": 0, "raw": [321050320]}]}', encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["vectors", "--verify", str(path)])
    assert result.exit_code == 1
    assert "constants mismatch" in result.output
    assert "ok:" not in result.output


def test_draw_rejected_range_leaves_no_trace(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["draw", "--seed", "0", "--min", "5", "--max", "5", "--trace", "--base-dir", str(tmp_path)]
    )
    assert result.exit_code == 2
    assert not (tmp_path / "logs").exists()

    result = runner.invoke(app, ["draw", "--seed", "0x100000000", "--trace", "--base-dir", str(tmp_path)])
    assert result.exit_code == 2
    assert not (tmp_path / "logs").exists()
