import argparse
from pathlib import Path

import pytest

from pathlattice.__main__ import build_grid_spec, build_parser, main, parse_point
from pathlattice.sim.map_loader import MAP_ENV_VAR


def test_parse_point() -> None:
    assert parse_point("3,4") == (3, 4)
    assert parse_point(" 1 , 2 ") == (1, 2)
    for bad in ["3", "a,b", "-1,2", "1,2,3"]:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_point(bad)


def test_grid_spec_from_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(MAP_ENV_VAR, raising=False)
    args = build_parser().parse_args(
        ["--width", "6", "--height", "4", "--start", "0,0", "--obstacle", "1,1"]
    )

    spec = build_grid_spec(args)

    assert (spec.width, spec.height) == (6, 4)
    assert spec.start == (0, 0)
    assert spec.end == (4, 2)
    assert spec.obstacles == [(1, 1)]


def test_grid_spec_from_map_with_overrides(tmp_path: Path) -> None:
    path = tmp_path / "map.txt"
    path.write_text("S...\n.#..\n...E\n", encoding="utf-8")
    args = build_parser().parse_args(
        ["--map", str(path), "--obstacle", "2,0", "--end", "3,1"]
    )

    spec = build_grid_spec(args)

    assert spec.obstacles == [(1, 1), (2, 0)]
    assert spec.start == (0, 0)
    assert spec.end == (3, 1)


def test_main_runs_and_replays(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv(MAP_ENV_VAR, raising=False)
    main(["--start", "0,0", "--end", "2,0", "--trace-dir", str(tmp_path)])
    output = capsys.readouterr().out
    assert "succeeded" in output
    assert "Trace saved to" in output

    main(["--replay-latest", "--trace-dir", str(tmp_path)])
    replay_output = capsys.readouterr().out
    assert "succeeded" in replay_output


def test_main_replay_without_runs(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="No run folder found"):
        main(["--replay-latest", "--trace-dir", str(tmp_path / "empty")])


def test_main_rejects_bad_map(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("....\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--map", str(path)])


def test_main_rejects_missing_map(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--map", str(tmp_path / "nope.txt")])
    assert excinfo.value.code == 2


def test_main_runs_start_equal_end_grid(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv(MAP_ENV_VAR, raising=False)
    main(["--width", "3", "--height", "3"])

    assert "succeeded" in capsys.readouterr().out
