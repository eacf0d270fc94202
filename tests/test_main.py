from __future__ import annotations

from pathlib import Path

import pytest

from cfg import CFG
from main import main, parse_args


@pytest.fixture
def bridged(tmp_path: Path) -> Path:
    path = tmp_path / "bridged.txt"
    path.write_text("0/2@1\n0/3@1\n2/3@100\n2/3@100\n")
    return path


def test_parse_args_defaults() -> None:
    cfg = parse_args(["brute"])
    assert cfg.MODE == "brute"
    assert cfg.PROBLEM == CFG.PROBLEM
    assert cfg.INPUT == "-"
    assert cfg.SOURCE == 0
    assert cfg.TARGET is None


def test_parse_args_problem_variant() -> None:
    assert parse_args(["fast", "2", "x.txt"]).PROBLEM == 2
    assert parse_args(["fast", "7", "x.txt"]).PROBLEM == 2


@pytest.mark.parametrize("mode", ["fast", "brute"])
def test_reports_longest_trail(mode: str, bridged: Path, capsys) -> None:
    assert main([mode, "1", str(bridged)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "3 nodes"
    assert out[1] == "longest path length: 201"


def test_target_report(bridged: Path, capsys) -> None:
    assert main(["fast", "1", str(bridged), "--target", "0"]) == 0
    out = capsys.readouterr().out
    assert "trail 0 -> 0: 0" in out
    assert "removed 0/2@1" in out
    assert "removed 0/3@1" in out
    assert "stranded weight: 200" in out


def test_aoc_style_input(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bridges.txt"
    path.write_text("0/2\n2/2\n2/3\n3/4\n3/5\n0/1\n10/1\n9/10\n")
    assert main(["fast", "1", str(path)]) == 0
    fast = capsys.readouterr().out
    assert main(["brute", "1", str(path)]) == 0
    assert capsys.readouterr().out == fast
    assert "longest path length: 31" in fast


def test_random_input(capsys) -> None:
    assert main(["fast", "--random", "5", "--seed", "2"]) == 0
    assert capsys.readouterr().out.startswith("5 nodes\n")


def test_negative_cost_line_ends_input(tmp_path: Path, capsys) -> None:
    path = tmp_path / "negative.txt"
    path.write_text("0/1\n-3/1\n1/2\n")
    assert main(["fast", "1", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["2 nodes", "longest path length: 1"]
