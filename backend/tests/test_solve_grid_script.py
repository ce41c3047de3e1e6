from __future__ import annotations

import json
from pathlib import Path

import pytest

from crucible.core import config as config_module
from scripts.solve_grid import main


SAMPLE_GRID = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "input.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_prints_one_cost_per_default_profile(tmp_path: Path, capsys) -> None:
    code = main([str(_write(tmp_path, SAMPLE_GRID))])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["102", "94"]


def test_custom_profile_json_report(tmp_path: Path, capsys) -> None:
    code = main([str(_write(tmp_path, "111\n111\n111\n")), "--min-run", "2", "--max-run", "2", "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["profiles"][0]["profile"] == "custom"
    assert payload["profiles"][0]["cost"] == 4


def test_unreachable_exits_with_one(tmp_path: Path, capsys) -> None:
    code = main([str(_write(tmp_path, "11111\n")), "--min-run", "0", "--max-run", "3"])
    assert code == 1
    assert capsys.readouterr().out.strip() == "unreachable"


def test_bad_input_exits_with_two(tmp_path: Path, capsys) -> None:
    assert main([str(_write(tmp_path, "12\n3\n"))]) == 2
    assert "error:" in capsys.readouterr().err
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert main([str(_write(tmp_path, "11\n11\n")), "--min-run", "1"]) == 2


def test_bad_log_level_is_an_argument_error(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(_write(tmp_path, "11\n11\n")), "--log-level", "LOUD"])
    assert exc_info.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_is_case_insensitive(tmp_path: Path, capsys) -> None:
    assert main([str(_write(tmp_path, "11\n11\n")), "--log-level", "debug", "--min-run", "0", "--max-run", "3"]) == 0
    assert capsys.readouterr().out.strip() == "2"


def test_bad_configured_log_level_exits_with_two(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("CRUCIBLE_LOG_LEVEL", "chatty")
    config_module.get_settings.cache_clear()
    try:
        assert main([str(_write(tmp_path, "11\n11\n"))]) == 2
        assert "unsupported log level" in capsys.readouterr().err
    finally:
        config_module.get_settings.cache_clear()
