from __future__ import annotations

import pytest

from crucible.grid.cost_map import CostMap
from crucible.planning import solver as solver_module
from crucible.planning.search import SearchConfigError
from crucible.planning.solver import RunProfile, solve_cost_map


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

UNFORTUNATE_GRID = """\
111111111111
999999999991
999999999991
999999999991
999999999991
"""

STANDARD = RunProfile(name="standard", min_run=0, max_run=3)
ULTRA = RunProfile(name="ultra", min_run=4, max_run=10)


def test_sample_grid_default_profiles() -> None:
    report = solve_cost_map(CostMap.from_text(SAMPLE_GRID), [STANDARD, ULTRA])
    assert report.costs() == {"standard": 102, "ultra": 94}
    assert report.start == (0, 0)
    assert report.goal == (12, 12)


def test_ultra_profile_must_run_four_before_stopping() -> None:
    report = solve_cost_map(CostMap.from_text(UNFORTUNATE_GRID), [ULTRA])
    assert report.costs() == {"ultra": 71}


def test_parallel_profiles_match_sequential() -> None:
    cost_map = CostMap.from_text(SAMPLE_GRID)
    profiles = [STANDARD, ULTRA, RunProfile(name="tight", min_run=1, max_run=2)]
    sequential = solve_cost_map(cost_map, profiles)
    parallel = solve_cost_map(cost_map, profiles, parallel=True)
    assert sequential.costs() == parallel.costs()
    assert [o.profile.name for o in parallel.outcomes] == ["standard", "ultra", "tight"]


def test_custom_endpoints() -> None:
    cost_map = CostMap.from_rows([[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    report = solve_cost_map(cost_map, [STANDARD], start=(2, 2), goal=(0, 0))
    assert report.costs() == {"standard": 4}
    assert report.as_dict()["start"] == {"x": 2, "y": 2}


def test_unreachable_profile_reported_in_payload() -> None:
    corridor = CostMap.from_rows([[1, 1, 1, 1, 1]])
    payload = solve_cost_map(corridor, [STANDARD]).as_dict()
    assert payload["profiles"][0]["cost"] is None
    assert payload["profiles"][0]["reachable"] is False
    assert payload["grid"] == {"width": 5, "height": 1}


def test_bad_profile_fails_before_any_search() -> None:
    cost_map = CostMap.from_text(SAMPLE_GRID)
    with pytest.raises(SearchConfigError):
        solve_cost_map(cost_map, [STANDARD, RunProfile(name="bad", min_run=5, max_run=2)])
    with pytest.raises(ValueError):
        solve_cost_map(cost_map, [])


def test_parallel_pool_is_capped_by_max_workers(monkeypatch) -> None:
    created: list[int] = []
    real_pool = solver_module.ThreadPoolExecutor

    def _recording_pool(max_workers: int):
        created.append(max_workers)
        return real_pool(max_workers=max_workers)

    monkeypatch.setattr(solver_module, "ThreadPoolExecutor", _recording_pool)
    cost_map = CostMap.from_rows([[1] * 6 for _ in range(6)])
    profiles = [RunProfile(name=f"p{i}", min_run=0, max_run=3) for i in range(40)]

    report = solve_cost_map(cost_map, profiles, parallel=True, max_workers=3)
    assert created == [3]
    assert len(report.outcomes) == 40
    assert set(report.costs().values()) == {10}

    solve_cost_map(cost_map, profiles[:2], parallel=True, max_workers=8)
    assert created[-1] == 2

    with pytest.raises(ValueError):
        solve_cost_map(cost_map, profiles, parallel=True, max_workers=0)
