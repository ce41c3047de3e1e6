from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from crucible.grid.cost_map import CostMap
from crucible.planning.search import SearchResult, run_search, validate_search_request


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunProfile:
    name: str
    min_run: int
    max_run: int


@dataclass(frozen=True)
class ProfileOutcome:
    profile: RunProfile
    result: SearchResult

    def as_dict(self) -> dict:
        return {
            "profile": self.profile.name,
            "min_run": self.profile.min_run,
            "max_run": self.profile.max_run,
            **self.result.as_dict(),
        }


@dataclass(frozen=True)
class SolveReport:
    width: int
    height: int
    start: tuple[int, int]
    goal: tuple[int, int]
    outcomes: list[ProfileOutcome]
    runtime_ms: float

    def costs(self) -> dict[str, int | None]:
        return {o.profile.name: o.result.cost for o in self.outcomes}

    def as_dict(self) -> dict:
        return {
            "grid": {"width": self.width, "height": self.height},
            "start": {"x": self.start[0], "y": self.start[1]},
            "goal": {"x": self.goal[0], "y": self.goal[1]},
            "profiles": [o.as_dict() for o in self.outcomes],
            "runtime_ms": round(float(self.runtime_ms), 3),
        }


def solve_cost_map(
    cost_map: CostMap,
    profiles: list[RunProfile],
    *,
    start: tuple[int, int] | None = None,
    goal: tuple[int, int] | None = None,
    max_expansions: int | None = None,
    parallel: bool = False,
    max_workers: int | None = None,
) -> SolveReport:
    """Run one search per profile; defaults to top-left -> bottom-right.

    With ``parallel`` the profiles share a pool of at most ``max_workers``
    threads (default: the CPU count), never more threads than profiles.
    """
    if not profiles:
        raise ValueError("At least one run profile is required.")
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    start = cost_map.top_left() if start is None else start
    goal = cost_map.bottom_right() if goal is None else goal
    # Fail on the first bad profile before any search runs.
    for profile in profiles:
        validate_search_request(cost_map, start, goal, profile.min_run, profile.max_run, max_expansions)

    def _one(profile: RunProfile) -> ProfileOutcome:
        result = run_search(
            cost_map,
            start,
            goal,
            profile.min_run,
            profile.max_run,
            max_expansions=max_expansions,
        )
        logger.info(
            "profile=%s runs=[%d,%d] cost=%s expanded=%d runtime_ms=%.3f",
            profile.name,
            profile.min_run,
            profile.max_run,
            result.cost,
            result.expanded,
            result.runtime_ms,
        )
        return ProfileOutcome(profile=profile, result=result)

    t0 = time.perf_counter()
    if parallel and len(profiles) > 1:
        workers = min(len(profiles), max_workers or os.cpu_count() or 1)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(_one, profiles))
    else:
        outcomes = [_one(p) for p in profiles]
    runtime_ms = (time.perf_counter() - t0) * 1000.0

    return SolveReport(
        width=cost_map.width,
        height=cost_map.height,
        start=(int(start[0]), int(start[1])),
        goal=(int(goal[0]), int(goal[1])),
        outcomes=outcomes,
        runtime_ms=runtime_ms,
    )
