from __future__ import annotations

import logging
import operator
import time
from dataclasses import dataclass, field

from crucible.grid.cost_map import CostMap, Position
from crucible.planning.frontier import BestCostTable, MinPriorityQueue
from crucible.planning.motion import legal_transitions, start_state


logger = logging.getLogger(__name__)


class SearchConfigError(ValueError):
    pass


class SearchBudgetExceeded(RuntimeError):
    pass


@dataclass(frozen=True)
class SearchResult:
    cost: int | None
    expanded: int
    pushed: int
    stale_skipped: int
    table_size: int
    runtime_ms: float
    popped_costs: list[int] = field(default_factory=list)

    @property
    def reachable(self) -> bool:
        return self.cost is not None

    def as_dict(self) -> dict:
        return {
            "cost": self.cost,
            "reachable": self.reachable,
            "expanded": self.expanded,
            "pushed": self.pushed,
            "stale_skipped": self.stale_skipped,
            "table_size": self.table_size,
            "runtime_ms": round(float(self.runtime_ms), 3),
        }


def _require_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise SearchConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise SearchConfigError(f"{name} must be an integer, got {value!r}") from exc


def validate_search_request(
    cost_map: CostMap,
    start: tuple[int, int],
    goal: tuple[int, int],
    min_run: int,
    max_run: int,
    max_expansions: int | None = None,
) -> tuple[Position, Position]:
    min_run = _require_int("min_run", min_run)
    max_run = _require_int("max_run", max_run)
    if min_run < 0:
        raise SearchConfigError(f"min_run must be >= 0, got {min_run}")
    if max_run <= 0:
        raise SearchConfigError(f"max_run must be >= 1, got {max_run}")
    if min_run > max_run:
        raise SearchConfigError(f"min_run={min_run} exceeds max_run={max_run}")
    if max_expansions is not None and _require_int("max_expansions", max_expansions) <= 0:
        raise SearchConfigError(f"max_expansions must be >= 1 when set, got {max_expansions}")

    checked = []
    for name, point in (("start", start), ("goal", goal)):
        try:
            x, y = point
        except (TypeError, ValueError) as exc:
            raise SearchConfigError(f"{name} must be an (x, y) pair, got {point!r}") from exc
        pos = Position(_require_int(f"{name}.x", x), _require_int(f"{name}.y", y))
        if not cost_map.contains(pos):
            raise SearchConfigError(
                f"{name}=({pos.x},{pos.y}) outside grid bounds width={cost_map.width}, height={cost_map.height}"
            )
        checked.append(pos)
    return checked[0], checked[1]


def run_search(
    cost_map: CostMap,
    start: tuple[int, int],
    goal: tuple[int, int],
    min_run: int,
    max_run: int,
    *,
    max_expansions: int | None = None,
    trace: bool = False,
) -> SearchResult:
    """Uniform-cost search over (position, direction, run_length) states.

    The goal only counts once the traveler has moved at least ``min_run`` cells
    in its current direction. Returns a result with ``cost=None`` when no
    run-length-legal path exists.
    """
    start_pos, goal_pos = validate_search_request(cost_map, start, goal, min_run, max_run, max_expansions)

    t0 = time.perf_counter()
    best = BestCostTable()
    queue = MinPriorityQueue()
    initial = start_state(start_pos)
    best.relax(initial, 0)
    queue.push(0, initial)

    expanded = 0
    pushed = 1
    stale_skipped = 0
    popped_costs: list[int] = []
    found: int | None = None

    while queue:
        cost, state = queue.pop()
        if best.is_stale(state, cost):
            stale_skipped += 1
            continue
        if trace:
            popped_costs.append(cost)
        if state.position == goal_pos and state.run_length >= min_run:
            found = cost
            break

        expanded += 1
        if max_expansions is not None and expanded > max_expansions:
            raise SearchBudgetExceeded(
                f"search exceeded max_expansions={max_expansions} (min_run={min_run}, max_run={max_run})"
            )
        for transition in legal_transitions(cost_map, state, min_run, max_run):
            next_cost = cost + transition.entry_cost
            if best.relax(transition.state, next_cost):
                queue.push(next_cost, transition.state)
                pushed += 1

    runtime_ms = (time.perf_counter() - t0) * 1000.0
    result = SearchResult(
        cost=found,
        expanded=expanded,
        pushed=pushed,
        stale_skipped=stale_skipped,
        table_size=len(best),
        runtime_ms=runtime_ms,
        popped_costs=popped_costs,
    )
    logger.debug(
        "search %s->%s runs=[%d,%d] cost=%s expanded=%d pushed=%d stale=%d in %.3f ms",
        tuple(start_pos),
        tuple(goal_pos),
        min_run,
        max_run,
        found,
        expanded,
        pushed,
        stale_skipped,
        runtime_ms,
    )
    return result


def shortest_cost(
    cost_map: CostMap,
    start: tuple[int, int],
    goal: tuple[int, int],
    min_run: int,
    max_run: int,
    *,
    max_expansions: int | None = None,
) -> int | None:
    return run_search(cost_map, start, goal, min_run, max_run, max_expansions=max_expansions).cost
