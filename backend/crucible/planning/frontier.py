from __future__ import annotations

import heapq
import itertools

from crucible.planning.motion import SearchState


class MinPriorityQueue:
    """Binary min-heap of (cost, state) entries.

    Entries are never updated in place; callers push a new entry when a cheaper
    cost is found and must discard stale ones when popping.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, SearchState]] = []
        self._seq = itertools.count()

    def push(self, cost: int, state: SearchState) -> None:
        heapq.heappush(self._heap, (cost, next(self._seq), state))

    def pop(self) -> tuple[int, SearchState]:
        if not self._heap:
            raise IndexError("pop from empty priority queue")
        cost, _, state = heapq.heappop(self._heap)
        return cost, state

    def peek_cost(self) -> int | None:
        return self._heap[0][0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


class BestCostTable:
    """Lowest known accumulated cost per search state."""

    def __init__(self) -> None:
        self._best: dict[SearchState, int] = {}

    def get(self, state: SearchState) -> int | None:
        return self._best.get(state)

    def is_stale(self, state: SearchState, cost: int) -> bool:
        best = self._best.get(state)
        return best is not None and cost > best

    def relax(self, state: SearchState, cost: int) -> bool:
        best = self._best.get(state)
        if best is not None and cost >= best:
            return False
        self._best[state] = cost
        return True

    def __contains__(self, state: object) -> bool:
        return state in self._best

    def __len__(self) -> int:
        return len(self._best)
