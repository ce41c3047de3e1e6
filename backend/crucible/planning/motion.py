from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from crucible.grid.cost_map import CostMap, Position


class Direction(Enum):
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    @property
    def reverse(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class SearchState(NamedTuple):
    position: Position
    direction: Direction | None
    run_length: int


class Transition(NamedTuple):
    direction: Direction
    straight: bool
    state: SearchState
    entry_cost: int


_CANDIDATES: dict[Direction | None, tuple[tuple[Direction, bool], ...]] = {
    None: (
        (Direction.LEFT, True),
        (Direction.UP, True),
        (Direction.RIGHT, True),
        (Direction.DOWN, True),
    ),
    Direction.UP: ((Direction.LEFT, False), (Direction.UP, True), (Direction.RIGHT, False)),
    Direction.LEFT: ((Direction.DOWN, False), (Direction.LEFT, True), (Direction.UP, False)),
    Direction.DOWN: ((Direction.RIGHT, False), (Direction.DOWN, True), (Direction.LEFT, False)),
    Direction.RIGHT: ((Direction.DOWN, False), (Direction.RIGHT, True), (Direction.UP, False)),
}


def candidate_moves(direction: Direction | None) -> tuple[tuple[Direction, bool], ...]:
    """Moves offered before run-length checks; the reverse is never offered."""
    return _CANDIDATES[direction]


def step(position: tuple[int, int], direction: Direction) -> Position:
    dx, dy = direction.delta
    return Position(position[0] + dx, position[1] + dy)


def start_state(position: tuple[int, int]) -> SearchState:
    return SearchState(Position(*position), None, 0)


def legal_transitions(
    cost_map: CostMap,
    state: SearchState,
    min_run: int,
    max_run: int,
) -> list[Transition]:
    out: list[Transition] = []
    first_move = state.direction is None
    for direction, straight in candidate_moves(state.direction):
        if first_move:
            run_length = 1
        elif straight:
            if state.run_length >= max_run:
                continue
            run_length = state.run_length + 1
        else:
            if state.run_length < min_run:
                continue
            run_length = 1

        position = step(state.position, direction)
        entry_cost = cost_map.get(position)
        if entry_cost is None:
            continue
        out.append(
            Transition(
                direction=direction,
                straight=straight,
                state=SearchState(position, direction, run_length),
                entry_cost=entry_cost,
            )
        )
    return out
