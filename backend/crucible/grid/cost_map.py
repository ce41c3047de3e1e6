from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import numpy as np


_INT64_MAX = int(np.iinfo(np.int64).max)


class CostMapFormatError(ValueError):
    pass


class Position(NamedTuple):
    x: int
    y: int


class CostMap:
    """Immutable grid of non-negative per-cell entry costs, indexed by (x, y)."""

    def __init__(self, values) -> None:
        try:
            arr = np.asarray(values)
        except ValueError as exc:
            raise CostMapFormatError(f"cost map rows must have equal length: {exc}") from exc
        if arr.dtype == object:
            raise CostMapFormatError("cost map rows must have equal length")
        if arr.ndim != 2:
            raise CostMapFormatError(f"cost map must be 2D, got ndim={arr.ndim}")
        h, w = arr.shape
        if h == 0 or w == 0:
            raise CostMapFormatError("cost map must contain at least one row and one column")
        if not np.issubdtype(arr.dtype, np.integer):
            raise CostMapFormatError(f"cost map values must be integers, got dtype={arr.dtype}")
        if int(arr.min()) < 0:
            raise CostMapFormatError("cost map values must be non-negative")
        if int(arr.max()) > _INT64_MAX:
            raise CostMapFormatError(f"cost map values must be <= {_INT64_MAX}")
        self._values = arr.astype(np.int64, copy=True)
        self._values.setflags(write=False)
        self._height = int(h)
        self._width = int(w)

    @classmethod
    def from_rows(cls, rows) -> CostMap:
        rows = [list(row) for row in rows]
        if not rows:
            raise CostMapFormatError("cost map must contain at least one row")
        width = len(rows[0])
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise CostMapFormatError(f"row {idx} has length {len(row)}, expected {width}")
        return cls(rows)

    @classmethod
    def from_text(cls, text: str) -> CostMap:
        """Parse one decimal digit per cell, one row per non-blank line."""
        rows: list[list[int]] = []
        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue
            row = []
            for col, ch in enumerate(line):
                if not ch.isdigit() or not ch.isascii():
                    raise CostMapFormatError(f"invalid cost {ch!r} at line {line_no}, column {col + 1}")
                row.append(int(ch))
            rows.append(row)
        if not rows:
            raise CostMapFormatError("cost map input is empty")
        return cls.from_rows(rows)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        return self._height, self._width

    @property
    def values(self) -> np.ndarray:
        return self._values

    def contains(self, position: tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, position: tuple[int, int]) -> int | None:
        x, y = position
        if not (0 <= x < self._width and 0 <= y < self._height):
            return None
        return int(self._values[y, x])

    def top_left(self) -> Position:
        return Position(0, 0)

    def bottom_right(self) -> Position:
        return Position(self._width - 1, self._height - 1)

    def max_cost(self) -> int:
        return int(self._values.max())

    def total_cost(self) -> int:
        return int(self._values.sum())

    def render(self) -> str:
        return "\n".join("".join(str(int(v)) for v in row) for row in self._values)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"CostMap(width={self._width}, height={self._height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CostMap):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash((self.shape, self._values.tobytes()))


def load_cost_map(path: Path) -> CostMap:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"cost map file not found: {path}")
    return CostMap.from_text(path.read_text(encoding="utf-8"))
