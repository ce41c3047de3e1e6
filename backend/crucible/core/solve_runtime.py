from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Iterator


class SolveSlots:
    """Counts in-flight solves; callers that find no free slot are refused, not queued."""

    def __init__(self, max_concurrent: int = 2) -> None:
        self._lock = Lock()
        self._max = max(1, int(max_concurrent))
        self._active = 0
        self._rejected = 0

    def configure(self, *, max_concurrent: int) -> None:
        with self._lock:
            self._max = max(1, int(max_concurrent))

    def try_acquire(self) -> bool:
        with self._lock:
            if self._active >= self._max:
                self._rejected += 1
                return False
            self._active += 1
            return True

    def release(self) -> None:
        with self._lock:
            if self._active > 0:
                self._active -= 1

    @contextmanager
    def hold(self) -> Iterator[bool]:
        acquired = self.try_acquire()
        try:
            yield acquired
        finally:
            if acquired:
                self.release()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "max_concurrent": self._max,
                "active": self._active,
                "available_slots": max(0, self._max - self._active),
                "rejected": self._rejected,
            }


solve_slots = SolveSlots()
