from __future__ import annotations

import heapq
import itertools
from typing import Protocol


class Wakeable(Protocol):
    def regrow(self, now: float) -> bool:  # pragma: no cover
        ...


class Scheduler:
    """One-shot wake-ups at absolute times.

    Targets are woken by calling `target.regrow(now)`; the queue stores only
    (wake_time, order, target), never closures.
    """

    def __init__(self, *, now: float = 0.0) -> None:
        self.now = float(now)
        self._heap: list[tuple[float, int, Wakeable]] = []
        self._order = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, target: Wakeable, wake_time: float) -> None:
        heapq.heappush(self._heap, (float(wake_time), next(self._order), target))

    def next_wake_time(self) -> float | None:
        return self._heap[0][0] if self._heap else None

    def advance(self, now: float) -> list[Wakeable]:
        """Move the clock to `now` and wake every target that is due."""
        now = float(now)
        if now < self.now:
            raise ValueError("scheduler time cannot go backwards")
        self.now = now

        woken: list[Wakeable] = []
        while self._heap and self._heap[0][0] <= now:
            _, _, target = heapq.heappop(self._heap)
            if target.regrow(now):
                woken.append(target)
        return woken
