"""Nested start/stop timers backed by a running-statistics accumulator."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..stats.accumulator import NAN, StatAccumulator
from .clock import Clock, monotonic_clock


class TimerNode:
    """Time a repeated code region and own a tree of nested regions.

    ``start`` arms the timer, ``stop`` feeds the elapsed seconds into the
    accumulator and re-arms it, so back to back ``stop`` calls act as laps.
    Children are only created through :meth:`nest`, which keeps the tree
    acyclic.
    """

    def __init__(self, name: str = "", cap: Optional[int] = None, clock: Clock = monotonic_clock):
        self.stats = StatAccumulator(name, cap=cap)
        self.clock = clock
        self._start: Optional[float] = None
        self._children: List[TimerNode] = []

    def start(self) -> None:
        self._start = self.clock()

    def stop(self) -> float:
        """Record one sample and return the accumulator's updated mean.

        Without a pending start no sample is taken; the timer is armed and
        ``nan`` is returned.
        """

        now = self.clock()
        started, self._start = self._start, now
        if started is None:
            return NAN
        return self.stats.add(now - started)

    def reset(self) -> None:
        self._start = None
        self.stats.reset()

    def nest(self, name: str, cap: Optional[int] = None) -> TimerNode:
        child = TimerNode(name, cap=cap, clock=self.clock)
        self._children.append(child)
        return child

    def find(self, name: str) -> Optional[TimerNode]:
        for child in self._children:
            if child.name() == name:
                return child
        return None

    @property
    def children(self) -> Sequence[TimerNode]:
        return tuple(self._children)

    @property
    def running(self) -> bool:
        return self._start is not None

    # Read accessors mirror the accumulator.
    def name(self) -> str:
        return self.stats.name()

    def count(self) -> int:
        return self.stats.count()

    def mean(self) -> float:
        return self.stats.mean()

    def std(self) -> float:
        return self.stats.std()

    def last(self) -> float:
        return self.stats.last()

    def min(self) -> float:
        return self.stats.min()

    def max(self) -> float:
        return self.stats.max()

    def total(self) -> float:
        return self.stats.sum()

    sum = total

    def as_dict(self) -> Dict[str, float]:
        return self.stats.as_dict()

    def __repr__(self) -> str:
        return f"TimerNode(name={self.name()!r}, count={self.count()}, children={len(self._children)})"


__all__ = ["TimerNode"]
