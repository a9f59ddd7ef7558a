"""Running statistics over a stream of finite samples."""

from __future__ import annotations

import math
from typing import Dict, Optional

NAN = float("nan")


class StatAccumulator:
    """Welford accumulator for count, mean, sample std, last, min and max.

    With ``cap`` set, ``count`` saturates at ``cap`` and every later sample is
    weighted ``1 / cap`` in the mean, so old history decays at a fixed rate.
    Non-finite samples are ignored.
    """

    def __init__(self, name: str = "Statistic", cap: Optional[int] = None):
        if cap is not None and cap < 1:
            raise ValueError(f"cap must be a positive integer, got {cap!r}")
        self._name = name
        self.cap = cap
        self.reset()

    def add(self, value: float) -> float:
        """Feed one sample and return the updated mean (``nan`` if rejected)."""

        try:
            value = float(value)
        except OverflowError:
            return NAN
        if not math.isfinite(value):
            return NAN

        if self.cap is None or self._count < self.cap:
            self._count += 1
        mean_before = self._mean
        self._mean = mean_before + (value - mean_before) / self._count
        self._m2 += (value - mean_before) * (value - self._mean)

        self._last = value
        self._min = min(self._min, value)
        self._max = max(self._max, value)
        return self._mean

    def reset(self) -> None:
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._last = 0.0
        self._min = math.inf
        self._max = -math.inf

    def name(self) -> str:
        return self._name

    def count(self) -> int:
        return self._count

    def mean(self) -> float:
        return self._mean

    def std(self) -> float:
        if self._count < 2:
            return 0.0
        return math.sqrt(self._m2 / (self._count - 1))

    def last(self) -> float:
        return self._last

    def min(self) -> float:
        return self._min

    def max(self) -> float:
        return self._max

    def sum(self) -> float:
        """Accumulated total, ``mean * count``."""

        return self._mean * self._count

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": float(self._count),
            "mean": self._mean,
            "std": self.std(),
            "last": self._last,
            "min": self._min,
            "max": self._max,
            "sum": self.sum(),
        }

    def __repr__(self) -> str:
        return f"StatAccumulator(name={self._name!r}, count={self._count}, mean={self._mean:.6g})"


__all__ = ["StatAccumulator", "NAN"]
