"""Fixed-interval call gate."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ..timing.clock import Clock, monotonic_clock

T = TypeVar("T")


class Throttler(Generic[T]):
    """Call ``fn(obj, ...)`` at most once per ``period``.

    The first call always goes through. Suppressed calls return ``None``.
    """

    def __init__(self, obj: T, period: Union[float, timedelta], clock: Clock = monotonic_clock):
        self.obj = obj
        self.period = period.total_seconds() if isinstance(period, timedelta) else float(period)
        self.clock = clock
        self._last: Optional[float] = None

    def __call__(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        now = self.clock()
        if self._last is not None and now - self._last <= self.period:
            return None
        self._last = now
        return fn(self.obj, *args, **kwargs)


__all__ = ["Throttler"]
