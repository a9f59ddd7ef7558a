"""Monotonic clock used by every timer."""

from __future__ import annotations

import time
from typing import Callable

# Returns seconds as a float. Must never go backwards.
Clock = Callable[[], float]

monotonic_clock: Clock = time.perf_counter


__all__ = ["Clock", "monotonic_clock"]
