"""Pydantic models describing a timer tree."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..stats.accumulator import StatAccumulator
from ..timing.timer_node import TimerNode
from .renderer import share_percent


class StatSnapshot(BaseModel):
    name: str
    count: int
    mean: float
    std: float
    last: float
    min: Optional[float] = None
    max: Optional[float] = None
    total: float


class TimerSnapshot(StatSnapshot):
    share: Optional[int] = None
    children: List["TimerSnapshot"] = Field(default_factory=list)


TimerSnapshot.model_rebuild()


def stat_snapshot(stats: StatAccumulator) -> StatSnapshot:
    empty = stats.count() == 0
    return StatSnapshot(
        name=stats.name(),
        count=stats.count(),
        mean=stats.mean(),
        std=stats.std(),
        last=stats.last(),
        min=None if empty else stats.min(),
        max=None if empty else stats.max(),
        total=stats.sum(),
    )


def snapshot(node: TimerNode, parent_total: float = 0.0) -> TimerSnapshot:
    """Capture ``node`` and its subtree. Extrema are ``None`` before the first sample."""

    base = stat_snapshot(node.stats)
    return TimerSnapshot(
        **base.model_dump(),
        share=share_percent(base.total, parent_total) if base.count else None,
        children=[snapshot(child, base.total) for child in node.children],
    )


__all__ = ["StatSnapshot", "TimerSnapshot", "snapshot", "stat_snapshot"]
