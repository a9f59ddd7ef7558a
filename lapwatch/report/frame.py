"""Tabular export of a timer tree."""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from ..timing.timer_node import TimerNode
from .schemas import TimerSnapshot, snapshot

COLUMNS = ["path", "name", "depth", "count", "total", "mean", "std", "min", "max", "share"]


def _flatten(snap: TimerSnapshot, prefix: str, depth: int, rows: List[Dict[str, object]]) -> None:
    path = f"{prefix}/{snap.name}" if prefix else snap.name
    rows.append(
        {
            "path": path,
            "name": snap.name,
            "depth": depth,
            "count": snap.count,
            "total": snap.total,
            "mean": snap.mean,
            "std": snap.std,
            "min": snap.min,
            "max": snap.max,
            "share": snap.share,
        }
    )
    for child in snap.children:
        _flatten(child, path, depth + 1, rows)


def to_frame(node: TimerNode) -> pd.DataFrame:
    """One row per node in pre-order; times in seconds, ``share`` in percent."""

    rows: List[Dict[str, object]] = []
    _flatten(snapshot(node), "", 0, rows)
    return pd.DataFrame(rows, columns=COLUMNS)


__all__ = ["to_frame", "COLUMNS"]
