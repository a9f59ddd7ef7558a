"""Text rendering of accumulators and nested timer trees."""

from __future__ import annotations

from typing import List, Optional

from ..stats.accumulator import StatAccumulator
from ..timing.timer_node import TimerNode
from ..utils.config import RenderConfig


def share_percent(total: float, parent_total: float) -> Optional[int]:
    """Percentage of ``parent_total`` spent in ``total``; ``None`` without a parent."""

    if not parent_total:
        return None
    return round(100.0 * total / parent_total)


def render_statistic(stats: StatAccumulator) -> str:
    """One-line summary of a bare accumulator."""

    if stats.count() < 1:
        return f"{stats.name()} has no sample yet!\n"
    return (
        f"{stats.name():<16}mean|std  {stats.mean():<5.3g}|{stats.std():<5.3g}"
        f"  [min|max:  {stats.min():<5.3g}|{stats.max():<5.3g}]\n"
    )


def _render_line(node: TimerNode, width: int, parent_total: float) -> str:
    total = node.total()
    share = share_percent(total, parent_total)
    share_field = f"{share:>3d}% " if share is not None else " " * 5
    return (
        f"{node.name():<{width}}{total:>8.3g}s  {share_field}{node.count():>8d}  calls   mean|std: "
        f"{1000 * node.mean():>8.3g} | {1000 * node.std():<8.3g}  [min|max:  "
        f"{1000 * node.min():>8.3g} | {1000 * node.max():<8.3g}] in ms\n"
    )


def render_tree(
    node: TimerNode,
    parent_total: float = 0.0,
    depth: int = 0,
    config: Optional[RenderConfig] = None,
) -> str:
    """Depth-first report of ``node`` and its children.

    Each child line carries its share of this node's total. A node without
    samples prints a placeholder and its subtree is skipped.
    """

    config = config or RenderConfig()
    width = max(config.name_width - config.width_step * depth, 1)
    if node.count() < 1:
        return f"{node.name():<{width}}has no sample yet.\n"

    parts: List[str] = [_render_line(node, width, parent_total)]
    total = node.total()
    for child in node.children:
        parts.append("| " * depth + "|-")
        parts.append(render_tree(child, total, depth + 1, config))
    return "".join(parts)


__all__ = ["render_tree", "render_statistic", "share_percent"]
