from __future__ import annotations

import re
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lapwatch.report.renderer import render_statistic, render_tree, share_percent
from lapwatch.stats.accumulator import StatAccumulator
from lapwatch.timing.timer_node import TimerNode
from lapwatch.utils.config import RenderConfig


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> None:
        self.now += dt


def sample(node: TimerNode, clock: FakeClock, dt: float) -> None:
    node.start()
    clock.advance(dt)
    node.stop()


def percent_of(line: str):
    match = re.search(r"\s(\d+)% ", line)
    return int(match.group(1)) if match else None


def test_share_percent():
    assert share_percent(1.0, 3.0) == 33
    assert share_percent(2.0, 3.0) == 67
    assert share_percent(1.0, 0.0) is None


def test_empty_node_placeholder_skips_children():
    root = TimerNode("root")
    root.nest("child")
    assert render_tree(root) == "root".ljust(30) + "has no sample yet.\n"


def test_single_line_layout():
    clock = FakeClock()
    root = TimerNode("root", clock=clock)
    sample(root, clock, 0.5)
    expected = (
        "root".ljust(30)
        + "     0.5s  "
        + " " * 5
        + "       1  calls   mean|std: "
        + "     500 | 0       "
        + "  [min|max:  "
        + "     500 | 500     "
        + "] in ms\n"
    )
    assert render_tree(root) == expected


def test_nested_tree_shape_and_share():
    clock = FakeClock()
    root = TimerNode("root", clock=clock)
    child = root.nest("child")
    other = root.nest("other")
    grandchild = child.nest("grandchild")

    sample(root, clock, 1.0)
    sample(child, clock, 0.25)
    sample(grandchild, clock, 0.05)

    lines = render_tree(root).splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("root".ljust(30))
    assert percent_of(lines[0]) is None
    assert lines[1].startswith("|-" + "child".ljust(28))
    assert percent_of(lines[1]) == 25
    assert lines[2].startswith("| |-" + "grandchild".ljust(26))
    assert percent_of(lines[2]) == 20
    assert lines[3] == "|-" + "other".ljust(28) + "has no sample yet."


def test_zero_parent_total_omits_share():
    clock = FakeClock()
    root = TimerNode("root", clock=clock)
    child = root.nest("child")
    sample(root, clock, 0.0)
    sample(child, clock, 0.1)
    lines = render_tree(root).splitlines()
    assert "%" not in lines[1]


def test_parent_region_contains_child():
    clock = FakeClock()
    parent = TimerNode("parent", clock=clock)
    child = parent.nest("child")
    parent.start()
    clock.advance(0.01)
    child.start()
    clock.advance(0.03)
    child.stop()
    clock.advance(0.02)
    parent.stop()

    assert parent.total() >= child.total()
    share = percent_of(render_tree(parent).splitlines()[1])
    assert share == round(100 * child.total() / parent.total())
    assert 0 <= share <= 100


def test_render_config_widths():
    clock = FakeClock()
    root = TimerNode("r", clock=clock)
    child = root.nest("c")
    sample(root, clock, 1.0)
    sample(child, clock, 1.0)
    lines = render_tree(root, config=RenderConfig(name_width=10, width_step=4)).splitlines()
    assert lines[0].startswith("r".ljust(10) + "       1s")
    assert lines[1].startswith("|-" + "c".ljust(6) + "       1s")


def test_render_statistic():
    acc = StatAccumulator()
    assert render_statistic(acc) == "Statistic has no sample yet!\n"
    for value in [1, 2, 3, 4, 5]:
        acc.add(value)
    assert render_statistic(acc) == "Statistic".ljust(16) + "mean|std  3    |1.58   [min|max:  1    |5    ]\n"
