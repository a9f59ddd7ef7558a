"""Scope-bound helpers around :class:`TimerNode`."""

from __future__ import annotations

import atexit
import functools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Protocol

from ..report.renderer import render_tree
from ..utils.config import RenderConfig
from .clock import Clock, monotonic_clock
from .timer_node import TimerNode


class ReportSink(Protocol):
    def write(self, text: str) -> Any: ...


class ScopedTimer(TimerNode):
    """A timer for one ``with`` block that reports when the block exits.

    The region is stopped on every exit path, exceptions included. The
    report goes to ``sink`` when one is given.
    """

    def __init__(
        self,
        name: str = "",
        sink: Optional[ReportSink] = None,
        config: Optional[RenderConfig] = None,
        clock: Clock = monotonic_clock,
    ):
        super().__init__(name, clock=clock)
        self.sink = sink
        self.config = config

    def __enter__(self) -> ScopedTimer:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        if self.sink is not None:
            self.sink.write(render_tree(self, config=self.config))
        return False


@contextmanager
def tic_toc(node: TimerNode) -> Iterator[TimerNode]:
    """Start ``node`` on entry and stop it on exit."""

    node.start()
    try:
        yield node
    finally:
        node.stop()


def timed(node: TimerNode) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator timing every call of the wrapped function on ``node``."""

    def deco(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tic_toc(node):
                return func(*args, **kwargs)

        return wrapper

    return deco


class StaticTimer(TimerNode):
    """Timer that writes its report to ``sink`` when the interpreter exits."""

    def __init__(
        self,
        name: str,
        sink: ReportSink,
        config: Optional[RenderConfig] = None,
        clock: Clock = monotonic_clock,
    ):
        super().__init__(name, clock=clock)
        self.sink = sink
        self.config = config
        atexit.register(self.report)

    def report(self) -> str:
        text = render_tree(self, config=self.config)
        self.sink.write(text)
        return text

    def close(self) -> None:
        """Cancel the exit-time report."""

        atexit.unregister(self.report)


__all__ = ["ScopedTimer", "StaticTimer", "ReportSink", "tic_toc", "timed"]
