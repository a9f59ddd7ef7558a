"""Logging utilities built on top of :mod:`loguru`.

:func:`setup_logging` configures the process-wide sinks. :class:`Logger` is a
small name-tagged front end that formats its own lines (color, level prefix,
timestamp) and hands them to loguru as raw records, so any configured sink
receives exactly what a terminal would show.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

from loguru import logger

from .config import LoggerSettings

NOCOLOR = "\033[0m"
RED = "\033[31m"
YELLOW = "\033[33m"

INFO = "Info:    "
WARN = "Warning: "
ERROR = "Error:   "
FATAL = "Fatal:   "

# Records of file loggers go out at FILE_LEVEL, below every standard handler
# threshold, so only their own sink (added at that level) picks them up.
FILE_ONLY = "lapwatch_file_only"
LOGGER_KEY = "lapwatch_logger"
FILE_LEVEL = "LAPWATCH_FILE"

try:
    logger.level(FILE_LEVEL)
except ValueError:
    logger.level(FILE_LEVEL, no=1)


def _shared_sink_filter(record) -> bool:
    return not record["extra"].get(FILE_ONLY, False)


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> None:
    """Configure the global loguru logger.

    Args:
        log_file: Optional file path for log sink.
        level: Minimum log level (string understood by loguru).
    """

    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level, filter=_shared_sink_filter)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, rotation="10 MB", retention="7 days", filter=_shared_sink_filter)


class FatalError(RuntimeError):
    """Raised by :meth:`Logger.fatal` after the message is written."""


class DebugSink(ABC):
    """Debug output capability chosen once per logger."""

    enabled = False

    @abstractmethod
    def log(self, msg: str, args: tuple) -> None: ...

    @abstractmethod
    def run(self, fn: Callable[[], Any]) -> Any: ...


class NullDebugSink(DebugSink):
    """Drops everything without formatting the message or calling ``fn``."""

    def log(self, msg: str, args: tuple) -> None:
        return None

    def run(self, fn: Callable[[], Any]) -> Any:
        return None


class ActiveDebugSink(DebugSink):
    enabled = True

    def __init__(self, emit: Callable[[str, str], None]):
        self._emit = emit

    def log(self, msg: str, args: tuple) -> None:
        self._emit("DEBUG", msg.format(*args) if args else msg)

    def run(self, fn: Callable[[], Any]) -> Any:
        return fn()


def pad_name(name: str, padding: int) -> str:
    if not name:
        return ""
    return f"[{name}] ".ljust(padding)


class Logger:
    """Name-tagged logger writing preformatted lines through loguru."""

    def __init__(
        self,
        name: str,
        settings: Optional[LoggerSettings] = None,
        file: Optional[Union[str, Path]] = None,
    ):
        self.settings = replace(settings) if settings is not None else LoggerSettings()
        self.tag = pad_name(name, self.settings.name_padding)
        self._name = name
        self._since = time.time()
        self._key = f"{name}@{id(self):x}"
        self._log = logger.bind(**{LOGGER_KEY: self._key})
        self._sink_id: Optional[int] = None
        if file is not None:
            self._open_file(Path(file))
        self._debug: DebugSink = (
            ActiveDebugSink(lambda level, text: self._print(level, "", NOCOLOR, text))
            if self.settings.debug
            else NullDebugSink()
        )

    def _open_file(self, path: Path) -> None:
        key = self._key
        try:
            self._sink_id = logger.add(
                str(path),
                level=FILE_LEVEL,
                colorize=False,
                format="{message}",
                filter=lambda record: record["extra"].get(LOGGER_KEY) == key,
            )
        except OSError as exc:
            self.settings.colored = True
            self.error("Could not open file '{}'! Fallback to console logging! ({})", path, exc)
            return
        self._log = self._log.bind(**{FILE_ONLY: True})

    def close(self) -> None:
        """Detach this logger's file sink, if any."""

        if self._sink_id is not None:
            logger.remove(self._sink_id)
            self._sink_id = None
            self._log = logger.bind(**{LOGGER_KEY: self._key})

    @property
    def name(self) -> str:
        return self._name

    @property
    def debug_enabled(self) -> bool:
        return self._debug.enabled

    def _timestamp(self) -> str:
        if not self.settings.timed:
            return ""
        if self.settings.relative_time:
            return f"{int(time.time() - self._since)}s  "
        return time.strftime(self.settings.time_format, time.localtime()) + "  "

    def _emit(self, level: str, text: str) -> None:
        if self._sink_id is not None:
            level = FILE_LEVEL
        self._log.opt(raw=True).log(level, text)

    def _print(self, level: str, prefix: str, color: str, text: str) -> None:
        if self.settings.colored:
            line = f"{color}{self.tag}{self._timestamp()}{text}{NOCOLOR}\n"
        else:
            line = f"{self.tag}{prefix}{self._timestamp()}{text}\n"
        self._emit(level, line)

    def info(self, msg: str, *args: Any) -> None:
        self._print("INFO", INFO, NOCOLOR, msg.format(*args) if args else msg)

    def warn(self, msg: str, *args: Any) -> None:
        self._print("WARNING", WARN, YELLOW, msg.format(*args) if args else msg)

    def error(self, msg: str, *args: Any) -> None:
        self._print("ERROR", ERROR, RED, msg.format(*args) if args else msg)

    def fatal(self, msg: str, *args: Any) -> None:
        self._print("CRITICAL", FATAL, RED, msg.format(*args) if args else msg)
        raise FatalError(self._name)

    def debug(self, msg: str, *args: Any) -> None:
        self._debug.log(msg, args)

    def debug_block(self, fn: Callable[[], Any]) -> Any:
        """Run ``fn`` only when debug output is enabled."""

        return self._debug.run(fn)

    def format_value(self, value: Any) -> str:
        if isinstance(value, float):
            kind = "e" if self.settings.scientific else "f"
            return f"{value:.{self.settings.initial_precision}{kind}}"
        return str(value)

    def write(self, value: Any) -> None:
        """Write ``value`` as a line prefixed by the name tag."""

        text = self.format_value(value)
        if not text.endswith("\n"):
            text += "\n"
        self._emit("INFO", self.tag + text)

    def newline(self, n: int = 1) -> None:
        self._emit("INFO", "\n" * n)


__all__ = [
    "setup_logging",
    "logger",
    "Logger",
    "FatalError",
    "DebugSink",
    "NullDebugSink",
    "ActiveDebugSink",
    "pad_name",
]
