"""Levelled logging to a file or the console, and a rewritable status line."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable
from enum import IntEnum
from typing import TextIO, Union

from .paths import get_log_path

LogPathSource = Union[str, "os.PathLike[str]", Callable[[], str], None]


class LogLevel(IntEnum):
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERR = 4


class AppLogger:
    """Writes messages at or above a level, to a log file or to stdout/stderr.

    ``log_path`` may be a path, a callable returning one (looked up for every
    message), or ``None`` for the platform default. If the file cannot be
    opened the logger falls back to the console for good.
    """

    def __init__(
        self,
        app_name: str | None = None,
        level: int = LogLevel.WARN,
        to_file: bool = False,
        log_path: LogPathSource = None,
    ) -> None:
        self.app_name = app_name
        self.level = level
        self.to_file = to_file
        self.log_path = log_path

    def is_debug(self) -> bool:
        return self.level == LogLevel.DEBUG

    def is_info(self) -> bool:
        return self.level in (LogLevel.DEBUG, LogLevel.INFO)

    def _resolve_path(self) -> str | os.PathLike[str]:
        source = self.log_path
        if source is None:
            return get_log_path()
        if callable(source):
            return source()
        return source

    def _prefix(self) -> str:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        if self.app_name is not None:
            return f"{stamp} {self.app_name} "
        return f"{stamp} "

    def log(self, level: int, msg: str, *args: object) -> None:
        """Log ``msg`` (formatted with ``%`` if args are given) if ``level`` is high enough."""
        if level < self.level:
            return
        text = msg % args if args else msg

        if self.to_file:
            path = self._resolve_path()
            try:
                with open(path, "a", encoding="utf-8") as handle:
                    handle.write(self._prefix() + text + "\n")
                return
            except OSError:
                self.to_file = False
                self.log(LogLevel.ERR, "Unable to log to the file %s, logging to stdout instead", os.fspath(path))
                self.log(level, msg, *args)
                return

        stream = sys.stdout if level <= LogLevel.INFO else sys.stderr
        stream.write(text + "\n")
        stream.flush()


class StatusLine:
    """A console line that erases its previous message before writing the next."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._last_len = 0

    def show(self, msg: str) -> None:
        stream = sys.stdout if self._stream is None else self._stream
        stream.write("\b \b" * self._last_len)
        stream.write(msg)
        stream.flush()
        self._last_len = len(msg)

    def reset(self) -> None:
        """Forget the previous message so the next one is not erased over it."""
        self._last_len = 0