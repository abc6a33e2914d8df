"""Asynchronous console logger with coloured level tags."""

from __future__ import annotations

import enum
import queue
import sys
import threading
from datetime import datetime


class Level(enum.IntEnum):
    """Log levels and their coloured tags."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    DEBUG = 3
    CRITICAL = 4
    DEPRECATED = 5

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Level.INFO: "[\033[34mINFO\033[0m]",
    Level.WARNING: "[\033[33mWARN\033[0m]",
    Level.ERROR: "[\033[31mERROR\033[0m]",
    Level.DEBUG: "[\033[36mDEBUG\033[0m]",
    Level.CRITICAL: "[\033[35mCRITICAL\033[0m]",
    Level.DEPRECATED: "[\033[33mDEPRECATED\033[0m]",
}

_STOP = object()


def format_line(message, level, when, thread_id):
    """Build one log line: time, level tag, thread tag and message."""
    stamp = f"{when.strftime('%Y-%m-%d %H:%M:%S')}.{when.microsecond // 1000:03d}"
    return f"{stamp}\t{Level(level).label}\t[thread-{thread_id % 10000}]\t{message}\n"


class Logger:
    """Logger whose lines are written in order by a background thread."""

    def __init__(self, stream=None):
        self._stream = stream if stream is not None else sys.stdout
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._drain, name="logger", daemon=True)
        self._thread.start()
        self.log("Logger Module is successfully initialized.", Level.INFO)

    @property
    def closed(self) -> bool:
        return self._closed

    def log(self, message, level=Level.INFO, *args):
        """Queue a message, formatted printf-style with args; dropped once closed."""
        if message is None:
            return
        text = message % args if args else message
        level = Level(level)
        with self._lock:
            if self._closed:
                return
            line = format_line(text, level, datetime.now(), threading.get_ident())
            self._queue.put(line)

    def close(self):
        """Write every queued line, stop the writer thread and report it."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._thread.join()
        self._stream.write("Logger Module is destroyed.\n")
        self._stream.flush()

    def _drain(self):
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            self._stream.write(item)
            self._stream.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False