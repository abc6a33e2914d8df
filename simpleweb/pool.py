"""Fixed-size worker pool fed through a bounded task buffer."""

from __future__ import annotations

import queue
import threading

from .logger import Level

_STOP = object()


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads."""

    def __init__(self, thread_num, buffer_size, logger=None, callback=None):
        if thread_num < 1:
            raise ValueError("thread_num must be at least 1")
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self._logger = logger
        self._log("Thread pool & buffer pool init.", Level.INFO)
        self.thread_num = thread_num
        self.buffer_size = buffer_size
        self._tasks: queue.Queue = queue.Queue(maxsize=buffer_size)
        self._closed = False
        self._lock = threading.Lock()
        self._threads = [
            threading.Thread(target=self._routine, name=f"pool-{i}", daemon=True)
            for i in range(thread_num)
        ]
        for thread in self._threads:
            thread.start()
        if callback is not None:
            callback()
        self._log("Thread pool & buffer pool init success.", Level.INFO)

    def _log(self, message, level, *args):
        if self._logger is not None:
            self._logger.log(message, level, *args)

    def submit(self, func, *args):
        """Queue func(*args), blocking while the buffer is full."""
        if self._closed:
            raise RuntimeError("thread pool is shut down")
        self._tasks.put((func, args))
        return True

    def shutdown(self):
        """Discard pending tasks, let running ones finish and stop the workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._log("Thread pool & buffer pool destroy.", Level.INFO)
        while True:
            try:
                self._tasks.get_nowait()
            except queue.Empty:
                break
        for _ in self._threads:
            self._tasks.put(_STOP)
        for thread in self._threads:
            thread.join()
        self._log("Thread pool & buffer pool destroy success.", Level.INFO)

    def _routine(self):
        while True:
            item = self._tasks.get()
            if item is _STOP:
                return
            func, args = item
            try:
                func(*args)
            except Exception as exc:  # keep the worker alive
                self._log(
                    "Task %s failed: %s",
                    Level.ERROR,
                    getattr(func, "__name__", repr(func)),
                    exc,
                )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False