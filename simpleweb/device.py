"""Per-process device identity and run state."""

from __future__ import annotations

import random
import string
import threading

from .logger import Level, Logger

UID_LEN = 5


def generate_uid(length=UID_LEN, rng=None):
    """Return a random identifier of upper-case ASCII letters."""
    rng = rng if rng is not None else random.Random()
    return "".join(rng.choice(string.ascii_uppercase) for _ in range(length))


class Device:
    """Holds the device UID, the shared logger and the running flag."""

    def __init__(self, logger=None, custom_uid=None):
        self.logger = logger if logger is not None else Logger()
        self.running = threading.Event()
        self.running.set()
        self._closed = False
        if custom_uid is not None:
            if len(custom_uid) == UID_LEN:
                self.uid = custom_uid
                return
            self.logger.log(
                "Invalid custom UID, an random one would be in use", Level.WARNING
            )
        self.uid = generate_uid(UID_LEN)
        self.logger.log("Device UID generated, UID: %s", Level.INFO, self.uid)

    def stop(self):
        """Clear the running flag so loops watching it finish."""
        self.running.clear()

    def close(self):
        """Stop the device and shut its logger down."""
        if self._closed:
            return
        self._closed = True
        self.stop()
        self.uid = None
        self.logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False