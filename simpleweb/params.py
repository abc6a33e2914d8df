"""Command-line parsing for the client and the server."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

from .logger import Level

CLIENT_USAGE = (
    "\nUsage:\n"
    "\tSet the number of threads, workload and sleep time:\n"
    "\t\t<int> <int> <int>\n"
    "\t\tif no key is provided, assume the values are for number of thread, "
    "workload and sleep time\n"
    "\tSet the number of threads:\n"
    "\t\t--threads <int> or -T <int>\n"
    "\tSet the workload:\n"
    "\t\t--workload <int> or -W <int>\n"
    "\t\t 0 for concurrent request and 1 for FIFO\n"
    "\tSet the sleep time between requests:\n"
    "\t\t--delay <int> or -D <int>\n"
    "\t\tsleep time is an integer in seconds\n"
    "\tif any key is not provided, defaulting:"
    "\t\t- the number of threads to 5"
    "\t\t- workload to 0"
    "\t\t- sleep time to 2\n"
)

SERVER_USAGE = (
    "\nUsage:\n"
    "\tSet the number of threads and buffer size:\n"
    "\t\t<int> <int>\n"
    "\t\tif no key is provided, the first value is assumed to be the number of "
    "threads and the second value is assumed to be the buffer size\n"
    "\tSet the number of threads:\n"
    "\t\t--threads <int> or -T <int>\n"
    "\tSet the buffer size:\n"
    "\t\t--buffer <int> or -B <int> or <int> <int>\n"
    "\n\tif any value is not provided, the default value is 5 threads and 10 "
    "buffer size\n"
)

_THREAD_KEYS = {"--thread", "--threads", "-T", "-t"}
_WORKLOAD_KEYS = {"--workload", "-W", "-w"}
_DELAY_KEYS = {"--delay", "-D", "-d"}
_BUFFER_KEYS = {"--buffer", "-B", "-b"}

_INT_RE = re.compile(r"\s*[+-]?\d+")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class ArgumentError(ValueError):
    """Raised when command-line arguments are invalid."""


class UsageRequested(Exception):
    """Raised when no arguments were given; carries the usage text."""

    def __init__(self, usage):
        super().__init__(usage)
        self.usage = usage


@dataclass
class ClientParams:
    thread_num: int = 5
    workload: int = 0
    sleep_time: int = 2


@dataclass
class ServerParams:
    thread_num: int = 5
    buffer_size: int = 10


def _parse_int(text):
    if _INT_RE.fullmatch(text) is None:
        raise ArgumentError(f"Error: Invalid argument '{text}'.")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ArgumentError(f"Error: Invalid argument '{text}'.")
    return value


def parse_client_args(argv, logger=None):
    """Parse client arguments (without the program name)."""
    args = list(argv)
    if not args:
        raise UsageRequested(CLIENT_USAGE)

    def report(message, level):
        if logger is not None:
            logger.log(message, level)
        else:
            print(message, file=sys.stderr)

    thread_num = workload = sleep_time = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _THREAD_KEYS or arg in _WORKLOAD_KEYS or arg in _DELAY_KEYS:
            if i + 1 < len(args):
                value = _parse_int(args[i + 1])
                if arg in _THREAD_KEYS:
                    thread_num = value
                elif arg in _WORKLOAD_KEYS:
                    workload = value
                else:
                    sleep_time = value
                i += 2
                continue
            report(f"Error: Invalid argument '{arg}'.", Level.ERROR)
        elif i + 2 < len(args):
            thread_num, workload, sleep_time = (
                _parse_int(text) for text in args[i : i + 3]
            )
            i += 3
            continue
        else:
            report(f"Error: Invalid argument '{arg}'.", Level.ERROR)
        i += 1

    params = ClientParams()
    if thread_num is None:
        report("Thread number not provided, defaulting to 5", Level.WARNING)
    else:
        params.thread_num = thread_num
    if workload is None:
        report("Workload not provided, defaulting to 0", Level.WARNING)
    else:
        params.workload = workload
    if sleep_time is None:
        report(
            "Sleep time between requests not provided, defaulting to 2(seconds)",
            Level.WARNING,
        )
    else:
        params.sleep_time = sleep_time
    return params


def parse_server_args(argv):
    """Parse server arguments (without the program name)."""
    args = list(argv)
    if not args:
        raise UsageRequested(SERVER_USAGE)

    params = ServerParams()
    errors = []

    def checked(text):
        try:
            return _parse_int(text)
        except ArgumentError as exc:
            errors.append(str(exc))
            return None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _THREAD_KEYS or arg in _BUFFER_KEYS:
            if i + 1 < len(args):
                value = checked(args[i + 1])
                if value is not None:
                    if arg in _THREAD_KEYS:
                        params.thread_num = value
                    else:
                        params.buffer_size = value
                i += 2
                continue
            errors.append(f"Error: Invalid argument '{arg}'.")
        elif i + 1 < len(args):
            threads = checked(arg)
            buffer = checked(args[i + 1])
            if threads is not None:
                params.thread_num = threads
            if buffer is not None:
                params.buffer_size = buffer
            i += 2
            continue
        else:
            errors.append(f"Error: Invalid argument '{arg}'.")
        i += 1

    if errors:
        raise ArgumentError("\n".join(errors) + "\n" + SERVER_USAGE)
    return params